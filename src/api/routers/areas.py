import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from api.dependencies import get_repository
from gtd_ai.models import Area, AreaCreate, AreaOrder, AreaUpdate
from storage.repository import GTDRepository, RecordNotFound

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/areas", response_model=List[Area])
async def list_areas(repository: GTDRepository = Depends(get_repository)) -> List[Area]:
    """Areas in display order."""
    return await repository.list_areas()


@router.post("/api/areas", response_model=Area, status_code=201)
async def create_area(
    payload: AreaCreate,
    repository: GTDRepository = Depends(get_repository),
) -> Area:
    area = await repository.create_area(payload)
    logger.info(f"Created area {area.id} at order {area.order}")
    return area


@router.post("/api/areas/reorder", response_model=List[Area])
async def reorder_areas(
    payload: List[AreaOrder],
    repository: GTDRepository = Depends(get_repository),
) -> List[Area]:
    """Apply a caller-supplied list of {id, order}. Unknown ids reject the whole list."""
    try:
        return await repository.reorder_areas(payload)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/api/areas/{area_id}", response_model=Area)
async def update_area(
    area_id: str,
    payload: AreaUpdate,
    repository: GTDRepository = Depends(get_repository),
) -> Area:
    try:
        return await repository.update_area(area_id, payload)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/api/areas/{area_id}", status_code=204)
async def delete_area(
    area_id: str,
    repository: GTDRepository = Depends(get_repository),
) -> Response:
    try:
        await repository.delete_area(area_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
