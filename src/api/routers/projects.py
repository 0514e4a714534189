import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from api.dependencies import get_repository
from gtd_ai.models import Project, ProjectCreate, ProjectUpdate
from storage.repository import GTDRepository, RecordNotFound

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/projects", response_model=List[Project])
async def list_projects(repository: GTDRepository = Depends(get_repository)) -> List[Project]:
    return await repository.list_projects()


@router.post("/api/projects", response_model=Project, status_code=201)
async def create_project(
    payload: ProjectCreate,
    repository: GTDRepository = Depends(get_repository),
) -> Project:
    project = await repository.create_project(payload)
    logger.info(f"Created project {project.id}")
    return project


@router.patch("/api/projects/{project_id}", response_model=Project)
async def update_project(
    project_id: str,
    payload: ProjectUpdate,
    repository: GTDRepository = Depends(get_repository),
) -> Project:
    try:
        return await repository.update_project(project_id, payload)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/api/projects/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    repository: GTDRepository = Depends(get_repository),
) -> Response:
    """Delete the project only; its tasks keep their (now dangling) projectId."""
    try:
        await repository.delete_project(project_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
