import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from api.dependencies import get_repository
from gtd_ai.models import Task, TaskCreate, TaskUpdate
from storage.repository import GTDRepository, RecordNotFound

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/tasks", response_model=List[Task])
async def list_tasks(repository: GTDRepository = Depends(get_repository)) -> List[Task]:
    """All tasks, newest first."""
    return await repository.list_tasks()


@router.post("/api/tasks", response_model=Task, status_code=201)
async def create_task(
    payload: TaskCreate,
    repository: GTDRepository = Depends(get_repository),
) -> Task:
    task = await repository.create_task(payload)
    logger.info(f"Created task {task.id}")
    return task


@router.patch("/api/tasks/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    repository: GTDRepository = Depends(get_repository),
) -> Task:
    """Partial update. Toggling ``completed`` sets or clears ``completedAt``."""
    try:
        return await repository.update_task(task_id, payload)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/api/tasks/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    repository: GTDRepository = Depends(get_repository),
) -> Response:
    try:
        await repository.delete_task(task_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
