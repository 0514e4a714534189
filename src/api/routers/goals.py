import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from api.dependencies import get_repository
from gtd_ai.models import Goal, GoalCreate, GoalUpdate
from storage.repository import GTDRepository, RecordNotFound

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/goals", response_model=List[Goal])
async def list_goals(repository: GTDRepository = Depends(get_repository)) -> List[Goal]:
    return await repository.list_goals()


@router.post("/api/goals", response_model=Goal, status_code=201)
async def create_goal(
    payload: GoalCreate,
    repository: GTDRepository = Depends(get_repository),
) -> Goal:
    goal = await repository.create_goal(payload)
    logger.info(f"Created goal {goal.id} ({goal.timeframe})")
    return goal


@router.patch("/api/goals/{goal_id}", response_model=Goal)
async def update_goal(
    goal_id: str,
    payload: GoalUpdate,
    repository: GTDRepository = Depends(get_repository),
) -> Goal:
    try:
        return await repository.update_goal(goal_id, payload)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/api/goals/{goal_id}", status_code=204)
async def delete_goal(
    goal_id: str,
    repository: GTDRepository = Depends(get_repository),
) -> Response:
    try:
        await repository.delete_goal(goal_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
