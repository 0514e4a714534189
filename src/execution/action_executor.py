import logging
from typing import Annotated, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field

from api.metrics import ACTIONS_CREATED_TOTAL, ACTIONS_SKIPPED_TOTAL
from gtd_ai.models import Goal, GoalCreate, Project, ProjectCreate, Task, TaskCreate
from llm.schemas import GoalAction, ProjectAction, TaskAction
from storage.repository import GTDRepository

logger = logging.getLogger(__name__)


class TaskCreated(BaseModel):
    type: Literal["task_created"] = "task_created"
    data: Task


class ProjectCreated(BaseModel):
    type: Literal["project_created"] = "project_created"
    data: Project


class GoalCreated(BaseModel):
    type: Literal["goal_created"] = "goal_created"
    data: Goal


ActionResult = Annotated[Union[TaskCreated, ProjectCreated, GoalCreated], Field(discriminator="type")]


class ActionExecutor:
    """Apply a batch of interpreted actions to the repository, in order.

    A project created earlier in the batch becomes the default project of
    later task actions that name none. Invalid actions and per-action storage
    errors are logged and skipped; earlier successes are never rolled back.
    """

    def __init__(self, repository: GTDRepository):
        self.repository = repository

    async def execute(
        self, actions: Sequence[Union[TaskAction, ProjectAction, GoalAction]]
    ) -> List[ActionResult]:
        results: List[ActionResult] = []
        last_project_id: Optional[str] = None

        for index, action in enumerate(actions):
            reason = self._invalid_reason(action)
            if reason is not None:
                logger.warning(f"Skipping action {index} ({getattr(action, 'type', '?')}): {reason}")
                _count_skipped("invalid")
                continue

            try:
                result = await self._apply(action, last_project_id)
            except Exception as e:
                logger.exception(f"Failed to persist action {index} ({action.type}): {e}")
                _count_skipped("storage_error")
                continue

            if result.type == "project_created":
                last_project_id = result.data.id
            results.append(result)
            _count_created(action.type)

        logger.info(f"Applied {len(results)} of {len(actions)} action(s)")
        return results

    @staticmethod
    def _invalid_reason(action) -> Optional[str]:
        if isinstance(action, TaskAction):
            return None if action.data.text.strip() else "task text is empty"
        if isinstance(action, ProjectAction):
            return None if action.data.title.strip() else "project title is empty"
        if isinstance(action, GoalAction):
            return None if action.data.text.strip() else "goal text is empty"
        return "unsupported action type"

    async def _apply(self, action, last_project_id: Optional[str]) -> ActionResult:
        if isinstance(action, TaskAction):
            task = await self.repository.create_task(
                TaskCreate(
                    text=action.data.text,
                    category=action.data.category,
                    project_id=action.data.project_id or last_project_id,
                )
            )
            return TaskCreated(data=task)

        if isinstance(action, ProjectAction):
            project = await self.repository.create_project(
                ProjectCreate(
                    title=action.data.title,
                    status=action.data.status,
                    notes=action.data.notes,
                    area_id=action.data.area_id,
                )
            )
            return ProjectCreated(data=project)

        goal = await self.repository.create_goal(
            GoalCreate(text=action.data.text, timeframe=action.data.timeframe)
        )
        return GoalCreated(data=goal)


# Prometheus counters (best-effort)

def _count_created(kind: str) -> None:
    try:
        ACTIONS_CREATED_TOTAL.labels(type=kind).inc()
    except Exception:
        pass


def _count_skipped(reason: str) -> None:
    try:
        ACTIONS_SKIPPED_TOTAL.labels(reason=reason).inc()
    except Exception:
        pass
