from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from gtd_ai.models import (
    Area,
    AreaCreate,
    AreaOrder,
    AreaUpdate,
    Goal,
    GoalCreate,
    GoalUpdate,
    Project,
    ProjectCreate,
    ProjectUpdate,
    Task,
    TaskCreate,
    TaskUpdate,
)


class RecordNotFound(LookupError):
    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class GTDRepository(ABC):
    """Keyed storage for tasks, projects, areas and goals.

    Implementations assign ``id`` and ``created_at`` on create, keep a task's
    ``completed_at`` in step with ``completed``, and raise RecordNotFound for
    unknown ids. Cross-references (project_id, area_id) are stored as given
    and never checked or cascaded.
    """

    # Tasks
    @abstractmethod
    async def list_tasks(self) -> List[Task]: ...

    @abstractmethod
    async def get_task(self, task_id: str) -> Task: ...

    @abstractmethod
    async def create_task(self, fields: TaskCreate) -> Task: ...

    @abstractmethod
    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task: ...

    @abstractmethod
    async def delete_task(self, task_id: str) -> None: ...

    # Projects
    @abstractmethod
    async def list_projects(self) -> List[Project]: ...

    @abstractmethod
    async def get_project(self, project_id: str) -> Project: ...

    @abstractmethod
    async def create_project(self, fields: ProjectCreate) -> Project: ...

    @abstractmethod
    async def update_project(self, project_id: str, updates: ProjectUpdate) -> Project: ...

    @abstractmethod
    async def delete_project(self, project_id: str) -> None: ...

    # Areas
    @abstractmethod
    async def list_areas(self) -> List[Area]: ...

    @abstractmethod
    async def get_area(self, area_id: str) -> Area: ...

    @abstractmethod
    async def create_area(self, fields: AreaCreate) -> Area: ...

    @abstractmethod
    async def update_area(self, area_id: str, updates: AreaUpdate) -> Area: ...

    @abstractmethod
    async def delete_area(self, area_id: str) -> None: ...

    @abstractmethod
    async def reorder_areas(self, orders: List[AreaOrder]) -> List[Area]: ...

    # Goals
    @abstractmethod
    async def list_goals(self) -> List[Goal]: ...

    @abstractmethod
    async def get_goal(self, goal_id: str) -> Goal: ...

    @abstractmethod
    async def create_goal(self, fields: GoalCreate) -> Goal: ...

    @abstractmethod
    async def update_goal(self, goal_id: str, updates: GoalUpdate) -> Goal: ...

    @abstractmethod
    async def delete_goal(self, goal_id: str) -> None: ...


def patch_fields(updates, nullable: tuple = ()) -> dict:
    """Fields explicitly set on an *Update model.

    An explicit null only clears the fields named in ``nullable`` (optional
    references and notes); for required fields it means "leave unchanged".
    """
    data = updates.model_dump(exclude_unset=True)
    return {k: v for k, v in data.items() if v is not None or k in nullable}


def completion_timestamp(task: Task, changes: dict, now: datetime) -> Optional[datetime]:
    """completed_at after applying ``changes`` to ``task``.

    Set on the false -> true transition, cleared on -> false, untouched
    otherwise.
    """
    if "completed" not in changes:
        return task.completed_at
    if changes["completed"]:
        return task.completed_at if task.completed and task.completed_at else now
    return None
