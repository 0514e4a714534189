from __future__ import annotations

import logging
import uuid
from typing import Dict, List

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
    utcnow,
)
from storage.repository import GTDRepository, RecordNotFound, completion_timestamp, patch_fields

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def _newest_first(records):
    return sorted(records, key=lambda r: r.created_at, reverse=True)


class InMemoryRepository(GTDRepository):
    """Process-local storage: one dict per record kind. Used for tests and ephemeral runs."""

    def __init__(self):
        self.tasks: Dict[str, Task] = {}
        self.projects: Dict[str, Project] = {}
        self.areas: Dict[str, Area] = {}
        self.goals: Dict[str, Goal] = {}

    def _get(self, table: dict, kind: str, record_id: str):
        record = table.get(record_id)
        if record is None:
            raise RecordNotFound(kind, record_id)
        return record

    def _delete(self, table: dict, kind: str, record_id: str) -> None:
        if table.pop(record_id, None) is None:
            raise RecordNotFound(kind, record_id)

    # --- tasks ---

    async def list_tasks(self) -> List[Task]:
        return _newest_first(self.tasks.values())

    async def get_task(self, task_id: str) -> Task:
        return self._get(self.tasks, "Task", task_id)

    async def create_task(self, fields: TaskCreate) -> Task:
        now = utcnow()
        task = Task(
            **fields.model_dump(),
            id=_new_id(),
            created_at=now,
            completed_at=now if fields.completed else None,
        )
        self.tasks[task.id] = task
        return task

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        existing = self._get(self.tasks, "Task", task_id)
        changes = patch_fields(updates, nullable=("project_id",))
        changes["completed_at"] = completion_timestamp(existing, changes, utcnow())
        updated = existing.model_copy(update=changes)
        self.tasks[task_id] = updated
        return updated

    async def delete_task(self, task_id: str) -> None:
        self._delete(self.tasks, "Task", task_id)

    # --- projects ---

    async def list_projects(self) -> List[Project]:
        return _newest_first(self.projects.values())

    async def get_project(self, project_id: str) -> Project:
        return self._get(self.projects, "Project", project_id)

    async def create_project(self, fields: ProjectCreate) -> Project:
        project = Project(**fields.model_dump(), id=_new_id(), created_at=utcnow())
        self.projects[project.id] = project
        return project

    async def update_project(self, project_id: str, updates: ProjectUpdate) -> Project:
        existing = self._get(self.projects, "Project", project_id)
        updated = existing.model_copy(update=patch_fields(updates, nullable=("notes", "area_id")))
        self.projects[project_id] = updated
        return updated

    async def delete_project(self, project_id: str) -> None:
        # Tasks keep their project_id; readers treat it as unresolvable.
        self._delete(self.projects, "Project", project_id)

    # --- areas ---

    async def list_areas(self) -> List[Area]:
        return sorted(self.areas.values(), key=lambda a: (a.order, a.created_at))

    async def get_area(self, area_id: str) -> Area:
        return self._get(self.areas, "Area", area_id)

    async def create_area(self, fields: AreaCreate) -> Area:
        order = fields.order
        if order is None:
            order = max((a.order for a in self.areas.values()), default=-1) + 1
        area = Area(
            id=_new_id(),
            title=fields.title,
            description=fields.description,
            order=order,
            created_at=utcnow(),
        )
        self.areas[area.id] = area
        return area

    async def update_area(self, area_id: str, updates: AreaUpdate) -> Area:
        existing = self._get(self.areas, "Area", area_id)
        updated = existing.model_copy(update=patch_fields(updates, nullable=("description",)))
        self.areas[area_id] = updated
        return updated

    async def delete_area(self, area_id: str) -> None:
        self._delete(self.areas, "Area", area_id)

    async def reorder_areas(self, orders: List[AreaOrder]) -> List[Area]:
        # Check every id first so a bad item leaves all orders untouched.
        for item in orders:
            self._get(self.areas, "Area", item.id)
        for item in orders:
            self.areas[item.id] = self.areas[item.id].model_copy(update={"order": item.order})
        return await self.list_areas()

    # --- goals ---

    async def list_goals(self) -> List[Goal]:
        return _newest_first(self.goals.values())

    async def get_goal(self, goal_id: str) -> Goal:
        return self._get(self.goals, "Goal", goal_id)

    async def create_goal(self, fields: GoalCreate) -> Goal:
        goal = Goal(**fields.model_dump(), id=_new_id(), created_at=utcnow())
        self.goals[goal.id] = goal
        return goal

    async def update_goal(self, goal_id: str, updates: GoalUpdate) -> Goal:
        existing = self._get(self.goals, "Goal", goal_id)
        updated = existing.model_copy(update=patch_fields(updates))
        self.goals[goal_id] = updated
        return updated

    async def delete_goal(self, goal_id: str) -> None:
        self._delete(self.goals, "Goal", goal_id)

    # --- sample data ---

    async def seed_sample_data(self) -> None:
        """Populate an empty store with a few example records for demos."""
        if self.tasks or self.goals:
            return

        samples = [
            TaskCreate(text="Review the onboarding SOP edits", category="high_focus"),
            TaskCreate(text="Get to help tickets", category="high_focus"),
            TaskCreate(text="Reply to the team about the offsite", category="quick_work", completed=True),
            TaskCreate(text="Sign up for a new phone plan", category="quick_personal"),
            TaskCreate(text="Research GTD communities to join", category="quick_personal"),
        ]
        for sample in samples:
            await self.create_task(sample)
        await self.create_goal(GoalCreate(text="Settle into the new city and build a routine", timeframe="1_2_year"))
        logger.info(f"Seeded {len(samples)} sample tasks and 1 goal")
