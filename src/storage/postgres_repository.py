"""
PostgreSQL-backed GTD repository.

Each create/update/delete is a single statement (or a single transaction),
so it is independently atomic. Uses the shared asyncpg pool from storage.db.
"""

import logging
import uuid
from typing import List, Sequence

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
from storage import db
from storage.repository import GTDRepository, RecordNotFound, completion_timestamp, patch_fields

logger = logging.getLogger(__name__)

TASK_COLUMNS = ("id", "text", "category", "completed", "completed_at", "project_id", "created_at")
PROJECT_COLUMNS = ("id", "title", "status", "notes", "area_id", "created_at")
AREA_COLUMNS = ("id", "title", "description", "order", "created_at")
GOAL_COLUMNS = ("id", "text", "timeframe", "created_at")


def _quote(column: str) -> str:
    return f'"{column}"'


def _select(table: str, columns: Sequence[str]) -> str:
    return f"SELECT {', '.join(_quote(c) for c in columns)} FROM {table}"


def _insert(table: str, columns: Sequence[str]) -> str:
    placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
    return (
        f"INSERT INTO {table} ({', '.join(_quote(c) for c in columns)}) "
        f"VALUES ({placeholders}) RETURNING {', '.join(_quote(c) for c in columns)}"
    )


def _update(table: str, changes: dict, columns: Sequence[str]) -> tuple[str, list]:
    """UPDATE ... SET for the changed columns; the record id is always $1."""
    names = [name for name in changes if name in columns and name != "id"]
    assignments = ", ".join(f"{_quote(name)} = ${i}" for i, name in enumerate(names, start=2))
    query = (
        f"UPDATE {table} SET {assignments} WHERE id = $1 "
        f"RETURNING {', '.join(_quote(c) for c in columns)}"
    )
    return query, [changes[name] for name in names]


def task_from_record(record) -> Task:
    return Task(**{c: record[c] for c in TASK_COLUMNS})


def project_from_record(record) -> Project:
    return Project(**{c: record[c] for c in PROJECT_COLUMNS})


def area_from_record(record) -> Area:
    return Area(**{c: record[c] for c in AREA_COLUMNS})


def goal_from_record(record) -> Goal:
    return Goal(**{c: record[c] for c in GOAL_COLUMNS})


class PostgresRepository(GTDRepository):

    async def _get(self, table: str, columns, kind: str, record_id: str):
        row = await db.fetchrow(f"{_select(table, columns)} WHERE id = $1", record_id)
        if row is None:
            raise RecordNotFound(kind, record_id)
        return row

    async def _patch(self, table: str, columns, kind: str, record_id: str, changes: dict):
        if not changes:
            return await self._get(table, columns, kind, record_id)
        query, args = _update(table, changes, columns)
        row = await db.fetchrow(query, record_id, *args)
        if row is None:
            raise RecordNotFound(kind, record_id)
        return row

    async def _delete(self, table: str, kind: str, record_id: str) -> None:
        status = await db.execute(f"DELETE FROM {table} WHERE id = $1", record_id)
        # asyncpg returns e.g. "DELETE 1"
        if status.endswith(" 0"):
            raise RecordNotFound(kind, record_id)

    # --- tasks ---

    async def list_tasks(self) -> List[Task]:
        rows = await db.fetch(f"{_select('gtd_tasks', TASK_COLUMNS)} ORDER BY created_at DESC")
        return [task_from_record(r) for r in rows]

    async def get_task(self, task_id: str) -> Task:
        return task_from_record(await self._get("gtd_tasks", TASK_COLUMNS, "Task", task_id))

    async def create_task(self, fields: TaskCreate) -> Task:
        now = utcnow()
        row = await db.fetchrow(
            _insert("gtd_tasks", TASK_COLUMNS),
            str(uuid.uuid4()),
            fields.text,
            fields.category,
            fields.completed,
            now if fields.completed else None,
            fields.project_id,
            now,
        )
        return task_from_record(row)

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        changes = patch_fields(updates, nullable=("project_id",))
        # Read and write under one transaction so completed_at follows the
        # stored completion flag, not a stale copy.
        async with db.get_connection() as conn:
            async with conn.transaction():
                row = await conn.fetchrow(
                    f"{_select('gtd_tasks', TASK_COLUMNS)} WHERE id = $1 FOR UPDATE", task_id
                )
                if row is None:
                    raise RecordNotFound("Task", task_id)
                existing = task_from_record(row)
                changes["completed_at"] = completion_timestamp(existing, changes, utcnow())
                query, args = _update("gtd_tasks", changes, TASK_COLUMNS)
                row = await conn.fetchrow(query, task_id, *args)
        return task_from_record(row)

    async def delete_task(self, task_id: str) -> None:
        await self._delete("gtd_tasks", "Task", task_id)

    # --- projects ---

    async def list_projects(self) -> List[Project]:
        rows = await db.fetch(f"{_select('gtd_projects', PROJECT_COLUMNS)} ORDER BY created_at DESC")
        return [project_from_record(r) for r in rows]

    async def get_project(self, project_id: str) -> Project:
        return project_from_record(await self._get("gtd_projects", PROJECT_COLUMNS, "Project", project_id))

    async def create_project(self, fields: ProjectCreate) -> Project:
        row = await db.fetchrow(
            _insert("gtd_projects", PROJECT_COLUMNS),
            str(uuid.uuid4()),
            fields.title,
            fields.status,
            fields.notes,
            fields.area_id,
            utcnow(),
        )
        return project_from_record(row)

    async def update_project(self, project_id: str, updates: ProjectUpdate) -> Project:
        changes = patch_fields(updates, nullable=("notes", "area_id"))
        row = await self._patch("gtd_projects", PROJECT_COLUMNS, "Project", project_id, changes)
        return project_from_record(row)

    async def delete_project(self, project_id: str) -> None:
        await self._delete("gtd_projects", "Project", project_id)

    # --- areas ---

    async def list_areas(self) -> List[Area]:
        rows = await db.fetch(f'{_select("gtd_areas", AREA_COLUMNS)} ORDER BY "order", created_at')
        return [area_from_record(r) for r in rows]

    async def get_area(self, area_id: str) -> Area:
        return area_from_record(await self._get("gtd_areas", AREA_COLUMNS, "Area", area_id))

    async def create_area(self, fields: AreaCreate) -> Area:
        async with db.get_connection() as conn:
            async with conn.transaction():
                order = fields.order
                if order is None:
                    order = await conn.fetchval('SELECT COALESCE(MAX("order"), -1) + 1 FROM gtd_areas')
                row = await conn.fetchrow(
                    _insert("gtd_areas", AREA_COLUMNS),
                    str(uuid.uuid4()),
                    fields.title,
                    fields.description,
                    order,
                    utcnow(),
                )
        return area_from_record(row)

    async def update_area(self, area_id: str, updates: AreaUpdate) -> Area:
        changes = patch_fields(updates, nullable=("description",))
        row = await self._patch("gtd_areas", AREA_COLUMNS, "Area", area_id, changes)
        return area_from_record(row)

    async def delete_area(self, area_id: str) -> None:
        await self._delete("gtd_areas", "Area", area_id)

    async def reorder_areas(self, orders: List[AreaOrder]) -> List[Area]:
        async with db.get_connection() as conn:
            async with conn.transaction():
                for item in orders:
                    status = await conn.execute(
                        'UPDATE gtd_areas SET "order" = $2 WHERE id = $1', item.id, item.order
                    )
                    if status.endswith(" 0"):
                        # Raising inside the transaction rolls back earlier items.
                        raise RecordNotFound("Area", item.id)
        logger.info(f"Reordered {len(orders)} areas")
        return await self.list_areas()

    # --- goals ---

    async def list_goals(self) -> List[Goal]:
        rows = await db.fetch(f"{_select('gtd_goals', GOAL_COLUMNS)} ORDER BY created_at DESC")
        return [goal_from_record(r) for r in rows]

    async def get_goal(self, goal_id: str) -> Goal:
        return goal_from_record(await self._get("gtd_goals", GOAL_COLUMNS, "Goal", goal_id))

    async def create_goal(self, fields: GoalCreate) -> Goal:
        row = await db.fetchrow(
            _insert("gtd_goals", GOAL_COLUMNS),
            str(uuid.uuid4()),
            fields.text,
            fields.timeframe,
            utcnow(),
        )
        return goal_from_record(row)

    async def update_goal(self, goal_id: str, updates: GoalUpdate) -> Goal:
        row = await self._patch("gtd_goals", GOAL_COLUMNS, "Goal", goal_id, patch_fields(updates))
        return goal_from_record(row)

    async def delete_goal(self, goal_id: str) -> None:
        await self._delete("gtd_goals", "Goal", goal_id)
