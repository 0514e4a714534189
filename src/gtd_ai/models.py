from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


TaskCategory = Literal[
    "high_focus",
    "quick_work",
    "quick_personal",
    "home",
    "waiting_for",
    "someday",
]
ProjectStatus = Literal["active", "on_hold", "completed"]
GoalTimeframe = Literal["vision", "3_5_year", "1_2_year", "quarterly", "weekly"]

TASK_CATEGORIES: tuple[str, ...] = (
    "high_focus",
    "quick_work",
    "quick_personal",
    "home",
    "waiting_for",
    "someday",
)
PROJECT_STATUSES: tuple[str, ...] = ("active", "on_hold", "completed")
GOAL_TIMEFRAMES: tuple[str, ...] = ("vision", "3_5_year", "1_2_year", "quarterly", "weekly")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _not_blank(v: Optional[str], field: str) -> Optional[str]:
    if v is None:
        return v
    v2 = v.strip()
    if not v2:
        raise ValueError(f"{field} must not be blank")
    return v2


class GTDModel(BaseModel):
    # camelCase on the wire (completedAt, projectId), snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Tasks ---

class TaskCreate(GTDModel):
    text: str = Field(..., min_length=1)
    category: TaskCategory = "quick_work"
    completed: bool = False
    project_id: Optional[str] = None

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return _not_blank(v, "text")


class TaskUpdate(GTDModel):
    text: Optional[str] = None
    category: Optional[TaskCategory] = None
    completed: Optional[bool] = None
    project_id: Optional[str] = None

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v, "text")


class Task(TaskCreate):
    id: str
    created_at: datetime
    completed_at: Optional[datetime] = None


# --- Projects ---

class ProjectCreate(GTDModel):
    title: str = Field(..., min_length=1)
    status: ProjectStatus = "active"
    notes: Optional[str] = None
    area_id: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        return _not_blank(v, "title")


class ProjectUpdate(GTDModel):
    title: Optional[str] = None
    status: Optional[ProjectStatus] = None
    notes: Optional[str] = None
    area_id: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v, "title")


class Project(ProjectCreate):
    id: str
    created_at: datetime


# --- Areas of focus ---

class AreaCreate(GTDModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    # None means "append after the last area"
    order: Optional[int] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        return _not_blank(v, "title")


class AreaUpdate(GTDModel):
    title: Optional[str] = None
    description: Optional[str] = None
    order: Optional[int] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v, "title")


class Area(GTDModel):
    id: str
    title: str
    description: Optional[str] = None
    order: int = 0
    created_at: datetime


class AreaOrder(GTDModel):
    id: str
    order: int


# --- Goals ---

class GoalCreate(GTDModel):
    text: str = Field(..., min_length=1)
    timeframe: GoalTimeframe = "1_2_year"

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return _not_blank(v, "text")


class GoalUpdate(GTDModel):
    text: Optional[str] = None
    timeframe: Optional[GoalTimeframe] = None

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v, "text")


class Goal(GoalCreate):
    id: str
    created_at: datetime
