from __future__ import annotations

import logging
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from interpretation.normalizer import normalize_category, normalize_status, normalize_timeframe

logger = logging.getLogger(__name__)


class ActionData(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskActionData(ActionData):
    text: str = ""
    category: str = "quick_work"
    project_id: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def canonical_category(cls, v):
        return normalize_category(v)


class ProjectActionData(ActionData):
    title: str = ""
    status: str = "active"
    notes: Optional[str] = None
    area_id: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def canonical_status(cls, v):
        return normalize_status(v)


class GoalActionData(ActionData):
    text: str = ""
    timeframe: str = "1_2_year"

    @field_validator("timeframe", mode="before")
    @classmethod
    def canonical_timeframe(cls, v):
        return normalize_timeframe(v)


class TaskAction(BaseModel):
    type: Literal["task"] = "task"
    data: TaskActionData = Field(default_factory=TaskActionData)


class ProjectAction(BaseModel):
    type: Literal["project"] = "project"
    data: ProjectActionData = Field(default_factory=ProjectActionData)


class GoalAction(BaseModel):
    type: Literal["goal"] = "goal"
    data: GoalActionData = Field(default_factory=GoalActionData)


Action = Annotated[Union[TaskAction, ProjectAction, GoalAction], Field(discriminator="type")]

InterpreterMode = Literal["llm", "fallback", "command"]


class InterpretResult(BaseModel):
    narrative: str
    actions: List[Action] = Field(default_factory=list)
    mode: InterpreterMode = "llm"


# --- defensive decoding of untrusted model output ---

def _text(data: dict, key: str) -> str:
    v = data.get(key)
    return v if isinstance(v, str) else ""


def _optional_text(data: dict, *keys: str) -> Optional[str]:
    for key in keys:
        v = data.get(key)
        if isinstance(v, str) and v.strip():
            return v
    return None


def parse_action(raw: Any) -> Optional[Union[TaskAction, ProjectAction, GoalAction]]:
    """Decode one action dict field by field.

    Wrong-typed fields fall back to defaults. Unknown action types (including
    the model's "none") return None. Blank text is kept; the executor decides
    whether the action is valid.
    """
    if not isinstance(raw, dict):
        return None

    kind = raw.get("type")
    data = raw.get("data")
    if not isinstance(data, dict):
        data = {}

    if kind == "task":
        return TaskAction(
            data=TaskActionData(
                text=_text(data, "text") or _text(data, "title"),
                category=data.get("category"),
                project_id=_optional_text(data, "projectId", "project_id"),
            )
        )
    if kind == "project":
        return ProjectAction(
            data=ProjectActionData(
                title=_text(data, "title") or _text(data, "text"),
                status=data.get("status"),
                notes=_optional_text(data, "notes"),
                area_id=_optional_text(data, "areaId", "area_id"),
            )
        )
    if kind == "goal":
        return GoalAction(
            data=GoalActionData(
                text=_text(data, "text") or _text(data, "title"),
                timeframe=data.get("timeframe"),
            )
        )
    return None


def parse_actions(raw: Any) -> list[Union[TaskAction, ProjectAction, GoalAction]]:
    if not isinstance(raw, list):
        return []

    actions = []
    for item in raw:
        action = parse_action(item)
        if action is None:
            logger.debug(f"Ignoring unrecognised action: {item!r}")
            continue
        actions.append(action)
    return actions
