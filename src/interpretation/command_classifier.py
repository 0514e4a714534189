import logging
import re
from typing import Optional, Union

from llm.schemas import (
    GoalAction,
    GoalActionData,
    InterpretResult,
    ProjectAction,
    ProjectActionData,
    TaskAction,
    TaskActionData,
)

logger = logging.getLogger(__name__)

_TASK_RE = re.compile(r"^\s*(?:add|create) task\b:?\s*(.*?)\.?\s*$", re.IGNORECASE | re.DOTALL)
_PROJECT_RE = re.compile(r"^\s*(?:add|create) project\b:?\s*(.*?)\.?\s*$", re.IGNORECASE | re.DOTALL)
_GOAL_RE = re.compile(r"^\s*(?:add|create) goal\b:?\s*(.*?)\.?\s*$", re.IGNORECASE | re.DOTALL)


def sniff_task_category(message: str) -> str:
    lower = message.lower()
    if "personal" in lower:
        return "quick_personal"
    if "home" in lower:
        return "home"
    if "important" in lower or "focus" in lower:
        return "high_focus"
    return "quick_work"


def sniff_goal_timeframe(message: str) -> str:
    lower = message.lower()
    if "vision" in lower or "long term" in lower:
        return "vision"
    if "3" in lower or "5" in lower:
        return "3_5_year"
    return "1_2_year"


class CommandClassifier:
    """Zero-latency recognition of literal "add task:" style commands.

    No model is involved. Anything without a recognised prefix is left to the
    interpreters.
    """

    def classify(self, message: str) -> Optional[Union[TaskAction, ProjectAction, GoalAction]]:
        match = _TASK_RE.match(message)
        if match and match.group(1).strip():
            return TaskAction(
                data=TaskActionData(
                    text=match.group(1).strip(),
                    category=sniff_task_category(message),
                )
            )

        match = _PROJECT_RE.match(message)
        if match and match.group(1).strip():
            return ProjectAction(
                data=ProjectActionData(
                    title=match.group(1).strip(),
                    status="active",
                    notes="Created via AI assistant",
                )
            )

        match = _GOAL_RE.match(message)
        if match and match.group(1).strip():
            return GoalAction(
                data=GoalActionData(
                    text=match.group(1).strip(),
                    timeframe=sniff_goal_timeframe(message),
                )
            )

        return None

    def classify_result(self, message: str) -> Optional[InterpretResult]:
        action = self.classify(message)
        if action is None:
            return None

        logger.info(f"Recognised literal {action.type} command")
        return InterpretResult(narrative=describe(action), actions=[action], mode="command")


def describe(action: Union[TaskAction, ProjectAction, GoalAction]) -> str:
    if isinstance(action, TaskAction):
        category = action.data.category.replace("_", " ")
        return f'I\'ve created a new task: "{action.data.text}" in your {category} category.'
    if isinstance(action, ProjectAction):
        return f'I\'ve created a new project: "{action.data.title}" for you.'
    timeframe = action.data.timeframe.replace("_", "-")
    return f'I\'ve created a new {timeframe} goal: "{action.data.text}".'
