"""Rule-based stand-in for the model when it is unreachable or refuses.

Produces at most one action, chosen by keyword priority: task, then project,
then goal. Every narrative says the assistant is in backup mode so the user
knows the richer interpretation was not available.
"""

import logging
import re

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

TASK_KEYWORDS = ("task", "remember", "need to", "should")
PROJECT_KEYWORDS = ("project", "initiative", "campaign")
GOAL_KEYWORDS = ("goal", "vision", "aspir", "dream")

_FLAGS = re.IGNORECASE | re.DOTALL

TASK_PATTERNS = (
    re.compile(r"(?:add|create|new) task\b:?\s*(.*?)\.?\s*$", _FLAGS),
    re.compile(r"(?:i need to|should|remember to)\s+(.*?)\.?\s*$", _FLAGS),
    re.compile(r"\btask\b:?\s*(.*?)\.?\s*$", _FLAGS),
)
PROJECT_PATTERNS = (
    re.compile(r"(?:add|create|new|start) project\b:?\s*(.*?)\.?\s*$", _FLAGS),
    re.compile(r"\bproject\b:?\s*(.*?)\.?\s*$", _FLAGS),
)
GOAL_PATTERNS = (
    re.compile(r"(?:add|create|new|set) goal\b:?\s*(.*?)\.?\s*$", _FLAGS),
    re.compile(r"\bgoal\b:?\s*(.*?)\.?\s*$", _FLAGS),
)

# (category, keywords) in priority order
CATEGORY_RULES = (
    ("quick_personal", ("personal", "doctor", "family", "friend")),
    ("home", ("home", "house", "clean", "fix")),
    ("high_focus", ("important", "urgent", "focus", "priority")),
    ("waiting_for", ("wait", "waiting", "follow up")),
    ("someday", ("maybe", "someday", "consider")),
)

VISION_KEYWORDS = ("vision", "long", "life", "retire", "decade", "20")
QUARTERLY_KEYWORDS = ("quarter", "qtr", "3 month", "90 day")
WEEKLY_KEYWORDS = ("week", "7 day", "eow", "by friday")
_QUARTER_RE = re.compile(r"\bq[1-4]\b", re.IGNORECASE)

HELP_NARRATIVE = (
    "I'm currently operating in backup mode due to temporary AI limitations, "
    "but I can still help you create tasks, projects, and goals! Try saying things like "
    "'I need to call the dentist' or 'create project: website redesign'."
)


def _contains_any(text: str, keywords) -> bool:
    return any(k in text for k in keywords)


def _extract(message: str, patterns) -> str:
    for pattern in patterns:
        match = pattern.search(message)
        if match:
            # An empty capture stays empty; the executor drops blank actions.
            return match.group(1).strip()
    return message.strip()


def fallback_category(message: str) -> str:
    lower = message.lower()
    for category, keywords in CATEGORY_RULES:
        if _contains_any(lower, keywords):
            return category
    return "quick_work"


def fallback_timeframe(message: str) -> str:
    lower = message.lower()
    if _contains_any(lower, VISION_KEYWORDS):
        return "vision"
    if _contains_any(lower, QUARTERLY_KEYWORDS) or _QUARTER_RE.search(lower):
        return "quarterly"
    if _contains_any(lower, WEEKLY_KEYWORDS):
        return "weekly"
    # Any 3 or 5 counts, so "finish in 3 days" also lands here.
    if "3" in lower or "5" in lower:
        return "3_5_year"
    return "1_2_year"


class FallbackInterpreter:

    def interpret(self, message: str) -> InterpretResult:
        lower = message.lower()

        if _contains_any(lower, TASK_KEYWORDS):
            text = _extract(message, TASK_PATTERNS)
            category = fallback_category(message)
            return InterpretResult(
                narrative=(
                    f'I\'ve created a task "{text}" in your {category.replace("_", " ")} category. '
                    "Even though I'm running in backup mode, I can still help you stay organized!"
                ),
                actions=[TaskAction(data=TaskActionData(text=text, category=category))],
                mode="fallback",
            )

        if _contains_any(lower, PROJECT_KEYWORDS):
            title = _extract(message, PROJECT_PATTERNS)
            return InterpretResult(
                narrative=(
                    f'I\'ve created a new project "{title}" for you. '
                    "I'm currently running in backup mode, but your GTD system is fully functional!"
                ),
                actions=[
                    ProjectAction(
                        data=ProjectActionData(
                            title=title,
                            status="active",
                            notes="Created via AI assistant (backup mode)",
                        )
                    )
                ],
                mode="fallback",
            )

        if _contains_any(lower, GOAL_KEYWORDS):
            text = _extract(message, GOAL_PATTERNS)
            timeframe = fallback_timeframe(message)
            return InterpretResult(
                narrative=(
                    f'I\'ve added "{text}" as a {timeframe.replace("_", "-")} goal. '
                    "I'm operating in backup mode right now, but your goals are safely stored!"
                ),
                actions=[GoalAction(data=GoalActionData(text=text, timeframe=timeframe))],
                mode="fallback",
            )

        logger.info("Fallback interpreter found no actionable keywords")
        return InterpretResult(narrative=HELP_NARRATIVE, actions=[], mode="fallback")
