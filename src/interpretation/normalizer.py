"""Map loose classification strings onto the canonical GTD tokens.

Model output (and occasionally user input) carries synonyms like "Q1",
"this week" or "annual". Everything here is pure and total: unknown values
fall back to a default instead of raising, so a misclassified item is
created anyway and can be fixed by editing it afterwards.
"""

from __future__ import annotations

import re
from typing import Any

from gtd_ai.models import GOAL_TIMEFRAMES, PROJECT_STATUSES, TASK_CATEGORIES

DEFAULT_TIMEFRAME = "1_2_year"
DEFAULT_CATEGORY = "quick_work"
DEFAULT_STATUS = "active"

_STRIP_RE = re.compile(r"[^a-z0-9_]")

TIMEFRAME_SYNONYMS: dict[str, str] = {
    "vision": "vision",
    "longterm": "vision",
    "life": "vision",
    "lifetime": "vision",
    "retirement": "vision",
    "retire": "vision",
    "10year": "vision",
    "10years": "vision",
    "15year": "vision",
    "20year": "vision",
    "decade": "vision",
    "decades": "vision",
    "3_5_year": "3_5_year",
    "35year": "3_5_year",
    "35years": "3_5_year",
    "3year": "3_5_year",
    "3years": "3_5_year",
    "5year": "3_5_year",
    "5years": "3_5_year",
    "mediumterm": "3_5_year",
    "1_2_year": "1_2_year",
    "12year": "1_2_year",
    "12years": "1_2_year",
    "1year": "1_2_year",
    "1years": "1_2_year",
    "2year": "1_2_year",
    "2years": "1_2_year",
    "annual": "1_2_year",
    "yearly": "1_2_year",
    "quarterly": "quarterly",
    "quarter": "quarterly",
    "quarters": "quarterly",
    "q1": "quarterly",
    "q2": "quarterly",
    "q3": "quarterly",
    "q4": "quarterly",
    "3month": "quarterly",
    "3months": "quarterly",
    "90day": "quarterly",
    "90days": "quarterly",
    "weekly": "weekly",
    "week": "weekly",
    "weeks": "weekly",
    "7day": "weekly",
    "7days": "weekly",
    "thisweek": "weekly",
    "nextweek": "weekly",
}

CATEGORY_SYNONYMS: dict[str, str] = {
    "highfocus": "high_focus",
    "focus": "high_focus",
    "deepwork": "high_focus",
    "important": "high_focus",
    "urgent": "high_focus",
    "quickwork": "quick_work",
    "work": "quick_work",
    "quickpersonal": "quick_personal",
    "personal": "quick_personal",
    "errand": "quick_personal",
    "errands": "quick_personal",
    "home": "home",
    "house": "home",
    "family": "home",
    "waitingfor": "waiting_for",
    "waiting": "waiting_for",
    "delegated": "waiting_for",
    "someday": "someday",
    "somedaymaybe": "someday",
    "maybe": "someday",
}

STATUS_SYNONYMS: dict[str, str] = {
    "active": "active",
    "inprogress": "active",
    "open": "active",
    "onhold": "on_hold",
    "hold": "on_hold",
    "paused": "on_hold",
    "blocked": "on_hold",
    "completed": "completed",
    "complete": "completed",
    "done": "completed",
    "finished": "completed",
}


def _squash(raw: str) -> str:
    return _STRIP_RE.sub("", raw.lower())


def _normalize(raw: Any, canonical: tuple[str, ...], synonyms: dict[str, str], default: str) -> str:
    if not isinstance(raw, str):
        return default
    if raw in canonical:
        return raw
    key = _squash(raw)
    if key in canonical:
        return key
    return synonyms.get(key, default)


def normalize_timeframe(raw: Any) -> str:
    """Return one of vision, 3_5_year, 1_2_year, quarterly, weekly."""
    return _normalize(raw, GOAL_TIMEFRAMES, TIMEFRAME_SYNONYMS, DEFAULT_TIMEFRAME)


def normalize_category(raw: Any) -> str:
    return _normalize(raw, TASK_CATEGORIES, CATEGORY_SYNONYMS, DEFAULT_CATEGORY)


def normalize_status(raw: Any) -> str:
    return _normalize(raw, PROJECT_STATUSES, STATUS_SYNONYMS, DEFAULT_STATUS)
