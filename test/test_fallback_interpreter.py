import pytest

from interpretation.fallback_interpreter import FallbackInterpreter
from llm.schemas import GoalAction, ProjectAction, TaskAction


@pytest.fixture
def fallback():
    return FallbackInterpreter()


def test_add_task_prefix(fallback):
    result = fallback.interpret("add task: call the dentist")
    assert result.mode == "fallback"
    (action,) = result.actions
    assert isinstance(action, TaskAction)
    assert action.data.text == "call the dentist"
    assert action.data.category in {"quick_personal", "quick_work"}
    assert "backup mode" in result.narrative


def test_need_to_phrase_extracts_action(fallback):
    (action,) = fallback.interpret("I need to schedule the doctor appointment.").actions
    assert action.data.text == "schedule the doctor appointment"
    assert action.data.category == "quick_personal"


@pytest.mark.parametrize(
    "message, category",
    [
        ("remember to fix the sink", "home"),
        ("task: urgent contract review", "high_focus"),
        ("I should follow up with the landlord", "waiting_for"),
        ("maybe I should learn the banjo", "someday"),
        ("remember to send the slides", "quick_work"),
    ],
)
def test_task_categories(fallback, message, category):
    (action,) = fallback.interpret(message).actions
    assert action.data.category == category


def test_project_when_model_unreachable(fallback):
    result = fallback.interpret("create project: website redesign")
    (action,) = result.actions
    assert isinstance(action, ProjectAction)
    assert action.data.title == "website redesign"
    assert action.data.status == "active"
    assert "backup mode" in result.narrative


def test_task_keywords_win_over_project(fallback):
    (action,) = fallback.interpret("add a task for the marketing project").actions
    assert isinstance(action, TaskAction)


@pytest.mark.parametrize(
    "message, timeframe",
    [
        ("set goal: retire by the sea", "vision"),
        ("goal: ship the beta this quarter", "quarterly"),
        ("my Q2 goal is hiring", "quarterly"),
        ("goal: inbox zero by friday", "weekly"),
        ("goal: become a staff engineer in 5 years", "3_5_year"),
        ("set goal: learn Spanish", "1_2_year"),
    ],
)
def test_goal_timeframes(fallback, message, timeframe):
    (action,) = fallback.interpret(message).actions
    assert isinstance(action, GoalAction)
    assert action.data.timeframe == timeframe


def test_lone_digit_three_selects_three_to_five_years(fallback):
    # Known ambiguity: any "3" counts, even when it means days.
    (action,) = fallback.interpret("goal: finish the draft in 3 days").actions
    assert action.data.timeframe == "3_5_year"


def test_no_keywords_returns_help(fallback):
    result = fallback.interpret("hello there")
    assert result.actions == []
    assert "backup mode" in result.narrative
    assert "create project: website redesign" in result.narrative


@pytest.mark.parametrize("message", ["", "   ", "task", "\n\n", "🙂" * 50, "x" * 10000])
def test_never_raises(fallback, message):
    result = fallback.interpret(message)
    assert isinstance(result.narrative, str)
    assert len(result.actions) <= 1


@pytest.mark.parametrize("message", ["add task:", "create project:", "add goal:"])
def test_command_without_payload_has_blank_text(fallback, message):
    (action,) = fallback.interpret(message).actions
    text = action.data.title if isinstance(action, ProjectAction) else action.data.text
    assert text == ""


def test_keyword_inside_word_is_not_a_command(fallback):
    (action,) = fallback.interpret("add taskforce notes").actions
    assert action.data.text == "add taskforce notes"


@pytest.mark.parametrize("message", ["goal: a long-range dream", "goal: own a cabin by 2040"])
def test_long_and_twenty_select_vision(fallback, message):
    (action,) = fallback.interpret(message).actions
    assert action.data.timeframe == "vision"
