import pytest
from gtd_ai.models import AreaCreate, GoalCreate, ProjectCreate, Task, TaskCreate, TaskUpdate, utcnow

def test_task_defaults():
    t = TaskCreate(text="Call mom")
    assert t.category == "quick_work"
    assert t.completed is False
    assert t.project_id is None

def test_task_text_is_trimmed():
    assert TaskCreate(text="  Call mom  ").text == "Call mom"

def test_task_blank_text_rejected():
    with pytest.raises(Exception):
        TaskCreate(text="   ")

def test_task_unknown_category_rejected():
    with pytest.raises(Exception):
        TaskCreate(text="Call mom", category="errands")

def test_task_accepts_camel_case_input():
    t = TaskCreate.model_validate({"text": "Book flights", "projectId": "p1"})
    assert t.project_id == "p1"

def test_task_serializes_camel_case():
    task = Task(text="X", id="t1", created_at=utcnow(), completed=True, completed_at=utcnow())
    dumped = task.model_dump(by_alias=True)
    assert "completedAt" in dumped and "createdAt" in dumped and "projectId" in dumped

def test_update_blank_text_rejected():
    with pytest.raises(Exception):
        TaskUpdate(text="")

def test_project_defaults():
    p = ProjectCreate(title="Website redesign")
    assert p.status == "active"
    assert p.notes is None

def test_project_empty_title():
    with pytest.raises(Exception):
        ProjectCreate(title="")

def test_goal_timeframes():
    assert GoalCreate(text="Run a marathon", timeframe="weekly").timeframe == "weekly"
    with pytest.raises(Exception):
        GoalCreate(text="Run a marathon", timeframe="q1")

def test_area_order_optional():
    assert AreaCreate(title="Health").order is None
