from llm.schemas import GoalAction, ProjectAction, TaskAction, parse_actions


def test_parses_mixed_batch_in_order():
    actions = parse_actions(
        [
            {"type": "project", "data": {"title": "Plan vacation", "status": "active"}},
            {"type": "task", "data": {"text": "Look at flights", "category": "quick_work"}},
            {"type": "goal", "data": {"text": "Learn Spanish", "timeframe": "q1"}},
        ]
    )
    assert [type(a) for a in actions] == [ProjectAction, TaskAction, GoalAction]
    assert actions[2].data.timeframe == "quarterly"


def test_non_list_is_empty():
    assert parse_actions(None) == []
    assert parse_actions({"type": "task"}) == []
    assert parse_actions("task") == []


def test_skips_unknown_and_malformed_items():
    actions = parse_actions(
        [
            "not a dict",
            {"type": "none"},
            {"type": "reminder", "data": {"text": "x"}},
            {"type": "task", "data": {"text": "Keep me"}},
        ]
    )
    assert len(actions) == 1
    assert actions[0].data.text == "Keep me"


def test_wrong_typed_fields_default():
    (task,) = parse_actions([{"type": "task", "data": {"text": 12, "category": ["home"], "projectId": 5}}])
    assert task.data.text == ""
    assert task.data.category == "quick_work"
    assert task.data.project_id is None


def test_missing_data_keeps_blank_action_for_executor_to_reject():
    (goal,) = parse_actions([{"type": "goal"}])
    assert goal.data.text == ""
    assert goal.data.timeframe == "1_2_year"


def test_project_fields_normalized():
    (project,) = parse_actions(
        [{"type": "project", "data": {"title": "Garage", "status": "On Hold", "areaId": "a1", "notes": ""}}]
    )
    assert project.data.status == "on_hold"
    assert project.data.area_id == "a1"
    assert project.data.notes is None


def test_task_accepts_title_when_text_missing():
    (task,) = parse_actions([{"type": "task", "data": {"title": "Email Sam", "category": "personal"}}])
    assert task.data.text == "Email Sam"
    assert task.data.category == "quick_personal"
