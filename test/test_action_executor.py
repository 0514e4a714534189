import pytest

from execution.action_executor import ActionExecutor
from llm.schemas import (
    GoalAction,
    GoalActionData,
    ProjectAction,
    ProjectActionData,
    TaskAction,
    TaskActionData,
    parse_actions,
)


def task(text, **kw):
    return TaskAction(data=TaskActionData(text=text, **kw))


def project(title, **kw):
    return ProjectAction(data=ProjectActionData(title=title, **kw))


def goal(text, **kw):
    return GoalAction(data=GoalActionData(text=text, **kw))


def test_creates_each_kind(repository, run):
    results = run(
        ActionExecutor(repository).execute(
            [task("Email Sam"), project("Garage cleanup"), goal("Run a marathon", timeframe="vision")]
        )
    )
    assert [r.type for r in results] == ["task_created", "project_created", "goal_created"]
    assert results[0].data.id in repository.tasks
    assert results[2].data.timeframe == "vision"


def test_task_after_project_links_to_it(repository, run):
    results = run(
        ActionExecutor(repository).execute(
            [project("Plan vacation"), task("Look at flights"), task("Check passport")]
        )
    )
    project_id = results[0].data.id
    assert results[1].data.project_id == project_id
    assert results[2].data.project_id == project_id


def test_links_to_most_recent_project(repository, run):
    results = run(
        ActionExecutor(repository).execute(
            [task("Before any project"), project("First"), project("Second"), task("Linked")]
        )
    )
    assert results[0].data.project_id is None
    assert results[3].data.project_id == results[2].data.id


def test_explicit_project_id_wins(repository, run):
    results = run(
        ActionExecutor(repository).execute([project("New"), task("Old project task", project_id="existing-id")])
    )
    assert results[1].data.project_id == "existing-id"


def test_batch_state_does_not_leak_between_calls(repository, run):
    executor = ActionExecutor(repository)
    run(executor.execute([project("Earlier")]))
    (result,) = run(executor.execute([task("Standalone")]))
    assert result.data.project_id is None


@pytest.mark.parametrize(
    "actions",
    [
        [task("   "), task("A"), goal("B")],
        [task("A"), project(""), goal("B")],
        [task("A"), goal("B"), goal("\n\t")],
    ],
)
def test_one_invalid_two_valid(repository, run, actions):
    results = run(ActionExecutor(repository).execute(actions))
    assert len(results) == 2
    assert len(repository.tasks) + len(repository.projects) + len(repository.goals) == 2


def test_never_persists_blank_text(repository, run):
    actions = parse_actions([{"type": "task"}, {"type": "project", "data": {}}, {"type": "goal", "data": {"text": " "}}])
    assert run(ActionExecutor(repository).execute(actions)) == []
    assert not repository.tasks and not repository.projects and not repository.goals


def test_skipped_project_is_not_linked(repository, run):
    (result,) = run(ActionExecutor(repository).execute([project("  "), task("Orphan")]))
    assert result.data.project_id is None


def test_storage_failure_skips_only_that_action(repository, run, monkeypatch):
    async def broken_create_project(fields):
        raise RuntimeError("constraint violation")

    monkeypatch.setattr(repository, "create_project", broken_create_project)

    results = run(ActionExecutor(repository).execute([task("First"), project("Broken"), task("Third")]))
    assert [r.data.text for r in results] == ["First", "Third"]
    assert results[1].data.project_id is None


def test_empty_batch(repository, run):
    assert run(ActionExecutor(repository).execute([])) == []


def test_result_serializes_with_camel_case(repository, run):
    (result,) = run(ActionExecutor(repository).execute([task("Call mom", category="quick_personal")]))
    dumped = result.model_dump(by_alias=True)
    assert dumped["type"] == "task_created"
    assert dumped["data"]["category"] == "quick_personal"
    assert "completedAt" in dumped["data"]
