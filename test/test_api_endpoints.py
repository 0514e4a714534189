import importlib

import pytest
from fastapi.testclient import TestClient

from api.backend import BackendAPI
from api.dependencies import get_backend, get_repository
from interpretation.intent_interpreter import IntentInterpreter
from llm.llm_client import LLMClient
from storage.memory_repository import InMemoryRepository


@pytest.fixture
def app():
    mod = importlib.import_module("api.main")
    yield mod.app
    mod.app.dependency_overrides.clear()


@pytest.fixture
def client(app, repository):
    app.dependency_overrides[get_repository] = lambda: repository
    return TestClient(app)


def _use_provider(app, provider):
    backend = BackendAPI(interpreter=IntentInterpreter(llm_client=LLMClient(provider=provider)))
    app.dependency_overrides[get_backend] = lambda: backend


# --- chat ---

def test_chat_creates_actions(app, client, fake_provider_factory):
    _use_provider(
        app,
        fake_provider_factory(
            '{"response":"I\'ve created a project \'Plan vacation\' and a task.","actions":['
            '{"type":"project","data":{"title":"Plan vacation"}},'
            '{"type":"task","data":{"text":"Research destinations","category":"quick_personal"}}]}'
        ),
    )

    r = client.post("/api/ai/chat", json={"message": "plan my vacation"})
    assert r.status_code == 200
    body = r.json()
    assert body["message"].startswith("I've created")
    assert [a["type"] for a in body["actions"]] == ["project_created", "task_created"]
    assert body["actions"][1]["data"]["projectId"] == body["actions"][0]["data"]["id"]

    tasks = client.get("/api/tasks").json()
    assert tasks[0]["text"] == "Research destinations"


def test_chat_degraded_model_still_responds(app, client, failing_provider_factory):
    _use_provider(app, failing_provider_factory(RuntimeError("You exceeded your current quota")))

    r = client.post("/api/ai/chat", json={"message": "create project: website redesign"})
    assert r.status_code == 200
    body = r.json()
    assert "backup mode" in body["message"]
    assert body["actions"][0]["data"]["title"] == "website redesign"


@pytest.mark.parametrize("payload", [{}, {"message": ""}, {"message": "   "}, {"message": None}])
def test_chat_requires_message(client, payload):
    r = client.post("/api/ai/chat", json=payload)
    assert r.status_code == 400
    assert r.json()["detail"] == "Message is required"


# --- CRUD ---

def test_task_crud_and_completion(client):
    r = client.post("/api/tasks", json={"text": "Call the dentist", "category": "quick_personal"})
    assert r.status_code == 201
    task = r.json()
    assert task["completed"] is False
    assert task["completedAt"] is None

    done = client.patch(f"/api/tasks/{task['id']}", json={"completed": True}).json()
    assert done["completedAt"] is not None

    undone = client.patch(f"/api/tasks/{task['id']}", json={"completed": False}).json()
    assert undone["completedAt"] is None

    assert client.delete(f"/api/tasks/{task['id']}").status_code == 204
    assert client.get("/api/tasks").json() == []


def test_invalid_task_rejected(client):
    assert client.post("/api/tasks", json={"text": "  "}).status_code == 422
    assert client.post("/api/tasks", json={"text": "x", "category": "errands"}).status_code == 422


def test_unknown_ids_are_404(client):
    assert client.patch("/api/tasks/nope", json={"text": "x"}).status_code == 404
    assert client.delete("/api/projects/nope").status_code == 404
    assert client.patch("/api/goals/nope", json={"timeframe": "weekly"}).status_code == 404
    assert client.delete("/api/areas/nope").status_code == 404


def test_project_and_goal_crud(client):
    p = client.post("/api/projects", json={"title": "Garage cleanup"}).json()
    assert p["status"] == "active"
    p = client.patch(f"/api/projects/{p['id']}", json={"status": "on_hold", "notes": "after winter"}).json()
    assert p["status"] == "on_hold"
    assert p["notes"] == "after winter"

    g = client.post("/api/goals", json={"text": "Learn Spanish", "timeframe": "quarterly"}).json()
    assert client.get("/api/goals").json()[0]["id"] == g["id"]


def test_area_reorder(client):
    ids = [client.post("/api/areas", json={"title": t}).json()["id"] for t in ("Health", "Work", "Family")]
    assert [a["order"] for a in client.get("/api/areas").json()] == [0, 1, 2]

    r = client.post(
        "/api/areas/reorder",
        json=[{"id": ids[2], "order": 0}, {"id": ids[0], "order": 1}, {"id": ids[1], "order": 2}],
    )
    assert r.status_code == 200
    assert [a["title"] for a in r.json()] == ["Family", "Health", "Work"]

    bad = client.post("/api/areas/reorder", json=[{"id": "missing", "order": 0}])
    assert bad.status_code == 404


def test_default_repository_without_startup(app):
    # TestClient without a context manager never runs startup handlers
    client = TestClient(app)
    assert client.get("/api/goals").status_code == 200
    from api import state
    assert isinstance(state.repository, InMemoryRepository)
