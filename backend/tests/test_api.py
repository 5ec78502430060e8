from __future__ import annotations

from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from goalcraft.api.routes.deps import get_ai_generator
from goalcraft.db.deps import get_db
from goalcraft.db.models.goal_progress import GoalProgressRecord
from goalcraft.main import app
from goalcraft.services.ai_goal_generator import AIGoalGenerator
from goalcraft.services.security import RateLimiter

HALF_MARATHON = "I want to run a half marathon in 3 months"


@pytest.fixture()
def client():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    GoalProgressRecord.__table__.create(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client, TestingSessionLocal
    app.dependency_overrides.clear()


def _compile(test_client: TestClient, text: str = HALF_MARATHON) -> dict:
    response = test_client.post("/goals/compile", json={"text": text, "use_ai": False})
    assert response.status_code == 200
    return response.json()


def _goal_url(title: str) -> str:
    return f"/goals/{quote(title)}"


def test_compile_returns_camel_case_spec_and_persists(client) -> None:
    test_client, session_factory = client

    spec = _compile(test_client)

    assert spec["title"] == "Half Marathon Training"
    assert spec["durationDays"] == 90
    assert spec["gamification"]["streaksEnabled"] is True
    with session_factory() as db:
        assert db.get(GoalProgressRecord, "spec:Half Marathon Training") is not None

    fetched = test_client.get(_goal_url(spec["title"]))
    assert fetched.status_code == 200
    assert fetched.json() == spec


def test_compile_rejects_blank_text(client) -> None:
    test_client, _ = client

    assert test_client.post("/goals/compile", json={"text": "   "}).status_code == 422


def test_compile_uses_injected_ai_generator(client) -> None:
    test_client, _ = client

    class _Model:
        def invoke(self, prompt: str) -> str:
            return '{"title": "Paint a Mural", "category": "creative"}'

    generator = AIGoalGenerator(model=_Model(), api_key="sk-test-0123456789abcdefghij", rate_limiter=RateLimiter())
    app.dependency_overrides[get_ai_generator] = lambda: generator

    response = test_client.post("/goals/compile", json={"text": "paint a mural", "use_ai": True})

    assert response.status_code == 200
    assert response.json()["source"] == "ai"
    assert response.json()["title"] == "Paint a Mural"


def test_unknown_goal_is_404(client) -> None:
    test_client, _ = client

    assert test_client.get("/goals/Nope").status_code == 404
    assert test_client.get("/goals/Nope/progress").status_code == 404


def test_log_entry_updates_snapshot(client) -> None:
    test_client, _ = client
    spec = _compile(test_client)

    response = test_client.post(
        f"{_goal_url(spec['title'])}/entries",
        json={"tracker_name": "Longest Run", "value": 7, "note": "felt good"},
    )

    assert response.status_code == 200
    snapshot = response.json()
    assert snapshot["state"]["totals"]["Longest Run"] == 7
    assert snapshot["streak"] == 1
    assert [a["id"] for a in snapshot["state"]["achievements"]] == ["Longest Run-25", "Longest Run-50"]
    assert snapshot["recentActivity"][0]["timeAgo"] == "just now"
    assert len(snapshot["chart"]) == 14

    progress = test_client.get(f"{_goal_url(spec['title'])}/progress").json()
    assert progress["state"]["totals"]["Longest Run"] == 7


def test_log_entry_validation(client) -> None:
    test_client, _ = client
    spec = _compile(test_client)
    url = f"{_goal_url(spec['title'])}/entries"

    assert test_client.post(url, json={"tracker_name": "Longest Run"}).status_code == 422
    unknown = test_client.post(url, json={"tracker_name": "Pushups", "value": 3})
    assert unknown.status_code == 400
    assert "Unknown tracker" in unknown.json()["detail"]
    assert test_client.post(url, json={"tracker_name": "Longest Run", "value": 1, "date": "05/20"}).status_code == 400


def test_complete_milestone(client) -> None:
    test_client, _ = client
    spec = _compile(test_client)
    url = _goal_url(spec["title"])

    first = test_client.post(f"{url}/milestones/0/complete")
    second = test_client.post(f"{url}/milestones/0/complete")

    assert first.status_code == 200
    assert second.json()["state"]["completedMilestones"] == [0]
    assert test_client.post(f"{url}/milestones/42/complete").status_code == 404


def test_titles_with_slashes_are_addressable(client) -> None:
    test_client, _ = client
    spec = _compile(test_client, "finish 1/2 of my thesis")
    assert "/" in spec["title"]
    tracker = spec["trackers"][0]["name"]

    for url in (_goal_url(spec["title"]), f"/goals/{quote(spec['title'], safe='')}"):
        fetched = test_client.get(url)
        assert fetched.status_code == 200
        assert fetched.json()["title"] == spec["title"]

    url = _goal_url(spec["title"])
    logged = test_client.post(f"{url}/entries", json={"tracker_name": tracker, "value": 1})
    assert logged.status_code == 200
    assert logged.json()["goalTitle"] == spec["title"]
    assert test_client.get(f"{url}/progress").json()["state"]["totals"][tracker] == 1
    assert test_client.post(f"{url}/milestones/0/complete").status_code == 200
