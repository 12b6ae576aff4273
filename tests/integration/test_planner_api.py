"""
Integration tests for the planner HTTP API.
"""

import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from main import create_app
from timebox.api import deps
from timebox.infrastructure.local.rate_limiter import InMemoryRateLimiter
from timebox.infrastructure.local.schedule_repository import InMemoryScheduleRepository
from timebox.infrastructure.local.settings_repository import InMemoryUserSettingsRepository
from timebox.services import generation_service as generation_module

DAY = "2026-03-02"


@pytest.fixture
def llm_text(monkeypatch):
    mock = MagicMock(return_value=(None, "litellm_request_failed", None))
    monkeypatch.setattr(generation_module, "generate_text_with_status", mock)
    return mock


@pytest.fixture
def client(llm_text):
    app = create_app()
    settings_repo = InMemoryUserSettingsRepository()
    schedule_repo = InMemoryScheduleRepository()
    rate_limiter = InMemoryRateLimiter(max_requests=3, window_seconds=60)
    llm_provider = MagicMock()
    llm_provider.get_model.return_value = "openai/gpt-4o-2024-08-06"
    llm_provider.get_available_models.return_value = ["openai/gpt-4o-2024-08-06"]

    app.dependency_overrides[deps.get_settings_repository] = lambda: settings_repo
    app.dependency_overrides[deps.get_schedule_repository] = lambda: schedule_repo
    app.dependency_overrides[deps.get_rate_limiter] = lambda: rate_limiter
    app.dependency_overrides[deps.get_llm_provider] = lambda: llm_provider

    # Lifespan is not entered, so no database file is created.
    return TestClient(app)


def _create(client, start_time, duration=1.0, **extra):
    body = {"startTime": start_time, "duration": duration, **extra}
    return client.post(f"/api/schedule/{DAY}/items", json=body)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# =========================================================================
# Settings
# =========================================================================


def test_settings_round_trip(client):
    response = client.get("/api/settings")
    assert response.status_code == 200
    assert response.json()["dayDuration"] == {"start": "05:00", "end": "21:00"}

    response = client.put(
        "/api/settings",
        json={"name": "Ada", "dayDuration": {"start": "10:00", "end": "10:30"}, "intermittentFasting": True},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Ada"
    assert data["dayDuration"] == {"start": "10:00", "end": "11:00"}
    assert data["coreTime"] == {"start": "10:00", "end": "11:00"}
    assert data["intermittentFasting"] is True


def test_delete_setting(client):
    client.put("/api/settings", json={"profile": "student"})

    assert client.delete("/api/settings/profile").status_code == 204
    assert client.delete("/api/settings/profile").status_code == 404
    assert client.delete("/api/settings/favoriteColor").status_code == 422


def test_invalid_clock_time_rejected(client):
    response = client.put("/api/settings", json={"dayDuration": {"start": "5am", "end": "21:00"}})

    assert response.status_code == 422


# =========================================================================
# Schedule editing
# =========================================================================


def test_create_and_list(client):
    response = _create(client, 9, 2, activityType="top-goal")
    assert response.status_code == 200
    body = response.json()
    assert body["applied"] is True
    assert body["item"]["startTime"] == 9
    assert body["item"]["activityType"] == "top-goal"

    view = client.get(f"/api/schedule/{DAY}").json()
    assert view["date"] == DAY
    assert view["dayWindow"] == {"start": "05:00", "end": "21:00"}
    assert len(view["items"]) == 1
    assert view["events"][0]["title"] == "Untitled Event"


def test_rejected_placement_returns_applied_false(client):
    _create(client, 9, 2)

    for start_time in (10, 4):
        response = _create(client, start_time)
        assert response.status_code == 200
        assert response.json() == {"applied": False, "item": None}

    assert _create(client, 11).json()["applied"] is True


def test_patch_item(client):
    item_id = _create(client, 9, 2).json()["item"]["id"]

    response = client.patch(
        f"/api/schedule/{DAY}/items/{item_id}",
        json={"startTime": 18, "activity": "Gym", "activityType": "physical"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["applied"] is True
    assert body["item"]["startTime"] == 18
    assert body["item"]["activity"] == "Gym"

    refused = client.patch(f"/api/schedule/{DAY}/items/{item_id}", json={"startTime": 20.5})
    assert refused.json()["applied"] is False
    assert refused.json()["item"]["startTime"] == 18


def test_unknown_item_is_404(client):
    assert client.patch(f"/api/schedule/{DAY}/items/missing", json={"startTime": 9}).status_code == 404
    assert client.delete(f"/api/schedule/{DAY}/items/missing").status_code == 404


def test_delete_item(client):
    item_id = _create(client, 9).json()["item"]["id"]

    assert client.delete(f"/api/schedule/{DAY}/items/{item_id}").status_code == 204
    assert client.get(f"/api/schedule/{DAY}").json()["items"] == []


def test_clear_schedule(client):
    _create(client, 9)

    assert client.delete(f"/api/schedule/{DAY}").status_code == 204
    assert client.get(f"/api/schedule/{DAY}").json()["items"] == []


def test_invalid_date_is_422(client):
    assert client.get("/api/schedule/not-a-date").status_code == 422


def test_window_change_reconciles(client):
    _create(client, 6, 2)

    view = client.put(f"/api/schedule/{DAY}/window", json={"start": "08:00", "end": "18:00"}).json()

    assert view["dayWindow"] == {"start": "08:00", "end": "18:00"}
    assert view["items"][0]["startTime"] == 8
    assert view["items"][0]["duration"] == 2


def test_bulk_replace_validates_items(client):
    response = client.put(
        f"/api/schedule/{DAY}/items",
        json=[{"id": "a", "startTime": 9.25, "duration": 1, "activity": "x", "activityType": "default"}],
    )
    assert response.status_code == 422

    response = client.put(
        f"/api/schedule/{DAY}/items",
        json=[
            {"id": "a", "startTime": 9, "duration": 1, "activity": "x", "activityType": "default"},
            {"id": "a", "startTime": 11, "duration": 1, "activity": "y", "activityType": "default"},
        ],
    )
    assert response.status_code == 422

    response = client.put(
        f"/api/schedule/{DAY}/items",
        json=[{"id": "a", "startTime": 20, "duration": 3, "activity": "x", "activityType": "leisure"}],
    )
    assert response.status_code == 200
    assert response.json()["items"][0]["duration"] == 1


def test_gestures(client):
    item_id = _create(client, 9, 2).json()["item"]["id"]

    dropped = client.post(
        f"/api/schedule/{DAY}/gestures/drop",
        json={"itemId": item_id, "start": f"{DAY}T13:30:00", "end": f"{DAY}T15:30:00"},
    ).json()
    assert dropped["applied"] is True
    assert dropped["item"]["startTime"] == 13.5

    resized = client.post(
        f"/api/schedule/{DAY}/gestures/resize",
        json={"itemId": item_id, "start": f"{DAY}T13:30:00", "end": f"{DAY}T16:00:00"},
    ).json()
    assert resized["item"]["duration"] == 2.5

    selected = client.post(
        f"/api/schedule/{DAY}/gestures/select",
        json={"start": f"{DAY}T14:00:00", "end": f"{DAY}T15:00:00"},
    ).json()
    assert selected == {"applied": False, "item": None}

    degenerate = client.post(
        f"/api/schedule/{DAY}/gestures/select",
        json={"start": f"{DAY}T07:00:00", "end": f"{DAY}T07:15:00"},
    ).json()
    assert degenerate["applied"] is False


# =========================================================================
# Generation
# =========================================================================


def _respond(mock, payload):
    mock.return_value = (json.dumps(payload), None, None)


def _schedule_body(**overrides):
    body = {
        "northStar": "Write a book",
        "brainDump": "chapter 3, gym, laundry",
        "topGoals": ["Chapter 3", "Gym", "Laundry"],
        "dayDuration": {"start": "08:00", "end": "20:00"},
        "date": DAY,
    }
    body.update(overrides)
    return body


def test_generate_schedule_commits(client, llm_text):
    _create(client, 15, 1)
    _respond(
        llm_text,
        {
            "schedule": [
                {"id": "1", "startTime": 9, "duration": 2, "activity": "Chapter 3", "activityType": "top-goal"},
                {"id": "2", "startTime": 12, "duration": 1, "activity": "Gym", "activityType": "physical"},
            ]
        },
    )

    response = client.post("/api/generate/schedule", json=_schedule_body())

    assert response.status_code == 200
    body = response.json()
    assert body["applied"] is True
    assert [i["id"] for i in body["schedule"]["items"]] == ["1", "2"]
    assert [i["id"] for i in client.get(f"/api/schedule/{DAY}").json()["items"]] == ["1", "2"]


def test_generate_schedule_invalid_output_is_502_and_keeps_schedule(client, llm_text):
    _create(client, 15, 1)
    _respond(
        llm_text,
        {"schedule": [{"id": "1", "startTime": 9, "duration": 2, "activity": "x", "activityType": "work"}]},
    )

    response = client.post("/api/generate/schedule", json=_schedule_body())

    assert response.status_code == 502
    items = client.get(f"/api/schedule/{DAY}").json()["items"]
    assert [i["startTime"] for i in items] == [15]


def test_generation_provider_failure_is_502(client):
    response = client.post("/api/generate/top-goals", json={"northStar": "x", "brainDump": "y"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Generation failed. Please try again."


def test_generation_rate_limited(client, llm_text):
    _respond(llm_text, {"topGoals": ["a", "b", "c"]})

    statuses = [
        client.post("/api/generate/top-goals", json={"northStar": "x", "brainDump": "y"}).status_code
        for _ in range(4)
    ]

    assert statuses == [200, 200, 200, 429]


def test_generation_request_validation(client):
    response = client.post("/api/generate/schedule", json={"northStar": "x"})

    assert response.status_code == 422


def test_categorize(client, llm_text):
    _respond(llm_text, {"category": "physical"})

    response = client.post(
        "/api/generate/categorize", json={"activity": "Morning run", "topGoals": ["Write"]}
    )

    assert response.status_code == 200
    assert response.json() == {"category": "physical"}


def test_categorize_empty_activity(client):
    response = client.post("/api/generate/categorize", json={"activity": "", "topGoals": []})

    assert response.status_code == 422


def test_list_models(client):
    response = client.get("/api/models")

    assert response.status_code == 200
    assert response.json()["models"] == [{"id": "openai/gpt-4o-2024-08-06", "name": "openai/gpt-4o-2024-08-06"}]
    assert response.json()["defaultModelId"] == "openai/gpt-4o-2024-08-06"


# =========================================================================
# Authentication
# =========================================================================


@pytest.fixture
def auth_client(client):
    from timebox.infrastructure.local.mock_auth import MockAuthProvider

    client.app.dependency_overrides[deps.get_auth_provider] = lambda: MockAuthProvider(enabled=True)
    return client


def test_auth_required_when_enabled(auth_client):
    assert auth_client.get("/api/settings").status_code == 401
    assert auth_client.get("/api/settings", headers={"Authorization": "Token abc"}).status_code == 401


def test_schedules_are_scoped_by_token(auth_client):
    alice = {"Authorization": "Bearer alice"}
    bob = {"Authorization": "Bearer bob"}

    auth_client.post(f"/api/schedule/{DAY}/items", json={"startTime": 9, "duration": 1}, headers=alice)

    assert len(auth_client.get(f"/api/schedule/{DAY}", headers=alice).json()["items"]) == 1
    assert auth_client.get(f"/api/schedule/{DAY}", headers=bob).json()["items"] == []
