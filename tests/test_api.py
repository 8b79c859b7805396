import random

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from api_main import app
from trackbit.api.deps import get_db
from trackbit.api.insights import get_coach_client, get_suggestion_engine
from trackbit.services import CoachClient, SuggestionEngine
from trackbit.services import coach as coach_module

HEADERS = {"X-User-Id": "user-1"}


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_suggestion_engine] = lambda: SuggestionEngine(rng=random.Random(0))
    app.dependency_overrides[get_coach_client] = lambda: CoachClient(api_url="")
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _create_habit(client, **fields):
    body = {"name": "Water", "frequency": "daily", **fields}
    response = client.post("/v1/habits", json=body, headers=HEADERS)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_user_header_is_required(client):
    assert client.get("/v1/habits").status_code == 401
    assert client.get("/v1/habits", headers={"X-User-Id": "x" * 65}).status_code == 400


def test_habit_lifecycle(client):
    habit = _create_habit(client, target_value=8, unit="glasses")
    assert habit["target_days"] == [0, 1, 2, 3, 4, 5, 6]

    response = client.post(f"/v1/habits/{habit['id']}/toggle", json={"date": "2024-01-10"}, headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["completed"] is True
    assert response.json()["value"] == 8

    streak = client.get(f"/v1/habits/{habit['id']}/streak", headers=HEADERS).json()
    assert streak["current"] == 1

    day = client.get("/v1/stats/day/2024-01-10", headers=HEADERS).json()
    assert day["total_habits"] == 1
    assert day["percentage"] == 100

    updated = client.patch(f"/v1/habits/{habit['id']}", json={"name": "Hydrate"}, headers=HEADERS).json()
    assert updated["name"] == "Hydrate"

    assert client.delete(f"/v1/habits/{habit['id']}", headers=HEADERS).status_code == 200
    assert client.get(f"/v1/habits/{habit['id']}", headers=HEADERS).status_code == 404


def test_habits_are_invisible_to_other_users(client):
    habit = _create_habit(client)
    response = client.get(f"/v1/habits/{habit['id']}", headers={"X-User-Id": "user-2"})
    assert response.status_code == 404


def test_validation_errors_map_to_400(client):
    response = client.post("/v1/habits", json={"name": "Gym", "frequency": "custom", "target_days": []}, headers=HEADERS)
    assert response.status_code == 400
    assert "day" in response.json()["detail"]

    response = client.get("/v1/logs", params={"start": "2024-01-10", "end": "2024-01-01"}, headers=HEADERS)
    assert response.status_code == 400


def test_routine_progress_flow(client):
    water = _create_habit(client)
    read = _create_habit(client, name="Read")
    routine = client.post("/v1/routines", json={"name": "Morning", "habit_ids": [water["id"], read["id"]]}, headers=HEADERS)
    assert routine.status_code == 201
    routine_id = routine.json()["id"]

    progress = client.post(f"/v1/routines/{routine_id}/toggle", json={"date": "2024-01-10"}, headers=HEADERS).json()
    assert progress == {"completed": 2, "total": 2, "percentage": 100.0}

    progress = client.get(f"/v1/routines/{routine_id}/progress/2024-01-10", headers=HEADERS).json()
    assert progress["completed"] == 2

    assert client.get("/v1/routines/999/progress/2024-01-10", headers=HEADERS).status_code == 404


def test_routine_from_template(client):
    response = client.post("/v1/routines/from-template", json={"template_id": "evening-wind-down"}, headers=HEADERS)
    assert response.status_code == 201
    assert len(response.json()["habit_ids"]) == 3

    response = client.post("/v1/routines/from-template", json={"template_id": "nope"}, headers=HEADERS)
    assert response.status_code == 404


def test_goal_assessment(client):
    habit = _create_habit(client)
    goal = client.post("/v1/goals", json={"habit_id": habit["id"], "target_days": 2, "start_date": "2024-01-01"}, headers=HEADERS)
    assert goal.status_code == 201
    for day in ("2024-01-01", "2024-01-02", "2024-01-03"):
        client.post(f"/v1/habits/{habit['id']}/toggle", json={"date": day}, headers=HEADERS)

    result = client.get(f"/v1/goals/{goal.json()['id']}/assessment", params={"today": "2024-01-02"}, headers=HEADERS).json()
    assert result["completed_days"] == 3
    assert result["label"] == "Highly Effective"

    response = client.post("/v1/goals", json={"habit_id": 999}, headers=HEADERS)
    assert response.status_code == 400


def test_suggestions_and_templates(client):
    assert client.get("/v1/suggestions", headers=HEADERS).json() == []

    _create_habit(client, name="Wake up early")
    _create_habit(client, name="Read")
    suggestions = client.get("/v1/suggestions", params={"today": "2024-01-10"}, headers=HEADERS).json()
    assert suggestions
    assert all("confidence" in s for s in suggestions)

    templates = client.get("/v1/templates", params={"category": "evening"}).json()
    assert {t["category"] for t in templates} == {"evening"}
    assert client.get("/v1/templates/mindful-living").json()["name"] == "Mindful Living"
    assert client.get("/v1/templates/unknown").status_code == 404


def test_profile_survey_and_recommendations(client):
    response = client.post(
        "/v1/profile/survey",
        json={"display_name": "Sam", "lifestyle_focus": ["health-wellness"], "age": 30},
        headers=HEADERS,
    )
    assert response.status_code == 200
    assert response.json()["survey_completed"] is True

    recs = client.get("/v1/recommendations", headers=HEADERS).json()
    assert recs[0]["name"] == "Drink Water"

    habit = client.post(f"/v1/recommendations/{recs[0]['id']}/apply", headers=HEADERS).json()
    assert habit["name"] == "Drink Water"


def test_coach_offline_reply(client):
    response = client.post(
        "/v1/coach",
        json={"goal": "Sleep better", "current_habits": ["Read"], "struggles": ["time"]},
        headers=HEADERS,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["offline"] is True
    assert "Sleep better" in body["reply"]

    response = client.post("/v1/coach", json={"goal": "", "current_habits": ["Read"], "struggles": ["time"]}, headers=HEADERS)
    assert response.status_code == 400


def test_calendar_download(client):
    response = client.get("/v1/calendar.ics", params={"tz": "UTC"}, headers=HEADERS)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/calendar")
    assert "attachment" in response.headers["content-disposition"]
    assert response.text.startswith("BEGIN:VCALENDAR")

    assert client.get("/v1/calendar.ics", params={"tz": "Nowhere/Land"}, headers=HEADERS).status_code == 400


def test_patch_with_null_frequency_keeps_custom_schedule(client):
    habit = _create_habit(client, name="Gym", frequency="custom", target_days=[1, 3])

    response = client.patch(f"/v1/habits/{habit['id']}", json={"frequency": None}, headers=HEADERS)

    assert response.status_code == 200
    assert response.json()["frequency"] == "custom"
    assert response.json()["target_days"] == [1, 3]


def test_storage_failure_answers_503_and_writes_nothing(client, db, monkeypatch):
    def storage_down():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "commit", storage_down)
    response = client.post("/v1/habits", json={"name": "Water"}, headers=HEADERS)

    assert response.status_code == 503
    assert response.json()["detail"] == "Could not save changes"
    assert client.get("/v1/habits", headers=HEADERS).json() == []


def test_coach_request_carries_survey_profile(client, monkeypatch):
    client.post(
        "/v1/profile/survey",
        json={"display_name": "Sam", "lifestyle_focus": ["health-wellness"], "age": 30, "occupation_category": "student"},
        headers=HEADERS,
    )
    sent = {}

    class Reply:
        def raise_for_status(self):
            return None

        def json(self):
            return {"reply": "Keep going."}

    def fake_post(url, json, timeout):
        sent.update(json)
        return Reply()

    monkeypatch.setattr(coach_module.requests, "post", fake_post)
    app.dependency_overrides[get_coach_client] = lambda: CoachClient(api_url="http://coach.test/chat")

    response = client.post(
        "/v1/coach",
        json={"goal": "Sleep better", "current_habits": ["Read"], "struggles": ["time"]},
        headers=HEADERS,
    )

    assert response.json() == {"reply": "Keep going.", "offline": False, "notice": None}
    assert sent["user"]["profile"] == {"age": 30, "occupation": "student", "lifestyleFocus": ["health-wellness"]}
