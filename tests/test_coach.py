import pytest
import requests

from trackbit.errors import ValidationError
from trackbit.services import coach as coach_module
from trackbit.services.coach import DEFAULT_REPLY, OFFLINE_NOTICE, CoachClient, follow_up_fallback

ARGS = dict(goal="Get fit", current_habits=["Walk", "Stretch"], struggles=["Motivation"], time_per_day=20)


class FakeResponse:
    def __init__(self, payload=None, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        if self.payload is None:
            raise ValueError("no json")
        return self.payload


def test_unconfigured_endpoint_answers_offline():
    result = CoachClient(api_url="").reply(**ARGS)

    assert result["offline"] is True
    assert result["notice"] == OFFLINE_NOTICE
    assert result["reply"].startswith('Thanks for sharing your goal: "Get fit"')
    assert "2 habits" in result["reply"]
    assert "20 minutes" in result["reply"]
    assert "For consistency and motivation" in result["reply"]
    assert "For time management" not in result["reply"]


def test_remote_reply_is_returned(monkeypatch):
    sent = {}

    def fake_post(url, json, timeout):
        sent.update(url=url, json=json, timeout=timeout)
        return FakeResponse({"reply": "Start with two minutes a day."})

    monkeypatch.setattr(coach_module.requests, "post", fake_post)
    result = CoachClient(api_url="http://coach.test/chat", timeout=3).reply(**ARGS)

    assert result == {"reply": "Start with two minutes a day.", "offline": False, "notice": None}
    assert sent["timeout"] == 3
    assert sent["json"]["user"]["currentHabits"] == ["Walk", "Stretch"]
    assert "followUpMessage" not in sent["json"]["user"]


@pytest.mark.parametrize(
    "behaviour",
    [
        requests.Timeout("slow"),
        requests.ConnectionError("down"),
        FakeResponse({"error": "boom"}, status=500),
        FakeResponse(None),
        FakeResponse({"reply": "   "}),
    ],
)
def test_remote_failures_fall_back(monkeypatch, behaviour):
    def fake_post(url, json, timeout):
        if isinstance(behaviour, Exception):
            raise behaviour
        return behaviour

    monkeypatch.setattr(coach_module.requests, "post", fake_post)
    result = CoachClient(api_url="http://coach.test/chat").reply(**ARGS, follow_up_message="I feel so busy lately")

    assert result["offline"] is True
    assert result["reply"].startswith("Time management for habits")


@pytest.mark.parametrize(
    "message, heading",
    [
        ("I lost my motivation", "Motivation strategies"),
        ("I never have time", "Time management"),
        ("How do I stay consistent?", "Building consistency"),
        ("I am stressed and overwhelmed", "Managing stress"),
        ("How should I start a new habit?", "Starting new habits"),
        ("How can I track my progress?", "Tracking progress"),
    ],
)
def test_follow_up_keywords(message, heading):
    assert follow_up_fallback(message).startswith(heading)


def test_unmatched_follow_up_gets_default_reply():
    assert follow_up_fallback("hello there") == DEFAULT_REPLY


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"goal": "  "}, "goal"),
        ({"current_habits": []}, "current habit"),
        ({"struggles": [""]}, "struggle"),
    ],
)
def test_missing_inputs_are_rejected(overrides, message):
    with pytest.raises(ValidationError, match=message):
        CoachClient(api_url="").reply(**{**ARGS, **overrides})
