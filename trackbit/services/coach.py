import logging
from typing import Any, Optional

import requests

from trackbit.config import settings
from trackbit.errors import ValidationError

log = logging.getLogger(__name__)

OFFLINE_NOTICE = "AI Coach is currently offline. You're now using the built-in coaching assistant with general habit-building advice."

CONSISTENCY_TIPS = (
    "For consistency and motivation:\n"
    "- Start with just 2-3 minutes per day\n"
    "- Use habit stacking (attach new habits to existing ones)\n"
    "- Track your progress visually\n"
    "- Celebrate small wins\n\n"
)
TIME_TIPS = (
    "For time management:\n"
    "- Break habits into micro-habits\n"
    "- Use transition times (before meals, after waking)\n"
    "- Batch similar activities together\n\n"
)
GENERAL_TIPS = (
    "General tips:\n"
    "- Focus on one habit at a time\n"
    "- Make it obvious (visual cues)\n"
    "- Make it attractive (pair with something you enjoy)\n"
    "- Make it easy (reduce friction)\n"
    "- Make it satisfying (immediate rewards)\n\n"
    "What specific challenge would you like to work on first?"
)

# Checked in order; the first rule whose predicate matches wins.
FOLLOW_UP_RULES = [
    (
        lambda text: "motivation" in text or "motivated" in text,
        "Motivation strategies:\n\n"
        "- Connect habits to your deeper values and identity\n"
        "- Visualize your future self who has these habits\n"
        "- Find an accountability partner\n"
        "- Use the 2-minute rule: make it so easy you can't say no\n"
        "- Track your streak and celebrate milestones\n\n"
        "Remember: motivation gets you started, but systems keep you going. What system can you put in place today?",
    ),
    (
        lambda text: "time" in text or "busy" in text or "schedule" in text,
        "Time management for habits:\n\n"
        "- Audit your day: track how you spend 30 minutes\n"
        "- Use habit stacking: attach new habits to existing routines\n"
        "- Try micro-habits: 30 seconds to 2 minutes\n"
        "- Use transition times: while coffee brews, before meals\n"
        "- Batch similar activities together\n\n"
        "Which part of your day has the most consistent routine where you could add a habit?",
    ),
    (
        lambda text: "consistency" in text or "consistent" in text,
        "Building consistency:\n\n"
        "- Start ridiculously small (1 push-up, 1 page, 1 minute)\n"
        "- Never miss twice in a row\n"
        "- Focus on showing up, not perfection\n"
        "- Use environmental design (make it obvious)\n"
        "- Track your habits visually\n"
        "- Have a plan for obstacles\n\n"
        "Consistency beats intensity. What's the smallest version of your habit you could do even on your worst day?",
    ),
    (
        lambda text: "stress" in text or "overwhelmed" in text,
        "Managing stress and overwhelm:\n\n"
        "- Prioritize: focus on 1-3 keystone habits\n"
        "- Use breathing exercises (4-7-8 technique)\n"
        "- Practice the 'good enough' mindset\n"
        "- Build in recovery time\n"
        "- Connect with your support system\n"
        "- Remember why you started\n\n"
        "Stress often comes from trying to do too much. What's the ONE habit that would have the biggest positive impact on your life?",
    ),
    (
        lambda text: "habit" in text and ("new" in text or "start" in text),
        "Starting new habits:\n\n"
        "- Choose habits aligned with your identity\n"
        "- Start with a 2-minute version\n"
        "- Stack it onto an existing routine\n"
        "- Design your environment for success\n"
        "- Plan for obstacles in advance\n"
        "- Focus on the process, not outcomes\n\n"
        "What existing routine could you attach this new habit to?",
    ),
    (
        lambda text: "progress" in text or "track" in text,
        "Tracking progress effectively:\n\n"
        "- Use simple binary tracking (did it/didn't do it)\n"
        "- Focus on process metrics, not just outcomes\n"
        "- Review weekly, not daily\n"
        "- Celebrate small wins\n"
        "- Learn from missed days without judgment\n"
        "- Adjust based on patterns you notice\n\n"
        "How are you currently tracking your habits? What's working and what isn't?",
    ),
]

DEFAULT_REPLY = (
    "I understand you're working on building better habits. Here are some universal principles that can help:\n\n"
    "- Start small and build gradually\n"
    "- Focus on consistency over perfection\n"
    "- Design your environment to support your goals\n"
    "- Connect habits to your identity and values\n"
    "- Plan for obstacles and setbacks\n"
    "- Celebrate progress along the way\n\n"
    "Could you tell me more about your specific situation? I'd love to give you more targeted advice."
)


def initial_fallback(goal: str, current_habits: list[str], struggles: list[str], time_per_day: int) -> str:
    text = (
        f'Thanks for sharing your goal: "{goal}". I can see you\'re working on {len(current_habits)} habits '
        f"and have {time_per_day} minutes per day to focus on them.\n\n"
    )
    lowered = [s.lower() for s in struggles]
    if "consistency" in lowered or "motivation" in lowered:
        text += CONSISTENCY_TIPS
    if "time" in lowered or "busy schedule" in lowered:
        text += TIME_TIPS
    return text + GENERAL_TIPS


def follow_up_fallback(message: str) -> str:
    text = (message or "").lower()
    for matches, reply in FOLLOW_UP_RULES:
        if matches(text):
            return reply
    return DEFAULT_REPLY


class CoachClient:
    """Posts coaching requests to the configured endpoint.

    Any failure (no URL, timeout, connection error, non-2xx, bad body) is
    answered by the scripted responder and flagged ``offline``.
    """

    def __init__(self, api_url: Optional[str] = None, timeout: Optional[float] = None):
        self.api_url = settings.COACH_API_URL if api_url is None else api_url
        self.timeout = settings.COACH_TIMEOUT_SECONDS if timeout is None else timeout

    def reply(
        self,
        goal: str,
        current_habits: list[str],
        struggles: list[str],
        time_per_day: int = 15,
        follow_up_message: Optional[str] = None,
        conversation_history: Optional[list[dict[str, str]]] = None,
        profile: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        goal = (goal or "").strip()
        current_habits = [h.strip() for h in current_habits or [] if h and h.strip()]
        struggles = [s.strip() for s in struggles or [] if s and s.strip()]
        if not goal:
            raise ValidationError("Please enter your goal")
        if not current_habits:
            raise ValidationError("Please add at least one current habit or create habits first")
        if not struggles:
            raise ValidationError("Please add at least one struggle")

        user: dict[str, Any] = {
            "goal": goal,
            "currentHabits": current_habits,
            "struggles": struggles,
            "timePerDay": time_per_day,
        }
        if follow_up_message:
            user["followUpMessage"] = follow_up_message
            user["conversationHistory"] = conversation_history or []
        if profile:
            user["profile"] = profile

        reply = self._post(user)
        if reply is not None:
            return {"reply": reply, "offline": False, "notice": None}

        if follow_up_message:
            text = follow_up_fallback(follow_up_message)
        else:
            text = initial_fallback(goal, current_habits, struggles, time_per_day)
        return {"reply": text, "offline": True, "notice": OFFLINE_NOTICE}

    def _post(self, user: dict[str, Any]) -> Optional[str]:
        if not self.api_url:
            log.info("Coach endpoint not configured, using offline responder")
            return None
        try:
            response = requests.post(self.api_url, json={"user": user}, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            log.warning("Coach request failed, falling back: %s", exc)
            return None

        reply = data.get("reply") if isinstance(data, dict) else None
        if not isinstance(reply, str) or not reply.strip():
            log.warning("Coach response had no reply text, falling back")
            return None
        return reply
