"""Rule-based suggestion engine.

Works on plain habit and log rows (anything with the model attributes) and
never touches the database, so it is a pure function of its inputs plus the
injected random source. Empty input yields an empty list.
"""

import logging
import random
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional

from trackbit.config import settings
from trackbit.core.dates import DAY_LABELS, date_range, day_of_week, parse_date
from trackbit.core.streaks import streak_runs
from trackbit.core.templates import ROUTINE_TEMPLATES

log = logging.getLogger(__name__)

CORRELATION_CANDIDATE = 0.3
CORRELATION_PAIRING = 0.7
TEMPLATE_THRESHOLD = 0.6
BEST_DAY_RATE = 0.7

CATEGORY_KEYWORDS = {
    "health": ("water", "exercise", "sleep", "vitamin"),
    "mindfulness": ("meditat", "gratitude", "journal", "mindful"),
    "productivity": ("work", "plan", "study", "learn"),
    "learning": ("read", "book", "course"),
    "fitness": ("workout", "run", "gym", "exercise"),
}

MORNING_KEYWORDS = ("morning", "wake", "breakfast")
EVENING_KEYWORDS = ("evening", "night", "sleep")

NEW_HABIT_IDEAS = [
    {
        "category": "health",
        "habits": [
            {"name": "Drink Water", "icon": "Droplets", "description": "Stay hydrated throughout the day"},
            {"name": "Take Vitamins", "icon": "Pill", "description": "Support your nutritional needs"},
        ],
    },
    {
        "category": "mindfulness",
        "habits": [
            {"name": "Meditation", "icon": "Brain", "description": "Practice mindfulness and reduce stress"},
            {"name": "Gratitude Journal", "icon": "Heart", "description": "Reflect on positive moments"},
        ],
    },
    {
        "category": "productivity",
        "habits": [
            {"name": "Plan Tomorrow", "icon": "Calendar", "description": "Prepare for the next day"},
            {"name": "Deep Work", "icon": "Focus", "description": "Dedicated focused work time"},
        ],
    },
]


def _completed_dates_by_habit(logs: Iterable[Any]) -> dict[Any, set[date]]:
    result: dict[Any, set[date]] = defaultdict(set)
    for entry in logs:
        if entry.completed:
            result[entry.habit_id].add(parse_date(entry.log_date))
    return result


def _log_dates_by_habit(logs: Iterable[Any]) -> dict[Any, list[date]]:
    result: dict[Any, list[date]] = defaultdict(list)
    for entry in logs:
        result[entry.habit_id].append(parse_date(entry.log_date))
    return result


def habit_correlation(dates_a: Iterable[date], dates_b: Iterable[date]) -> float:
    """Jaccard similarity of two completed-date sets; 0 when both are empty."""
    a, b = set(dates_a), set(dates_b)
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def weekly_pattern(completed: Iterable[date], history: Iterable[date]) -> list[float]:
    """Completion rate per weekday (Sunday=0).

    The denominator is how many times each weekday occurs between the first
    and last logged date of the habit.
    """
    history = sorted(set(history))
    if not history:
        return [0.0] * 7

    occurrences = [0] * 7
    for d in date_range(history[0], history[-1]):
        occurrences[day_of_week(d)] += 1

    hits = [0] * 7
    for d in set(completed):
        hits[day_of_week(d)] += 1

    return [hits[i] / occurrences[i] if occurrences[i] else 0.0 for i in range(7)]


def categorize_habits(habits: Iterable[Any]) -> list[str]:
    found: set[str] = set()
    for habit in habits:
        text = f"{habit.name or ''} {getattr(habit, 'description', None) or ''}".lower()
        for category, keywords in CATEGORY_KEYWORDS.items():
            if any(keyword in text for keyword in keywords):
                found.add(category)
    return [c for c in CATEGORY_KEYWORDS if c in found]


def recent_completion_ratio(completed: Iterable[date], days: int, today: date) -> float:
    cutoff = today - timedelta(days=days)
    return sum(1 for d in completed if cutoff <= d <= today) / days


class SuggestionEngine:
    def __init__(self, rng: Optional[random.Random] = None, limit: Optional[int] = None):
        if rng is None:
            rng = random.Random(settings.SUGGESTION_SEED) if settings.SUGGESTION_SEED is not None else random.Random()
        self.rng = rng
        self.limit = settings.SUGGESTION_LIMIT if limit is None else limit

    def analyze_user_patterns(self, habits: list[Any], logs: list[Any]) -> dict[str, Any]:
        completed = _completed_dates_by_habit(logs)
        history = _log_dates_by_habit(logs)

        weekly: dict[Any, list[float]] = {}
        streaks: dict[Any, list[int]] = {}
        seasonal: dict[Any, dict[str, int]] = {}
        for habit in habits:
            dates = completed.get(habit.id, set())
            weekly[habit.id] = weekly_pattern(dates, history.get(habit.id, []))
            streaks[habit.id] = streak_runs(dates)
            months: dict[str, int] = {}
            for d in sorted(dates):
                key = d.strftime("%b")
                months[key] = months.get(key, 0) + 1
            seasonal[habit.id] = months

        correlations = []
        for i, first in enumerate(habits):
            for second in habits[i + 1 :]:
                score = habit_correlation(completed.get(first.id, set()), completed.get(second.id, set()))
                if score > CORRELATION_CANDIDATE:
                    correlations.append({"habit1": first.id, "habit2": second.id, "correlation": score})

        return {
            "weekly_patterns": weekly,
            "streak_patterns": streaks,
            "seasonal_patterns": seasonal,
            "correlations": correlations,
            "last_analyzed": datetime.utcnow(),
        }

    def generate_suggestions(self, habits: list[Any], logs: list[Any], routines: Optional[list[Any]] = None, today: Optional[date] = None) -> list[dict[str, Any]]:
        if not habits:
            return []

        today = parse_date(today) if today is not None else date.today()
        patterns = self.analyze_user_patterns(habits, logs)
        categories = categorize_habits(habits)
        completed = _completed_dates_by_habit(logs)

        suggestions: list[dict[str, Any]] = []
        suggestions.extend(self._template_suggestions(habits, categories, routines or []))
        suggestions.extend(self._optimization_suggestions(habits, completed, patterns, today))
        suggestions.extend(self._new_habit_suggestions(habits, categories))
        suggestions.extend(self._timing_suggestions(habits))
        suggestions.extend(self._pairing_suggestions(habits, patterns))

        suggestions.sort(key=lambda s: s["confidence"], reverse=True)
        log.debug("Generated %d suggestions for %d habits", len(suggestions), len(habits))
        return suggestions[: self.limit]

    def template_compatibility(self, template: dict[str, Any], categories: list[str], habit_count: int) -> float:
        score = 0.0
        if template["category"] in categories or any(tag in categories for tag in template.get("tags", [])):
            score += 0.3

        difficulty = template["difficulty"]
        if difficulty == "beginner" and habit_count <= 3:
            score += 0.2
        elif difficulty == "intermediate" and 3 <= habit_count <= 6:
            score += 0.2
        elif difficulty == "advanced" and habit_count > 6:
            score += 0.2

        score += template["popularity"] / 5 * 0.3
        score += self.rng.random() * 0.2
        return max(0.0, min(score, 1.0))

    def _template_suggestions(self, habits: list[Any], categories: list[str], routines: list[Any]) -> list[dict[str, Any]]:
        existing = {(r.name or "").strip().lower() for r in routines}
        result = []
        for template in ROUTINE_TEMPLATES:
            if template["name"].lower() in existing:
                continue
            score = self.template_compatibility(template, categories, len(habits))
            if score <= TEMPLATE_THRESHOLD:
                continue

            have = ", ".join(categories) if categories else "current"
            result.append(
                _suggestion(
                    id=f"template-{template['id']}",
                    type="routine-template",
                    title=f'Try "{template["name"]}" Routine',
                    description=f"Based on your current habits, this {template['category']} routine could boost your progress by {round(score * 100)}%",
                    reasoning=f"Your {have} habits show you're ready for this {template['difficulty']} routine. Users with similar patterns saw {round(score * 50 + 25)}% improvement.",
                    confidence=score,
                    category=template["category"],
                    action_data={
                        "template_id": template["id"],
                        "routine_data": {
                            "name": template["name"],
                            "description": template["description"],
                            "color": template["color"],
                            "icon": template["icon"],
                        },
                    },
                )
            )
        return result

    def _optimization_suggestions(self, habits: list[Any], completed: dict[Any, set[date]], patterns: dict[str, Any], today: date) -> list[dict[str, Any]]:
        result = []
        for habit in habits:
            rate = recent_completion_ratio(completed.get(habit.id, set()), 30, today)
            if not 0.3 < rate < 0.7:
                continue

            weekly = patterns["weekly_patterns"].get(habit.id, [])
            best = [(day, r) for day, r in enumerate(weekly) if r > BEST_DAY_RATE]
            target_days = list(habit.target_days or [])
            if not best or len(best) >= len(target_days):
                continue

            best_avg = sum(r for _, r in best) / len(best)
            labels = ", ".join(DAY_LABELS[day] for day, _ in best)
            result.append(
                _suggestion(
                    id=f"optimize-{habit.id}",
                    type="optimization",
                    title=f'Optimize "{habit.name}" Schedule',
                    description="Focus on your most successful days to build consistency",
                    reasoning=f"You complete this habit {round(rate * 100)}% of the time. Your success rate is highest on {labels} ({round(best_avg * 100)}%).",
                    confidence=min(0.95, 0.5 + 0.4 * best_avg),
                    category="optimization",
                    action_data={
                        "habit_id": habit.id,
                        "suggested_days": [day for day, _ in best],
                        "optimization_tips": [
                            f"Focus on {len(best)} days per week instead of {len(target_days)}",
                            "Build consistency before expanding",
                            "Track what makes those days successful",
                        ],
                    },
                )
            )
        return result

    def _new_habit_suggestions(self, habits: list[Any], categories: list[str]) -> list[dict[str, Any]]:
        if len(habits) < 2:
            return []

        result = []
        for idea in NEW_HABIT_IDEAS:
            if idea["category"] in categories:
                continue
            habit = idea["habits"][0]
            result.append(
                _suggestion(
                    id=f"new-habit-{idea['category']}",
                    type="new-habit",
                    title=f'Add "{habit["name"]}" to Your Routine',
                    description=f"Complement your existing habits with {idea['category']} practices",
                    reasoning=f"You've built consistency with {len(habits)} habits. Adding {idea['category']} habits could create a more balanced routine and improve overall well-being.",
                    confidence=0.7,
                    category=idea["category"],
                    action_data={
                        "habit_suggestions": [
                            {
                                "name": habit["name"],
                                "description": habit["description"],
                                "icon": habit["icon"],
                                "frequency": "daily",
                                "target_days": [0, 1, 2, 3, 4, 5, 6],
                                "color": "#0D9488",
                            }
                        ]
                    },
                )
            )
        return result

    def _timing_suggestions(self, habits: list[Any]) -> list[dict[str, Any]]:
        names = [(h.name or "").lower() for h in habits]
        morning = [n for n in names if any(k in n for k in MORNING_KEYWORDS)]
        evening = [n for n in names if any(k in n for k in EVENING_KEYWORDS)]
        if not morning or evening:
            return []

        return [
            _suggestion(
                id="timing-evening",
                type="timing",
                title="Add Evening Wind-Down Routine",
                description="Balance your morning habits with evening practices",
                reasoning=f"You have {len(morning)} morning habit{'s' if len(morning) != 1 else ''} but no evening routine. Evening habits can improve sleep quality and next-day performance.",
                confidence=0.75,
                category="timing",
                action_data={"template_id": "evening-wind-down"},
            )
        ]

    def _pairing_suggestions(self, habits: list[Any], patterns: dict[str, Any]) -> list[dict[str, Any]]:
        by_id = {h.id: h for h in habits}
        result = []
        for pair in patterns["correlations"]:
            score = pair["correlation"]
            first, second = by_id.get(pair["habit1"]), by_id.get(pair["habit2"])
            if score <= CORRELATION_PAIRING or first is None or second is None:
                continue

            result.append(
                _suggestion(
                    id=f"correlation-{first.id}-{second.id}",
                    type="correlation-pairing",
                    title=f'Pair "{first.name}" with "{second.name}"',
                    description="These habits work great together",
                    reasoning=f"You complete these habits together {round(score * 100)}% of the time. Consider doing them in sequence for better consistency.",
                    confidence=score,
                    category="correlation",
                    action_data={
                        "habit_ids": [first.id, second.id],
                        "optimization_tips": [
                            "Do these habits back-to-back",
                            "Set the same reminder time",
                            "Create a mini-routine with both habits",
                        ],
                    },
                )
            )
        return result


def _suggestion(**fields) -> dict[str, Any]:
    fields["confidence"] = round(float(fields["confidence"]), 4)
    fields["created_at"] = datetime.utcnow()
    return fields
