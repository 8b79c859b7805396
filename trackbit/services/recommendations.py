from typing import Any, Optional

from trackbit.config import settings

EVERY_DAY = [0, 1, 2, 3, 4, 5, 6]
WORK_DAYS = [1, 2, 3, 4, 5]

LIFESTYLE_FOCUS_OPTIONS = (
    "health-wellness",
    "work-career",
    "family-relationship",
    "financial",
    "social-leisure",
    "technological",
    "cultural-spiritual",
    "environment-ethical",
)
GENDER_OPTIONS = ("male", "female", "non-binary", "prefer-not-to-say")
OCCUPATION_OPTIONS = ("student", "professional", "self-employed", "retired", "unemployed", "other")


def _rec(category: str, name: str, description: str, icon: str, color: str, target_days: list[int], reasoning: str, confidence: float, tags: list[str], target_value: Optional[float] = None, unit: Optional[str] = None) -> dict[str, Any]:
    return {
        "category": category,
        "name": name,
        "description": description,
        "icon": icon,
        "color": color,
        "frequency": "daily" if target_days == EVERY_DAY else "custom",
        "target_days": list(target_days),
        "target_value": target_value,
        "unit": unit,
        "reasoning": reasoning,
        "confidence_score": confidence,
        "tags": tags,
    }


def generate_habit_recommendations(profile, limit: Optional[int] = None) -> list[dict[str, Any]]:
    """Deterministic rule table keyed by lifestyle focus, age, gender and occupation."""
    focus = set(profile.lifestyle_focus or [])
    age = profile.age
    occupation = profile.occupation_category
    recs: list[dict[str, Any]] = []

    if "health-wellness" in focus:
        weight = f" and weight of {profile.weight_kg:g}kg" if profile.weight_kg else ""
        early = "building healthy habits early" if age and age < 30 else "maintaining health and energy"
        recs.append(_rec(
            "health-wellness", "Drink Water", "Stay hydrated throughout the day", "Droplets", "#3B82F6", EVERY_DAY,
            f"Based on your focus on health & wellness{weight}, staying hydrated is essential for optimal body function.",
            0.95, ["hydration", "health", "daily"], 8, "glasses",
        ))
        recs.append(_rec(
            "health-wellness", "Morning Exercise", "30 minutes of physical activity", "Dumbbell", "#EF4444", WORK_DAYS,
            f"Regular exercise is crucial for {early}. Perfect for your health-focused lifestyle.",
            0.9, ["exercise", "fitness", "morning"], 30, "minutes",
        ))

    if "work-career" in focus:
        recs.append(_rec(
            "work-career", "Deep Work Session", "Focused work without distractions", "Brain", "#8B5CF6", WORK_DAYS,
            f"As a {occupation or 'professional'}, deep focus sessions will significantly boost your productivity and career growth.",
            0.88, ["productivity", "focus", "career"], 90 if occupation == "student" else 120, "minutes",
        ))
        recs.append(_rec(
            "work-career", "Skill Learning", "Learn something new related to your field", "BookOpen", "#10B981", EVERY_DAY,
            "Continuous learning is essential for career advancement and staying competitive in your field.",
            0.85, ["learning", "growth", "skills"], 30, "minutes",
        ))

    if "family-relationship" in focus:
        recs.append(_rec(
            "family-relationship", "Quality Time", "Spend meaningful time with loved ones", "Heart", "#EC4899", EVERY_DAY,
            "Strong relationships are built through consistent, quality interactions. This habit will strengthen your bonds with family and friends.",
            0.9, ["relationships", "family", "connection"], 60, "minutes",
        ))

    if "financial" in focus:
        recs.append(_rec(
            "financial", "Budget Review", "Review and track daily expenses", "DollarSign", "#F59E0B", EVERY_DAY,
            "Daily financial awareness is key to building wealth and achieving financial goals.",
            0.82, ["money", "budgeting", "financial-health"],
        ))

    if "cultural-spiritual" in focus:
        recs.append(_rec(
            "cultural-spiritual", "Meditation", "Mindfulness and inner peace practice", "Brain", "#6366F1", EVERY_DAY,
            "Regular meditation enhances spiritual growth, reduces stress, and improves overall well-being.",
            0.87, ["meditation", "mindfulness", "spiritual"], 15, "minutes",
        ))
        recs.append(_rec(
            "cultural-spiritual", "Gratitude Journal", "Write down things you're grateful for", "BookOpen", "#10B981", EVERY_DAY,
            "Gratitude practice enhances spiritual awareness and promotes positive thinking.",
            0.83, ["gratitude", "journaling", "positivity"], 3, "items",
        ))

    if age:
        if age < 25:
            recs.append(_rec(
                "personal-development", "Read Books", "Read for personal and professional growth", "BookOpen", "#0D9488", EVERY_DAY,
                "At your age, building a strong reading habit will compound into tremendous knowledge and wisdom over time.",
                0.9, ["reading", "learning", "growth"], 30, "minutes",
            ))
        elif age > 50:
            recs.append(_rec(
                "health-wellness", "Gentle Stretching", "Maintain flexibility and mobility", "Activity", "#10B981", EVERY_DAY,
                "Regular stretching becomes increasingly important for maintaining mobility and preventing injury as we age.",
                0.88, ["stretching", "flexibility", "health"], 15, "minutes",
            ))

    if profile.gender == "female":
        recs.append(_rec(
            "health-wellness", "Self-Care Time", "Dedicated time for personal wellness", "Heart", "#EC4899", EVERY_DAY,
            "Self-care is essential for maintaining physical and mental health, especially important for overall well-being.",
            0.85, ["self-care", "wellness", "mental-health"], 30, "minutes",
        ))

    if occupation == "student":
        recs.append(_rec(
            "work-career", "Study Session", "Focused study time", "BookOpen", "#8B5CF6", WORK_DAYS,
            "Consistent daily study habits are crucial for academic success and knowledge retention.",
            0.92, ["studying", "education", "focus"], 120, "minutes",
        ))

    cap = settings.RECOMMENDATION_LIMIT if limit is None else limit
    return recs[:cap]
