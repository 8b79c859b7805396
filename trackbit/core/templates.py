from copy import deepcopy
from typing import Any, Dict, List, Optional

ALL_DAYS = [0, 1, 2, 3, 4, 5, 6]
WEEKDAYS = [1, 2, 3, 4, 5]

TEMPLATE_CATEGORIES = ("morning", "evening", "fitness", "productivity", "wellness")
DIFFICULTIES = ("beginner", "intermediate", "advanced")

CATEGORY_COLORS = {
    "morning": "#F59E0B",
    "evening": "#6366F1",
    "fitness": "#EF4444",
    "productivity": "#10B981",
    "wellness": "#EC4899",
    "custom": "#8B5CF6",
}


def _habit(name: str, description: str, icon: str, target_days: Optional[List[int]] = None, target_value: Optional[float] = None, unit: Optional[str] = None) -> Dict[str, Any]:
    days = list(target_days or ALL_DAYS)
    return {
        "name": name,
        "description": description,
        "icon": icon,
        "frequency": "daily" if days == ALL_DAYS else "custom",
        "target_days": days,
        "target_value": target_value,
        "unit": unit,
    }


ROUTINE_TEMPLATES: List[Dict[str, Any]] = [
    {
        "id": "energizing-morning",
        "name": "Energizing Morning",
        "description": "Start the day hydrated, moving and with a clear plan.",
        "category": "morning",
        "icon": "Sun",
        "color": CATEGORY_COLORS["morning"],
        "estimated_duration": 30,
        "difficulty": "beginner",
        "habits": [
            _habit("Drink Water", "A full glass right after waking up", "Droplets", target_value=1, unit="glass"),
            _habit("Morning Stretch", "Ten minutes of light stretching", "Activity", target_value=10, unit="minutes"),
            _habit("Plan the Day", "Write down the three most important tasks", "ListTodo"),
        ],
        "tags": ["energy", "hydration", "planning", "health"],
        "popularity": 5,
    },
    {
        "id": "miracle-morning",
        "name": "Miracle Morning",
        "description": "Silence, affirmations, visualization, exercise, reading and scribing.",
        "category": "morning",
        "icon": "Sunrise",
        "color": CATEGORY_COLORS["morning"],
        "estimated_duration": 60,
        "difficulty": "advanced",
        "habits": [
            _habit("Meditation", "Sit in silence", "Brain", target_value=10, unit="minutes"),
            _habit("Affirmations", "Read your affirmations out loud", "MessageCircle"),
            _habit("Morning Workout", "Get the heart rate up", "Dumbbell", target_value=20, unit="minutes"),
            _habit("Read", "Read a non-fiction book", "BookOpen", target_value=10, unit="pages"),
            _habit("Journal", "Write a few lines", "PenLine"),
        ],
        "tags": ["mindfulness", "learning", "fitness", "growth"],
        "popularity": 4,
    },
    {
        "id": "evening-wind-down",
        "name": "Evening Wind-Down",
        "description": "Disconnect from screens and prepare the body for sleep.",
        "category": "evening",
        "icon": "Moon",
        "color": CATEGORY_COLORS["evening"],
        "estimated_duration": 30,
        "difficulty": "beginner",
        "habits": [
            _habit("No Screens Before Bed", "Put devices away an hour before sleep", "MonitorOff"),
            _habit("Gratitude Journal", "Write three good things about today", "Heart"),
            _habit("Sleep by 11pm", "Lights off on time", "Bed"),
        ],
        "tags": ["sleep", "mindfulness", "relaxation", "health"],
        "popularity": 5,
    },
    {
        "id": "evening-reflection",
        "name": "Evening Reflection",
        "description": "Review the day and set up tomorrow.",
        "category": "evening",
        "icon": "Notebook",
        "color": CATEGORY_COLORS["evening"],
        "estimated_duration": 20,
        "difficulty": "intermediate",
        "habits": [
            _habit("Daily Review", "What went well and what to improve", "ClipboardCheck"),
            _habit("Plan Tomorrow", "Prepare tomorrow's priorities", "Calendar"),
            _habit("Read Before Bed", "Read fiction for fun", "BookOpen", target_value=15, unit="minutes"),
        ],
        "tags": ["productivity", "learning", "reflection"],
        "popularity": 4,
    },
    {
        "id": "beginner-fitness",
        "name": "Beginner Fitness",
        "description": "Gentle movement three days a week.",
        "category": "fitness",
        "icon": "Dumbbell",
        "color": CATEGORY_COLORS["fitness"],
        "estimated_duration": 25,
        "difficulty": "beginner",
        "habits": [
            _habit("Walk", "Brisk walk outside", "Footprints", target_days=[1, 3, 5], target_value=20, unit="minutes"),
            _habit("Bodyweight Workout", "Squats, push-ups and planks", "Dumbbell", target_days=[1, 3, 5]),
        ],
        "tags": ["fitness", "health", "exercise"],
        "popularity": 4,
    },
    {
        "id": "runner-training",
        "name": "Runner Training",
        "description": "A structured running week with recovery.",
        "category": "fitness",
        "icon": "Timer",
        "color": CATEGORY_COLORS["fitness"],
        "estimated_duration": 45,
        "difficulty": "advanced",
        "habits": [
            _habit("Run", "Easy or tempo run", "Timer", target_days=[1, 3, 6], target_value=5, unit="km"),
            _habit("Mobility", "Foam roll and stretch", "Activity", target_days=[2, 4], target_value=15, unit="minutes"),
            _habit("Track Water Intake", "Stay hydrated on training days", "Droplets", target_value=8, unit="glasses"),
        ],
        "tags": ["fitness", "running", "endurance"],
        "popularity": 3,
    },
    {
        "id": "deep-work-day",
        "name": "Deep Work Day",
        "description": "Protect focused blocks for your most important work.",
        "category": "productivity",
        "icon": "Target",
        "color": CATEGORY_COLORS["productivity"],
        "estimated_duration": 120,
        "difficulty": "intermediate",
        "habits": [
            _habit("Deep Work", "Focused work without notifications", "Focus", target_days=WEEKDAYS, target_value=90, unit="minutes"),
            _habit("Inbox Zero", "Process email once a day", "Mail", target_days=WEEKDAYS),
            _habit("Plan Tomorrow", "Prepare tomorrow's priorities", "Calendar", target_days=WEEKDAYS),
        ],
        "tags": ["productivity", "focus", "work"],
        "popularity": 4,
    },
    {
        "id": "student-study",
        "name": "Student Study Session",
        "description": "Consistent study with spaced review.",
        "category": "productivity",
        "icon": "GraduationCap",
        "color": CATEGORY_COLORS["productivity"],
        "estimated_duration": 60,
        "difficulty": "beginner",
        "habits": [
            _habit("Study Session", "Pomodoro study blocks", "BookOpen", target_days=WEEKDAYS, target_value=50, unit="minutes"),
            _habit("Review Notes", "Review yesterday's notes", "FileText", target_days=WEEKDAYS),
        ],
        "tags": ["learning", "productivity", "study"],
        "popularity": 3,
    },
    {
        "id": "mindful-living",
        "name": "Mindful Living",
        "description": "Small daily practices for a calmer mind.",
        "category": "wellness",
        "icon": "Leaf",
        "color": CATEGORY_COLORS["wellness"],
        "estimated_duration": 20,
        "difficulty": "beginner",
        "habits": [
            _habit("Meditation", "Guided or silent meditation", "Brain", target_value=10, unit="minutes"),
            _habit("Mindful Walk", "Walk without your phone", "Footprints", target_value=15, unit="minutes"),
            _habit("Gratitude Journal", "Write three good things about today", "Heart"),
        ],
        "tags": ["mindfulness", "wellness", "stress"],
        "popularity": 5,
    },
    {
        "id": "self-care-sunday",
        "name": "Self-Care Sunday",
        "description": "A weekly reset for body and mind.",
        "category": "wellness",
        "icon": "Sparkles",
        "color": CATEGORY_COLORS["wellness"],
        "estimated_duration": 90,
        "difficulty": "intermediate",
        "habits": [
            _habit("Weekly Review", "Look back at the week", "ClipboardCheck", target_days=[0]),
            _habit("Meal Prep", "Prepare healthy meals for the week", "ChefHat", target_days=[0]),
            _habit("Digital Detox", "Half a day offline", "WifiOff", target_days=[0], target_value=4, unit="hours"),
        ],
        "tags": ["wellness", "health", "planning"],
        "popularity": 3,
    },
]


def list_templates() -> List[Dict[str, Any]]:
    return deepcopy(ROUTINE_TEMPLATES)


def get_template_by_id(template_id: str) -> Optional[Dict[str, Any]]:
    for template in ROUTINE_TEMPLATES:
        if template["id"] == template_id:
            return deepcopy(template)
    return None


def get_templates_by_category(category: str) -> List[Dict[str, Any]]:
    return [deepcopy(t) for t in ROUTINE_TEMPLATES if t["category"] == category]


def get_popular_templates(limit: int = 3) -> List[Dict[str, Any]]:
    ranked = sorted(ROUTINE_TEMPLATES, key=lambda t: t["popularity"], reverse=True)
    return [deepcopy(t) for t in ranked[: max(limit, 0)]]


def search_templates(query: str) -> List[Dict[str, Any]]:
    """Case-insensitive match on name, description, tags and habit names."""
    needle = (query or "").strip().lower()
    if not needle:
        return list_templates()

    found: List[Dict[str, Any]] = []
    for template in ROUTINE_TEMPLATES:
        haystack = [template["name"], template["description"], *template["tags"]]
        haystack.extend(h["name"] for h in template["habits"])
        if any(needle in item.lower() for item in haystack):
            found.append(deepcopy(template))
    return found
