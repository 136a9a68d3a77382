"""
Achievement badges and streak milestones.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from .moods import DIFFICULT_MOODS, normalize_mood
from .streaks import compute_streaks, entry_dates, parse_entry_date

MILESTONE_DAYS = [7, 14, 30, 60, 100, 365]

BADGE_CATALOGUE = [
    ("first_entry", "First Steps", "Created your first journal entry", "🌱", "streak"),
    ("consistency_3", "Getting Started", "3 days writing streak", "🔥", "streak"),
    ("consistency_7", "Consistency Champ", "7 days writing streak", "💪", "streak"),
    ("consistency_30", "Monthly Master", "30 days writing streak", "👑", "streak"),
    ("deep_thinker", "Deep Thinker", "Wrote an entry with 500+ words", "🧠", "depth"),
    ("novelist", "Aspiring Novelist", "Wrote an entry with 1000+ words", "📚", "depth"),
    ("resilient_soul", "Resilient Soul", "Logged an entry despite a difficult mood", "💫", "mood"),
    ("joy_spreader", "Joy Spreader", "Logged 5 happy entries", "😊", "mood"),
    ("early_bird", "Early Bird", "Wrote an entry before 6 AM", "🌅", "special"),
    ("night_owl", "Night Owl", "Wrote an entry after 10 PM", "🦉", "special"),
]


def _created_hour(entry: Dict[str, Any]) -> Optional[int]:
    created = entry.get("created_at")
    if not isinstance(created, str):
        return None
    try:
        return datetime.fromisoformat(created).hour
    except ValueError:
        return None


def _word_count(entry: Dict[str, Any]) -> int:
    if isinstance(entry.get("word_count"), int):
        return entry["word_count"]
    return len((entry.get("content") or "").split())


def compute_badges(entries: List[Dict[str, Any]], today: date) -> List[Dict[str, Any]]:
    """The full badge catalogue with `earned` flags for these entries."""
    current = compute_streaks(entry_dates(entries), today)["current"]
    moods = [normalize_mood(entry.get("mood")) for entry in entries]
    hours = [hour for hour in (_created_hour(entry) for entry in entries) if hour is not None]
    longest_text = max((_word_count(entry) for entry in entries), default=0)

    earned = {
        "first_entry": bool(entries),
        "consistency_3": current >= 3,
        "consistency_7": current >= 7,
        "consistency_30": current >= 30,
        "deep_thinker": longest_text >= 500,
        "novelist": longest_text >= 1000,
        "resilient_soul": any(mood in DIFFICULT_MOODS for mood in moods),
        "joy_spreader": moods.count("happy") >= 5,
        "early_bird": any(hour < 6 for hour in hours),
        "night_owl": any(hour >= 22 for hour in hours),
    }

    first_date = min(
        (d for d in (parse_entry_date(entry.get("date")) for entry in entries) if d is not None),
        default=None
    )

    badges = []
    for badge_id, name, description, icon, category in BADGE_CATALOGUE:
        badge = {
            "id": badge_id,
            "name": name,
            "description": description,
            "icon": icon,
            "category": category,
            "earned": earned[badge_id]
        }
        if badge_id == "first_entry" and first_date is not None:
            badge["earned_date"] = first_date.isoformat()
        badges.append(badge)
    return badges


def next_milestone(current_streak: int) -> Optional[Dict[str, int]]:
    for milestone in MILESTONE_DAYS:
        if current_streak < milestone:
            return {
                "days": milestone,
                "remaining": milestone - current_streak,
                "progress": round(current_streak / milestone * 100)
            }
    return None
