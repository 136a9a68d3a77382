"""
Mood trends over recent entries.
"""

from collections import Counter
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from .moods import (
    DIFFICULT_MOODS,
    MOOD_LABELS,
    NEUTRAL,
    NEUTRAL_SCORE,
    get_mood_emoji,
    mood_score,
    normalize_mood,
)
from .streaks import parse_entry_date

WEEK_WINDOW = 7
MONTH_WINDOW = 30
MIN_ENTRIES_FOR_TREND = 3
DOMINANT_MOOD_DAYS = 3

WRITE_MORE_MESSAGE = "Write more entries to see your mood patterns!"

DOMINANT_MOOD_CLAUSES = {
    "stressed": "Try some relaxation techniques or take short breaks when you can.",
    "happy": "Your positive energy is shining through!",
    "excited": "Your positive energy is shining through!",
    "sad": "Be gentle with yourself, and consider talking to someone you trust.",
}


def _windows(entries: List[Dict[str, Any]], today: date):
    last_week, last_month = [], []
    for entry in entries:
        entry_date = parse_entry_date(entry.get("date"))
        if entry_date is None:
            continue
        age = (today - entry_date).days
        if 0 <= age < MONTH_WINDOW:
            last_month.append(entry)
            if age < WEEK_WINDOW:
                last_week.append(entry)
    return last_week, last_month


def trend_message(recent_moods: List[str], average: float) -> str:
    """Human-readable summary of the last week's moods."""
    if len(recent_moods) < MIN_ENTRIES_FOR_TREND:
        return WRITE_MORE_MESSAGE

    if average >= 4:
        message = "You've been feeling great lately! Keep up the positive energy."
    elif average >= 3.5:
        message = "Your mood has been pretty stable. You're doing well!"
    elif average >= 2.5:
        message = "You seem to be going through some ups and downs. Take care of yourself."
    else:
        message = "It looks like you've been having a tough time. Remember, it's okay to ask for help."

    ranked = Counter(recent_moods).most_common(2)
    mood, count = ranked[0]
    tied = len(ranked) > 1 and ranked[1][1] == count
    clause = DOMINANT_MOOD_CLAUSES.get(mood)
    if count >= DOMINANT_MOOD_DAYS and clause and not tied:
        message += " " + clause

    return message


def analyze_trends(entries: List[Dict[str, Any]], today: date) -> Dict[str, Any]:
    """
    Mood distribution over the last 30 days and average mood score over
    the last 7, both counted back from (and including) `today`.
    """
    last_week, last_month = _windows(entries, today)

    month_moods = [normalize_mood(entry.get("mood")) for entry in last_month]
    week_moods = [normalize_mood(entry.get("mood")) for entry in last_week]

    counts = Counter(month_moods)
    distribution = {
        mood: {
            "count": count,
            "percentage": round(count / len(month_moods) * 100)
        }
        for mood, count in counts.most_common()
    }

    scores = [mood_score(mood) for mood in week_moods]
    average = sum(scores) / len(scores) if scores else float(NEUTRAL_SCORE)
    dominant = counts.most_common(1)[0][0] if counts else NEUTRAL

    return {
        "last_7_days": len(last_week),
        "last_30_days": len(last_month),
        "mood_distribution": distribution,
        "average_score": round(average, 2),
        "dominant_mood": dominant,
        "trend_message": trend_message(week_moods, average)
    }


def build_mood_calendar(entries: List[Dict[str, Any]], today: date, days: int = MONTH_WINDOW) -> List[Dict[str, Any]]:
    """One cell per day for the last `days` days, oldest first."""
    by_date: Dict[date, Dict[str, Any]] = {}
    for entry in entries:
        entry_date = parse_entry_date(entry.get("date"))
        if entry_date is not None:
            by_date.setdefault(entry_date, entry)

    calendar = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        entry = by_date.get(day)
        mood: Optional[str] = normalize_mood(entry.get("mood")) if entry else None
        calendar.append({
            "date": day.isoformat(),
            "mood": mood,
            "emoji": get_mood_emoji(mood) if mood else None,
            "has_entry": entry is not None,
            "entry_id": entry.get("id") if entry else None
        })
    return calendar


def mood_stats(entries: List[Dict[str, Any]]) -> Dict[str, Any]:
    """All-time mood counts and percentages."""
    counts = {label: 0 for label in MOOD_LABELS}
    for entry in entries:
        mood = normalize_mood(entry.get("mood"))
        counts[mood] = counts.get(mood, 0) + 1

    total = len(entries)
    most_common = max(counts, key=counts.get) if total else NEUTRAL

    return {
        "stats": counts,
        "total_entries": total,
        "most_common_mood": most_common,
        "mood_distribution": [
            {
                "mood": mood,
                "count": count,
                "percentage": round(count / total * 100, 1) if total else 0,
                "emoji": get_mood_emoji(mood)
            }
            for mood, count in counts.items()
        ]
    }


def describe_recent_trend(entries: List[Dict[str, Any]]) -> str:
    """One-sentence read on the moods of the 7 most recent entries."""
    if not entries:
        return "Start writing more entries to see your patterns!"

    recent = sorted(entries, key=lambda entry: str(entry.get("date", "")))[-WEEK_WINDOW:]
    dominant = Counter(normalize_mood(entry.get("mood")) for entry in recent).most_common(1)[0][0]

    if dominant in ("happy", "excited"):
        return "You've been in great spirits lately! Your positive energy is shining through your entries."
    if dominant in DIFFICULT_MOODS:
        return ("You seem to be going through a challenging time. Remember to take care of yourself "
                "and reach out for support when needed.")
    return "Your mood has been relatively balanced recently. You're managing life's ups and downs well."
