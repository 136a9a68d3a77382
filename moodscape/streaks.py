"""
Writing streaks and engagement counts.
"""

from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Set


def parse_entry_date(value: Any) -> Optional[date]:
    """Return the calendar date of an entry's `date` value, or None if unusable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value[:10], "%Y-%m-%d").date()
        except ValueError:
            return None
    return None


def entry_dates(entries: Iterable[Dict[str, Any]]) -> Set[date]:
    """Unique calendar dates of the given entries (unparseable dates skipped)."""
    dates = set()
    for entry in entries:
        parsed = parse_entry_date(entry.get("date"))
        if parsed is not None:
            dates.add(parsed)
    return dates


def compute_streaks(dates: Iterable[date], today: date) -> Dict[str, int]:
    """
    Current and longest run of consecutive days with an entry.

    The current streak is counted backward from today, or from yesterday
    when nothing has been written today yet, and stops at the first gap.
    """
    unique = set(dates)
    if not unique:
        return {"current": 0, "longest": 0}

    current = 0
    check_date = today if today in unique else today - timedelta(days=1)
    while check_date in unique:
        current += 1
        check_date -= timedelta(days=1)

    ordered = sorted(unique)
    longest = 1
    run = 1
    for previous, day in zip(ordered, ordered[1:]):
        if day - previous == timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1

    return {"current": current, "longest": longest}


def streak_summary(entries: List[Dict[str, Any]], today: date) -> Dict[str, Any]:
    """
    Calculate journaling streak and engagement stats.
    """
    dates = entry_dates(entries)
    if not dates:
        return {
            "current_streak": 0,
            "longest_streak": 0,
            "total_entries": len(entries),
            "this_week": 0,
            "this_month": 0,
            "last_entry_date": None
        }

    streaks = compute_streaks(dates, today)
    month_start = today.replace(day=1)

    this_week = sum(1 for d in dates if 0 <= (today - d).days < 7)
    this_month = sum(1 for d in dates if month_start <= d <= today)

    return {
        "current_streak": streaks["current"],
        "longest_streak": streaks["longest"],
        "total_entries": len(entries),
        "this_week": this_week,
        "this_month": this_month,
        "last_entry_date": max(dates).isoformat()
    }


def week_chain(dates: Set[date], today: date) -> List[Dict[str, Any]]:
    """Last 7 days, oldest first, flagged with whether each has an entry."""
    chain = []
    for offset in range(6, -1, -1):
        day = today - timedelta(days=offset)
        chain.append({
            "date": day.isoformat(),
            "day": day.strftime("%a")[0],
            "has_entry": day in dates,
            "is_today": offset == 0
        })
    return chain


def encouragement_message(summary: Dict[str, Any]) -> str:
    """Generate personalized encouragement based on streak."""
    streak = summary.get("current_streak", 0)
    total = summary.get("total_entries", 0)

    if streak == 0:
        if total == 0:
            return "Start your journaling journey today. Every story begins with one page."
        return "Welcome back! Ready to pick up your reflection practice again?"
    elif streak == 1:
        return "Great start! One day at a time builds lasting habits."
    elif streak < 7:
        return f"{streak} days in a row! You're building something meaningful."
    elif streak < 30:
        return f"Amazing {streak}-day streak! Consistency is your superpower."
    elif streak < 100:
        return f"Incredible {streak} days! Your dedication to self-reflection inspires."
    else:
        return f"Legendary {streak}-day streak! Daily reflection is part of who you are now."
