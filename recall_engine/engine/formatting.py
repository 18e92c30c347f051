"""
Display helpers shared by the answer strategies.
"""

import math
from datetime import datetime

from recall_engine.engine.scoring import days_between


_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_date(date: datetime) -> str:
    """Render a date as ``Mon D, YYYY`` (e.g. ``Jan 5, 2026``)."""
    return f"{_MONTHS[date.month - 1]} {date.day}, {date.year}"


def relative_time(date: datetime, now: datetime) -> str:
    """Human-friendly age of *date* relative to *now*; future dates read as Today."""
    days = max(0, math.floor(days_between(date, now)))

    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{days // 7} weeks ago"
    if days < 365:
        return f"{days // 30} months ago"
    return f"{days // 365} years ago"


def truncate(text: str, limit: int) -> str:
    """Cut *text* to *limit* characters, appending ``...`` when shortened."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def plural(count: int, noun: str) -> str:
    """``1 board`` / ``2 boards``."""
    return f"{count} {noun}{'s' if count != 1 else ''}"
