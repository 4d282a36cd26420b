"""
Date/time utilities for task due dates
All due-date presentation logic should use functions from this module
"""

from datetime import datetime, date, time
from typing import Any, Optional
from src.config.constants import (
    DEFAULT_DUE_TIME,
    DUE_SOON_WINDOW_DAYS,
    TIME_DISPLAY_LENGTH,
    TIME_PLACEHOLDER,
)
from src.utils.logger import logger

SECONDS_PER_DAY = 24 * 60 * 60


def get_current_datetime() -> datetime:
    """
    Get current local datetime (naive, viewer's wall clock)

    Returns:
        Current datetime object
    """
    return datetime.now()


def normalize_time_value(value: Any) -> Optional[str]:
    """
    Normalize a due time to "HH:MM"

    Accepts None/"", "HH:MM", "HH:MM:SS" or an [hour, minute] pair.
    Other values are converted with str().

    Args:
        value: Raw due time

    Returns:
        Normalized time string or None if absent
    """
    if value is None or value == "":
        return None

    if isinstance(value, str):
        return value[:TIME_DISPLAY_LENGTH] if len(value) > TIME_DISPLAY_LENGTH else value

    if isinstance(value, (list, tuple)) and len(value) >= 2:
        hour, minute = value[0], value[1]
        return f"{str(hour).zfill(2)}:{str(minute).zfill(2)}"

    return str(value)


def format_time(value: Any) -> str:
    """Due time for display, with a placeholder when absent"""
    return normalize_time_value(value) or TIME_PLACEHOLDER


def format_date(value: Any) -> str:
    """Due date for display, with a placeholder when absent"""
    if value is None or value == "":
        return TIME_PLACEHOLDER
    if isinstance(value, (list, tuple)) and len(value) >= 3:
        try:
            return date(int(value[0]), int(value[1]), int(value[2])).isoformat()
        except (TypeError, ValueError):
            return str(value)
    return str(value)


def _parse_due_datetime(due_date: Any, normalized_time: str) -> datetime:
    if isinstance(due_date, datetime):
        due_date = due_date.date()
    if isinstance(due_date, date):
        day = due_date
    elif isinstance(due_date, (list, tuple)) and len(due_date) >= 3:
        # Jackson LocalDate array: [year, month, day]
        day = date(int(due_date[0]), int(due_date[1]), int(due_date[2]))
    else:
        day = date.fromisoformat(str(due_date))
    return datetime.combine(day, time.fromisoformat(normalized_time))


def is_due_soon(
    due_date: Any,
    due_time: Any = None,
    now: Optional[datetime] = None,
) -> bool:
    """
    Check whether a task is due within the next two days

    The due instant is the date plus the normalized time (end of day when
    no time is set), read as local time. Overdue tasks are never due soon.

    Args:
        due_date: Due date (ISO string, date or [year, month, day])
        due_time: Raw due time in any shape accepted by normalize_time_value
        now: Current local datetime (defaults to now)

    Returns:
        True if 0 <= days until due <= 2
    """
    if not due_date:
        return False

    normalized_time = normalize_time_value(due_time) or DEFAULT_DUE_TIME

    try:
        due = _parse_due_datetime(due_date, normalized_time)
    except (TypeError, ValueError) as e:
        logger.warning(f"Cannot interpret due date '{due_date}' at '{normalized_time}': {e}")
        return False

    if now is None:
        now = get_current_datetime()

    diff_days = (due - now).total_seconds() / SECONDS_PER_DAY
    return 0 <= diff_days <= DUE_SOON_WINDOW_DAYS
