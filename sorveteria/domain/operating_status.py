"""Open/closed status derived from the configured hours and the current time."""

from collections.abc import Mapping, Sequence
from datetime import datetime

from .constants import WEEKDAY_KEYS, OperatingStatus
from .entities import DayHours, SpecialHours


def weekday_key(moment: datetime) -> str:
    """Return the day key (``segunda`` ... ``domingo``) for a moment."""
    return WEEKDAY_KEYS[moment.weekday()]


def _within(current: str, open_time: str, close_time: str) -> bool:
    # Zero-padded HH:MM strings order the same way as the times they encode
    return open_time <= current < close_time


def compute_operating_status(
    weekly_hours: Mapping[str, DayHours],
    special_hours: Sequence[SpecialHours],
    now: datetime,
) -> OperatingStatus:
    """Decide whether the shop is open at ``now``.

    A special-hours entry for today's date wins over the weekly table when it
    is marked closed or carries both times; otherwise the weekly entry for
    today's weekday decides. Open intervals are half-open: ``[open, close)``.

    Never returns ``OperatingStatus.OPENING_SOON``.
    """
    today = now.strftime("%Y-%m-%d")
    current_time = now.strftime("%H:%M")

    special = next((s for s in special_hours if s.date == today), None)
    if special is not None:
        if special.closed:
            return OperatingStatus.CLOSED
        if special.open and special.close:
            if _within(current_time, special.open, special.close):
                return OperatingStatus.OPEN
            return OperatingStatus.CLOSED

    day = weekly_hours.get(weekday_key(now))
    if day is None or day.closed:
        return OperatingStatus.CLOSED

    if _within(current_time, day.open, day.close):
        return OperatingStatus.OPEN
    return OperatingStatus.CLOSED
