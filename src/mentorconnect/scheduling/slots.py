"""Time-of-day helpers, slot generation and the same-day cutoff filter.

Slots are handled as ``datetime.time`` values internally and rendered as
zero-padded ``HH:MM`` strings only at the boundary.
"""

import re
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta

DEFAULT_STEP_MINUTES = 30

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class InvalidTimeFormat(ValueError):
    """A time-of-day string is not a zero-padded 24-hour ``HH:MM`` value."""


class InvalidTimeWindow(ValueError):
    """A window's start is not strictly before its end."""


def parse_time_of_day(value: str) -> time:
    """Parse ``"HH:MM"`` into a ``time``.

    Raises:
        InvalidTimeFormat: If the value is not zero-padded 24-hour ``HH:MM``.
    """
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Expected an HH:MM string, got {value!r}")
    match = _TIME_PATTERN.match(value)
    if match is None:
        raise InvalidTimeFormat(f"Invalid time of day: {value!r} (expected HH:MM)")
    return time(int(match.group(1)), int(match.group(2)))


def format_time_of_day(value: time) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


def validate_window(start_time: str, end_time: str) -> tuple[time, time]:
    """Parse both ends of a window and check that start < end."""
    start = parse_time_of_day(start_time)
    end = parse_time_of_day(end_time)
    if start >= end:
        raise InvalidTimeWindow(
            f"start_time {start_time} must be earlier than end_time {end_time}"
        )
    return start, end


def generate_slots(
    start_time: time, end_time: time, step_minutes: int = DEFAULT_STEP_MINUTES
) -> list[time]:
    """Slot start times in the half-open interval [start_time, end_time).

    An inverted or empty window yields no slots. Windows never wrap past
    midnight because both bounds are times of the same day.
    """
    if step_minutes <= 0:
        raise ValueError(f"step_minutes must be positive, got {step_minutes}")

    anchor = date.min
    current = datetime.combine(anchor, start_time)
    end = datetime.combine(anchor, end_time)
    step = timedelta(minutes=step_minutes)

    slots: list[time] = []
    while current < end:
        slots.append(current.time())
        current += step
    return slots


def unique_sorted(slots: Iterable[time]) -> list[time]:
    return sorted(set(slots))


def apply_today_cutoff(slots: list[time], target_date: date, now: datetime) -> list[time]:
    """Drop slots at or before the current minute when ``target_date`` is today.

    For any other date the slots are returned unchanged.
    """
    if target_date != now.date():
        return slots
    current = now.time().replace(second=0, microsecond=0)
    return [slot for slot in slots if slot > current]
