"""Availability resolution: turn weekly rules into bookable slots for a date.

The pure functions operate on a snapshot of rules; ``AvailabilityResolver``
binds them to a rule store and a clock.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime, time

from mentorconnect.scheduling.slots import (
    DEFAULT_STEP_MINUTES,
    InvalidTimeFormat,
    apply_today_cutoff,
    format_time_of_day,
    generate_slots,
    parse_time_of_day,
    unique_sorted,
)
from mentorconnect.scheduling.store import RuleStore, ScheduleRule

logger = logging.getLogger(__name__)


def weekday_index(target_date: date) -> int:
    """Day of week with Sunday=0 through Saturday=6."""
    return (target_date.weekday() + 1) % 7


def _rule_slots(rule: ScheduleRule, step_minutes: int) -> list[time]:
    """Slots for one rule, or none if its times do not parse."""
    try:
        start = parse_time_of_day(rule.start_time)
        end = parse_time_of_day(rule.end_time)
    except InvalidTimeFormat as e:
        logger.warning(
            "Skipping %s rule %s with unusable window %r-%r: %s",
            rule.kind.value,
            rule.id,
            rule.start_time,
            rule.end_time,
            e,
        )
        return []
    return generate_slots(start, end, step_minutes)


def _matching(rules: Iterable[ScheduleRule], weekday: int) -> list[ScheduleRule]:
    return [r for r in rules if r.is_active and r.day_of_week == weekday]


def resolve_available_times(
    rules: Iterable[ScheduleRule],
    target_date: date,
    now: datetime,
    step_minutes: int = DEFAULT_STEP_MINUTES,
) -> list[time]:
    """Union the slots of every active rule on ``target_date``'s weekday.

    The result is deduplicated, sorted, and cut off at ``now`` when
    ``target_date`` is today. No matching rules means no availability.
    """
    weekday = weekday_index(target_date)
    matching = _matching(rules, weekday)
    if not matching:
        return []

    slots: list[time] = []
    for rule in matching:
        slots.extend(_rule_slots(rule, step_minutes))

    resolved = apply_today_cutoff(unique_sorted(slots), target_date, now)
    logger.debug(
        "Resolved %d slots from %d rules for %s (weekday %d)",
        len(resolved),
        len(matching),
        target_date,
        weekday,
    )
    return resolved


def resolve_mentor_availability(
    rules: Iterable[ScheduleRule],
    target_date: date,
    step_minutes: int = DEFAULT_STEP_MINUTES,
) -> dict[int, list[time]]:
    """Per-mentor slots for ``target_date``, keyed by mentor id.

    Several windows for one mentor are merged into that mentor's list.
    Mentors appear in the order their first matching rule is found. The
    same-day cutoff is not applied here.
    """
    weekday = weekday_index(target_date)
    by_mentor: dict[int, list[time]] = {}
    for rule in _matching(rules, weekday):
        if rule.mentor_id is None:
            continue
        by_mentor.setdefault(rule.mentor_id, []).extend(_rule_slots(rule, step_minutes))
    return {mentor_id: unique_sorted(slots) for mentor_id, slots in by_mentor.items()}


class AvailabilityResolver:
    """Read-side entry point: bookable times for a calendar date."""

    def __init__(
        self,
        store: RuleStore,
        step_minutes: int = DEFAULT_STEP_MINUTES,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._step_minutes = step_minutes
        self._clock = clock or datetime.now

    async def get_available_appointment_times(self, target_date: date) -> list[str]:
        rules = await self._store.list_active_global_schedules_for_weekday(
            weekday_index(target_date)
        )
        slots = resolve_available_times(rules, target_date, self._clock(), self._step_minutes)
        return [format_time_of_day(s) for s in slots]

    async def get_available_mentor_time_slots(self, target_date: date) -> dict[int, list[str]]:
        rules = await self._store.list_active_mentor_availability_for_weekday(
            weekday_index(target_date)
        )
        resolved = resolve_mentor_availability(rules, target_date, self._step_minutes)
        return {
            mentor_id: [format_time_of_day(s) for s in slots]
            for mentor_id, slots in resolved.items()
        }
