"""Default global booking hours for a fresh install."""

import logging

from mentorconnect.scheduling.store import RuleKind, RuleStore

logger = logging.getLogger(__name__)

# (day_of_week, start, end) with 0=Sunday
DEFAULT_GLOBAL_SCHEDULES: list[tuple[int, str, str]] = [
    *[(day, "08:00", "18:00") for day in range(1, 6)],  # Monday-Friday
    (6, "09:00", "13:00"),  # Saturday
]


async def seed_default_schedules(store: RuleStore) -> int:
    """Create the default global schedules if none exist yet.

    Returns the number of rules created.
    """
    if await store.list_rules(RuleKind.GLOBAL):
        return 0
    for day_of_week, start_time, end_time in DEFAULT_GLOBAL_SCHEDULES:
        await store.create_rule(
            RuleKind.GLOBAL,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
        )
    logger.info("Seeded %d default appointment schedules", len(DEFAULT_GLOBAL_SCHEDULES))
    return len(DEFAULT_GLOBAL_SCHEDULES)
