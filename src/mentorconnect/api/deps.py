"""Shared FastAPI dependencies and rule lookup helpers."""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from mentorconnect.config import get_settings
from mentorconnect.database import get_db
from mentorconnect.scheduling.resolver import AvailabilityResolver
from mentorconnect.scheduling.slots import InvalidTimeFormat, InvalidTimeWindow, validate_window
from mentorconnect.scheduling.store import RuleKind, RuleStore, ScheduleRule, SqlRuleStore

RULE_LABELS = {
    RuleKind.GLOBAL: "Appointment schedule",
    RuleKind.MENTOR: "Mentor availability",
}


def get_clock() -> Callable[[], datetime]:
    return datetime.now


async def get_rule_store(session: AsyncSession = Depends(get_db)) -> RuleStore:
    return SqlRuleStore(session)


async def get_resolver(
    store: RuleStore = Depends(get_rule_store),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> AvailabilityResolver:
    return AvailabilityResolver(
        store, step_minutes=get_settings().slot_step_minutes, clock=clock
    )


async def get_rule_or_404(store: RuleStore, kind: RuleKind, rule_id: int) -> ScheduleRule:
    rule = await store.get_rule(kind, rule_id)
    if rule is None:
        raise HTTPException(status_code=404, detail=f"{RULE_LABELS[kind]} not found")
    return rule


async def update_rule_checked(
    store: RuleStore, kind: RuleKind, rule_id: int, changes: dict[str, Any]
) -> ScheduleRule:
    """Apply a partial update, checking the merged window when times change."""
    rule = await get_rule_or_404(store, kind, rule_id)
    # A stored window that does not parse can still be deactivated or moved.
    if "start_time" in changes or "end_time" in changes:
        start_time = changes.get("start_time", rule.start_time)
        end_time = changes.get("end_time", rule.end_time)
        try:
            validate_window(start_time, end_time)
        except (InvalidTimeFormat, InvalidTimeWindow) as e:
            raise HTTPException(status_code=422, detail=str(e)) from e

    updated = await store.update_rule(kind, rule_id, changes)
    if updated is None:
        raise HTTPException(status_code=404, detail=f"{RULE_LABELS[kind]} not found")
    return updated
