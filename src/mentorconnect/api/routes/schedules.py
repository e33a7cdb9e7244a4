"""Admin endpoints for the global appointment schedule."""

import logging

from fastapi import APIRouter, Depends

from mentorconnect.api.deps import get_rule_or_404, get_rule_store, update_rule_checked
from mentorconnect.scheduling.store import RuleKind, RuleStore, ScheduleRule
from mentorconnect.schemas.schedule import (
    AppointmentScheduleCreate,
    AppointmentScheduleRead,
    AppointmentScheduleUpdate,
)

router = APIRouter(prefix="/api/admin/appointment-schedules", tags=["schedules"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[AppointmentScheduleRead])
async def list_schedules(
    store: RuleStore = Depends(get_rule_store),
) -> list[ScheduleRule]:
    return await store.list_rules(RuleKind.GLOBAL)


@router.post("", response_model=AppointmentScheduleRead, status_code=201)
async def create_schedule(
    body: AppointmentScheduleCreate,
    store: RuleStore = Depends(get_rule_store),
) -> ScheduleRule:
    rule = await store.create_rule(RuleKind.GLOBAL, **body.model_dump())
    logger.info(
        "Created appointment schedule %d (day %d, %s-%s)",
        rule.id,
        rule.day_of_week,
        rule.start_time,
        rule.end_time,
    )
    return rule


@router.get("/{schedule_id}", response_model=AppointmentScheduleRead)
async def get_schedule(
    schedule_id: int,
    store: RuleStore = Depends(get_rule_store),
) -> ScheduleRule:
    return await get_rule_or_404(store, RuleKind.GLOBAL, schedule_id)


@router.patch("/{schedule_id}", response_model=AppointmentScheduleRead)
async def update_schedule(
    schedule_id: int,
    body: AppointmentScheduleUpdate,
    store: RuleStore = Depends(get_rule_store),
) -> ScheduleRule:
    """Update any field of a schedule except its id and creation time."""
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    rule = await update_rule_checked(store, RuleKind.GLOBAL, schedule_id, changes)
    logger.info("Updated appointment schedule %d: %s", schedule_id, sorted(changes))
    return rule


@router.delete("/{schedule_id}", status_code=204)
async def delete_schedule(
    schedule_id: int,
    store: RuleStore = Depends(get_rule_store),
) -> None:
    await get_rule_or_404(store, RuleKind.GLOBAL, schedule_id)
    await store.delete_rule(RuleKind.GLOBAL, schedule_id)
    logger.info("Deleted appointment schedule %d", schedule_id)
