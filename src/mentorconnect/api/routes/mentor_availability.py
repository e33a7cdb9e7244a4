"""Mentor availability rules: public listing and admin management."""

import logging

from fastapi import APIRouter, Depends

from mentorconnect.api.deps import get_rule_or_404, get_rule_store, update_rule_checked
from mentorconnect.scheduling.store import RuleKind, RuleStore, ScheduleRule
from mentorconnect.schemas.schedule import (
    MentorAvailabilityCreate,
    MentorAvailabilityRead,
    MentorAvailabilityUpdate,
)

router = APIRouter(tags=["mentor-availability"])
logger = logging.getLogger(__name__)


@router.get("/api/mentor-availability", response_model=list[MentorAvailabilityRead])
async def list_all_mentor_availability(
    store: RuleStore = Depends(get_rule_store),
) -> list[ScheduleRule]:
    return await store.list_rules(RuleKind.MENTOR)


@router.post(
    "/api/admin/mentor-availability", response_model=MentorAvailabilityRead, status_code=201
)
async def create_mentor_availability(
    body: MentorAvailabilityCreate,
    store: RuleStore = Depends(get_rule_store),
) -> ScheduleRule:
    rule = await store.create_rule(RuleKind.MENTOR, **body.model_dump())
    logger.info(
        "Created availability %d for mentor %d (day %d, %s-%s)",
        rule.id,
        body.mentor_id,
        rule.day_of_week,
        rule.start_time,
        rule.end_time,
    )
    return rule


@router.get(
    "/api/admin/mentor-availability/{mentor_id}", response_model=list[MentorAvailabilityRead]
)
async def get_mentor_availability(
    mentor_id: int,
    store: RuleStore = Depends(get_rule_store),
) -> list[ScheduleRule]:
    """All availability rules of one mentor, active or not."""
    return await store.list_rules(RuleKind.MENTOR, mentor_id=mentor_id)


@router.patch(
    "/api/admin/mentor-availability/rules/{rule_id}", response_model=MentorAvailabilityRead
)
async def update_mentor_availability(
    rule_id: int,
    body: MentorAvailabilityUpdate,
    store: RuleStore = Depends(get_rule_store),
) -> ScheduleRule:
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    rule = await update_rule_checked(store, RuleKind.MENTOR, rule_id, changes)
    logger.info("Updated mentor availability %d: %s", rule_id, sorted(changes))
    return rule


@router.delete("/api/admin/mentor-availability/rules/{rule_id}", status_code=204)
async def delete_mentor_availability(
    rule_id: int,
    store: RuleStore = Depends(get_rule_store),
) -> None:
    await get_rule_or_404(store, RuleKind.MENTOR, rule_id)
    await store.delete_rule(RuleKind.MENTOR, rule_id)
    logger.info("Deleted mentor availability %d", rule_id)
