"""Bookable time slots for a calendar date."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError

from mentorconnect.api.deps import get_resolver
from mentorconnect.scheduling.resolver import AvailabilityResolver

router = APIRouter(prefix="/api", tags=["availability"])
logger = logging.getLogger(__name__)

UNAVAILABLE_DETAIL = "Availability unavailable"


@router.get("/available-time-slots", response_model=list[str])
async def get_available_time_slots(
    target_date: date = Query(alias="date"),
    resolver: AvailabilityResolver = Depends(get_resolver),
) -> list[str]:
    """Bookable "HH:MM" start times under the global schedule."""
    try:
        return await resolver.get_available_appointment_times(target_date)
    except SQLAlchemyError as e:
        logger.exception("Failed to load appointment schedules for %s", target_date)
        raise HTTPException(status_code=503, detail=UNAVAILABLE_DETAIL) from e


@router.get("/available-mentor-time-slots", response_model=dict[int, list[str]])
async def get_available_mentor_time_slots(
    target_date: date = Query(alias="date"),
    resolver: AvailabilityResolver = Depends(get_resolver),
) -> dict[int, list[str]]:
    """Bookable "HH:MM" start times per mentor id."""
    try:
        return await resolver.get_available_mentor_time_slots(target_date)
    except SQLAlchemyError as e:
        logger.exception("Failed to load mentor availability for %s", target_date)
        raise HTTPException(status_code=503, detail=UNAVAILABLE_DETAIL) from e
