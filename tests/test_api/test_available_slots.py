"""Tests for the bookable time slot endpoints."""

from collections.abc import AsyncGenerator

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import SQLAlchemyError

from mentorconnect.api.deps import get_rule_store
from mentorconnect.main import app
from mentorconnect.scheduling.store import InMemoryRuleStore, RuleKind, ScheduleRule

# FIXED_NOW in conftest is Monday 2024-06-10 09:45
TODAY = "2024-06-10"
NEXT_MONDAY = "2024-06-17"
SUNDAY = "2024-06-16"


async def _schedule(client: AsyncClient, day: int, start: str, end: str, **extra: object) -> None:
    resp = await client.post(
        "/api/admin/appointment-schedules",
        json={"day_of_week": day, "start_time": start, "end_time": end, **extra},
    )
    assert resp.status_code == 201, resp.text


async def _mentor(client: AsyncClient, mentor_id: int, day: int, start: str, end: str) -> None:
    resp = await client.post(
        "/api/admin/mentor-availability",
        json={"mentor_id": mentor_id, "day_of_week": day, "start_time": start, "end_time": end},
    )
    assert resp.status_code == 201, resp.text


class FailingStore(InMemoryRuleStore):
    async def list_active_rules_for_weekday(
        self, kind: RuleKind, weekday: int
    ) -> list[ScheduleRule]:
        raise SQLAlchemyError("database is locked")


@pytest.fixture
async def failing_store() -> AsyncGenerator[None, None]:
    app.dependency_overrides[get_rule_store] = FailingStore
    yield
    del app.dependency_overrides[get_rule_store]


async def test_union_of_overlapping_schedules(client: AsyncClient) -> None:
    await _schedule(client, 1, "09:00", "10:00")
    await _schedule(client, 1, "09:30", "11:00")
    resp = await client.get("/api/available-time-slots", params={"date": NEXT_MONDAY})
    assert resp.status_code == 200
    assert resp.json() == ["09:00", "09:30", "10:00", "10:30"]


async def test_inactive_schedule_ignored(client: AsyncClient) -> None:
    await _schedule(client, 1, "09:00", "10:00", is_active=False)
    resp = await client.get("/api/available-time-slots", params={"date": NEXT_MONDAY})
    assert resp.json() == []


async def test_unscheduled_day_is_empty(client: AsyncClient) -> None:
    for day in range(1, 7):
        await _schedule(client, day, "08:00", "18:00")
    resp = await client.get("/api/available-time-slots", params={"date": SUNDAY})
    assert resp.status_code == 200
    assert resp.json() == []


async def test_today_drops_past_slots(client: AsyncClient) -> None:
    await _schedule(client, 1, "09:00", "10:30")
    resp = await client.get("/api/available-time-slots", params={"date": TODAY})
    assert resp.json() == ["10:00"]


async def test_missing_date(client: AsyncClient) -> None:
    resp = await client.get("/api/available-time-slots")
    assert resp.status_code == 422


async def test_invalid_date(client: AsyncClient) -> None:
    resp = await client.get("/api/available-time-slots", params={"date": "not-a-date"})
    assert resp.status_code == 422


async def test_store_failure_is_unavailable(client: AsyncClient, failing_store: None) -> None:
    resp = await client.get("/api/available-time-slots", params={"date": NEXT_MONDAY})
    assert resp.status_code == 503
    assert resp.json()["detail"] == "Availability unavailable"


async def test_mentor_slots_keyed_by_mentor(client: AsyncClient) -> None:
    await _mentor(client, 2, 1, "09:00", "10:00")
    await _mentor(client, 2, 1, "14:00", "15:00")
    await _mentor(client, 3, 2, "09:00", "10:00")
    resp = await client.get("/api/available-mentor-time-slots", params={"date": NEXT_MONDAY})
    assert resp.status_code == 200
    assert resp.json() == {"2": ["09:00", "09:30", "14:00", "14:30"]}


async def test_mentor_slots_not_cut_off_today(client: AsyncClient) -> None:
    await _mentor(client, 2, 1, "09:00", "10:00")
    resp = await client.get("/api/available-mentor-time-slots", params={"date": TODAY})
    assert resp.json() == {"2": ["09:00", "09:30"]}


async def test_mentor_slots_empty(client: AsyncClient) -> None:
    resp = await client.get("/api/available-mentor-time-slots", params={"date": SUNDAY})
    assert resp.json() == {}


async def test_mentor_store_failure_is_unavailable(
    client: AsyncClient, failing_store: None
) -> None:
    resp = await client.get("/api/available-mentor-time-slots", params={"date": NEXT_MONDAY})
    assert resp.status_code == 503
