"""Repository interface over weekly schedule rules.

Two rule kinds share one shape: global appointment schedules (when booking is
open at all) and mentor availability (when a given mentor takes sessions).
"""

import enum
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mentorconnect.models.schedule import AppointmentSchedule, MentorAvailability

logger = logging.getLogger(__name__)

# Fields a caller may change on an existing rule.
MUTABLE_FIELDS = frozenset({"day_of_week", "start_time", "end_time", "is_active", "mentor_id"})


class RuleKind(str, enum.Enum):
    GLOBAL = "global"
    MENTOR = "mentor"


@dataclass(frozen=True)
class ScheduleRule:
    """A weekly recurring availability window."""

    id: int
    kind: RuleKind
    day_of_week: int  # 0=Sunday, 6=Saturday
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    is_active: bool = True
    mentor_id: int | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


def _check_changes(changes: dict[str, Any]) -> None:
    unknown = set(changes) - MUTABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update rule fields: {', '.join(sorted(unknown))}")


def _check_mentor(kind: RuleKind, mentor_id: int | None) -> None:
    if kind is RuleKind.MENTOR and mentor_id is None:
        raise ValueError("Mentor availability requires a mentor_id")


class RuleStore(ABC):
    """Abstract storage for schedule rules.

    Implementations return ``ScheduleRule`` snapshots; mutating a returned
    record never affects the store.
    """

    @abstractmethod
    async def list_rules(self, kind: RuleKind, mentor_id: int | None = None) -> list[ScheduleRule]:
        """All rules of ``kind`` ordered by id, optionally narrowed to one mentor."""
        ...

    @abstractmethod
    async def get_rule(self, kind: RuleKind, rule_id: int) -> ScheduleRule | None: ...

    @abstractmethod
    async def create_rule(
        self,
        kind: RuleKind,
        *,
        day_of_week: int,
        start_time: str,
        end_time: str,
        is_active: bool = True,
        mentor_id: int | None = None,
    ) -> ScheduleRule:
        """Persist a new rule, assigning its id and creation timestamp."""
        ...

    @abstractmethod
    async def update_rule(
        self, kind: RuleKind, rule_id: int, changes: dict[str, Any]
    ) -> ScheduleRule | None:
        """Apply ``changes`` in place. Returns None if the rule does not exist."""
        ...

    @abstractmethod
    async def delete_rule(self, kind: RuleKind, rule_id: int) -> bool: ...

    @abstractmethod
    async def list_active_rules_for_weekday(
        self, kind: RuleKind, weekday: int
    ) -> list[ScheduleRule]: ...

    async def list_active_global_schedules_for_weekday(self, weekday: int) -> list[ScheduleRule]:
        return await self.list_active_rules_for_weekday(RuleKind.GLOBAL, weekday)

    async def list_active_mentor_availability_for_weekday(
        self, weekday: int
    ) -> list[ScheduleRule]:
        return await self.list_active_rules_for_weekday(RuleKind.MENTOR, weekday)


class InMemoryRuleStore(RuleStore):
    """Dict-backed store with a per-kind id counter."""

    def __init__(self) -> None:
        self._rules: dict[RuleKind, dict[int, ScheduleRule]] = {kind: {} for kind in RuleKind}
        self._next_id: dict[RuleKind, int] = {kind: 1 for kind in RuleKind}

    async def list_rules(self, kind: RuleKind, mentor_id: int | None = None) -> list[ScheduleRule]:
        rules = sorted(self._rules[kind].values(), key=lambda r: r.id)
        if mentor_id is not None:
            rules = [r for r in rules if r.mentor_id == mentor_id]
        return rules

    async def get_rule(self, kind: RuleKind, rule_id: int) -> ScheduleRule | None:
        return self._rules[kind].get(rule_id)

    async def create_rule(
        self,
        kind: RuleKind,
        *,
        day_of_week: int,
        start_time: str,
        end_time: str,
        is_active: bool = True,
        mentor_id: int | None = None,
    ) -> ScheduleRule:
        _check_mentor(kind, mentor_id)
        rule_id = self._next_id[kind]
        self._next_id[kind] += 1
        rule = ScheduleRule(
            id=rule_id,
            kind=kind,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            is_active=is_active,
            mentor_id=mentor_id if kind is RuleKind.MENTOR else None,
        )
        self._rules[kind][rule_id] = rule
        return rule

    async def update_rule(
        self, kind: RuleKind, rule_id: int, changes: dict[str, Any]
    ) -> ScheduleRule | None:
        _check_changes(changes)
        rule = self._rules[kind].get(rule_id)
        if rule is None:
            return None
        if kind is RuleKind.GLOBAL:
            changes = {k: v for k, v in changes.items() if k != "mentor_id"}
        updated = replace(rule, **changes)
        self._rules[kind][rule_id] = updated
        return updated

    async def delete_rule(self, kind: RuleKind, rule_id: int) -> bool:
        return self._rules[kind].pop(rule_id, None) is not None

    async def list_active_rules_for_weekday(
        self, kind: RuleKind, weekday: int
    ) -> list[ScheduleRule]:
        return [
            r
            for r in await self.list_rules(kind)
            if r.day_of_week == weekday and r.is_active
        ]


_MODELS: dict[RuleKind, type[AppointmentSchedule] | type[MentorAvailability]] = {
    RuleKind.GLOBAL: AppointmentSchedule,
    RuleKind.MENTOR: MentorAvailability,
}


def _to_rule(kind: RuleKind, row: AppointmentSchedule | MentorAvailability) -> ScheduleRule:
    return ScheduleRule(
        id=row.id,
        kind=kind,
        day_of_week=row.day_of_week,
        start_time=row.start_time,
        end_time=row.end_time,
        is_active=row.is_active,
        mentor_id=getattr(row, "mentor_id", None),
        created_at=row.created_at,
    )


class SqlRuleStore(RuleStore):
    """Store backed by the ``appointment_schedules`` and ``mentor_availability`` tables.

    Writes commit the session; reads never do.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _get_row(
        self, kind: RuleKind, rule_id: int
    ) -> AppointmentSchedule | MentorAvailability | None:
        model = _MODELS[kind]
        result = await self._session.execute(select(model).where(model.id == rule_id))
        return result.scalar_one_or_none()

    async def list_rules(self, kind: RuleKind, mentor_id: int | None = None) -> list[ScheduleRule]:
        model = _MODELS[kind]
        stmt = select(model).order_by(model.id)
        if mentor_id is not None and kind is RuleKind.MENTOR:
            stmt = stmt.where(MentorAvailability.mentor_id == mentor_id)
        result = await self._session.execute(stmt)
        return [_to_rule(kind, row) for row in result.scalars().all()]

    async def get_rule(self, kind: RuleKind, rule_id: int) -> ScheduleRule | None:
        row = await self._get_row(kind, rule_id)
        return _to_rule(kind, row) if row is not None else None

    async def create_rule(
        self,
        kind: RuleKind,
        *,
        day_of_week: int,
        start_time: str,
        end_time: str,
        is_active: bool = True,
        mentor_id: int | None = None,
    ) -> ScheduleRule:
        _check_mentor(kind, mentor_id)
        values: dict[str, Any] = {
            "day_of_week": day_of_week,
            "start_time": start_time,
            "end_time": end_time,
            "is_active": is_active,
        }
        if kind is RuleKind.MENTOR:
            values["mentor_id"] = mentor_id
        row = _MODELS[kind](**values)
        self._session.add(row)
        await self._session.commit()
        await self._session.refresh(row)
        return _to_rule(kind, row)

    async def update_rule(
        self, kind: RuleKind, rule_id: int, changes: dict[str, Any]
    ) -> ScheduleRule | None:
        _check_changes(changes)
        row = await self._get_row(kind, rule_id)
        if row is None:
            return None
        for name, value in changes.items():
            if name == "mentor_id" and kind is not RuleKind.MENTOR:
                continue
            setattr(row, name, value)
        await self._session.commit()
        await self._session.refresh(row)
        return _to_rule(kind, row)

    async def delete_rule(self, kind: RuleKind, rule_id: int) -> bool:
        row = await self._get_row(kind, rule_id)
        if row is None:
            return False
        await self._session.delete(row)
        await self._session.commit()
        return True

    async def list_active_rules_for_weekday(
        self, kind: RuleKind, weekday: int
    ) -> list[ScheduleRule]:
        model = _MODELS[kind]
        stmt = (
            select(model)
            .where(model.day_of_week == weekday, model.is_active == True)  # noqa: E712
            .order_by(model.id)
        )
        result = await self._session.execute(stmt)
        rules = [_to_rule(kind, row) for row in result.scalars().all()]
        logger.debug("Loaded %d active %s rules for weekday %d", len(rules), kind.value, weekday)
        return rules
