from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, model_validator

from mentorconnect.scheduling.slots import format_time_of_day, parse_time_of_day, validate_window


def _canonical_time(value: str) -> str:
    return format_time_of_day(parse_time_of_day(value))


# Zero-padded 24-hour "HH:MM"
TimeOfDayStr = Annotated[str, AfterValidator(_canonical_time)]


class ScheduleRuleFields(BaseModel):
    """Stored rule fields as-is, without input checks."""

    day_of_week: int
    start_time: str
    end_time: str
    is_active: bool


class ScheduleRuleBase(BaseModel):
    day_of_week: int = Field(ge=0, le=6)  # 0=Sunday, 6=Saturday
    start_time: TimeOfDayStr = Field(examples=["09:00"])
    end_time: TimeOfDayStr = Field(examples=["17:00"])
    is_active: bool = True

    @model_validator(mode="after")
    def check_window(self) -> "ScheduleRuleBase":
        validate_window(self.start_time, self.end_time)
        return self


class ScheduleRuleUpdate(BaseModel):
    day_of_week: int | None = Field(default=None, ge=0, le=6)
    start_time: TimeOfDayStr | None = None
    end_time: TimeOfDayStr | None = None
    is_active: bool | None = None


class AppointmentScheduleCreate(ScheduleRuleBase):
    pass


class AppointmentScheduleUpdate(ScheduleRuleUpdate):
    pass


class AppointmentScheduleRead(ScheduleRuleFields):
    id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class MentorAvailabilityCreate(ScheduleRuleBase):
    mentor_id: int = Field(gt=0)


class MentorAvailabilityUpdate(ScheduleRuleUpdate):
    mentor_id: int | None = Field(default=None, gt=0)


class MentorAvailabilityRead(ScheduleRuleFields):
    id: int
    mentor_id: int
    created_at: datetime

    model_config = {"from_attributes": True}
