from mentorconnect.schemas.schedule import (
    AppointmentScheduleCreate,
    AppointmentScheduleRead,
    AppointmentScheduleUpdate,
    MentorAvailabilityCreate,
    MentorAvailabilityRead,
    MentorAvailabilityUpdate,
)
from mentorconnect.schemas.system import StatusResponse

__all__ = [
    "AppointmentScheduleCreate",
    "AppointmentScheduleRead",
    "AppointmentScheduleUpdate",
    "MentorAvailabilityCreate",
    "MentorAvailabilityRead",
    "MentorAvailabilityUpdate",
    "StatusResponse",
]
