from mentorconnect.models.schedule import AppointmentSchedule, MentorAvailability

__all__ = [
    "AppointmentSchedule",
    "MentorAvailability",
]
