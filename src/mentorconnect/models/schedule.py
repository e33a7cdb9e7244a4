from datetime import datetime

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from mentorconnect.database import Base


class AppointmentSchedule(Base):
    """Global weekly window during which appointments may be booked at all."""

    __tablename__ = "appointment_schedules"
    __table_args__ = (Index("ix_appointment_schedules_day_active", "day_of_week", "is_active"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    day_of_week: Mapped[int]  # 0=Sunday, 6=Saturday
    start_time: Mapped[str] = mapped_column(String(5))  # HH:MM
    end_time: Mapped[str] = mapped_column(String(5))  # HH:MM
    is_active: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)


class MentorAvailability(Base):
    """Weekly window during which one mentor takes sessions."""

    __tablename__ = "mentor_availability"
    __table_args__ = (Index("ix_mentor_availability_day_active", "day_of_week", "is_active"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    mentor_id: Mapped[int] = mapped_column(index=True)
    day_of_week: Mapped[int]  # 0=Sunday, 6=Saturday
    start_time: Mapped[str] = mapped_column(String(5))  # HH:MM
    end_time: Mapped[str] = mapped_column(String(5))  # HH:MM
    is_active: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
