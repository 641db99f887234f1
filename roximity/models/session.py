from __future__ import annotations

from datetime import datetime
from typing import List, TYPE_CHECKING

from sqlalchemy import Float, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roximity.db.base_class import Base

if TYPE_CHECKING:
    from roximity.models.attendance_record import AttendanceRecord
    from roximity.models.presence_log import PresenceLog
    from roximity.models.student_session import StudentSession


class AttendanceSession(Base):
    """
    Uma aula: a janela em que os dispositivos precisam ser detectados.

    ``required_presence_percentage`` fica em (0, 100], como o front do
    professor envia; o motor trabalha com a fração.
    """

    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    course_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    start_time: Mapped[datetime] = mapped_column(nullable=False)
    end_time: Mapped[datetime] = mapped_column(nullable=False)
    required_presence_percentage: Mapped[float] = mapped_column(Float, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    presence_logs: Mapped[List["PresenceLog"]] = relationship(
        back_populates="session",
        cascade="all, delete-orphan",
    )
    attendance_records: Mapped[List["AttendanceRecord"]] = relationship(
        back_populates="session",
        cascade="all, delete-orphan",
    )
    enrollments: Mapped[List["StudentSession"]] = relationship(
        back_populates="session",
        cascade="all, delete-orphan",
    )
