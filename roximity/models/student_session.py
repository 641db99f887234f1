from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roximity.db.base_class import Base

if TYPE_CHECKING:
    from roximity.models.session import AttendanceSession


class StudentSession(Base):
    """
    Matrícula de um aluno em uma sessão.

    ``temporary_ble_identifier`` é o identificador que o celular do aluno
    anuncia durante a aula; é ele que aparece em ``presence_logs``.
    """

    __tablename__ = "student_sessions"
    __table_args__ = (
        UniqueConstraint("student_id", "session_id", name="uq_student_sessions_student_session"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    student_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    session_id: Mapped[int] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    temporary_ble_identifier: Mapped[str] = mapped_column(String(128), nullable=False)

    enrolled_at: Mapped[datetime] = mapped_column(
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    session: Mapped["AttendanceSession"] = relationship(
        back_populates="enrollments",
    )
