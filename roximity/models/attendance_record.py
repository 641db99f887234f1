from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roximity.db.base_class import Base

if TYPE_CHECKING:
    from roximity.models.session import AttendanceSession


class AttendanceRecord(Base):
    """
    Veredito de um dispositivo em uma execução da apuração.

    Cada execução acrescenta um lote novo com o mesmo ``computed_at``; os
    lotes anteriores ficam como histórico.
    """

    __tablename__ = "attendance_records"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    session_id: Mapped[int] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    device_identifier: Mapped[str] = mapped_column(String(128), nullable=False)

    cumulative_duration_ms: Mapped[int] = mapped_column(BigInteger, nullable=False)
    required_duration_ms: Mapped[int] = mapped_column(BigInteger, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)

    computed_at: Mapped[datetime] = mapped_column(nullable=False)

    session: Mapped["AttendanceSession"] = relationship(
        back_populates="attendance_records",
    )


Index(
    "ix_attendance_records_session_device",
    AttendanceRecord.session_id,
    AttendanceRecord.device_identifier,
)
