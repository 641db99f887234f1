from __future__ import annotations

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roximity.db.base_class import Base

if TYPE_CHECKING:
    from roximity.models.session import AttendanceSession


class PresenceLog(Base):
    """Uma detecção BLE de um dispositivo durante a sessão, enviada por um observer."""

    __tablename__ = "presence_logs"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    session_id: Mapped[int] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    device_identifier: Mapped[str] = mapped_column(String(128), nullable=False)

    # momento da detecção (UTC naive), não o horário do insert
    timestamp: Mapped[datetime] = mapped_column(nullable=False)
    rssi: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    session: Mapped["AttendanceSession"] = relationship(
        back_populates="presence_logs",
    )


Index(
    "ix_presence_logs_session_device_ts",
    PresenceLog.session_id,
    PresenceLog.device_identifier,
    PresenceLog.timestamp,
)
