# roximity/crud/attendance_stores.py
"""Stores SQL usados pelo ``AttendanceService``.

Todos compartilham a mesma ``AsyncSession`` da requisição. Falhas do
SQLAlchemy saem como ``StoreError`` (via ``store_errors``).
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from roximity.crud.base import store_errors
from roximity.crud.presence_log import presence_log as crud_presence_log
from roximity.crud.session import session as crud_session
from roximity.crud.student_session import student_session as crud_student_session
from roximity.models.attendance_record import AttendanceRecord as AttendanceRecordRow
from roximity.services.attendance_types import AttendanceRecord, SessionWindow, Sighting


class SqlSessionStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_session(self, session_id: int) -> Optional[SessionWindow]:
        row = await crud_session.get(self.db, id=session_id)
        if row is None:
            return None
        return SessionWindow(
            id=row.id,
            window_start=row.start_time,
            window_end=row.end_time,
            required_presence_fraction=row.required_presence_percentage / 100,
        )


class SqlSightingStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_sightings(self, session_id: int) -> List[Sighting]:
        rows = await crud_presence_log.get_by_session(self.db, session_id=session_id)
        return [
            Sighting(
                device_id=row.device_identifier,
                observed_at=row.timestamp,
                signal_strength=row.rssi,
            )
            for row in rows
        ]


class SqlEnrollmentStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_enrolled_devices(self, session_id: int) -> List[str]:
        rows = await crud_student_session.get_by_session(self.db, session_id=session_id)
        return sorted({row.temporary_ble_identifier for row in rows})


class SqlRecordSink:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def save_records(self, records: Sequence[AttendanceRecord]) -> None:
        """Grava o lote inteiro em uma transação; se falhar, nada fica gravado."""
        rows = [
            AttendanceRecordRow(
                session_id=record.session_id,
                device_identifier=record.device_id,
                cumulative_duration_ms=record.cumulative_duration_ms,
                required_duration_ms=record.required_duration_ms,
                status=record.status.value,
                computed_at=record.computed_at,
            )
            for record in records
        ]
        async with store_errors(self.db, f"save {len(rows)} attendance records"):
            self.db.add_all(rows)
            await self.db.commit()
