# roximity/api/deps.py
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roximity.crud.attendance_stores import (
    SqlEnrollmentStore,
    SqlRecordSink,
    SqlSessionStore,
    SqlSightingStore,
)
from roximity.db.session import AsyncSessionLocal
from roximity.services.attendance import AttendanceService


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


def build_attendance_service(db: AsyncSession) -> AttendanceService:
    return AttendanceService(
        sessions=SqlSessionStore(db),
        sightings=SqlSightingStore(db),
        enrollments=SqlEnrollmentStore(db),
        sink=SqlRecordSink(db),
    )


def get_attendance_service(
    db: AsyncSession = Depends(get_db_session),
) -> AttendanceService:
    """Serviço de apuração ligado à sessão de banco da requisição."""
    return build_attendance_service(db)
