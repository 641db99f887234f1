from datetime import datetime, timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from roximity.core.exceptions import StoreError
from roximity.crud import session as crud_session
from roximity.crud.attendance_stores import (
    SqlEnrollmentStore,
    SqlRecordSink,
    SqlSessionStore,
    SqlSightingStore,
)
from roximity.db.session import AsyncSessionLocal
from roximity.models.attendance_record import AttendanceRecord as AttendanceRecordRow
from roximity.schemas import SessionCreate
from roximity.services.attendance_types import AttendanceRecord, AttendanceStatus

START = datetime(2025, 3, 10, 9, 0, 0)


class BrokenSession:
    """AsyncSession cujo banco caiu: toda query falha."""

    def __init__(self):
        self.rollbacks = 0

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("db down"))

    async def rollback(self):
        self.rollbacks += 1


def _record(session_id: int, device_id) -> AttendanceRecord:
    return AttendanceRecord(
        session_id=session_id,
        device_id=device_id,
        cumulative_present_duration=timedelta(minutes=50),
        required_duration=timedelta(minutes=45),
        status=AttendanceStatus.PRESENT,
        computed_at=START + timedelta(hours=2),
    )


async def _count_records() -> int:
    async with AsyncSessionLocal() as db:
        result = await db.execute(select(func.count()).select_from(AttendanceRecordRow))
        return result.scalar_one()


@pytest.mark.asyncio
async def test_record_sink_saves_whole_batch(db_ready):
    async with AsyncSessionLocal() as db:
        row = await crud_session.create(
            db,
            SessionCreate(
                course_id="CS101",
                start_time=START,
                end_time=START + timedelta(hours=1),
                required_presence_percentage=75,
            ),
        )
        await SqlRecordSink(db).save_records([_record(row.id, "A"), _record(row.id, "B")])

    assert await _count_records() == 2


@pytest.mark.asyncio
async def test_record_sink_failure_leaves_no_partial_batch(db_ready):
    async with AsyncSessionLocal() as db:
        row = await crud_session.create(
            db,
            SessionCreate(
                course_id="CS101",
                start_time=START,
                end_time=START + timedelta(hours=1),
                required_presence_percentage=75,
            ),
        )
        # device_identifier é NOT NULL: o segundo insert falha
        with pytest.raises(StoreError):
            await SqlRecordSink(db).save_records([_record(row.id, "A"), _record(row.id, None)])

    assert await _count_records() == 0


@pytest.mark.asyncio
async def test_session_store_wraps_database_errors():
    db = BrokenSession()

    with pytest.raises(StoreError) as excinfo:
        await SqlSessionStore(db).get_session(1)

    assert isinstance(excinfo.value.__cause__, OperationalError)
    assert db.rollbacks == 1


@pytest.mark.asyncio
async def test_sighting_store_wraps_database_errors():
    db = BrokenSession()

    with pytest.raises(StoreError):
        await SqlSightingStore(db).get_sightings(1)
    assert db.rollbacks == 1


@pytest.mark.asyncio
async def test_enrollment_store_wraps_database_errors():
    with pytest.raises(StoreError):
        await SqlEnrollmentStore(BrokenSession()).get_enrolled_devices(1)
