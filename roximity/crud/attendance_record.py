# roximity/crud/attendance_record.py
from typing import List

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from roximity.crud.base import CRUDBase, store_errors
from roximity.models.attendance_record import AttendanceRecord


class CRUDAttendanceRecord(CRUDBase[AttendanceRecord, BaseModel, BaseModel]):
    async def get_by_session(
        self,
        db: AsyncSession,
        session_id: int,
        *,
        latest_only: bool = False,
    ) -> List[AttendanceRecord]:
        """
        Registros de uma sessão, "Present" antes de "Absent".

        Com ``latest_only`` volta só a execução mais recente de cada
        dispositivo; sem ele, todas as execuções (histórico).
        """
        stmt = select(self.model).where(self.model.session_id == session_id)

        if latest_only:
            latest = (
                select(
                    self.model.device_identifier,
                    func.max(self.model.computed_at).label("computed_at"),
                )
                .where(self.model.session_id == session_id)
                .group_by(self.model.device_identifier)
                .subquery()
            )
            stmt = stmt.join(
                latest,
                (self.model.device_identifier == latest.c.device_identifier)
                & (self.model.computed_at == latest.c.computed_at),
            )

        stmt = stmt.order_by(
            self.model.status.desc(),
            self.model.device_identifier.asc(),
            self.model.computed_at.desc(),
        )
        async with store_errors(db, f"load attendance records for session {session_id}"):
            result = await db.execute(stmt)
            return list(result.scalars().all())


attendance_record = CRUDAttendanceRecord(AttendanceRecord)
