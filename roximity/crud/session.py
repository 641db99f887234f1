# roximity/crud/session.py
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roximity.crud.base import CRUDBase, store_errors
from roximity.models.session import AttendanceSession
from roximity.schemas.session import SessionCreate, SessionUpdate


class CRUDSession(CRUDBase[AttendanceSession, SessionCreate, SessionUpdate]):
    async def get_multi(
        self,
        db: AsyncSession,
        skip: int = 0,
        limit: int = 100,
    ) -> List[AttendanceSession]:
        """Sessões mais recentes primeiro."""
        stmt = (
            select(self.model)
            .order_by(self.model.start_time.desc(), self.model.id.desc())
            .offset(skip)
            .limit(limit)
        )
        async with store_errors(db, "list sessions"):
            result = await db.execute(stmt)
            return list(result.scalars().all())


session = CRUDSession(AttendanceSession)
