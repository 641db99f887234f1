# roximity/crud/presence_log.py
from typing import List, Sequence

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roximity.core.config import settings
from roximity.crud.base import CRUDBase, store_errors
from roximity.models.presence_log import PresenceLog
from roximity.schemas.presence_log import PresenceLogCreate


class CRUDPresenceLog(CRUDBase[PresenceLog, PresenceLogCreate, BaseModel]):
    def _build(self, obj_in: PresenceLogCreate) -> PresenceLog:
        data = obj_in.model_dump()
        if data.get("rssi") is None:
            data["rssi"] = settings.DEFAULT_PRESENCE_RSSI
        return self.model(**data)

    async def create(self, db: AsyncSession, obj_in: PresenceLogCreate) -> PresenceLog:
        db_obj = self._build(obj_in)
        async with store_errors(db, "store presence log"):
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
        return db_obj

    async def create_many(
        self,
        db: AsyncSession,
        objs_in: Sequence[PresenceLogCreate],
    ) -> List[PresenceLog]:
        """Grava um lote de detecções em uma única transação."""
        db_objs = [self._build(obj_in) for obj_in in objs_in]
        async with store_errors(db, "store presence logs"):
            db.add_all(db_objs)
            await db.commit()
            for db_obj in db_objs:
                await db.refresh(db_obj)
        return db_objs

    async def get_by_session(
        self,
        db: AsyncSession,
        session_id: int,
    ) -> List[PresenceLog]:
        stmt = (
            select(self.model)
            .where(self.model.session_id == session_id)
            .order_by(self.model.timestamp.asc(), self.model.id.asc())
        )
        async with store_errors(db, f"load presence logs for session {session_id}"):
            result = await db.execute(stmt)
            return list(result.scalars().all())


presence_log = CRUDPresenceLog(PresenceLog)
