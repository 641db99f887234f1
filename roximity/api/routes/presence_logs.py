# roximity/api/routes/presence_logs.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from roximity.api.deps import get_db_session
from roximity.crud import presence_log as crud_presence_log
from roximity.crud import session as crud_session
from roximity.schemas import PresenceLogBatchCreate, PresenceLogCreate, PresenceLogRead

router = APIRouter()


async def _ensure_sessions_exist(db: AsyncSession, session_ids: set[int]) -> None:
    for session_id in sorted(session_ids):
        if not await crud_session.get(db, id=session_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Session {session_id} not found",
            )


@router.post(
    "/",
    response_model=PresenceLogRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_presence_log(
    log_in: PresenceLogCreate,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Grava uma detecção enviada por um observer BLE.

    Sem ``rssi``, usa DEFAULT_PRESENCE_RSSI.
    """
    await _ensure_sessions_exist(db, {log_in.session_id})
    return await crud_presence_log.create(db, log_in)


@router.post(
    "/batch",
    response_model=List[PresenceLogRead],
    status_code=status.HTTP_201_CREATED,
)
async def create_presence_logs(
    batch_in: PresenceLogBatchCreate,
    db: AsyncSession = Depends(get_db_session),
):
    await _ensure_sessions_exist(db, {log.session_id for log in batch_in.logs})
    return await crud_presence_log.create_many(db, batch_in.logs)


@router.get("/{session_id}", response_model=List[PresenceLogRead])
async def list_presence_logs(
    session_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    return await crud_presence_log.get_by_session(db, session_id=session_id)
