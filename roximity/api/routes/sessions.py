# roximity/api/routes/sessions.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from roximity.api.deps import get_db_session
from roximity.crud import session as crud_session
from roximity.schemas import SessionCreate, SessionRead, SessionUpdate
from roximity.services.attendance_types import SessionWindow

router = APIRouter()


@router.get("/", response_model=List[SessionRead])
async def list_sessions(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db_session),
):
    return await crud_session.get_multi(db, skip=skip, limit=limit)


@router.post(
    "/",
    response_model=SessionRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(
    session_in: SessionCreate,
    db: AsyncSession = Depends(get_db_session),
):
    return await crud_session.create(db, session_in)


@router.get("/{session_id}", response_model=SessionRead)
async def get_session(
    session_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    db_session = await crud_session.get(db, id=session_id)
    if not db_session:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        )
    return db_session


@router.put("/{session_id}", response_model=SessionRead)
async def update_session(
    session_id: int,
    session_in: SessionUpdate,
    db: AsyncSession = Depends(get_db_session),
):
    db_session = await crud_session.get(db, id=session_id)
    if not db_session:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        )

    changes = {
        field: value
        for field, value in session_in.model_dump(exclude_unset=True).items()
        if value is not None
    }
    # a janela resultante continua válida? (ValidationError -> 422)
    SessionWindow(
        id=session_id,
        window_start=changes.get("start_time") or db_session.start_time,
        window_end=changes.get("end_time") or db_session.end_time,
        required_presence_fraction=(
            changes.get("required_presence_percentage")
            or db_session.required_presence_percentage
        )
        / 100,
    ).validate()

    return await crud_session.update(db, db_session, changes)
