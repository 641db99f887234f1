# roximity/api/routes/student_sessions.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from roximity.api.deps import get_db_session
from roximity.crud import session as crud_session
from roximity.crud import student_session as crud_student_session
from roximity.schemas import (
    StudentSessionCreate,
    StudentSessionRead,
    StudentSessionWithSession,
)

router = APIRouter()


@router.post(
    "/",
    response_model=StudentSessionRead,
    status_code=status.HTTP_201_CREATED,
)
async def enroll_student(
    enrollment_in: StudentSessionCreate,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Matricula um aluno em uma sessão com o identificador BLE do celular.

    Uma matrícula por (aluno, sessão): repetir devolve 409.
    """
    if not await crud_session.get(db, id=enrollment_in.session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        )

    existing = await crud_student_session.get_for_student_and_session(
        db,
        student_id=enrollment_in.student_id,
        session_id=enrollment_in.session_id,
    )
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Student already enrolled in this session",
        )

    return await crud_student_session.create(db, enrollment_in)


@router.get("/", response_model=List[StudentSessionWithSession])
async def list_student_sessions(
    student_id: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db_session),
):
    enrollments = await crud_student_session.get_by_student(db, student_id=student_id)
    return [
        StudentSessionWithSession(
            id=enrollment.id,
            student_id=enrollment.student_id,
            session_id=enrollment.session_id,
            temporary_ble_identifier=enrollment.temporary_ble_identifier,
            enrolled_at=enrollment.enrolled_at,
            course_id=enrollment.session.course_id,
            start_time=enrollment.session.start_time,
            end_time=enrollment.session.end_time,
        )
        for enrollment in enrollments
    ]


@router.get("/by-session/{session_id}", response_model=List[StudentSessionRead])
async def list_session_enrollments(
    session_id: int,
    db: AsyncSession = Depends(get_db_session),
):
    return await crud_student_session.get_by_session(db, session_id=session_id)
