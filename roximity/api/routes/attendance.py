# roximity/api/routes/attendance.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from roximity.api.deps import get_attendance_service, get_db_session
from roximity.crud import attendance_record as crud_attendance_record
from roximity.schemas import (
    AttendanceComputeRequest,
    AttendanceComputeResponse,
    AttendanceRecordRead,
)
from roximity.services.attendance import AttendanceService

router = APIRouter()


@router.post("/compute/{session_id}", response_model=AttendanceComputeResponse)
async def compute_attendance(
    session_id: int,
    request_in: Optional[AttendanceComputeRequest] = None,
    service: AttendanceService = Depends(get_attendance_service),
):
    """
    Roda o motor de presença para a sessão e grava o lote resultante.

    Alunos matriculados entram no cálculo mesmo sem detecção. 404 se a sessão
    não existe, 422 se a janela/percentual é inválido, 503 se o banco falhar.
    """
    include_devices = request_in.include_devices if request_in else []
    records = await service.compute(session_id, include_devices=include_devices)

    return AttendanceComputeResponse(
        records=[
            AttendanceRecordRead(
                session_id=record.session_id,
                device_identifier=record.device_id,
                cumulative_duration_ms=record.cumulative_duration_ms,
                required_duration_ms=record.required_duration_ms,
                status=record.status.value,
                computed_at=record.computed_at,
            )
            for record in records
        ]
    )


@router.get("/{session_id}", response_model=List[AttendanceRecordRead])
async def list_attendance_records(
    session_id: int,
    latest_only: bool = Query(default=False),
    db: AsyncSession = Depends(get_db_session),
):
    return await crud_attendance_record.get_by_session(
        db, session_id=session_id, latest_only=latest_only
    )
