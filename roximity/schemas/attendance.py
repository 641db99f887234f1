from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class AttendanceComputeRequest(BaseModel):
    # dispositivos esperados na aula mesmo sem detecção (presença zero)
    include_devices: List[str] = Field(default_factory=list)


class AttendanceRecordRead(BaseModel):
    session_id: int
    device_identifier: str
    cumulative_duration_ms: int
    required_duration_ms: int
    status: Literal["Present", "Absent"]
    computed_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AttendanceComputeResponse(BaseModel):
    message: str = "Attendance computed"
    records: List[AttendanceRecordRead]
