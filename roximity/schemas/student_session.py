from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StudentSessionBase(BaseModel):
    student_id: str = Field(..., min_length=1, max_length=64)
    session_id: int
    temporary_ble_identifier: str = Field(..., min_length=1, max_length=128)


class StudentSessionCreate(StudentSessionBase):
    pass


class StudentSessionRead(StudentSessionBase):
    id: int
    enrolled_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StudentSessionWithSession(StudentSessionRead):
    """Matrícula junto com os dados da aula (listagem do aluno)."""

    course_id: str
    start_time: datetime
    end_time: datetime
