from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from roximity.utils.time import normalize_utc_naive


class SessionBase(BaseModel):
    course_id: str = Field(..., min_length=1, max_length=64)
    start_time: datetime
    end_time: datetime
    required_presence_percentage: float = Field(..., gt=0, le=100)

    @field_validator("start_time", "end_time")
    @classmethod
    def _to_utc_naive(cls, value: datetime) -> datetime:
        return normalize_utc_naive(value)


class SessionCreate(SessionBase):
    @model_validator(mode="after")
    def _check_window(self) -> "SessionCreate":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class SessionUpdate(BaseModel):
    """Update parcial; a janela resultante é validada de novo na rota."""

    course_id: Optional[str] = Field(None, min_length=1, max_length=64)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    required_presence_percentage: Optional[float] = Field(None, gt=0, le=100)

    @field_validator("start_time", "end_time")
    @classmethod
    def _to_utc_naive(cls, value: Optional[datetime]) -> Optional[datetime]:
        return normalize_utc_naive(value)


class SessionRead(SessionBase):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
