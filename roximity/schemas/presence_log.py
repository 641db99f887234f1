from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from roximity.utils.time import normalize_utc_naive


class PresenceLogBase(BaseModel):
    session_id: int
    device_identifier: str = Field(..., min_length=1, max_length=128)
    timestamp: datetime
    rssi: Optional[int] = None

    @field_validator("timestamp")
    @classmethod
    def _to_utc_naive(cls, value: datetime) -> datetime:
        return normalize_utc_naive(value)


class PresenceLogCreate(PresenceLogBase):
    pass


class PresenceLogBatchCreate(BaseModel):
    logs: List[PresenceLogCreate] = Field(..., min_length=1)


class PresenceLogRead(PresenceLogBase):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
