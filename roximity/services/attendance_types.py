"""Modelo em memória compartilhado pelas etapas do motor de presença."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional

from roximity.core.exceptions import ValidationError
from roximity.utils.time import to_milliseconds


class AttendanceStatus(str, enum.Enum):
    PRESENT = "Present"
    ABSENT = "Absent"


@dataclass(frozen=True)
class Sighting:
    """Uma detecção do beacon de um dispositivo."""

    device_id: str
    observed_at: datetime
    signal_strength: Optional[int] = None


@dataclass(frozen=True)
class SessionWindow:
    """Janela da aula e a fração dela em que o dispositivo precisa estar presente."""

    id: Any
    window_start: datetime
    window_end: datetime
    required_presence_fraction: float

    @property
    def span(self) -> timedelta:
        return self.window_end - self.window_start

    @property
    def required_duration(self) -> timedelta:
        # timedelta * float arredonda para o microssegundo mais próximo
        return self.span * self.required_presence_fraction

    def validate(self) -> "SessionWindow":
        if self.window_end <= self.window_start:
            raise ValidationError(
                f"Session {self.id}: window_end ({self.window_end.isoformat()}) "
                f"must be after window_start ({self.window_start.isoformat()})"
            )
        fraction = self.required_presence_fraction
        if not (0 < fraction <= 1):
            raise ValidationError(
                f"Session {self.id}: required_presence_fraction must be in (0, 1], got {fraction}"
            )
        return self


@dataclass(frozen=True)
class PresenceInterval:
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class AttendanceRecord:
    session_id: Any
    device_id: str
    cumulative_present_duration: timedelta
    required_duration: timedelta
    status: AttendanceStatus
    computed_at: datetime

    @property
    def cumulative_duration_ms(self) -> int:
        return to_milliseconds(self.cumulative_present_duration)

    @property
    def required_duration_ms(self) -> int:
        return to_milliseconds(self.required_duration)
