"""Apuração de presença em lote para uma sessão.

``AttendanceService`` busca a sessão, as detecções e os dispositivos
matriculados em stores injetados, roda o motor e entrega o lote inteiro ao
sink em uma única chamada. Os stores SQL ficam em ``roximity.crud``; os
testes usam fakes.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Iterable, List, Optional, Protocol, Sequence

from roximity.core.config import Settings, settings
from roximity.core.exceptions import NotFoundError
from roximity.services.attendance_engine import compute_attendance
from roximity.services.attendance_types import (
    AttendanceRecord,
    AttendanceStatus,
    SessionWindow,
    Sighting,
)

logger = logging.getLogger("roximity.attendance")


class SessionStore(Protocol):
    async def get_session(self, session_id: Any) -> Optional[SessionWindow]:
        ...


class SightingStore(Protocol):
    async def get_sightings(self, session_id: Any) -> Sequence[Sighting]:
        ...


class EnrollmentStore(Protocol):
    async def get_enrolled_devices(self, session_id: Any) -> Sequence[str]:
        ...


class RecordSink(Protocol):
    async def save_records(self, records: Sequence[AttendanceRecord]) -> None:
        ...


class AttendanceService:
    def __init__(
        self,
        *,
        sessions: SessionStore,
        sightings: SightingStore,
        sink: RecordSink,
        enrollments: Optional[EnrollmentStore] = None,
        gap_threshold: Optional[timedelta] = None,
        clip_to_window: Optional[bool] = None,
        config: Settings = settings,
    ):
        self.sessions = sessions
        self.sightings = sightings
        self.sink = sink
        self.enrollments = enrollments
        self.gap_threshold = (
            gap_threshold
            if gap_threshold is not None
            else timedelta(seconds=config.ATTENDANCE_GAP_THRESHOLD_SECONDS)
        )
        self.clip_to_window = (
            clip_to_window if clip_to_window is not None else config.ATTENDANCE_CLIP_TO_WINDOW
        )

    async def evaluate(
        self,
        session_id: Any,
        include_devices: Iterable[str] = (),
    ) -> List[AttendanceRecord]:
        """Calcula os registros de ``session_id`` sem gravar.

        Dispositivos matriculados na sessão entram junto com ``include_devices``,
        então quem nunca foi detectado sai como Absent.
        """
        session = await self.sessions.get_session(session_id)
        if session is None:
            raise NotFoundError("Session", session_id)
        session.validate()

        expected = set(include_devices)
        if self.enrollments is not None:
            expected.update(await self.enrollments.get_enrolled_devices(session_id))

        sightings = await self.sightings.get_sightings(session_id)
        logger.info(
            "Computing attendance (session_id=%s sightings=%s expected_devices=%s gap=%s clip=%s)",
            session_id,
            len(sightings),
            len(expected),
            self.gap_threshold,
            self.clip_to_window,
        )
        return compute_attendance(
            session,
            sightings,
            gap_threshold=self.gap_threshold,
            clip_to_window=self.clip_to_window,
            include_devices=expected,
        )

    async def compute(
        self,
        session_id: Any,
        include_devices: Iterable[str] = (),
    ) -> List[AttendanceRecord]:
        """Calcula e grava o lote completo de ``session_id``.

        Levanta NotFoundError, ValidationError ou StoreError. O sink recebe a
        lista completa uma única vez; nada é gravado se o cálculo falhar.
        """
        records = await self.evaluate(session_id, include_devices)
        await self.sink.save_records(records)

        present = sum(1 for r in records if r.status is AttendanceStatus.PRESENT)
        logger.info(
            "Attendance computed (session_id=%s devices=%s present=%s)",
            session_id,
            len(records),
            present,
        )
        return records
