"""Motor de apuração de presença.

Duas etapas que se compõem:

- ``group_sightings``: mapeamento, detecções -> timestamps ordenados por dispositivo
- ``compute_attendance``: redução, por dispositivo merge -> (recorte) -> avaliação

Tudo aqui é puro e síncrono; os stores ficam em ``roximity.services.attendance``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from roximity.services.attendance_types import (
    AttendanceRecord,
    AttendanceStatus,
    PresenceInterval,
    SessionWindow,
    Sighting,
)
from roximity.services.presence_intervals import (
    DEFAULT_GAP_THRESHOLD,
    clip_intervals,
    merge_timestamps,
    total_duration,
)
from roximity.utils.time import now_utc_naive, truncate_to_milliseconds

logger = logging.getLogger("roximity.attendance_engine")


def evaluate(
    session: SessionWindow,
    device_id: str,
    intervals: Sequence[PresenceInterval],
    computed_at: Optional[datetime] = None,
) -> AttendanceRecord:
    """Transforma os intervalos de um dispositivo em um registro Present/Absent.

    Os intervalos são somados como vieram; o recorte na janela é do chamador.
    As duas durações são truncadas em milissegundos antes da comparação, então
    o veredito bate com os valores ``*_ms`` gravados. O limite é inclusivo:
    acumulado == exigido é Present.
    """
    cumulative = truncate_to_milliseconds(total_duration(intervals))
    required = truncate_to_milliseconds(session.required_duration)
    status = AttendanceStatus.PRESENT if cumulative >= required else AttendanceStatus.ABSENT

    return AttendanceRecord(
        session_id=session.id,
        device_id=device_id,
        cumulative_present_duration=cumulative,
        required_duration=required,
        status=status,
        computed_at=computed_at if computed_at is not None else now_utc_naive(),
    )


def group_sightings(
    sightings: Iterable[Sighting],
    include_devices: Iterable[str] = (),
) -> Dict[str, Tuple[datetime, ...]]:
    """Agrupa as detecções por dispositivo, com os timestamps em ordem crescente.

    ``include_devices`` acrescenta dispositivos sem detecção (tupla vazia).
    As chaves saem ordenadas pelo id do dispositivo.
    """
    buckets: Dict[str, List[datetime]] = {device_id: [] for device_id in include_devices}
    for sighting in sightings:
        buckets.setdefault(sighting.device_id, []).append(sighting.observed_at)

    return {device_id: tuple(sorted(buckets[device_id])) for device_id in sorted(buckets)}


def evaluate_device(
    session: SessionWindow,
    device_id: str,
    timestamps: Sequence[datetime],
    *,
    gap_threshold: timedelta = DEFAULT_GAP_THRESHOLD,
    clip_to_window: bool = True,
    computed_at: Optional[datetime] = None,
) -> AttendanceRecord:
    intervals = merge_timestamps(timestamps, gap_threshold)
    if clip_to_window:
        intervals = clip_intervals(intervals, session.window_start, session.window_end)

    record = evaluate(session, device_id, intervals, computed_at=computed_at)
    logger.debug(
        "Device %s: sightings=%s intervals=%s cumulative=%s status=%s",
        device_id,
        len(timestamps),
        len(intervals),
        record.cumulative_present_duration,
        record.status.value,
    )
    return record


def compute_attendance(
    session: SessionWindow,
    sightings: Iterable[Sighting],
    *,
    gap_threshold: timedelta = DEFAULT_GAP_THRESHOLD,
    clip_to_window: bool = True,
    include_devices: Iterable[str] = (),
    computed_at: Optional[datetime] = None,
) -> List[AttendanceRecord]:
    """Um registro por dispositivo visto (ou incluído) na ``session``.

    Levanta ``ValidationError`` para janela ou fração inválida. Todos os
    registros de uma execução compartilham o mesmo ``computed_at``.
    """
    session.validate()
    stamp = computed_at if computed_at is not None else now_utc_naive()
    grouped = group_sightings(sightings, include_devices)

    return [
        evaluate_device(
            session,
            device_id,
            timestamps,
            gap_threshold=gap_threshold,
            clip_to_window=clip_to_window,
            computed_at=stamp,
        )
        for device_id, timestamps in grouped.items()
    ]
