"""Junta os timestamps de detecção de um dispositivo em intervalos contínuos.

Mesma regra de sessão de um LAG() sobre a tabela de logs: um novo intervalo
começa sempre que o silêncio desde a detecção anterior for estritamente maior
que o gap configurado.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Sequence

from roximity.services.attendance_types import PresenceInterval

DEFAULT_GAP_THRESHOLD = timedelta(minutes=5)


def merge_timestamps(
    timestamps: Sequence[datetime],
    gap_threshold: timedelta = DEFAULT_GAP_THRESHOLD,
) -> List[PresenceInterval]:
    """Junta timestamps ordenados (não decrescentes) em intervalos de presença.

    Uma detecção isolada vira um intervalo de duração zero ``(t, t)``.
    """
    if not timestamps:
        return []

    intervals: List[PresenceInterval] = []
    block_start = timestamps[0]
    previous = timestamps[0]

    for current in timestamps[1:]:
        if current - previous > gap_threshold:
            intervals.append(PresenceInterval(start=block_start, end=previous))
            block_start = current
        previous = current

    intervals.append(PresenceInterval(start=block_start, end=previous))
    return intervals


def clip_intervals(
    intervals: Sequence[PresenceInterval],
    window_start: datetime,
    window_end: datetime,
) -> List[PresenceInterval]:
    """Recorta os intervalos em ``[window_start, window_end]`` e descarta os de fora."""
    clipped: List[PresenceInterval] = []
    for interval in intervals:
        start = max(interval.start, window_start)
        end = min(interval.end, window_end)
        if end < start:
            continue
        clipped.append(PresenceInterval(start=start, end=end))
    return clipped


def total_duration(intervals: Sequence[PresenceInterval]) -> timedelta:
    return sum((interval.duration for interval in intervals), timedelta(0))
