"""Utilitários de data/hora.

Tudo é gravado como ``TIMESTAMP WITHOUT TIME ZONE`` em UTC, então o código
normaliza para *UTC naive* nas bordas:

- datetimes com fuso são convertidos para UTC e perdem o tzinfo
- datetimes naive são considerados já em UTC
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

_ONE_MS = timedelta(milliseconds=1)


def now_utc_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize_utc_naive(dt: Optional[datetime]) -> Optional[datetime]:
    """Converte datetime aware para UTC naive (remove tzinfo)."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def to_milliseconds(delta: timedelta) -> int:
    """Milissegundos inteiros de ``delta`` (arredondado para baixo)."""
    return delta // _ONE_MS


def truncate_to_milliseconds(delta: timedelta) -> timedelta:
    """``delta`` sem a fração abaixo de 1 ms."""
    return timedelta(milliseconds=to_milliseconds(delta))
