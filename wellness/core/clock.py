"""Relógio da aplicação.

Os horários são gravados sem fuso (UTC "ingênuo"). Entradas com offset
(`Z`, `-03:00`...) são convertidas para UTC e perdem o tzinfo antes de
chegar ao banco ou de serem comparadas com o que já está gravado.
"""
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
