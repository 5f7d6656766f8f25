from __future__ import annotations

from datetime import datetime


def now_local() -> datetime:
    """Current local time with microseconds (columns are DATETIME(6)).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_iso(value: datetime | None) -> str | None:
    return value.isoformat(sep=" ") if value else None
