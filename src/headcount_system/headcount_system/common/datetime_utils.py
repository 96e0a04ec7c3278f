from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def require_iso_date(value: str) -> str:
    """Validate a ledger date key and return it unchanged."""
    try:
        parsed = parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}")
    return parsed.isoformat()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_epoch_ms(moment: datetime) -> int:
    """Persisted timestamps are integer epoch milliseconds."""
    return int(moment.timestamp() * 1000)


def from_epoch_ms(value: Optional[int]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value) / 1000)


def format_epoch_ms(value: Optional[int]) -> str:
    moment = from_epoch_ms(value)
    return moment.isoformat(timespec="seconds") if moment else ""
