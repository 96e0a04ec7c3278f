"""Lenient readers for stored documents.

Stored JSON may come from older installs or hand-edited backups, so a field
of the wrong shape reads as its default instead of raising.
"""

from __future__ import annotations

import math
from typing import Any, List, Optional


def int_or_none(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return None


def int_or_default(value: Any, default: int) -> int:
    number = int_or_none(value)
    return default if number is None else number


def str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def str_list(value: Any) -> List[str]:
    return [x for x in as_list(value) if isinstance(x, str)]
