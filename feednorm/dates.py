"""
Timestamp conversion between Atom's RFC 3339 values and the canonical
``YYYY-MM-DD HH:MM:SS`` form used inside the unified model.

Conversions never raise: input that does not parse comes out as the zero
timestamp in the target layout.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

from .rules import CANONICAL_TIMESTAMP, ZERO_CANONICAL, ZERO_ZONED, ZONED_TIMESTAMPS

# strptime takes one-digit fields; the layouts are fixed-width.
_ZONED_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})")
_CANONICAL_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")

# strptime's %f stops at microseconds; RFC 3339 allows any precision.
_LONG_FRACTION = re.compile(r"(\.\d{6})\d+")


def _parse_zoned(value: str) -> Optional[datetime]:
    value = value.strip()
    if not _ZONED_SHAPE.fullmatch(value):
        return None
    value = _LONG_FRACTION.sub(r"\1", value)
    for layout in ZONED_TIMESTAMPS:
        try:
            return datetime.strptime(value, layout)
        except ValueError:
            continue
    return None


def _parse_canonical(value: str) -> Optional[datetime]:
    value = value.strip()
    if not _CANONICAL_SHAPE.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, CANONICAL_TIMESTAMP)
    except ValueError:
        return None


def is_zoned(value: str) -> bool:
    return _parse_zoned(value) is not None


def is_canonical(value: str) -> bool:
    return _parse_canonical(value) is not None


def zoned_to_canonical(value: str) -> str:
    """
    Convert an RFC 3339 timestamp to the canonical form.

    The civil time is kept as written and the offset is dropped, so
    ``2024-01-02T03:04:05+02:00`` becomes ``2024-01-02 03:04:05``.
    """
    parsed = _parse_zoned(value)
    if parsed is None:
        return ZERO_CANONICAL
    # isoformat pads the year to four digits; strftime("%Y") does not everywhere.
    return parsed.replace(tzinfo=None, microsecond=0).isoformat(sep=" ")


def canonical_to_zoned(value: str) -> str:
    """Convert a canonical timestamp to RFC 3339, reading it as UTC."""
    parsed = _parse_canonical(value)
    if parsed is None:
        return ZERO_ZONED
    return parsed.replace(tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")
