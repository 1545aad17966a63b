"""Tabla de alias de campos y parseo tolerante de registros crudos."""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime, tzinfo
from typing import Any

from dateutil import tz
from dateutil.parser import isoparse

from metabolic_dashboard.model import RawRecord

_LOCAL_TZ = tz.gettz("UTC")

# Canonical field -> accepted spellings, in priority order. Historical data
# drops use either casing.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "metric": ("metric", "Metric"),
    "timestamp": ("timestamp", "Timestamp"),
    "value": ("value", "Value"),
    "unit": ("unit", "Unit"),
    "label": ("source_display", "OriginalName", "original_name"),
}


def field_value(record: RawRecord, name: str) -> Any:
    """Return the first non-empty alias of ``name`` present in ``record``.

    Args:
        record: Raw JSON object.
        name: Canonical field name (a key of FIELD_ALIASES).

    Returns:
        The raw value, or None when no alias carries a value.
    """
    if not isinstance(record, Mapping):
        return None
    for alias in FIELD_ALIASES[name]:
        value = record.get(alias)
        if value is None:
            continue
        if isinstance(value, str) and not value:
            continue
        return value
    return None


def metric_key(record: RawRecord) -> str:
    """Lower-cased metric identifier, '' when missing or not a string."""
    raw = field_value(record, "metric")
    if not isinstance(raw, str):
        return ""
    return raw.lower()


def text_field(record: RawRecord, name: str) -> str:
    raw = field_value(record, name)
    return "" if raw is None else str(raw)


def parse_value(raw: Any) -> float | None:
    """Parse a numeric value; None if missing, non-numeric or non-finite."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        out = float(raw)
    elif isinstance(raw, str):
        try:
            out = float(raw.strip())
        except ValueError:
            return None
    else:
        return None
    return out if math.isfinite(out) else None


def parse_timestamp(raw: Any, local_tz: tzinfo | None = None) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Only ISO-8601 text is accepted; relative words such as "now" or "today"
    are rejected. Naive values are interpreted in ``local_tz`` (UTC by default).

    Returns:
        The parsed datetime, or None when it cannot be parsed as a date.
    """
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        dt = isoparse(raw.strip())
    except (ValueError, OverflowError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=local_tz or _LOCAL_TZ)
    return dt
