"""Consultas de series temporales: serie completa, último valor y ventanas."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, tzinfo

from dateutil import tz
from dateutil.relativedelta import relativedelta

from metabolic_dashboard.fields import (
    field_value,
    metric_key,
    parse_timestamp,
    parse_value,
)
from metabolic_dashboard.index import find_descriptor
from metabolic_dashboard.model import (
    HealthData,
    LatestValue,
    MetricDescriptor,
    SeriesPoint,
    TimeWindow,
)

logger = logging.getLogger(__name__)


def query_series(
    data: HealthData,
    metric_name: str,
    local_tz: tzinfo | None = None,
) -> list[SeriesPoint]:
    """Deduplicated, chronologically sorted series for one metric.

    Matching is case-insensitive over every partition. Records sharing the
    same raw timestamp string collapse to the last one encountered (partition
    order, then record order); that survivor is dropped afterwards if its
    value or timestamp does not parse.

    Args:
        data: Loaded raw partitions.
        metric_name: Metric identifier, any casing.
        local_tz: Zone for timestamps without offset.

    Returns:
        List of points, possibly empty.
    """
    wanted = metric_name.lower()
    if not wanted:
        return []

    by_time: dict[str, object] = {}
    for _, records in data.partitions():
        for record in records:
            if metric_key(record) != wanted:
                continue
            time_str = field_value(record, "timestamp")
            raw_value = field_value(record, "value")
            if not isinstance(time_str, str) or raw_value is None:
                continue
            by_time[time_str] = raw_value

    points: list[SeriesPoint] = []
    for time_str, raw_value in by_time.items():
        value = parse_value(raw_value)
        ts = parse_timestamp(time_str, local_tz)
        if value is None or ts is None:
            logger.debug("Dropping %s point at %r: %r", wanted, time_str, raw_value)
            continue
        points.append(SeriesPoint(timestamp=ts, value=value))
    points.sort(key=lambda p: p.timestamp)
    return points


def query_latest(
    data: HealthData,
    metrics: Sequence[MetricDescriptor],
    metric_name: str,
    local_tz: tzinfo | None = None,
) -> LatestValue | None:
    """Most recent point of a metric, or None when it has no data.

    The unit comes from the catalog; metrics absent from it get ''.
    """
    series = query_series(data, metric_name, local_tz)
    if not series:
        return None
    latest = series[-1]
    descriptor = find_descriptor(list(metrics), metric_name)
    return LatestValue(
        timestamp=latest.timestamp,
        value=latest.value,
        metric=metric_name,
        unit=descriptor.unit if descriptor else "",
    )


def window_cutoff(
    window: TimeWindow, now: datetime | None = None, local_tz: tzinfo | None = None
) -> datetime | None:
    """Start of a trailing window (None for ALL).

    Month arithmetic clamps to the last day of shorter months
    (Mar 31 - 1M -> Feb 28/29).
    """
    months = window.months
    if months is None:
        return None
    if now is None:
        now = datetime.now(tz=tz.UTC)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=local_tz or tz.UTC)
    return now - relativedelta(months=months)


def filter_window(
    series: Sequence[SeriesPoint],
    window: TimeWindow,
    now: datetime | None = None,
    local_tz: tzinfo | None = None,
) -> list[SeriesPoint]:
    """Keep the points at or after the window cutoff.

    Args:
        series: Points as returned by query_series.
        window: Window tag; ALL returns every point.
        now: Reference instant (defaults to the current UTC time).
        local_tz: Zone for a naive ``now``.

    Returns:
        Filtered list of points.
    """
    cutoff = window_cutoff(window, now, local_tz)
    if cutoff is None:
        return list(series)
    return [p for p in series if p.timestamp >= cutoff]
