"""Búsqueda, agrupación por fuente y tira de signos vitales."""

from __future__ import annotations

from collections.abc import Sequence

from metabolic_dashboard.manager import HealthDataManager
from metabolic_dashboard.model import LatestValue, MetricDescriptor, PulseTile

# (metric id, tile label)
DEFAULT_PULSE: tuple[tuple[str, str], ...] = (
    ("RestingHeartRate", "RHR"),
    ("VO2Max", "VO2MAX"),
    ("HRV", "HRV"),
    ("glucose", "GLUCOSE"),
    ("StepCount", "STEPS"),
    ("SleepScore", "SLEEP"),
)

_ONE_DECIMAL_METRICS = frozenset({"hba1c"})


def search_metrics(
    metrics: Sequence[MetricDescriptor], query: str, min_length: int = 2
) -> list[MetricDescriptor]:
    """Descriptors whose label or name contains ``query`` (case-insensitive).

    Queries shorter than ``min_length`` match nothing.
    """
    needle = query.strip().lower()
    if len(needle) < min_length:
        return []
    return [
        m for m in metrics if needle in m.label.lower() or needle in m.name.lower()
    ]


def group_by_source(
    metrics: Sequence[MetricDescriptor],
) -> dict[str, list[MetricDescriptor]]:
    """Group descriptors by source; sources sorted, catalog order kept."""
    groups: dict[str, list[MetricDescriptor]] = {}
    for m in metrics:
        groups.setdefault(m.source, []).append(m)
    return {source: groups[source] for source in sorted(groups)}


def format_pulse_value(latest: LatestValue | None) -> str:
    """Display value for a tile: '--' without data, 1 decimal for HbA1c."""
    if latest is None:
        return "--"
    decimals = 1 if latest.metric.lower() in _ONE_DECIMAL_METRICS else 0
    return f"{latest.value:.{decimals}f}"


def vital_pulse(
    manager: HealthDataManager,
    tiles: Sequence[tuple[str, str]] = DEFAULT_PULSE,
) -> list[PulseTile]:
    """Latest value of each headline metric."""
    out: list[PulseTile] = []
    for metric, label in tiles:
        latest = manager.get_latest_value(metric)
        out.append(
            PulseTile(
                metric=metric,
                label=label,
                latest=latest,
                display_value=format_pulse_value(latest),
                unit=latest.unit if latest else "",
            )
        )
    return out
