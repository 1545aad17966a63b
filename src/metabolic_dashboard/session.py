"""Contexto de sesión explícito: métrica y ventana seleccionadas."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from metabolic_dashboard.index import find_descriptor
from metabolic_dashboard.manager import HealthDataManager
from metabolic_dashboard.model import MetricDescriptor, SeriesPoint, TimeWindow
from metabolic_dashboard.query import filter_window


@dataclass(frozen=True)
class DashboardSession:
    """Caller-owned selection state."""

    metric: str = "RestingHeartRate"
    window: TimeWindow = TimeWindow.ONE_MONTH

    def with_metric(self, metric: str) -> DashboardSession:
        return replace(self, metric=metric)

    def with_window(self, window: TimeWindow | str) -> DashboardSession:
        if not isinstance(window, TimeWindow):
            window = TimeWindow.parse(window)
        return replace(self, window=window)


def session_series(
    manager: HealthDataManager,
    session: DashboardSession,
    now: datetime | None = None,
) -> list[SeriesPoint]:
    """Windowed series for the session's metric."""
    series = manager.get_metric_data(session.metric)
    return filter_window(series, session.window, now, manager.local_tz)


def session_descriptor(
    manager: HealthDataManager, session: DashboardSession
) -> MetricDescriptor | None:
    return find_descriptor(manager.metrics, session.metric)
