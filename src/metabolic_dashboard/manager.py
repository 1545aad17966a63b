"""HealthDataManager: carga, índice y consultas sobre los datos de salud."""

from __future__ import annotations

import logging
from datetime import tzinfo

from dateutil import tz

from metabolic_dashboard.index import build_metric_index
from metabolic_dashboard.model import (
    PARTITIONS,
    HealthData,
    LatestValue,
    MetricDescriptor,
    SeriesPoint,
)
from metabolic_dashboard.query import query_latest, query_series
from metabolic_dashboard.sources.base import DataSource

logger = logging.getLogger(__name__)


class HealthDataManager:
    """Owns the loaded partitions and the metric catalog.

    Usage::

        manager = HealthDataManager(MasterJsonSource(MasterJsonPaths(root=data_dir)))
        if await manager.init():
            series = manager.get_metric_data("RestingHeartRate")
    """

    def __init__(
        self,
        source: DataSource | None = None,
        local_tz: tzinfo | None = None,
    ) -> None:
        self._source = source
        self.local_tz = local_tz or tz.UTC
        self.data = HealthData()
        self.metrics: list[MetricDescriptor] = []

    @classmethod
    def from_data(
        cls, data: HealthData, local_tz: tzinfo | None = None
    ) -> HealthDataManager:
        """Manager over already-loaded data, indexed immediately."""
        manager = cls(local_tz=local_tz)
        manager._apply(data)
        return manager

    async def init(self) -> bool:
        """Load all partitions and build the catalog.

        Returns:
            True on success. On any load failure the manager keeps empty data
            and an empty catalog and returns False.
        """
        if self._source is None:
            raise ValueError("HealthDataManager has no data source")
        logger.info("Loading temporal data")
        try:
            data = await self._source.load_all()
        except (OSError, ValueError):
            logger.exception("Data loading error")
            self.data = HealthData()
            self.metrics = []
            return False
        self._apply(data)
        return True

    def _apply(self, data: HealthData) -> None:
        self.data = data
        self.metrics = build_metric_index(data)
        logger.info(
            "Indexed %d data points across %d masters, %d metrics",
            data.point_count(),
            len(PARTITIONS),
            len(self.metrics),
        )

    def get_metric_data(self, metric_name: str) -> list[SeriesPoint]:
        """Series for one metric (recomputed on every call)."""
        return query_series(self.data, metric_name, self.local_tz)

    def get_latest_value(self, metric_name: str) -> LatestValue | None:
        """Latest point of a metric with its catalog unit."""
        return query_latest(self.data, self.metrics, metric_name, self.local_tz)
