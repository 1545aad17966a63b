"""Modelos tipados para métricas, puntos de serie y datos particionados."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

RawRecord = Mapping[str, Any]

# Orden fijo de iteración: define el "primero visto" del índice y el
# desempate de timestamps duplicados en las series.
PARTITIONS: tuple[str, ...] = ("labs", "vitals", "activity", "sleep")

SOURCE_TAGS: dict[str, str] = {
    "labs": "Labs",
    "vitals": "Vitals",
    "activity": "Activity",
    "sleep": "Sleep",
}


@dataclass(frozen=True)
class HealthData:
    """The four raw partitions, immutable after load."""

    labs: tuple[RawRecord, ...] = ()
    vitals: tuple[RawRecord, ...] = ()
    activity: tuple[RawRecord, ...] = ()
    sleep: tuple[RawRecord, ...] = ()

    @classmethod
    def from_partitions(
        cls, partitions: Mapping[str, Sequence[RawRecord]]
    ) -> HealthData:
        """Build from a name -> records mapping; missing partitions are empty."""
        return cls(**{name: tuple(partitions.get(name, ())) for name in PARTITIONS})

    def partitions(self) -> Iterator[tuple[str, tuple[RawRecord, ...]]]:
        """Yield (partition name, records) in the fixed partition order."""
        for name in PARTITIONS:
            yield name, getattr(self, name)

    def point_count(self) -> int:
        return sum(len(records) for _, records in self.partitions())


@dataclass(frozen=True)
class MetricDescriptor:
    """Catalog entry for one distinct metric."""

    name: str
    label: str
    unit: str
    source: str


@dataclass(frozen=True)
class SeriesPoint:
    """One observation of a series."""

    timestamp: datetime
    value: float


@dataclass(frozen=True)
class LatestValue:
    """Most recent point of a metric, with its catalog unit."""

    timestamp: datetime
    value: float
    metric: str
    unit: str = ""

    def to_dict(self) -> dict[str, object]:
        """Serialize with the timestamp as ISO-8601 UTC (``Z`` suffix)."""
        ts = self.timestamp.astimezone(timezone.utc)
        return {
            "timestamp": ts.isoformat(timespec="milliseconds").replace(
                "+00:00", "Z"
            ),
            "value": self.value,
            "metric": self.metric,
            "unit": self.unit,
        }


class TimeWindow(str, Enum):
    """Trailing display window for a series."""

    ONE_MONTH = "1M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    ALL = "ALL"

    @property
    def months(self) -> int | None:
        """Calendar months covered by the window; None for ALL."""
        return _WINDOW_MONTHS[self]

    @classmethod
    def parse(cls, text: str) -> TimeWindow:
        """Parse a window tag (case-insensitive).

        Raises:
            ValueError: If the tag is not one of 1M, 6M, 1Y, ALL.
        """
        tag = text.strip().upper()
        for window in cls:
            if window.value == tag:
                return window
        raise ValueError(f"Unknown time window: {text!r}")


_WINDOW_MONTHS: dict[TimeWindow, int | None] = {
    TimeWindow.ONE_MONTH: 1,
    TimeWindow.SIX_MONTHS: 6,
    TimeWindow.ONE_YEAR: 12,
    TimeWindow.ALL: None,
}


@dataclass(frozen=True)
class PulseTile:
    """Headline metric shown in the vital-pulse strip."""

    metric: str
    label: str
    latest: LatestValue | None = None
    display_value: str = "--"
    unit: str = ""
