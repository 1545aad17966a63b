"""Lectura de los JSON maestros (labs, vitals, activity, sleep)."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from metabolic_dashboard.model import PARTITIONS, HealthData, RawRecord
from metabolic_dashboard.sources.base import DataSource, SourcePaths

logger = logging.getLogger(__name__)


def _default_file_names() -> dict[str, str]:
    return {name: f"{name}_master.json" for name in PARTITIONS}


@dataclass(frozen=True)
class MasterJsonPaths(SourcePaths):
    """Paths for the master JSON files produced by the extraction pipeline."""

    # root: folder containing <partition>_master.json
    file_names: dict[str, str] = field(default_factory=_default_file_names)

    def path_for(self, partition: str) -> Path:
        return self.root / self.file_names[partition]


class MasterJsonSource(DataSource):
    """Reads the four master JSON documents concurrently."""

    _paths: MasterJsonPaths

    def validate(self) -> None:
        """Validate that the data directory exists."""
        if not self._paths.root.exists():
            raise FileNotFoundError(str(self._paths.root))

    def load_partition(self, partition: str) -> list[RawRecord]:
        """Read and parse one master file.

        Args:
            partition: One of labs, vitals, activity, sleep.

        Returns:
            The records, in file order.

        Raises:
            FileNotFoundError: If the file does not exist.
            json.JSONDecodeError: If the file is not valid JSON.
            ValueError: If the document is not a JSON array.
        """
        path = self._paths.path_for(partition)
        text = path.read_text(encoding="utf-8")
        raw: Any = json.loads(text)
        if not isinstance(raw, list):
            raise ValueError(f"{path.name} must be a JSON list")
        logger.debug("Read %d records from %s", len(raw), path)
        return raw

    async def load_all(self) -> HealthData:
        """Load all partitions concurrently.

        Raises:
            FileNotFoundError: If the data directory does not exist.
            OSError: If any file cannot be read.
            ValueError: If any file is not a JSON list (includes decode errors).
        """
        self.validate()
        results = await asyncio.gather(
            *(asyncio.to_thread(self.load_partition, name) for name in PARTITIONS)
        )
        return HealthData.from_partitions(dict(zip(PARTITIONS, results)))
