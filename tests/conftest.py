"""Shared fixtures: master JSON files on disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

SAMPLE_MASTERS: dict[str, list[dict[str, Any]]] = {
    "labs": [
        {
            "metric": "HbA1c",
            "source_display": "Hemoglobin A1c",
            "unit": "%",
            "timestamp": "2024-01-10T08:00:00Z",
            "value": "5.64",
        },
        {
            "metric": "Glucose",
            "source_display": "Glucose (fasting)",
            "unit": "mg/dL",
            "timestamp": "2024-01-10T08:00:00Z",
            "value": 92,
        },
    ],
    "vitals": [
        {
            "Metric": "RestingHeartRate",
            "OriginalName": "Resting HR",
            "Unit": "bpm",
            "Timestamp": "2024-01-01T00:00:00Z",
            "Value": 60,
        },
        {
            "metric": "restingheartrate",
            "timestamp": "2024-01-01T00:00:00Z",
            "value": 62,
        },
        {
            "metric": "RestingHeartRate",
            "timestamp": "2024-02-01T00:00:00Z",
            "value": 58,
        },
    ],
    "activity": [
        {"timestamp": "2024-02-01T00:00:00Z", "value": 9000},
        {
            "metric": "StepCount",
            "source_display": "Steps",
            "unit": "count",
            "timestamp": "2024-02-01T00:00:00Z",
            "value": 10234,
        },
    ],
    "sleep": [
        {
            "metric": "SleepScore",
            "timestamp": "2024-02-02T07:00:00Z",
            "value": "not-a-number",
        },
        {
            "metric": "SleepScore",
            "timestamp": "2024-02-03T07:00:00Z",
            "value": 81,
        },
    ],
}


def write_masters(root: Path, masters: dict[str, Any] | None = None) -> Path:
    """Write <partition>_master.json files under root and return root."""
    root.mkdir(parents=True, exist_ok=True)
    for name, records in (masters or SAMPLE_MASTERS).items():
        (root / f"{name}_master.json").write_text(
            json.dumps(records), encoding="utf-8"
        )
    return root


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return write_masters(tmp_path / "data")


@pytest.fixture
def sample_masters() -> dict[str, list[dict[str, Any]]]:
    return SAMPLE_MASTERS
