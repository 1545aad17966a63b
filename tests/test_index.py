from __future__ import annotations

from metabolic_dashboard.index import (
    build_metric_index,
    find_descriptor,
    label_sort_key,
)
from metabolic_dashboard.model import HealthData


def test_empty_data_builds_empty_index() -> None:
    assert build_metric_index(HealthData()) == []


def test_first_seen_partition_wins() -> None:
    data = HealthData.from_partitions(
        {
            "labs": [
                {
                    "metric": "Glucose",
                    "source_display": "Glucose (fasting)",
                    "unit": "mg/dL",
                    "timestamp": "2024-01-01T08:00:00Z",
                    "value": 95,
                }
            ],
            "vitals": [
                {
                    "Metric": "glucose",
                    "Unit": "mmol/L",
                    "Timestamp": "2024-01-02T08:00:00Z",
                    "Value": 5.2,
                }
            ],
        }
    )
    out = build_metric_index(data)
    assert len(out) == 1
    assert out[0].name == "glucose"
    assert out[0].label == "Glucose (fasting)"
    assert out[0].unit == "mg/dL"
    assert out[0].source == "Labs"


def test_label_falls_back_to_original_name_then_raw_metric() -> None:
    data = HealthData.from_partitions(
        {
            "activity": [
                {"Metric": "StepCount", "OriginalName": "Steps", "Unit": "count"},
                {"metric": "VO2Max"},
            ]
        }
    )
    out = {m.name: m for m in build_metric_index(data)}
    assert out["stepcount"].label == "Steps"
    assert out["stepcount"].source == "Activity"
    assert out["vo2max"].label == "VO2Max"
    assert out["vo2max"].unit == ""


def test_records_without_metric_are_excluded() -> None:
    data = HealthData.from_partitions(
        {
            "sleep": [
                {"timestamp": "2024-01-01T00:00:00Z", "value": 80},
                {"metric": "", "value": 1},
                {"metric": 7, "value": 1},
                {"metric": "SleepScore", "value": 81},
            ]
        }
    )
    out = build_metric_index(data)
    assert [m.name for m in out] == ["sleepscore"]
    assert out[0].source == "Sleep"


def test_names_unique_and_sorted_by_label() -> None:
    data = HealthData.from_partitions(
        {
            "labs": [
                {"metric": "Zn", "source_display": "Zinc"},
                {"metric": "Eos", "source_display": "éosinophils"},
                {"metric": "Alb", "source_display": "Albumin"},
            ],
            "vitals": [
                {"metric": "ApoB", "source_display": "apoB"},
                {"metric": "alb", "source_display": "Albumin again"},
            ],
        }
    )
    out = build_metric_index(data)
    names = [m.name for m in out]
    assert len(names) == len(set(names))
    assert [m.label for m in out] == ["Albumin", "apoB", "éosinophils", "Zinc"]


def test_label_sort_key_ignores_case_and_accents_first() -> None:
    labels = ["b", "É", "a", "e", "Z"]
    assert sorted(labels, key=label_sort_key) == ["a", "b", "e", "É", "Z"]


def test_find_descriptor_case_insensitive() -> None:
    data = HealthData.from_partitions({"vitals": [{"metric": "HRV", "unit": "ms"}]})
    metrics = build_metric_index(data)
    found = find_descriptor(metrics, "hRv")
    assert found is not None
    assert found.unit == "ms"
    assert find_descriptor(metrics, "missing") is None
