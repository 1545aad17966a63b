from __future__ import annotations

from datetime import datetime, timezone
from types import MappingProxyType

from dateutil import tz

from metabolic_dashboard.fields import (
    field_value,
    metric_key,
    parse_timestamp,
    parse_value,
    text_field,
)


def test_field_value_accepts_both_casings() -> None:
    assert field_value({"metric": "HRV"}, "metric") == "HRV"
    assert field_value({"Metric": "HRV"}, "metric") == "HRV"
    assert field_value({"Value": 3}, "value") == 3
    assert field_value({"OriginalName": "Heart Rate Var."}, "label") == (
        "Heart Rate Var."
    )


def test_field_value_prefers_first_non_empty_alias() -> None:
    record = {"metric": "", "Metric": "Glucose"}
    assert field_value(record, "metric") == "Glucose"
    record = {"source_display": "Fasting glucose", "OriginalName": "GLU"}
    assert field_value(record, "label") == "Fasting glucose"


def test_field_value_zero_is_a_value() -> None:
    assert field_value({"value": 0}, "value") == 0


def test_field_value_missing_or_not_a_dict() -> None:
    assert field_value({}, "unit") is None
    assert field_value("not a record", "metric") is None  # type: ignore[arg-type]
    assert text_field({}, "unit") == ""


def test_field_value_accepts_any_mapping() -> None:
    record = MappingProxyType({"Metric": "HRV", "value": 0})
    assert field_value(record, "metric") == "HRV"
    assert field_value(record, "value") == 0
    assert metric_key(record) == "hrv"


def test_metric_key_lower_cases_and_ignores_non_strings() -> None:
    assert metric_key({"Metric": "RestingHeartRate"}) == "restingheartrate"
    assert metric_key({"metric": 42}) == ""
    assert metric_key({"value": 1}) == ""


def test_parse_value_numbers_and_strings() -> None:
    assert parse_value(62) == 62.0
    assert parse_value("62.5") == 62.5
    assert parse_value(" 0.1 ") == 0.1


def test_parse_value_rejects_non_numeric_and_non_finite() -> None:
    assert parse_value("not-a-number") is None
    assert parse_value("nan") is None
    assert parse_value("inf") is None
    assert parse_value(float("nan")) is None
    assert parse_value(True) is None
    assert parse_value(None) is None
    assert parse_value([1]) is None


def test_parse_timestamp_with_offset() -> None:
    ts = parse_timestamp("2024-01-01T00:00:00Z")
    assert ts == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_parse_timestamp_naive_uses_local_zone() -> None:
    zone = tz.gettz("America/Argentina/Buenos_Aires")
    ts = parse_timestamp("2024-01-01 08:00", zone)
    assert ts is not None
    assert ts.tzinfo is zone
    assert ts.hour == 8


def test_parse_timestamp_naive_defaults_to_utc() -> None:
    ts = parse_timestamp("2024-03-10")
    assert ts == datetime(2024, 3, 10, tzinfo=timezone.utc)


def test_parse_timestamp_invalid() -> None:
    assert parse_timestamp("garbage") is None
    assert parse_timestamp("") is None
    assert parse_timestamp(1704067200) is None


def test_parse_timestamp_rejects_relative_words() -> None:
    assert parse_timestamp("now") is None
    assert parse_timestamp("today") is None
    assert parse_timestamp(" Now ") is None
