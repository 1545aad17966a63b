"""Índice de métricas: catálogo deduplicado a partir de las cuatro particiones."""

from __future__ import annotations

import logging
import unicodedata

from metabolic_dashboard.fields import field_value, metric_key, text_field
from metabolic_dashboard.model import SOURCE_TAGS, HealthData, MetricDescriptor

logger = logging.getLogger(__name__)


def label_sort_key(label: str) -> tuple[str, str, str]:
    """Linguistic sort key: accents and case only break ties.

    Primary key strips combining marks and case-folds, so "Éosinophils"
    sorts next to "eosinophils" instead of after "Z".
    """
    folded = label.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base, folded, label


def build_metric_index(data: HealthData) -> list[MetricDescriptor]:
    """Build the sorted, deduplicated metric catalog.

    The first record seen for a lower-cased metric name (partition order
    labs, vitals, activity, sleep) defines its label, unit and source.
    Records without a metric name are left out of the catalog.

    Args:
        data: Loaded raw partitions.

    Returns:
        Descriptors sorted by label.
    """
    seen: dict[str, MetricDescriptor] = {}
    skipped = 0
    for partition, records in data.partitions():
        for record in records:
            key = metric_key(record)
            if not key:
                skipped += 1
                continue
            if key in seen:
                continue
            raw_metric = field_value(record, "metric")
            seen[key] = MetricDescriptor(
                name=key,
                label=text_field(record, "label") or raw_metric,
                unit=text_field(record, "unit"),
                source=SOURCE_TAGS[partition],
            )
    if skipped:
        logger.debug("Index skipped %d records without a metric name", skipped)
    return sorted(seen.values(), key=lambda m: label_sort_key(m.label))


def find_descriptor(
    metrics: list[MetricDescriptor], metric_name: str
) -> MetricDescriptor | None:
    """Case-insensitive descriptor lookup."""
    wanted = metric_name.lower()
    for descriptor in metrics:
        if descriptor.name.lower() == wanted:
            return descriptor
    return None
