"""Exportación a Excel de una serie de métrica (ventana seleccionada)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Any

import pandas as pd
from dateutil import tz
from openpyxl.styles import Alignment, Border, Font, Side

from metabolic_dashboard.model import MetricDescriptor, SeriesPoint

_DIA_SEMANA: tuple[str, ...] = ("lun", "mar", "mie", "jue", "vie", "sab", "dom")

_TIMESTAMP_HEADER = "Fecha / Hora"
_WEEKDAY_HEADER = "Día"


@dataclass(frozen=True)
class ExcelLayout:
    """Layout/formatting configuration for the series sheet."""

    sheet_name: str = "Serie"
    timestamp_format: str = "dd/mm/yyyy hh:mm"
    value_format: str = "0.00"


def value_header(descriptor: MetricDescriptor | None, metric: str) -> str:
    """Header for the value column, e.g. 'Resting HR (bpm)'."""
    if descriptor is None:
        return metric
    if descriptor.unit:
        return f"{descriptor.label} ({descriptor.unit})"
    return descriptor.label


def series_to_frame(
    points: Sequence[SeriesPoint], local_tz: tzinfo | None = None
) -> pd.DataFrame:
    """Convert series points to a DataFrame (timestamp, value) in ``local_tz``."""
    df = pd.DataFrame(
        [{"timestamp": p.timestamp, "value": p.value} for p in points],
        columns=["timestamp", "value"],
    )
    if df.empty:
        return df
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True).dt.tz_convert(
        local_tz or tz.UTC
    )
    return df


def _weekday_label(i: int) -> str:
    """Convierte índice 0-6 (lunes-domingo) a etiqueta de 3 letras."""
    idx = int(i)
    return _DIA_SEMANA[idx] if 0 <= idx < 7 else ""


def _export_frame(df: pd.DataFrame, header: str) -> pd.DataFrame:
    """Añade columna Día, quita timezone y renombra cabeceras."""
    out = df.copy()
    if out.empty:
        return pd.DataFrame(columns=[_WEEKDAY_HEADER, _TIMESTAMP_HEADER, header])
    out["timestamp"] = out["timestamp"].dt.tz_localize(None)
    out.insert(0, "weekday", out["timestamp"].dt.weekday.map(_weekday_label))
    return out.rename(
        columns={
            "weekday": _WEEKDAY_HEADER,
            "timestamp": _TIMESTAMP_HEADER,
            "value": header,
        }
    )


def write_series_xlsx(
    points: Sequence[SeriesPoint],
    out_path: Path,
    layout: ExcelLayout,
    *,
    metric: str,
    descriptor: MetricDescriptor | None = None,
    local_tz: tzinfo | None = None,
) -> None:
    """Write a formatted Excel sheet with one row per point.

    Args:
        points: Series to export (already windowed).
        out_path: Output path for the XLSX file.
        layout: Excel layout parameters.
        metric: Requested metric name, used when there is no descriptor.
        descriptor: Catalog entry providing label and unit.
        local_tz: Zone the wall-clock times are written in (UTC by default).
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    header = value_header(descriptor, metric)
    export_df = _export_frame(series_to_frame(points, local_tz), header)

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        export_df.to_excel(writer, index=False, sheet_name=layout.sheet_name)
        ws = writer.book[layout.sheet_name]
        _format_sheet(ws, layout)


def _format_sheet(ws: Any, layout: ExcelLayout) -> None:
    """Apply borders, widths and number formats to a worksheet.

    Args:
        ws: openpyxl worksheet.
        layout: Excel layout parameters.
    """
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)

    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.alignment = center
        cell.border = border

    for row in ws.iter_rows(min_row=2):
        for cell in row:
            cell.alignment = center
            cell.border = border
        if len(row) >= 3:
            row[1].number_format = layout.timestamp_format
            row[2].number_format = layout.value_format

    # Anchos fijos para evitar ###.
    for letter, width in (("A", 6), ("B", 18), ("C", 18)):
        ws.column_dimensions[letter].width = width
