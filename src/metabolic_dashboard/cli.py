"""CLI del tablero metabólico: tira de signos vitales, catálogo y series."""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime
from pathlib import Path

from dateutil import tz

from metabolic_dashboard.catalog import group_by_source, search_metrics, vital_pulse
from metabolic_dashboard.excel_writer import ExcelLayout, write_series_xlsx
from metabolic_dashboard.manager import HealthDataManager
from metabolic_dashboard.model import TimeWindow
from metabolic_dashboard.session import (
    DashboardSession,
    session_descriptor,
    session_series,
)
from metabolic_dashboard.sources.master_json import MasterJsonPaths, MasterJsonSource


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Tablero metabólico: labs, vitals, actividad y sueño."
    )
    parser.add_argument(
        "--data-dir",
        default=str(Path("src") / "data"),
        help="Directorio con *_master.json (default: ./src/data).",
    )
    parser.add_argument(
        "--metric",
        default=DashboardSession().metric,
        help="Métrica a consultar (default: RestingHeartRate).",
    )
    parser.add_argument(
        "--window",
        type=TimeWindow.parse,
        default=TimeWindow.ONE_MONTH,
        help="Ventana temporal: 1M, 6M, 1Y o ALL (default: 1M).",
    )
    parser.add_argument("--search", help="Buscar métricas por nombre o etiqueta.")
    parser.add_argument(
        "--list",
        action="store_true",
        help="Listar el catálogo de métricas agrupado por fuente.",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Exportar la serie a Excel en --out-dir.",
    )
    parser.add_argument(
        "--out-dir",
        default="salidas",
        help="Directorio de salida para --export (default: ./salidas).",
    )
    parser.add_argument(
        "--tz",
        default="UTC",
        help="Zona horaria para timestamps sin offset (default: UTC).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Nivel de logging (default: WARNING).",
    )
    return parser.parse_args(argv)


def _print_pulse(manager: HealthDataManager) -> None:
    for tile in vital_pulse(manager):
        when = (
            tile.latest.timestamp.strftime("%d/%m/%y") if tile.latest else "No Data"
        )
        print(f"{tile.label:<8} {tile.display_value:>8} {tile.unit:<8} {when}")


def _print_catalog(manager: HealthDataManager) -> None:
    for source, metrics in group_by_source(manager.metrics).items():
        print(source.upper())
        for m in metrics:
            print(f"  {m.label.upper():<40} {m.name}")


def main(argv: list[str] | None = None) -> int:
    """Run the dashboard CLI.

    Returns:
        Exit code (0 on success, 1 when the data cannot be loaded).
    """
    ns = parse_args(argv)
    logging.basicConfig(
        level=ns.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    local_tz = tz.gettz(ns.tz)
    if local_tz is None:
        print(f"Error: zona horaria desconocida: {ns.tz}")
        return 2

    source = MasterJsonSource(
        MasterJsonPaths(root=Path(ns.data_dir).expanduser().resolve())
    )
    manager = HealthDataManager(source, local_tz=local_tz)
    if not asyncio.run(manager.init()):
        print("Error: no se pudieron cargar los datos.")
        return 1

    _print_pulse(manager)

    if ns.list:
        _print_catalog(manager)

    if ns.search:
        for m in search_metrics(manager.metrics, ns.search):
            print(f"{m.label.upper():<40} {m.source.upper():<10} {m.name}")

    session = DashboardSession(metric=ns.metric, window=ns.window)
    series = session_series(manager, session)
    descriptor = session_descriptor(manager, session)
    if descriptor is not None:
        print(f"Metric: {descriptor.label} | Unit: {descriptor.unit}")
    print(f"Points ({session.window.value}): {len(series)}")
    for point in series:
        print(f"  {point.timestamp.isoformat()}  {point.value:g}")

    if ns.export:
        ts = datetime.now(tz=local_tz).strftime("%Y-%m-%d_%H-%M-%S")
        out_path = (
            Path(ns.out_dir).expanduser() / f"serie_{session.metric.lower()}_{ts}.xlsx"
        )
        write_series_xlsx(
            series,
            out_path,
            ExcelLayout(),
            metric=session.metric,
            descriptor=descriptor,
            local_tz=manager.local_tz,
        )
        print(f"OK: Output: {out_path}")
    return 0
