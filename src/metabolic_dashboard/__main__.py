"""Punto de entrada del tablero metabólico."""

from __future__ import annotations

from metabolic_dashboard.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
