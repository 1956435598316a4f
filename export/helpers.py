"""Gemeinsame Hilfsfunktionen für JSON-, CSV- und Excel-Export."""

from datetime import date
from pathlib import Path
from typing import Union

from models.enrollment import EnrollmentRecord

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "header":   "4472C4",
    "band":     "F5F5F5",
    "top":      "B3D4FF",
}


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def truncate(text: str, max_len: int) -> str:
    """Kürzt Text auf max_len Zeichen, markiert mit '...'."""
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."


def record_rows(records: list[EnrollmentRecord]) -> list[list[str]]:
    """Datensätze als Zeilen in CSV-Spaltenreihenfolge."""
    return [r.to_row() for r in records]


def prepare_target(path: Union[str, Path]) -> Path:
    """Legt das Zielverzeichnis an und gibt den Pfad zurück."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path
