"""Zeilenweises Lesen von Einschreibungsdateien."""

from pathlib import Path
from typing import Union


def read_lines(path: Union[str, Path]) -> list[str]:
    """Liest eine Textdatei und gibt alle Zeilen ohne Zeilenende zurück.

    Leerzeilen bleiben erhalten, damit Zeilennummern in Fehlermeldungen
    der physischen Zeile in der Datei entsprechen. Ein UTF-8-BOM wird
    ignoriert.
    """
    with open(path, "r", encoding="utf-8-sig") as f:
        return f.read().splitlines()


def resolve_import_path(raw: str, data_dir: Union[str, Path]) -> Path:
    """Löst eine Benutzereingabe zu einem Dateipfad auf.

    Reine Dateinamen ohne Verzeichnisanteil werden zuerst in ``data_dir``
    gesucht ("inscripciones_validas.txt" → testdata/inscripciones_validas.txt).
    Existiert die Datei dort nicht, aber im Arbeitsverzeichnis, wird diese
    verwendet.
    """
    candidate = Path(raw.strip())
    if candidate.is_absolute() or len(candidate.parts) > 1:
        return candidate
    in_data_dir = Path(data_dir) / candidate
    if in_data_dir.exists() or not candidate.exists():
        return in_data_dir
    return candidate
