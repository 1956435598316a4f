"""SQLite-Anbindung: Verbindung, Schema und Fehlerübersetzung.

Alle Repositories teilen sich eine Database-Instanz. Jeder Schreibzugriff
wird sofort committed; ein Import ist daher nicht atomar.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Optional, Union

from models.errors import StorageError

logger = logging.getLogger(__name__)

MEMORY = ":memory:"

SCHEMA = [
    """CREATE TABLE IF NOT EXISTS estudiantes (
        cedula TEXT PRIMARY KEY,
        nombre TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS materias (
        codigo TEXT PRIMARY KEY,
        nombre TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS inscripciones (
        estudiante_cedula TEXT NOT NULL,
        materia_codigo TEXT NOT NULL,
        FOREIGN KEY(estudiante_cedula) REFERENCES estudiantes(cedula),
        FOREIGN KEY(materia_codigo) REFERENCES materias(codigo),
        PRIMARY KEY(estudiante_cedula, materia_codigo)
    )""",
]


class Database:
    """Eine SQLite-Verbindung mit initialisiertem Schema."""

    def __init__(self, path: Union[str, Path] = MEMORY):
        self.path = str(path)
        if self.path != MEMORY:
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self.conn = sqlite3.connect(self.path)
            self.conn.row_factory = sqlite3.Row
            self.conn.execute("PRAGMA foreign_keys = ON")
            for statement in SCHEMA:
                self.conn.execute(statement)
            self.conn.commit()
        except sqlite3.Error as e:
            raise StorageError(
                f"Datenbank konnte nicht initialisiert werden ({self.path}): {e}"
            ) from e
        logger.info(f"Datenbank initialisiert: {self.path}")

    # ─── Zugriff ───

    def execute(self, sql: str, params: tuple = ()) -> None:
        """Führt eine schreibende Anweisung aus und committed sofort."""
        try:
            self.conn.execute(sql, params)
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            raise StorageError(f"Schreibzugriff fehlgeschlagen: {e}") from e

    def fetch_one(self, sql: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        try:
            return self.conn.execute(sql, params).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Abfrage fehlgeschlagen: {e}") from e

    def fetch_all(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        try:
            return self.conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Abfrage fehlgeschlagen: {e}") from e

    def scalar(self, sql: str, params: tuple = ()) -> Any:
        """Gibt die erste Spalte der ersten Ergebniszeile zurück."""
        row = self.fetch_one(sql, params)
        return row[0] if row is not None else None

    # ─── Lebenszyklus ───

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
