from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional


_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


# ─── DATENBANK ───

class DatabaseConfig(BaseModel):
    """Speicherort der SQLite-Datenbank."""
    # Pfad zur Datenbankdatei (":memory:" für eine flüchtige Datenbank)
    path: str = Field("inscripciones.db",
        description="Pfad zur SQLite-Datenbankdatei")


# ─── IMPORT ───

class ImportConfig(BaseModel):
    """Regeln für den Import von Einschreibungsdateien.

    Jede Zeile hat das Format ``cedula,nombre,codigo,materia``.
    Die Längenregeln gelten nach dem Entfernen von Leerzeichen.
    """
    # Verzeichnis, in dem reine Dateinamen gesucht werden
    data_dir: str = Field("testdata",
        description="Standardverzeichnis für Importdateien")
    # Minimale Länge der Ausweisnummer (Cédula)
    student_id_min_length: int = Field(6, ge=1,
        description="Minimale Länge der Ausweisnummer")
    # Maximale Länge der Ausweisnummer (Cédula)
    student_id_max_length: int = Field(12, ge=1,
        description="Maximale Länge der Ausweisnummer")
    # Minimale Länge für Namen und Kurscodes
    min_field_length: int = Field(2, ge=1,
        description="Minimale Länge für Namen und Kurscodes")

    @model_validator(mode='after')
    def validate_id_bounds(self):
        if self.student_id_min_length > self.student_id_max_length:
            raise ValueError(
                f"student_id_min_length ({self.student_id_min_length}) > "
                f"student_id_max_length ({self.student_id_max_length})")
        return self


# ─── EXPORT ───

class ExportConfig(BaseModel):
    """Zielverzeichnis und Dateinamen der Exporte."""
    output_dir: str = Field(".",
        description="Verzeichnis für exportierte Dateien")
    json_filename: str = "inscripciones.json"
    csv_filename: str = "inscripciones.csv"
    xlsx_filename: str = "inscripciones.xlsx"


# ─── STATISTIK ───

class StatisticsConfig(BaseModel):
    """Parameter der Ranglisten."""
    # Länge der Top-Listen (Studierende / Kurse)
    top_n: int = Field(5, ge=1, le=50,
        description="Anzahl Einträge in den Top-Listen")


# ─── LOGGING ───

class LoggingConfig(BaseModel):
    """Logging-Einstellungen (Standardbibliothek ``logging``)."""
    level: str = Field("WARNING",
        description="Log-Level: DEBUG, INFO, WARNING, ERROR")
    # Optionale Log-Datei; ohne Angabe wird nach stderr geloggt
    file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        v = v.upper()
        if v not in _LOG_LEVELS:
            raise ValueError(
                f"Ungültiges Log-Level '{v}'. Erlaubt: {sorted(_LOG_LEVELS)}")
        return v


# ─── GESAMTKONFIGURATION ───

class AppConfig(BaseModel):
    """Vollständige Anwendungskonfiguration."""
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    importing: ImportConfig = Field(default_factory=ImportConfig)
    exporting: ExportConfig = Field(default_factory=ExportConfig)
    statistics: StatisticsConfig = Field(default_factory=StatisticsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
