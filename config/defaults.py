from config.schema import (
    AppConfig,
    DatabaseConfig,
    ExportConfig,
    ImportConfig,
    LoggingConfig,
    StatisticsConfig,
)


# Kopfzeile der CSV-Exporte; Reihenfolge entspricht dem Importformat
CSV_HEADER = ["CEDULA", "NOMBRE_ESTUDIANTE", "CODIGO_MATERIA", "NOMBRE_MATERIA"]

# Anzahl der Felder pro Importzeile
FIELDS_PER_LINE = 4


def default_import_config() -> ImportConfig:
    """Standard-Validierungsregeln.

    Ausweisnummer: 6 bis 12 Zeichen.
    Name, Kurscode, Kursname: mindestens 2 Zeichen.
    """
    return ImportConfig(
        data_dir="testdata",
        student_id_min_length=6,
        student_id_max_length=12,
        min_field_length=2,
    )


def default_app_config() -> AppConfig:
    """Vollständige Default-Konfiguration (wird ohne YAML-Datei verwendet)."""
    return AppConfig(
        database=DatabaseConfig(path="inscripciones.db"),
        importing=default_import_config(),
        exporting=ExportConfig(),
        statistics=StatisticsConfig(top_n=5),
        logging=LoggingConfig(level="WARNING"),
    )
