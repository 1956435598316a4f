"""Konfigurationsmanager: Laden, Speichern und Anzeigen der Anwendungskonfiguration.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich import box
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.defaults import default_app_config
from config.schema import AppConfig

logger = logging.getLogger(__name__)
console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

def _yaml_header() -> str:
    return f"""\
# ============================================
# Kurseinschreibungen — Anwendungskonfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""


_SECTION_COMMENTS = {
    "database": (
        "Datenbank",
        "SQLite-Datei für Studierende, Kurse und Einschreibungen.",
    ),
    "importing": (
        "Import",
        "Zeilenformat: cedula,nombre,codigo,materia\n"
        "Reine Dateinamen werden in data_dir gesucht.",
    ),
    "exporting": (
        "Export",
        None,
    ),
    "statistics": (
        "Statistik",
        None,
    ),
    "logging": (
        "Logging",
        "Level: DEBUG, INFO, WARNING, ERROR.",
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "app_config.yaml"

    def first_run_check(self) -> bool:
        """True, solange keine Anwendungskonfiguration angelegt wurde."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> AppConfig:
        """Liest die Anwendungskonfiguration; fehlende Abschnitte bekommen Defaults."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py config init' aus."
            )
        raw = yaml.load(target.read_text(encoding="utf-8"))
        try:
            return AppConfig.model_validate(dict(raw or {}))
        except ValidationError as e:
            raise ValueError(f"Konfigurationsdatei ungültig: {target}\n{e}") from e

    def load_or_default(self, path: Optional[Path] = None) -> AppConfig:
        """Wie load(), fällt aber ohne Datei auf die Default-Config zurück.

        Ein explizit angegebener Pfad muss existieren.
        """
        if path is not None:
            return self.load(path)
        if self.first_run_check():
            return default_app_config()
        return self.load()

    # ─── Speichern ───

    def save(self, config: AppConfig, path: Optional[Path] = None) -> Path:
        """Speichere Config als YAML mit Kommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_yaml_header() + "\n")
            yaml.dump(self._build_commented_yaml(config), f)
        logger.info(f"Konfiguration gespeichert: {target}")

        return target

    def _build_commented_yaml(self, config: AppConfig) -> CommentedMap:
        """AppConfig als CommentedMap mit Abschnittsüberschriften."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        return cm

    # ─── Anzeige ───

    def show(self, config: AppConfig) -> None:
        """Gibt die Konfiguration als rich-Tabelle aus."""
        table = Table(title="Konfiguration", box=box.ROUNDED)
        table.add_column("Bereich", style="bold")
        table.add_column("Parameter")
        table.add_column("Wert")
        for section, values in config.model_dump().items():
            for key, value in values.items():
                table.add_row(section, key, "—" if value is None else str(value))
        console.print(table)
