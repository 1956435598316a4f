"""Interaktives Konsolenmenü.

Hauptmenü: Import, Auswertungen der zuletzt importierten Datei, Exporte
und ein Untermenü für erweiterte Abfragen. Jeder Fehler wird gemeldet,
danach geht es zurück ins Menü.
"""

import logging
from typing import Callable, Optional, TextIO

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from data.enrollment_import import ImportResult
from data.file_reader import resolve_import_path
from export.csv_export import export_csv
from export.excel_export import ExcelExporter
from export.json_export import export_json
from export.tui_renderer import (
    render_course_roster,
    render_records,
    render_statistics,
    render_student,
    render_student_counts,
)
from models.errors import (
    DuplicateEnrollmentError,
    EnrollmentImportError,
    LineValidationError,
    StorageError,
)
from models.snapshot import ConsolidatedSnapshot
from services.context import AppContext

logger = logging.getLogger(__name__)

# Erwartbare Fehler einer Menüaktion; alles andere ist ein Programmfehler
OPERATION_ERRORS = (
    DuplicateEnrollmentError,
    EnrollmentImportError,
    LineValidationError,
    StorageError,
    OSError,
)

_MAIN_OPTIONS = [
    ("1", "Einschreibungsdatei importieren"),
    ("2", "Anzahl Kurse pro Studierende/r anzeigen"),
    ("3", "Studierende nach Kurs filtern"),
    ("4", "Daten als JSON exportieren"),
    ("5", "Daten als CSV exportieren"),
    ("6", "Daten als Excel exportieren"),
    ("7", "Erweiterte Abfragen"),
    ("0", "Beenden"),
]

_ADVANCED_OPTIONS = [
    ("1", "Studierende/n nach Cédula suchen"),
    ("2", "Allgemeine Statistik anzeigen"),
    ("3", "Neuen Datensatz einfügen"),
    ("4", "Alle Datensätze anzeigen"),
    ("0", "Zurück zum Hauptmenü"),
]


class ConsoleMenu:
    """Menüschleife über einem AppContext.

    ``stream`` ersetzt stdin (für Tests); Dateiende wirkt wie "0".
    """

    def __init__(
        self,
        ctx: AppContext,
        console: Optional[Console] = None,
        stream: Optional[TextIO] = None,
    ):
        self.ctx = ctx
        self.console = console or Console()
        self.stream = stream
        self.snapshot: Optional[ConsolidatedSnapshot] = None

    # ─── Eingabe ───

    def _ask(self, prompt: str, default: Optional[str] = None) -> str:
        if default is None:
            return Prompt.ask(prompt, console=self.console, stream=self.stream).strip()
        return Prompt.ask(
            prompt, console=self.console, stream=self.stream, default=default,
            show_default=False,
        ).strip()

    def _show_options(self, title: str, options: list[tuple[str, str]]) -> None:
        self.console.print()
        self.console.print(Panel(f"[bold]{title}[/bold]", border_style="cyan"))
        for key, label in options:
            self.console.print(f"  [bold]{key}.[/bold] {label}")

    def _run(self, action: Callable[[], None]) -> None:
        """Führt eine Menüaktion aus; erwartbare Fehler beenden nur die Aktion."""
        try:
            action()
        except OPERATION_ERRORS as e:
            logger.debug(f"Menüaktion fehlgeschlagen: {e!r}")
            self.console.print(f"[red]Fehler:[/red] {e}")

    # ─── Schleifen ───

    def run(self) -> None:
        """Hauptmenü bis zur Auswahl 0 (oder Eingabeende)."""
        actions = {
            "1": self.import_file,
            "2": self.show_counts_per_student,
            "3": self.filter_by_course,
            "4": lambda: self.export("json"),
            "5": lambda: self.export("csv"),
            "6": lambda: self.export("xlsx"),
            "7": self.run_advanced,
        }
        while True:
            self._show_options("Kurseinschreibungen", _MAIN_OPTIONS)
            choice = self._ask("\nAuswahl", default="0")
            if choice == "0":
                self.console.print("Programm wird beendet.")
                return
            action = actions.get(choice)
            if action is None:
                self.console.print("[yellow]Ungültige Auswahl.[/yellow]")
                continue
            self._run(action)

    def run_advanced(self) -> None:
        actions = {
            "1": self.find_student,
            "2": self.show_statistics,
            "3": self.insert_record,
            "4": self.show_all_records,
        }
        while True:
            self._show_options("Erweiterte Abfragen", _ADVANCED_OPTIONS)
            choice = self._ask("\nAuswahl", default="0")
            if choice == "0":
                return
            action = actions.get(choice)
            if action is None:
                self.console.print("[yellow]Ungültige Auswahl.[/yellow]")
                continue
            self._run(action)

    # ─── Hauptmenü-Aktionen ───

    def _require_snapshot(self) -> bool:
        if self.snapshot is None:
            self.console.print(
                "[yellow]Bitte zuerst eine Einschreibungsdatei importieren (Option 1).[/yellow]"
            )
            return False
        return True

    def import_file(self) -> Optional[ImportResult]:
        raw = self._ask("Pfad der Einschreibungsdatei")
        if not raw:
            self.console.print("[yellow]Kein Pfad angegeben.[/yellow]")
            return None
        path = resolve_import_path(raw, self.ctx.config.importing.data_dir)
        result = self.ctx.importer.import_file(path)
        self.snapshot = result.snapshot
        result.report.print_rich(self.console)
        self.console.print(f"[green]✓[/green] Datei importiert: {path}")
        self.console.print(result.snapshot.summary())
        return result

    def show_counts_per_student(self) -> None:
        if not self._require_snapshot():
            return
        counts, skipped = self.ctx.statistics.per_student_counts(
            list(self.snapshot.students.values()))
        render_student_counts(self.console, counts)
        for s in skipped:
            self.console.print(f"[red]Zählung für {s.key} fehlgeschlagen:[/red] {s.reason}")

    def filter_by_course(self) -> None:
        if not self._require_snapshot():
            return
        code = self._ask("Kurscode")
        course = self.snapshot.courses.get(code)
        if course is None:
            self.console.print("[yellow]Kurs nicht gefunden. Bitte einen gültigen Code eingeben.[/yellow]")
            return
        students = self.ctx.statistics.students_enrolled_in(code)
        render_course_roster(self.console, course, students)

    def export(self, fmt: str) -> None:
        if not self._require_snapshot():
            return
        records = self.ctx.queries.records_for(self.snapshot)
        cfg = self.ctx.config.exporting
        if fmt == "json":
            target = export_json(records, self.ctx.export_path(cfg.json_filename))
        elif fmt == "csv":
            target = export_csv(records, self.ctx.export_path(cfg.csv_filename))
        else:
            target = ExcelExporter(records, self.ctx.statistics.general_statistics()).export(
                self.ctx.export_path(cfg.xlsx_filename))
        self.console.print(f"[green]✓[/green] Daten exportiert: {target}")

    # ─── Erweiterte Abfragen ───

    def find_student(self) -> None:
        student_id = self._ask("Cédula")
        if not student_id:
            self.console.print("[yellow]Die Cédula darf nicht leer sein.[/yellow]")
            return
        lookup = self.ctx.queries.find_student(student_id)
        if lookup is None:
            self.console.print(f"Keine Person mit Cédula {student_id} gefunden.")
            return
        render_student(self.console, lookup)

    def show_statistics(self) -> None:
        render_statistics(self.console, self.ctx.statistics.general_statistics())

    def insert_record(self) -> None:
        self.console.print("[bold]Neuen Datensatz einfügen[/bold]")
        student_id = self._ask("Cédula")
        student_name = self._ask("Name")
        course_code = self._ask("Kurscode")
        course_name = self._ask("Kursname")
        if not all([student_id, student_name, course_code, course_name]):
            self.console.print("[yellow]Alle Felder sind Pflichtfelder.[/yellow]")
            return
        record = self.ctx.queries.insert_enrollment(
            student_id, student_name, course_code, course_name)
        self.console.print(
            f"[green]✓[/green] Datensatz eingefügt: {record.student.id} → {record.course.code}"
        )

    def show_all_records(self) -> None:
        render_records(self.console, self.ctx.queries.all_records())
