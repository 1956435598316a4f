"""Kurseinschreibungen — Haupt-CLI.

Verwendung:
  python main.py                          Interaktives Menü
  python main.py import <datei.txt>       Einschreibungsdatei importieren
  python main.py counts                   Kurse pro Studierende/r
  python main.py course <code>            Studierende eines Kurses
  python main.py student <cedula>         Person mit Kursen anzeigen
  python main.py stats                    Allgemeine Statistik (Top 5)
  python main.py add <id> <name> <code> <kurs>   Datensatz einfügen
  python main.py list                     Alle Datensätze
  python main.py export --format json     Export (json, csv, xlsx)
  python main.py config show              Konfiguration anzeigen
  python main.py config init              Default-Konfiguration anlegen
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

console = Console()
logger = logging.getLogger(__name__)


def _setup_logging(level: str, log_file: Optional[str] = None) -> None:
    """Konfiguriert das Root-Logging (stderr oder Datei)."""
    handlers: list[logging.Handler] = []
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    else:
        handlers.append(logging.StreamHandler(sys.stderr))
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def _open_context(ctx: click.Context):
    """Öffnet Datenbank und Dienste einmal pro Aufruf."""
    from services.context import AppContext
    from models.errors import StorageError

    if ctx.obj.get("app") is None:
        try:
            app = AppContext.open(ctx.obj["config"], ctx.obj.get("db_path"))
        except StorageError as e:
            console.print(f"[red]Datenbankfehler:[/red] {e}")
            sys.exit(1)
        ctx.call_on_close(app.close)
        ctx.obj["app"] = app
    return ctx.obj["app"]


def _fail(message: str) -> None:
    console.print(f"[red bold]Fehler:[/red bold] {message}")
    sys.exit(1)


# ─── MENÜ ─────────────────────────────────────────────────────────────────────

@click.command("menu")
@click.pass_context
def cmd_menu(ctx: click.Context):
    """Startet das interaktive Menü."""
    from ui.menu import ConsoleMenu
    app = _open_context(ctx)
    console.print("[bold]Sistema de Inscripciones — Kurseinschreibungen[/bold]")
    console.print(
        f"[dim]Reine Dateinamen werden in '{app.config.importing.data_dir}/' gesucht. "
        f"Exporte landen in '{app.config.exporting.output_dir}'.[/dim]"
    )
    ConsoleMenu(app, console=console).run()


# ─── IMPORT ───────────────────────────────────────────────────────────────────

@click.command("import")
@click.argument("datei")
@click.pass_context
def cmd_import(ctx: click.Context, datei: str):
    """Importiert Einschreibungen aus einer Textdatei."""
    from data.file_reader import resolve_import_path
    from models.errors import EnrollmentImportError

    app = _open_context(ctx)
    path = resolve_import_path(datei, app.config.importing.data_dir)
    console.print(f"[bold]Importiere:[/bold] {path}")
    try:
        result = app.importer.import_file(path)
    except EnrollmentImportError as e:
        _fail(f"Import fehlgeschlagen: {e}")

    result.report.print_rich(console)
    console.print(f"[green]✓[/green] Import erfolgreich!")
    console.print(result.snapshot.summary())


# ─── ABFRAGEN ─────────────────────────────────────────────────────────────────

@click.command("counts")
@click.pass_context
def cmd_counts(ctx: click.Context):
    """Zeigt die Anzahl Kurse für alle Studierenden."""
    from export.tui_renderer import render_student_counts
    from models.errors import StorageError

    app = _open_context(ctx)
    try:
        students = app.queries.students.get_all()
        counts, skipped = app.statistics.per_student_counts(students)
    except StorageError as e:
        _fail(str(e))
    render_student_counts(console, counts)
    for s in skipped:
        console.print(f"[yellow]Übersprungen: {s.key} ({s.reason})[/yellow]")


@click.command("course")
@click.argument("code")
@click.pass_context
def cmd_course(ctx: click.Context, code: str):
    """Listet die Studierenden eines Kurses."""
    from export.tui_renderer import render_course_roster
    from models.errors import StorageError

    app = _open_context(ctx)
    try:
        course = app.queries.courses.get_by_key(code)
        if course is None:
            _fail(f"Kurs '{code}' nicht gefunden.")
        students = app.statistics.students_enrolled_in(code)
    except StorageError as e:
        _fail(str(e))
    render_course_roster(console, course, students)


@click.command("student")
@click.argument("cedula")
@click.pass_context
def cmd_student(ctx: click.Context, cedula: str):
    """Zeigt eine Person mit allen eingeschriebenen Kursen."""
    from export.tui_renderer import render_student
    from models.errors import StorageError

    app = _open_context(ctx)
    try:
        lookup = app.queries.find_student(cedula)
    except StorageError as e:
        _fail(str(e))
    if lookup is None:
        console.print(f"Keine Person mit Cédula {cedula} gefunden.")
        sys.exit(1)
    render_student(console, lookup)


@click.command("stats")
@click.pass_context
def cmd_stats(ctx: click.Context):
    """Gesamtzahlen und Top-Ranglisten."""
    from export.tui_renderer import render_statistics
    from models.errors import StorageError

    app = _open_context(ctx)
    try:
        stats = app.statistics.general_statistics()
    except StorageError as e:
        _fail(str(e))
    render_statistics(console, stats)


@click.command("add")
@click.argument("cedula")
@click.argument("name")
@click.argument("code")
@click.argument("kurs")
@click.pass_context
def cmd_add(ctx: click.Context, cedula: str, name: str, code: str, kurs: str):
    """Fügt eine einzelne Einschreibung ein (Stammdaten nur falls neu)."""
    from models.errors import DuplicateEnrollmentError, LineValidationError, StorageError

    app = _open_context(ctx)
    try:
        record = app.queries.insert_enrollment(cedula, name, code, kurs)
    except DuplicateEnrollmentError as e:
        console.print(f"[yellow]Abgelehnt:[/yellow] {e}")
        sys.exit(1)
    except (LineValidationError, StorageError) as e:
        _fail(str(e))
    console.print(
        f"[green]✓[/green] Datensatz eingefügt: {record.student.id} → {record.course.code}"
    )


@click.command("list")
@click.pass_context
def cmd_list(ctx: click.Context):
    """Listet alle Datensätze."""
    from export.tui_renderer import render_records
    from models.errors import StorageError

    app = _open_context(ctx)
    try:
        records = app.queries.all_records()
    except StorageError as e:
        _fail(str(e))
    render_records(console, records)


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@click.option("--format", "fmt", type=click.Choice(["json", "csv", "xlsx"]),
              default="json", show_default=True, help="Exportformat.")
@click.option("--output", "-o", default=None,
              help="Ausgabepfad (Standard aus der Konfiguration).")
@click.option("--from-file", "from_file", default=None,
              help="Nur die Studierenden dieser Importdatei exportieren "
                   "(Datei wird vorher importiert).")
@click.pass_context
def cmd_export(ctx: click.Context, fmt: str, output: Optional[str],
               from_file: Optional[str]):
    """Exportiert Einschreibungen als JSON, CSV oder Excel."""
    from data.file_reader import resolve_import_path
    from export.csv_export import export_csv
    from export.excel_export import ExcelExporter
    from export.json_export import export_json
    from models.errors import EnrollmentImportError, StorageError

    app = _open_context(ctx)
    cfg = app.config.exporting
    default_name = {
        "json": cfg.json_filename, "csv": cfg.csv_filename, "xlsx": cfg.xlsx_filename,
    }[fmt]
    target = Path(output) if output else app.export_path(default_name)

    try:
        if from_file:
            path = resolve_import_path(from_file, app.config.importing.data_dir)
            result = app.importer.import_file(path)
            records = app.queries.records_for(result.snapshot)
        else:
            records = app.queries.all_records()

        if fmt == "json":
            written = export_json(records, target)
        elif fmt == "csv":
            written = export_csv(records, target)
        else:
            written = ExcelExporter(records, app.statistics.general_statistics()).export(target)
    except (EnrollmentImportError, StorageError, OSError) as e:
        _fail(f"Export fehlgeschlagen: {e}")

    console.print(f"[green]✓[/green] {len(records)} Datensätze exportiert: {written}")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
@click.pass_context
def config_show(ctx: click.Context):
    """Zeigt die aktive Konfiguration an."""
    from config.manager import ConfigManager
    ConfigManager().show(ctx.obj["config"])


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Vorhandene Datei überschreiben.")
@click.pass_context
def config_init(ctx: click.Context, force: bool):
    """Legt eine kommentierte Default-Konfiguration an."""
    from config.defaults import default_app_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    target = ctx.obj.get("config_path") or mgr.DEFAULT_CONFIG
    if target.exists() and not force:
        console.print(
            f"[yellow]Konfiguration existiert bereits: {target}[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    written = mgr.save(default_app_config(), target)
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {written}")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group(invoke_without_command=True)
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Pfad zur YAML-Konfiguration.")
@click.option("--db", "db_path", default=None,
              help="Pfad zur SQLite-Datenbank (überschreibt die Konfiguration).")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Ausführliches Logging (DEBUG).")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], db_path: Optional[str],
        verbose: bool):
    """Verwaltung von Kurseinschreibungen (Import, Abfragen, Export).

    Ohne Unterbefehl startet das interaktive Menü.
    """
    from config.manager import ConfigManager

    ctx.ensure_object(dict)
    is_config_init = ctx.invoked_subcommand == "config"
    try:
        config = ConfigManager().load_or_default(
            None if is_config_init and config_path and not config_path.exists()
            else config_path
        )
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    _setup_logging("DEBUG" if verbose else config.logging.level, config.logging.file)
    ctx.obj.update(config=config, config_path=config_path, db_path=db_path)

    if ctx.invoked_subcommand is None:
        ctx.invoke(cmd_menu)


def main():
    """Einstiegspunkt."""
    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_menu)
cli.add_command(cmd_import)
cli.add_command(cmd_counts)
cli.add_command(cmd_course)
cli.add_command(cmd_student)
cli.add_command(cmd_stats)
cli.add_command(cmd_add)
cli.add_command(cmd_list)
cli.add_command(cmd_export)
cli.add_command(cmd_config)


if __name__ == "__main__":
    main()
