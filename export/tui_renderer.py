"""Terminal-Darstellung (rich) für Menü und CLI."""

from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from export.helpers import truncate

if TYPE_CHECKING:
    from analysis.statistics import GeneralStatistics, StudentCount
    from models.course import Course
    from models.enrollment import EnrollmentRecord
    from models.student import Student
    from services.queries import StudentLookup

NAME_WIDTH = 25


def render_records(console: Console, records: list["EnrollmentRecord"]) -> None:
    """Alle Datensätze als Tabelle, Namen auf 25 Zeichen gekürzt."""
    if not records:
        console.print("[dim]Keine Datensätze in der Datenbank.[/dim]")
        return
    table = Table(title=f"Alle Einschreibungen ({len(records)})", box=box.ROUNDED)
    table.add_column("Cédula", style="bold")
    table.add_column("Name")
    table.add_column("Kurscode")
    table.add_column("Kursname")
    for r in records:
        table.add_row(
            r.student.id,
            truncate(r.student.name, NAME_WIDTH),
            r.course.code,
            truncate(r.course.name, NAME_WIDTH),
        )
    console.print(table)


def render_student(console: Console, lookup: "StudentLookup") -> None:
    """Stammdaten und Kursliste einer Person."""
    s = lookup.student
    console.print(Panel(
        f"[bold]{s.name}[/bold]\n"
        f"Cédula: {s.id}\n"
        f"Eingeschriebene Kurse: {len(lookup.courses)}",
        title="Studierende/r",
        border_style="cyan",
    ))
    if not lookup.courses:
        console.print("[dim]Keine Kurse eingeschrieben.[/dim]")
        return
    table = Table(box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Code", style="bold")
    table.add_column("Kurs")
    for i, c in enumerate(lookup.courses, 1):
        table.add_row(str(i), c.code, c.name)
    console.print(table)


def render_course_roster(
    console: Console, course: "Course", students: list["Student"]
) -> None:
    """Teilnehmerliste eines Kurses."""
    if not students:
        console.print(
            f"[dim]Keine Studierenden in {course.name} ({course.code}) eingeschrieben.[/dim]"
        )
        return
    table = Table(title=f"{course.name} ({course.code})", box=box.ROUNDED)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Cédula", style="bold")
    for i, s in enumerate(students, 1):
        table.add_row(str(i), s.name, s.id)
    console.print(table)
    console.print(f"Gesamt: {len(students)} Studierende")


def render_student_counts(console: Console, counts: list["StudentCount"]) -> None:
    table = Table(title="Kurse pro Studierende/r", box=box.ROUNDED)
    table.add_column("Cédula", style="bold")
    table.add_column("Name")
    table.add_column("Kurse", justify="right")
    for sc in counts:
        table.add_row(sc.student.id, sc.student.name, str(sc.count))
    console.print(table)


def render_statistics(
    console: Console, stats: "GeneralStatistics", title: Optional[str] = None
) -> None:
    """Gesamtzahlen, beide Ranglisten und übersprungene Entitäten."""
    console.print(Panel(
        f"Studierende: [bold]{stats.total_students}[/bold]  |  "
        f"Kurse: [bold]{stats.total_courses}[/bold]  |  "
        f"Einschreibungen: [bold]{stats.total_enrollments}[/bold]",
        title=title or "Allgemeine Statistik",
        border_style="cyan",
    ))

    if stats.top_students:
        table = Table(title=f"TOP {len(stats.top_students)} – Studierende mit den meisten Kursen",
                      box=box.ROUNDED)
        table.add_column("#", justify="right")
        table.add_column("Name")
        table.add_column("Cédula")
        table.add_column("Kurse", justify="right")
        for i, sc in enumerate(stats.top_students, 1):
            table.add_row(str(i), sc.student.name, sc.student.id, str(sc.count))
        console.print(table)

    if stats.top_courses:
        table = Table(title=f"TOP {len(stats.top_courses)} – Kurse mit den meisten Studierenden",
                      box=box.ROUNDED)
        table.add_column("#", justify="right")
        table.add_column("Kurs")
        table.add_column("Code")
        table.add_column("Studierende", justify="right")
        for i, cc in enumerate(stats.top_courses, 1):
            table.add_row(str(i), cc.course.name, cc.course.code, str(cc.count))
        console.print(table)

    if stats.skipped:
        console.print("[yellow bold]Übersprungen (Zählung fehlgeschlagen):[/yellow bold]")
        for s in stats.skipped:
            console.print(f"  [yellow]• {s.kind} {s.key}: {s.reason}[/yellow]")
