"""Import von Einschreibungen aus Textdateien.

Zeilenformat:  cedula,nombre_estudiante,codigo_materia,nombre_materia
Validierung:   ungültige Zeilen werden gemeldet und übersprungen.
Persistenz:    Studierende → Kurse → Einschreibungen, jeweils nur wenn
               noch nicht vorhanden (erneuter Import ist unschädlich).
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from pydantic import BaseModel, Field

from config.defaults import FIELDS_PER_LINE, default_import_config
from config.schema import ImportConfig
from data.file_reader import read_lines
from models.course import Course
from models.enrollment import Enrollment
from models.errors import EnrollmentImportError, LineValidationError, StorageError
from models.snapshot import ConsolidatedSnapshot
from models.student import Student
from repository.base import CourseStore, EnrollmentStore, StudentStore

logger = logging.getLogger(__name__)


# ─── Ergebnis-Modelle ─────────────────────────────────────────────────────────

class ParsedLine(BaseModel):
    """Eine gültige, getrimmte Importzeile."""

    student_id: str
    student_name: str
    course_code: str
    course_name: str


class LineError(BaseModel):
    """Eine abgelehnte Zeile mit Begründung."""

    line_number: int   # 1-basiert, physische Zeile in der Datei
    line: str
    reason: str


class ImportReport(BaseModel):
    """Protokoll eines Imports."""

    total_lines: int = 0
    valid_lines: int = 0
    blank_lines: list[int] = Field(default_factory=list)  # übersprungen, kein Fehler
    errors: list[LineError] = Field(default_factory=list)
    students_created: int = 0
    students_existing: int = 0
    courses_created: int = 0
    courses_existing: int = 0
    enrollments_created: int = 0
    enrollments_existing: int = 0

    def print_rich(self, console=None) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = console or Console()
        lines = [
            f"Zeilen gelesen: {self.total_lines} "
            f"([green]{self.valid_lines} gültig[/green], "
            f"[red]{len(self.errors)} fehlerhaft[/red], "
            f"[dim]{len(self.blank_lines)} leer[/dim])",
            f"Studierende: {self.students_created} neu, {self.students_existing} vorhanden",
            f"Kurse: {self.courses_created} neu, {self.courses_existing} vorhanden",
            f"Einschreibungen: {self.enrollments_created} neu, "
            f"{self.enrollments_existing} vorhanden",
        ]
        if self.blank_lines:
            lines.append(
                "[dim]Leerzeilen übersprungen: "
                + ", ".join(str(n) for n in self.blank_lines) + "[/dim]"
            )
        if self.errors:
            lines.append("\n[yellow bold]Übersprungene Zeilen:[/yellow bold]")
            for e in self.errors:
                lines.append(f"  [yellow]• Zeile {e.line_number}: {e.reason}[/yellow]")

        console.print(Panel("\n".join(lines), title="Import", border_style="cyan"))


class ImportResult(BaseModel):
    """Rückgabe eines erfolgreichen Imports."""

    snapshot: ConsolidatedSnapshot
    report: ImportReport


# ─── Zeilen-Validierung ───────────────────────────────────────────────────────

def validate_fields(
    student_id: str,
    student_name: str,
    course_code: str,
    course_name: str,
    rules: Optional[ImportConfig] = None,
) -> None:
    """Prüft bereits getrimmte Felder gegen die Längenregeln."""
    rules = rules or default_import_config()
    fields = [student_id, student_name, course_code, course_name]
    for i, value in enumerate(fields, start=1):
        if not value:
            raise LineValidationError(f"Feld {i} ist leer")

    lo, hi = rules.student_id_min_length, rules.student_id_max_length
    if not lo <= len(student_id) <= hi:
        raise LineValidationError(
            f"Ausweisnummer '{student_id}' muss zwischen {lo} und {hi} Zeichen haben"
        )
    min_len = rules.min_field_length
    if len(student_name) < min_len:
        raise LineValidationError(
            f"Name '{student_name}' muss mindestens {min_len} Zeichen haben"
        )
    if len(course_code) < min_len:
        raise LineValidationError(
            f"Kurscode '{course_code}' muss mindestens {min_len} Zeichen haben"
        )
    if len(course_name) < min_len:
        raise LineValidationError(
            f"Kursname '{course_name}' muss mindestens {min_len} Zeichen haben"
        )


def parse_line(line: str, rules: Optional[ImportConfig] = None) -> ParsedLine:
    """Zerlegt und validiert eine Importzeile.

    Raises:
        LineValidationError: falsche Feldanzahl, leeres Feld oder
            verletzte Längenregel.
    """
    parts = line.split(",")
    if len(parts) != FIELDS_PER_LINE:
        raise LineValidationError(
            f"Falsches Format: {FIELDS_PER_LINE} kommagetrennte Felder erwartet, "
            f"{len(parts)} gefunden"
        )
    student_id, student_name, course_code, course_name = (p.strip() for p in parts)
    validate_fields(student_id, student_name, course_code, course_name, rules)
    return ParsedLine(
        student_id=student_id,
        student_name=student_name,
        course_code=course_code,
        course_name=course_name,
    )


# ─── Importer ─────────────────────────────────────────────────────────────────

class EnrollmentImporter:
    """Validiert Zeilen, baut die konsolidierte Sicht und speichert sie."""

    def __init__(
        self,
        students: StudentStore,
        courses: CourseStore,
        enrollments: EnrollmentStore,
        rules: Optional[ImportConfig] = None,
    ):
        self.students = students
        self.courses = courses
        self.enrollments = enrollments
        self.rules = rules or default_import_config()

    def import_file(self, path: Union[str, Path]) -> ImportResult:
        """Liest eine Datei und importiert ihre Zeilen."""
        try:
            lines = read_lines(path)
        except UnicodeDecodeError as e:
            raise EnrollmentImportError(
                f"Datei ist nicht UTF-8-kodiert: {path} (Byte {e.start})") from e
        except OSError as e:
            raise EnrollmentImportError(f"Datei konnte nicht gelesen werden: {path} ({e})") from e
        logger.info(f"Importiere {path} ({len(lines)} Zeilen)")
        return self.import_lines(lines)

    def import_lines(self, lines: Iterable[str]) -> ImportResult:
        """Importiert eine Folge roher Textzeilen.

        Raises:
            EnrollmentImportError: keine gültige Zeile oder Datenbankfehler
                beim Speichern (bereits geschriebene Zeilen bleiben erhalten).
        """
        report = ImportReport()
        students: dict[str, Student] = {}
        courses: dict[str, Course] = {}
        pairs: dict[tuple[str, str], Enrollment] = {}

        for number, line in enumerate(lines, start=1):
            report.total_lines += 1
            if not line.strip():
                report.blank_lines.append(number)
                continue
            try:
                parsed = parse_line(line, self.rules)
            except LineValidationError as e:
                logger.warning(f"Zeile {number} übersprungen: {e}")
                report.errors.append(LineError(line_number=number, line=line, reason=str(e)))
                continue

            report.valid_lines += 1
            # Erster Name gewinnt
            if parsed.student_id not in students:
                students[parsed.student_id] = Student(
                    id=parsed.student_id, name=parsed.student_name)
            if parsed.course_code not in courses:
                courses[parsed.course_code] = Course(
                    code=parsed.course_code, name=parsed.course_name)
            key = (parsed.student_id, parsed.course_code)
            if key not in pairs:
                pairs[key] = Enrollment(student_id=key[0], course_code=key[1])

        if report.valid_lines == 0:
            raise EnrollmentImportError("Keine gültigen Daten in der Datei gefunden.")

        snapshot = ConsolidatedSnapshot(
            students=students, courses=courses, enrollments=list(pairs.values()),
        )
        try:
            self._persist(snapshot, report)
        except StorageError as e:
            raise EnrollmentImportError(f"Fehler beim Speichern in der Datenbank: {e}") from e

        logger.info(
            f"Import abgeschlossen: {len(students)} Studierende, {len(courses)} Kurse, "
            f"{len(pairs)} Einschreibungen ({len(report.errors)} Zeilen abgelehnt)"
        )
        return ImportResult(snapshot=snapshot, report=report)

    def _persist(self, snapshot: ConsolidatedSnapshot, report: ImportReport) -> None:
        """Schreibt Stammdaten vor den Einschreibungen (referentielle Integrität)."""
        for student in snapshot.students.values():
            if self.students.exists(student.id):
                report.students_existing += 1
            else:
                self.students.create(student)
                report.students_created += 1

        for course in snapshot.courses.values():
            if self.courses.exists(course.code):
                report.courses_existing += 1
            else:
                self.courses.create(course)
                report.courses_created += 1

        for enrollment in snapshot.enrollments:
            if self.enrollments.exists(enrollment.student_id, enrollment.course_code):
                report.enrollments_existing += 1
            else:
                self.enrollments.create(enrollment)
                report.enrollments_created += 1
