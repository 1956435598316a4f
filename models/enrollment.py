"""Einschreibungen und zusammengeführte Datensätze (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict

from models.course import Course
from models.student import Student


class Enrollment(BaseModel):
    """Einschreibung: ein Paar (Studierende, Kurs), eindeutig pro Paar."""

    model_config = ConfigDict(frozen=True)

    student_id: str
    course_code: str


class EnrollmentRecord(BaseModel):
    """Vollständiger Datensatz einer Einschreibung mit Stammdaten.

    Einheit aller Listen und Exporte (JSON, CSV, Excel).
    """

    model_config = ConfigDict(frozen=True)

    student: Student
    course: Course

    def to_export_dict(self) -> dict:
        """Serialisiert den Datensatz im Exportformat (spanische Schlüssel)."""
        return {
            "estudiante": {"cedula": self.student.id, "nombre": self.student.name},
            "materia": {"codigo": self.course.code, "nombre": self.course.name},
        }

    def to_row(self) -> list[str]:
        """Zeile in der Spaltenreihenfolge des CSV-Exports."""
        return [self.student.id, self.student.name, self.course.code, self.course.name]
