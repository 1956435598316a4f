"""Konsolidierte Sicht auf den zuletzt importierten Datenbestand."""

from pydantic import BaseModel, ConfigDict, Field

from models.course import Course
from models.enrollment import Enrollment
from models.student import Student


class ConsolidatedSnapshot(BaseModel):
    """Unveränderliche Momentaufnahme eines Imports.

    Enthält alle Studierenden und Kurse der importierten Datei (erster Name
    gewinnt) sowie die eindeutigen Einschreibungen in Dateireihenfolge.
    Nach einem erfolgreichen Import existieren alle Schlüssel auch in der
    Datenbank.
    """

    model_config = ConfigDict(frozen=True)

    students: dict[str, Student] = Field(default_factory=dict)
    courses: dict[str, Course] = Field(default_factory=dict)
    enrollments: list[Enrollment] = Field(default_factory=list)

    def summary(self) -> str:
        """Kurze Übersicht über die Momentaufnahme."""
        return "\n".join([
            f"Studierende: {len(self.students)}",
            f"Kurse: {len(self.courses)}",
            f"Einschreibungen: {len(self.enrollments)}",
        ])
