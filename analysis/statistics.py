"""Aggregationen über den Einschreibungsbestand.

Zählt Einschreibungen pro Person und Kurs, berechnet Gesamtzahlen und
die Top-N-Ranglisten. Schlägt die Zählung für eine einzelne Entität fehl,
wird sie übersprungen und in ``GeneralStatistics.skipped`` vermerkt.
"""

import logging
from typing import Sequence, TypeVar

from pydantic import BaseModel, Field

from models.course import Course
from models.errors import StorageError
from models.student import Student
from repository.base import CourseStore, EnrollmentStore, StudentStore

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5


# ─── Metriken-Modelle ─────────────────────────────────────────────────────────

class StudentCount(BaseModel):
    """Anzahl Kurse einer Person."""

    student: Student
    count: int


class CourseCount(BaseModel):
    """Anzahl Studierende eines Kurses."""

    course: Course
    count: int


class SkippedEntity(BaseModel):
    """Entität, deren Zählung fehlgeschlagen ist."""

    kind: str     # "student" / "course"
    key: str      # Ausweisnummer bzw. Kurscode
    reason: str


class GeneralStatistics(BaseModel):
    """Gesamtstatistik des Datenbestands."""

    total_students: int
    total_courses: int
    total_enrollments: int
    top_students: list[StudentCount]
    top_courses: list[CourseCount]
    skipped: list[SkippedEntity] = Field(default_factory=list)


# ─── Rangliste ────────────────────────────────────────────────────────────────

RankedT = TypeVar("RankedT", StudentCount, CourseCount)


def rank_top(entries: Sequence[RankedT], limit: int = DEFAULT_TOP_N) -> list[RankedT]:
    """Top-N nach Anzahl, absteigend.

    Einträge mit Anzahl 0 fallen heraus. sorted() ist stabil, bei
    Gleichstand bleibt also die ursprüngliche Reihenfolge erhalten.
    """
    positive = [e for e in entries if e.count > 0]
    return sorted(positive, key=lambda e: e.count, reverse=True)[:limit]


# ─── Engine ───────────────────────────────────────────────────────────────────

class EnrollmentStatistics:
    """Zähl- und Ranglistenabfragen über die Repositories."""

    def __init__(
        self,
        students: StudentStore,
        courses: CourseStore,
        enrollments: EnrollmentStore,
        top_n: int = DEFAULT_TOP_N,
    ):
        self.students = students
        self.courses = courses
        self.enrollments = enrollments
        self.top_n = top_n

    def count_enrollments_for(self, student_id: str) -> int:
        """Anzahl Kurse einer Person (0 für unbekannte Nummern)."""
        return self.enrollments.count_by_student(student_id)

    def students_enrolled_in(self, course_code: str) -> list[Student]:
        """Studierende eines Kurses in Speicherreihenfolge."""
        return self.enrollments.students_of(course_code)

    def courses_of(self, student_id: str) -> list[Course]:
        return self.enrollments.courses_of(student_id)

    def per_student_counts(
        self, students: Sequence[Student]
    ) -> tuple[list[StudentCount], list[SkippedEntity]]:
        """Zählt Kurse für jede übergebene Person.

        Returns:
            (Zählungen, übersprungene Personen) – eine fehlgeschlagene
            Zählung bricht die Schleife nicht ab.
        """
        counts: list[StudentCount] = []
        skipped: list[SkippedEntity] = []
        for student in students:
            try:
                n = self.enrollments.count_by_student(student.id)
            except StorageError as e:
                logger.warning(f"Zählung für {student.id} übersprungen: {e}")
                skipped.append(SkippedEntity(kind="student", key=student.id, reason=str(e)))
                continue
            counts.append(StudentCount(student=student, count=n))
        return counts, skipped

    def per_course_counts(
        self, courses: Sequence[Course]
    ) -> tuple[list[CourseCount], list[SkippedEntity]]:
        """Zählt Studierende für jeden übergebenen Kurs."""
        counts: list[CourseCount] = []
        skipped: list[SkippedEntity] = []
        for course in courses:
            try:
                n = len(self.enrollments.students_of(course.code))
            except StorageError as e:
                logger.warning(f"Zählung für Kurs {course.code} übersprungen: {e}")
                skipped.append(SkippedEntity(kind="course", key=course.code, reason=str(e)))
                continue
            counts.append(CourseCount(course=course, count=n))
        return counts, skipped

    def general_statistics(self) -> GeneralStatistics:
        """Gesamtzahlen und Top-N-Ranglisten.

        Fehler beim Laden der Studierenden- oder Kursliste werden
        weitergereicht; Fehler einzelner Zählungen nicht.
        """
        students = self.students.get_all()
        courses = self.courses.get_all()

        student_counts, skipped_students = self.per_student_counts(students)
        course_counts, skipped_courses = self.per_course_counts(courses)

        return GeneralStatistics(
            total_students=len(students),
            total_courses=len(courses),
            total_enrollments=sum(sc.count for sc in student_counts),
            top_students=rank_top(student_counts, self.top_n),
            top_courses=rank_top(course_counts, self.top_n),
            skipped=skipped_students + skipped_courses,
        )
