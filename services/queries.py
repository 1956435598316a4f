"""Abfragen und Einzel-Einfügungen über die Repositories."""

import logging
from typing import Optional

from pydantic import BaseModel

from config.defaults import default_import_config
from config.schema import ImportConfig
from data.enrollment_import import validate_fields
from models.course import Course
from models.enrollment import Enrollment, EnrollmentRecord
from models.errors import DuplicateEnrollmentError
from models.snapshot import ConsolidatedSnapshot
from models.student import Student
from repository.base import CourseStore, EnrollmentStore, StudentStore

logger = logging.getLogger(__name__)


class StudentLookup(BaseModel):
    """Eine Person mit allen eingeschriebenen Kursen."""

    student: Student
    courses: list[Course]


class EnrollmentQueries:
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

    def find_student(self, student_id: str) -> Optional[StudentLookup]:
        """Sucht eine Person; None bedeutet "nicht gefunden"."""
        student = self.students.get_by_key(student_id)
        if student is None:
            return None
        return StudentLookup(student=student, courses=self.enrollments.courses_of(student_id))

    def insert_enrollment(
        self,
        student_id: str,
        student_name: str,
        course_code: str,
        course_name: str,
    ) -> EnrollmentRecord:
        """Legt eine Einschreibung an, Stammdaten nur falls noch nicht vorhanden.

        Vorhandene Namen werden nicht überschrieben (erster Eintrag gewinnt).

        Raises:
            LineValidationError: Eingabe verletzt die Importregeln.
            DuplicateEnrollmentError: Einschreibung existiert bereits.
        """
        student_id, student_name = student_id.strip(), student_name.strip()
        course_code, course_name = course_code.strip(), course_name.strip()
        validate_fields(student_id, student_name, course_code, course_name, self.rules)

        student = self.students.get_by_key(student_id)
        if student is None:
            student = Student(id=student_id, name=student_name)
            self.students.create(student)
            logger.info(f"Studierende/r angelegt: {student_id}")

        course = self.courses.get_by_key(course_code)
        if course is None:
            course = Course(code=course_code, name=course_name)
            self.courses.create(course)
            logger.info(f"Kurs angelegt: {course_code}")

        if self.enrollments.exists(student_id, course_code):
            raise DuplicateEnrollmentError(student_id, course_code)

        self.enrollments.create(Enrollment(student_id=student_id, course_code=course_code))
        logger.info(f"Einschreibung angelegt: {student_id} → {course_code}")
        return EnrollmentRecord(student=student, course=course)

    def all_records(self) -> list[EnrollmentRecord]:
        """Alle (Person, Kurs)-Paare, pro Person in Einschreibungsreihenfolge."""
        return self._records_for_students(self.students.get_all())

    def records_for(self, snapshot: ConsolidatedSnapshot) -> list[EnrollmentRecord]:
        """Alle Datensätze der Personen eines Imports (aktueller Datenbankstand)."""
        return self._records_for_students(list(snapshot.students.values()))

    def _records_for_students(self, students: list[Student]) -> list[EnrollmentRecord]:
        records: list[EnrollmentRecord] = []
        for student in students:
            for course in self.enrollments.courses_of(student.id):
                records.append(EnrollmentRecord(student=student, course=course))
        return records
