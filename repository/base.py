"""Zugriffsschnittstellen je Entitätsart.

Jede Schnittstelle bietet {create, get_by_key, get_all, exists}; die
Einschreibungen zusätzlich die Join-Abfragen. Implementiert werden sie
einmal gegen SQLite (siehe *_repo.py); Tests können eigene Stubs
einsetzen.
"""

from typing import Optional, Protocol

from models.course import Course
from models.enrollment import Enrollment
from models.student import Student


class StudentStore(Protocol):
    def create(self, student: Student) -> None: ...
    def get_by_key(self, student_id: str) -> Optional[Student]: ...
    def get_all(self) -> list[Student]: ...
    def exists(self, student_id: str) -> bool: ...


class CourseStore(Protocol):
    def create(self, course: Course) -> None: ...
    def get_by_key(self, code: str) -> Optional[Course]: ...
    def get_all(self) -> list[Course]: ...
    def exists(self, code: str) -> bool: ...


class EnrollmentStore(Protocol):
    def create(self, enrollment: Enrollment) -> None: ...
    def get_all(self) -> list[Enrollment]: ...
    def exists(self, student_id: str, course_code: str) -> bool: ...
    def courses_of(self, student_id: str) -> list[Course]: ...
    def students_of(self, course_code: str) -> list[Student]: ...
    def count_by_student(self, student_id: str) -> int: ...
