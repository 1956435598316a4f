"""Datenhaltung (SQLite)."""

from repository.database import Database
from repository.student_repo import StudentRepository
from repository.course_repo import CourseRepository
from repository.enrollment_repo import EnrollmentRepository
from repository.base import CourseStore, EnrollmentStore, StudentStore

__all__ = [
    "Database",
    "StudentRepository",
    "CourseRepository",
    "EnrollmentRepository",
    "StudentStore",
    "CourseStore",
    "EnrollmentStore",
]
