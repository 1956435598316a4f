from models.student import Student
from models.course import Course
from models.enrollment import Enrollment, EnrollmentRecord
from models.snapshot import ConsolidatedSnapshot
from models.errors import (
    DuplicateEnrollmentError,
    EnrollmentImportError,
    LineValidationError,
    StorageError,
)

__all__ = [
    "Student",
    "Course",
    "Enrollment",
    "EnrollmentRecord",
    "ConsolidatedSnapshot",
    "DuplicateEnrollmentError",
    "EnrollmentImportError",
    "LineValidationError",
    "StorageError",
]
