"""SQLite-Repository für Einschreibungen.

Die Join-Abfragen liefern Ergebnisse in Einfügereihenfolge der
Einschreibungen (rowid), damit Listen zwischen Aufrufen stabil bleiben.
"""

from models.course import Course
from models.enrollment import Enrollment
from models.student import Student
from repository.database import Database


class EnrollmentRepository:
    def __init__(self, db: Database):
        self.db = db

    def create(self, enrollment: Enrollment) -> None:
        self.db.execute(
            "INSERT INTO inscripciones (estudiante_cedula, materia_codigo) VALUES (?, ?)",
            (enrollment.student_id, enrollment.course_code),
        )

    def get_all(self) -> list[Enrollment]:
        rows = self.db.fetch_all(
            "SELECT estudiante_cedula, materia_codigo FROM inscripciones ORDER BY rowid"
        )
        return [
            Enrollment(student_id=r["estudiante_cedula"], course_code=r["materia_codigo"])
            for r in rows
        ]

    def exists(self, student_id: str, course_code: str) -> bool:
        return bool(self.db.scalar(
            "SELECT EXISTS(SELECT 1 FROM inscripciones "
            "WHERE estudiante_cedula = ? AND materia_codigo = ?)",
            (student_id, course_code),
        ))

    def courses_of(self, student_id: str) -> list[Course]:
        """Alle Kurse einer Person."""
        rows = self.db.fetch_all(
            """SELECT m.codigo, m.nombre
               FROM materias m
               JOIN inscripciones i ON m.codigo = i.materia_codigo
               WHERE i.estudiante_cedula = ?
               ORDER BY i.rowid""",
            (student_id,),
        )
        return [Course(code=r["codigo"], name=r["nombre"]) for r in rows]

    def students_of(self, course_code: str) -> list[Student]:
        """Alle Studierenden eines Kurses."""
        rows = self.db.fetch_all(
            """SELECT e.cedula, e.nombre
               FROM estudiantes e
               JOIN inscripciones i ON e.cedula = i.estudiante_cedula
               WHERE i.materia_codigo = ?
               ORDER BY i.rowid""",
            (course_code,),
        )
        return [Student(id=r["cedula"], name=r["nombre"]) for r in rows]

    def count_by_student(self, student_id: str) -> int:
        return int(self.db.scalar(
            "SELECT COUNT(*) FROM inscripciones WHERE estudiante_cedula = ?",
            (student_id,),
        ))
