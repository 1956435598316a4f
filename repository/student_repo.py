"""SQLite-Repository für Studierende."""

from typing import Optional

from models.student import Student
from repository.database import Database


class StudentRepository:
    def __init__(self, db: Database):
        self.db = db

    def create(self, student: Student) -> None:
        self.db.execute(
            "INSERT INTO estudiantes (cedula, nombre) VALUES (?, ?)",
            (student.id, student.name),
        )

    def get_by_key(self, student_id: str) -> Optional[Student]:
        """Gibt None zurück, wenn es keine Person mit dieser Nummer gibt."""
        row = self.db.fetch_one(
            "SELECT cedula, nombre FROM estudiantes WHERE cedula = ?", (student_id,)
        )
        if row is None:
            return None
        return Student(id=row["cedula"], name=row["nombre"])

    def get_all(self) -> list[Student]:
        rows = self.db.fetch_all(
            "SELECT cedula, nombre FROM estudiantes ORDER BY rowid"
        )
        return [Student(id=r["cedula"], name=r["nombre"]) for r in rows]

    def exists(self, student_id: str) -> bool:
        return bool(self.db.scalar(
            "SELECT EXISTS(SELECT 1 FROM estudiantes WHERE cedula = ?)", (student_id,)
        ))
