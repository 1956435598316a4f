"""SQLite-Repository für Kurse."""

from typing import Optional

from models.course import Course
from repository.database import Database


class CourseRepository:
    def __init__(self, db: Database):
        self.db = db

    def create(self, course: Course) -> None:
        self.db.execute(
            "INSERT INTO materias (codigo, nombre) VALUES (?, ?)",
            (course.code, course.name),
        )

    def get_by_key(self, code: str) -> Optional[Course]:
        row = self.db.fetch_one(
            "SELECT codigo, nombre FROM materias WHERE codigo = ?", (code,)
        )
        if row is None:
            return None
        return Course(code=row["codigo"], name=row["nombre"])

    def get_all(self) -> list[Course]:
        rows = self.db.fetch_all("SELECT codigo, nombre FROM materias ORDER BY rowid")
        return [Course(code=r["codigo"], name=r["nombre"]) for r in rows]

    def exists(self, code: str) -> bool:
        return bool(self.db.scalar(
            "SELECT EXISTS(SELECT 1 FROM materias WHERE codigo = ?)", (code,)
        ))
