"""Verdrahtung von Datenbank, Repositories und Diensten."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from analysis.statistics import EnrollmentStatistics
from config.schema import AppConfig
from data.enrollment_import import EnrollmentImporter
from repository.course_repo import CourseRepository
from repository.database import Database
from repository.enrollment_repo import EnrollmentRepository
from repository.student_repo import StudentRepository
from services.queries import EnrollmentQueries


@dataclass
class AppContext:
    """Alle Dienste einer Sitzung, gebunden an eine Datenbank."""

    config: AppConfig
    db: Database
    importer: EnrollmentImporter
    statistics: EnrollmentStatistics
    queries: EnrollmentQueries

    @classmethod
    def open(
        cls, config: AppConfig, db_path: Optional[Union[str, Path]] = None
    ) -> "AppContext":
        db = Database(db_path or config.database.path)
        students = StudentRepository(db)
        courses = CourseRepository(db)
        enrollments = EnrollmentRepository(db)
        rules = config.importing
        return cls(
            config=config,
            db=db,
            importer=EnrollmentImporter(students, courses, enrollments, rules),
            statistics=EnrollmentStatistics(
                students, courses, enrollments, top_n=config.statistics.top_n),
            queries=EnrollmentQueries(students, courses, enrollments, rules),
        )

    def export_path(self, filename: str) -> Path:
        return Path(self.config.exporting.output_dir) / filename

    def close(self) -> None:
        self.db.close()
