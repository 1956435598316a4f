"""Tests für Zählungen, Ranglisten und Gesamtstatistik."""

import pytest

from analysis.statistics import (
    CourseCount,
    EnrollmentStatistics,
    StudentCount,
    rank_top,
)
from models.course import Course
from models.enrollment import Enrollment
from models.errors import StorageError
from models.student import Student
from repository.course_repo import CourseRepository
from repository.database import Database
from repository.enrollment_repo import EnrollmentRepository
from repository.student_repo import StudentRepository

COURSE_CODES = ["C01", "C02", "C03", "C04", "C05"]


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _student_counts(counts: list[int]) -> list[StudentCount]:
    return [
        StudentCount(student=Student(id=f"S0000{i}", name=f"Person {i}"), count=n)
        for i, n in enumerate(counts, 1)
    ]


def _make_ranked_db(counts: list[int]) -> Database:
    """Student i ist in den ersten counts[i] Kursen eingeschrieben."""
    db = Database()
    students, courses, enrollments = (
        StudentRepository(db), CourseRepository(db), EnrollmentRepository(db))
    for code in COURSE_CODES:
        courses.create(Course(code=code, name=f"Kurs {code}"))
    for sc in _student_counts(counts):
        students.create(sc.student)
        for code in COURSE_CODES[:sc.count]:
            enrollments.create(Enrollment(student_id=sc.student.id, course_code=code))
    return db


def _make_statistics(db: Database, enrollments=None, top_n: int = 5) -> EnrollmentStatistics:
    return EnrollmentStatistics(
        StudentRepository(db), CourseRepository(db),
        enrollments or EnrollmentRepository(db), top_n=top_n,
    )


class FlakyEnrollments(EnrollmentRepository):
    """Zählungen für ausgewählte Schlüssel schlagen fehl."""

    def __init__(self, db, bad_students=(), bad_courses=()):
        super().__init__(db)
        self.bad_students = set(bad_students)
        self.bad_courses = set(bad_courses)

    def count_by_student(self, student_id):
        if student_id in self.bad_students:
            raise StorageError("database is locked")
        return super().count_by_student(student_id)

    def students_of(self, course_code):
        if course_code in self.bad_courses:
            raise StorageError("database is locked")
        return super().students_of(course_code)


# ─── RANGLISTE ────────────────────────────────────────────────────────────────

class TestRankTop:
    def test_stable_descending_with_truncation(self):
        """[3,1,5,5,2,4] → 5 (erste), 5 (zweite), 4, 3, 2."""
        entries = _student_counts([3, 1, 5, 5, 2, 4])
        ranked = rank_top(entries)
        assert [e.count for e in ranked] == [5, 5, 4, 3, 2]
        assert [e.student.id for e in ranked] == [
            "S00003", "S00004", "S00006", "S00001", "S00005"]

    def test_zero_counts_excluded(self):
        ranked = rank_top(_student_counts([0, 2, 0]))
        assert [e.student.id for e in ranked] == ["S00002"]

    def test_fewer_than_limit(self):
        assert len(rank_top(_student_counts([1, 1]))) == 2
        assert rank_top([]) == []

    def test_custom_limit_for_courses(self):
        entries = [
            CourseCount(course=Course(code=f"C{i}", name="x"), count=i) for i in range(1, 5)
        ]
        assert [e.count for e in rank_top(entries, limit=2)] == [4, 3]


# ─── ENGINE ───────────────────────────────────────────────────────────────────

class TestEnrollmentStatistics:
    def test_count_for_unenrolled_student_is_zero(self):
        db = _make_ranked_db([0, 2])
        stats = _make_statistics(db)
        assert stats.count_enrollments_for("S00001") == 0
        assert stats.count_enrollments_for("S00002") == 2
        general = stats.general_statistics()
        assert [sc.student.id for sc in general.top_students] == ["S00002"]
        assert general.total_students == 2

    def test_general_statistics(self):
        db = _make_ranked_db([3, 1, 5, 5, 2, 4])
        general = _make_statistics(db).general_statistics()

        assert general.total_students == 6
        assert general.total_courses == 5
        assert general.total_enrollments == 20
        assert [sc.count for sc in general.top_students] == [5, 5, 4, 3, 2]
        assert general.top_students[0].student.id == "S00003"
        # C01: 6 Studierende, C02: 5, C03: 4, C04: 3, C05: 2
        assert [cc.course.code for cc in general.top_courses] == COURSE_CODES
        assert [cc.count for cc in general.top_courses] == [6, 5, 4, 3, 2]
        assert general.skipped == []

    def test_courses_without_students_not_ranked(self):
        db = _make_ranked_db([1])
        general = _make_statistics(db).general_statistics()
        assert general.total_courses == 5
        assert [cc.course.code for cc in general.top_courses] == ["C01"]

    def test_students_enrolled_in(self):
        db = _make_ranked_db([1, 0, 2])
        stats = _make_statistics(db)
        assert [s.id for s in stats.students_enrolled_in("C01")] == ["S00001", "S00003"]
        assert stats.students_enrolled_in("C05") == []

    def test_failed_counts_are_skipped_and_reported(self):
        db = _make_ranked_db([3, 1, 5])
        flaky = FlakyEnrollments(db, bad_students={"S00003"}, bad_courses={"C02"})
        general = _make_statistics(db, enrollments=flaky).general_statistics()

        assert general.total_students == 3
        assert general.total_enrollments == 4
        assert [sc.student.id for sc in general.top_students] == ["S00001", "S00002"]
        assert "C02" not in [cc.course.code for cc in general.top_courses]
        assert [(s.kind, s.key) for s in general.skipped] == [
            ("student", "S00003"), ("course", "C02")]
        assert "locked" in general.skipped[0].reason

    def test_failed_entity_list_propagates(self):
        db = _make_ranked_db([1])
        stats = _make_statistics(db)
        db.close()
        with pytest.raises(StorageError):
            stats.general_statistics()

    def test_top_n_configurable(self):
        db = _make_ranked_db([1, 2, 3])
        general = _make_statistics(db, top_n=2).general_statistics()
        assert [sc.count for sc in general.top_students] == [3, 2]
