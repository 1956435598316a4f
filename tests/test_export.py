"""Tests für JSON-, CSV- und Excel-Export."""

import csv
import json

import pytest

from analysis.statistics import CourseCount, GeneralStatistics, StudentCount
from export.csv_export import export_csv
from export.excel_export import ExcelExporter
from export.helpers import truncate
from export.json_export import export_json, records_to_json
from models.course import Course
from models.enrollment import EnrollmentRecord
from models.student import Student


def _make_records() -> list[EnrollmentRecord]:
    ana = Student(id="123456", name="Ana López")
    ben = Student(id="223456", name="Ben Diaz")
    mat = Course(code="MAT101", name="Cálculo I")
    fis = Course(code="FIS201", name="Física, General")
    return [
        EnrollmentRecord(student=ana, course=mat),
        EnrollmentRecord(student=ana, course=fis),
        EnrollmentRecord(student=ben, course=mat),
    ]


@pytest.fixture
def records() -> list[EnrollmentRecord]:
    return _make_records()


class TestJsonExport:
    def test_structure(self, records, tmp_path):
        target = export_json(records, tmp_path / "out" / "inscripciones.json")
        data = json.loads(target.read_text(encoding="utf-8"))
        assert len(data) == 3
        assert data[0] == {
            "estudiante": {"cedula": "123456", "nombre": "Ana López"},
            "materia": {"codigo": "MAT101", "nombre": "Cálculo I"},
        }

    def test_pretty_printed_and_unicode(self, records):
        text = records_to_json(records)
        assert "\n  {" in text
        assert "Ana López" in text

    def test_empty_list(self, tmp_path):
        target = export_json([], tmp_path / "leer.json")
        assert json.loads(target.read_text(encoding="utf-8")) == []


class TestCsvExport:
    def test_header_and_rows(self, records, tmp_path):
        target = export_csv(records, tmp_path / "inscripciones.csv")
        with open(target, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0] == ["CEDULA", "NOMBRE_ESTUDIANTE", "CODIGO_MATERIA", "NOMBRE_MATERIA"]
        assert rows[1] == ["123456", "Ana López", "MAT101", "Cálculo I"]
        # Komma im Kursnamen wird vom csv-Modul gequotet
        assert rows[2][3] == "Física, General"
        assert len(rows) == 4


class TestExcelExport:
    def test_records_and_statistics_sheets(self, records, tmp_path):
        from openpyxl import load_workbook

        stats = GeneralStatistics(
            total_students=2, total_courses=2, total_enrollments=3,
            top_students=[StudentCount(student=records[0].student, count=2)],
            top_courses=[CourseCount(course=records[0].course, count=2)],
        )
        target = ExcelExporter(records, stats).export(tmp_path / "inscripciones.xlsx")

        wb = load_workbook(target)
        assert wb.sheetnames == ["Einschreibungen", "Statistik"]
        ws = wb["Einschreibungen"]
        assert [c.value for c in ws[1]] == [
            "CEDULA", "NOMBRE_ESTUDIANTE", "CODIGO_MATERIA", "NOMBRE_MATERIA"]
        assert [c.value for c in ws[4]] == ["223456", "Ben Diaz", "MAT101", "Cálculo I"]
        assert ws.max_row == 4

        values = [c.value for row in wb["Statistik"].iter_rows() for c in row]
        assert "Einschreibungen gesamt" in values
        assert "Ana López" in values

    def test_without_statistics(self, records, tmp_path):
        from openpyxl import load_workbook

        target = ExcelExporter(records).export(tmp_path / "nur_daten.xlsx")
        assert load_workbook(target).sheetnames == ["Einschreibungen"]


class TestHelpers:
    def test_truncate(self):
        assert truncate("kurz", 25) == "kurz"
        long_name = "Maria Fernanda de los Angeles"
        assert truncate(long_name, 25) == long_name[:22] + "..."
        assert len(truncate(long_name, 25)) == 25
