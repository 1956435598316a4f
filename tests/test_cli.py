"""Tests für die Kommandozeile (click CliRunner)."""

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from main import cli

TESTDATA = Path(__file__).resolve().parent.parent / "testdata"
VALID_FILE = str(TESTDATA / "inscripciones_validas.txt")


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)


@pytest.fixture
def runner(tmp_path, monkeypatch) -> CliRunner:
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def _invoke(runner, tmp_path, *args):
    return runner.invoke(cli, ["--db", str(tmp_path / "test.db"), *args], obj={})


class TestCli:
    def test_import_then_stats(self, runner, tmp_path):
        result = _invoke(runner, tmp_path, "import", VALID_FILE)
        assert result.exit_code == 0, result.output
        assert "Import erfolgreich" in result.output

        result = _invoke(runner, tmp_path, "stats")
        assert result.exit_code == 0, result.output
        assert "Einschreibungen: 7" in result.output
        assert "Carla Ruiz" in result.output

    def test_import_missing_file_fails(self, runner, tmp_path):
        result = _invoke(runner, tmp_path, "import", str(tmp_path / "fehlt.txt"))
        assert result.exit_code == 1
        assert "Import fehlgeschlagen" in result.output

    def test_import_non_utf8_file_fails(self, runner, tmp_path):
        p = tmp_path / "latin1.txt"
        p.write_bytes("123456,José Pérez,MAT101,Cálculo\n".encode("latin-1"))
        result = _invoke(runner, tmp_path, "import", str(p))
        assert result.exit_code == 1
        assert "Import fehlgeschlagen" in result.output

        result = _invoke(runner, tmp_path, "export", "--from-file", str(p))
        assert result.exit_code == 1
        assert "Export fehlgeschlagen" in result.output

    def test_student_lookup(self, runner, tmp_path):
        _invoke(runner, tmp_path, "import", VALID_FILE)
        result = _invoke(runner, tmp_path, "student", "123456")
        assert result.exit_code == 0, result.output
        assert "Ana Lopez" in result.output
        assert "FIS201" in result.output

        result = _invoke(runner, tmp_path, "student", "999999")
        assert result.exit_code == 1
        assert "Keine Person mit Cédula 999999 gefunden." in result.output

    def test_course_roster(self, runner, tmp_path):
        _invoke(runner, tmp_path, "import", VALID_FILE)
        result = _invoke(runner, tmp_path, "course", "MAT101")
        assert result.exit_code == 0, result.output
        assert "Gesamt: 3 Studierende" in result.output

        result = _invoke(runner, tmp_path, "course", "XYZ999")
        assert result.exit_code == 1

    def test_add_duplicate_rejected(self, runner, tmp_path):
        args = ("add", "123456", "Ana Lopez", "MAT101", "Calculus")
        first = _invoke(runner, tmp_path, *args)
        assert first.exit_code == 0, first.output
        assert "Datensatz eingefügt" in first.output

        second = _invoke(runner, tmp_path, *args)
        assert second.exit_code == 1
        assert "Abgelehnt" in second.output

    def test_add_invalid_input(self, runner, tmp_path):
        result = _invoke(runner, tmp_path, "add", "12", "Ana Lopez", "MAT101", "Calculus")
        assert result.exit_code == 1
        assert "Ausweisnummer" in result.output

    def test_export_json(self, runner, tmp_path):
        _invoke(runner, tmp_path, "import", VALID_FILE)
        target = tmp_path / "out" / "alle.json"
        result = _invoke(runner, tmp_path, "export", "--format", "json", "-o", str(target))
        assert result.exit_code == 0, result.output
        data = json.loads(target.read_text(encoding="utf-8"))
        assert len(data) == 7
        assert set(data[0]) == {"estudiante", "materia"}

    def test_export_csv_default_name(self, runner, tmp_path):
        _invoke(runner, tmp_path, "add", "123456", "Ana Lopez", "MAT101", "Calculus")
        result = _invoke(runner, tmp_path, "export", "--format", "csv")
        assert result.exit_code == 0, result.output
        lines = (tmp_path / "inscripciones.csv").read_text(encoding="utf-8").splitlines()
        assert lines == [
            "CEDULA,NOMBRE_ESTUDIANTE,CODIGO_MATERIA,NOMBRE_MATERIA",
            "123456,Ana Lopez,MAT101,Calculus",
        ]

    def test_config_init_and_use(self, runner, tmp_path):
        result = runner.invoke(cli, ["config", "init"], obj={})
        assert result.exit_code == 0, result.output
        config_file = tmp_path / "config" / "app_config.yaml"
        assert config_file.exists()

        again = runner.invoke(cli, ["config", "init"], obj={})
        assert "existiert bereits" in again.output

        result = runner.invoke(cli, ["config", "show"], obj={})
        assert result.exit_code == 0, result.output
        assert "top_n" in result.output

    def test_unknown_config_file_fails(self, runner, tmp_path):
        result = runner.invoke(
            cli, ["--config", str(tmp_path / "fehlt.yaml"), "stats"], obj={})
        assert result.exit_code == 1
