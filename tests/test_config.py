"""Tests für Konfigurationsschema und ConfigManager."""

import pytest
from pydantic import ValidationError

from config.defaults import default_app_config
from config.manager import ConfigManager
from config.schema import AppConfig, ImportConfig, LoggingConfig


@pytest.fixture
def mgr(tmp_path) -> ConfigManager:
    manager = ConfigManager()
    manager.CONFIG_DIR = tmp_path / "config"
    manager.DEFAULT_CONFIG = manager.CONFIG_DIR / "app_config.yaml"
    return manager


class TestSchema:
    def test_defaults(self):
        cfg = default_app_config()
        assert cfg.database.path == "inscripciones.db"
        assert cfg.importing.student_id_min_length == 6
        assert cfg.importing.student_id_max_length == 12
        assert cfg.importing.min_field_length == 2
        assert cfg.statistics.top_n == 5
        assert cfg.exporting.json_filename == "inscripciones.json"

    def test_id_bounds_must_be_ordered(self):
        with pytest.raises(ValidationError, match="student_id_min_length"):
            ImportConfig(student_id_min_length=10, student_id_max_length=8)

    def test_log_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"
        with pytest.raises(ValidationError, match="Log-Level"):
            LoggingConfig(level="laut")

    def test_top_n_range(self):
        with pytest.raises(ValidationError):
            AppConfig.model_validate({"statistics": {"top_n": 0}})


class TestConfigManager:
    def test_save_and_load_roundtrip(self, mgr):
        cfg = default_app_config()
        cfg.statistics.top_n = 3
        cfg.database.path = "daten/test.db"
        target = mgr.save(cfg)

        text = target.read_text(encoding="utf-8")
        assert text.startswith("# ====")
        assert "─── Import ───" in text

        loaded = mgr.load()
        assert loaded == cfg

    def test_first_run(self, mgr):
        assert mgr.first_run_check() is True
        mgr.save(default_app_config())
        assert mgr.first_run_check() is False

    def test_load_missing_file(self, mgr, tmp_path):
        with pytest.raises(FileNotFoundError, match="config init"):
            mgr.load(tmp_path / "fehlt.yaml")

    def test_load_invalid_file(self, mgr, tmp_path):
        p = tmp_path / "kaputt.yaml"
        p.write_text("statistics:\n  top_n: 0\n", encoding="utf-8")
        with pytest.raises(ValueError, match="ungültig"):
            mgr.load(p)

    def test_partial_file_uses_defaults(self, mgr, tmp_path):
        p = tmp_path / "teil.yaml"
        p.write_text("database:\n  path: andere.db\n", encoding="utf-8")
        cfg = mgr.load(p)
        assert cfg.database.path == "andere.db"
        assert cfg.statistics.top_n == 5

    def test_load_or_default_without_file(self, mgr):
        assert mgr.load_or_default() == default_app_config()

    def test_load_or_default_explicit_path_must_exist(self, mgr, tmp_path):
        with pytest.raises(FileNotFoundError):
            mgr.load_or_default(tmp_path / "fehlt.yaml")
