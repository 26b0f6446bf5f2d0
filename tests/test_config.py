"""Tests for dcarisk.config — environment variable loading and defaults."""

import pytest

from dcarisk.config import DEFAULT_PARAMS, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Ensure config env vars are cleared between tests."""
    for var in ["DCA_DB_PATH", "DCA_EXPORT_DIR", "LOG_LEVEL", "API_PORT"]:
        # setenv first so teardown also removes values load_dotenv writes
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)


class TestLoadConfig:
    def test_defaults(self, tmp_path):
        cfg = load_config(env_path=str(tmp_path / "nonexistent.env"))
        assert cfg.db_path == "data/dcarisk.db"
        assert cfg.export_dir == "exports"
        assert cfg.log_level == "INFO"
        assert cfg.api_port == 8080

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DCA_DB_PATH", ":memory:")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("API_PORT", "9000")
        cfg = load_config(env_path=str(tmp_path / "nonexistent.env"))
        assert cfg.db_path == ":memory:"
        assert cfg.log_level == "DEBUG"
        assert cfg.api_port == 9000

    def test_reads_dotenv_file(self, monkeypatch, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("DCA_EXPORT_DIR=/tmp/dca-out\n", encoding="utf-8")
        cfg = load_config(env_path=str(env_file))
        assert cfg.export_dir == "/tmp/dca-out"

    def test_bad_port(self, monkeypatch, tmp_path):
        monkeypatch.setenv("API_PORT", "eighty")
        with pytest.raises(ValueError, match="API_PORT"):
            load_config(env_path=str(tmp_path / "nonexistent.env"))


class TestDefaultParams:
    def test_default_params(self):
        assert DEFAULT_PARAMS.to_dict() == {
            "pipStep": 5,
            "firstVolume": 1,
            "volumeExponent": 1,
            "maxPositions": 20,
            "maxDrawdownPips": 200,
            "pipValue": 10,
        }
