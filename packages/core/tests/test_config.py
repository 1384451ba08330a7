"""Tests for engine configuration."""

from decimal import Decimal

import pytest
import structlog
from structlog.testing import capture_logs

from equisplit_core import EngineConfig, configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()


class TestEngineConfig:
    """Test suite for EngineConfig."""

    def test_default_values(self):
        """EngineConfig should have sensible defaults."""
        config = EngineConfig()

        assert config.env == "development"
        assert config.log_level == "INFO"
        assert config.methodology_version == "2025.1"
        assert config.equalization_threshold == Decimal("1000")
        assert config.verify_conservation is True
        assert config.conservation_tolerance == Decimal("0.01")

    def test_environment_validation(self):
        """Environment should be validated."""
        # Valid environments
        EngineConfig(env="development")
        EngineConfig(env="staging")
        EngineConfig(env="production")
        EngineConfig(env="test")

        # Invalid environment
        with pytest.raises(ValueError):
            EngineConfig(env="invalid")

    def test_environment_case_insensitive(self):
        """Environment should be case-insensitive."""
        config = EngineConfig(env="PRODUCTION")
        assert config.env == "production"
        assert config.is_production is True

    def test_log_level_validation(self):
        """Log level should be validated and normalized."""
        config = EngineConfig(log_level="debug")
        assert config.log_level == "DEBUG"
        assert config.is_debug is True

        with pytest.raises(ValueError):
            EngineConfig(log_level="VERBOSE")

    def test_threshold_validation(self):
        """Equalization threshold cannot be negative."""
        with pytest.raises(ValueError):
            EngineConfig(equalization_threshold=Decimal("-1"))

    def test_methodology_version_validation(self):
        """Methodology version cannot be blank."""
        with pytest.raises(ValueError):
            EngineConfig(methodology_version="  ")

    def test_from_environment(self, monkeypatch):
        """EngineConfig should load from environment variables."""
        monkeypatch.setenv("EQUISPLIT_ENV", "staging")
        monkeypatch.setenv("EQUISPLIT_LOG_LEVEL", "warning")
        monkeypatch.setenv("EQUISPLIT_METHODOLOGY_VERSION", "2025.2")
        monkeypatch.setenv("EQUISPLIT_EQUALIZATION_THRESHOLD", "2500")
        monkeypatch.setenv("EQUISPLIT_VERIFY_CONSERVATION", "false")

        config = EngineConfig()

        assert config.env == "staging"
        assert config.log_level == "WARNING"
        assert config.methodology_version == "2025.2"
        assert config.equalization_threshold == Decimal("2500")
        assert config.verify_conservation is False

    def test_loads_from_dotenv_file(self, tmp_path, monkeypatch):
        """EngineConfig should load from .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "EQUISPLIT_ENV=production\n"
            "EQUISPLIT_EQUALIZATION_THRESHOLD=500\n"
        )

        # Change to temp directory so .env is found
        monkeypatch.chdir(tmp_path)

        config = EngineConfig()

        assert config.env == "production"
        assert config.equalization_threshold == Decimal("500")


class TestConfigureLogging:
    """Test suite for configure_logging."""

    def test_filters_below_configured_level(self):
        """Events below the configured level should be dropped."""
        configure_logging(EngineConfig(env="test", log_level="WARNING"))
        logger = structlog.get_logger()

        with capture_logs() as logs:
            logger.info("ignored")
            logger.warning("kept")

        assert [e["event"] for e in logs] == ["kept"]

    def test_production_renders_json(self, capsys):
        """Production should emit JSON lines."""
        configure_logging(EngineConfig(env="production"))
        structlog.get_logger().info("engine_started", jurisdiction="CA")

        output = capsys.readouterr().out
        assert '"event": "engine_started"' in output
        assert '"jurisdiction": "CA"' in output
