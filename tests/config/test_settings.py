"""
Maxi Yatzy - Settings Tests
"""

import logging

import pytest
from pydantic import ValidationError

from maxi_yatzy.config import configure_logging, get_settings
from maxi_yatzy.config.settings import Settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("DEBUG", "LOG_LEVEL", "AUTO_ROLL", "CONFIRM_ZERO_SCORE", "RANDOM_SEED"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert not settings.debug
        assert settings.log_level == "INFO"
        assert not settings.auto_roll
        assert settings.confirm_zero_score
        assert settings.random_seed is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("AUTO_ROLL", "true")
        monkeypatch.setenv("CONFIRM_ZERO_SCORE", "false")
        monkeypatch.setenv("RANDOM_SEED", "42")
        monkeypatch.setenv("LOG_LEVEL", "warning")
        settings = get_settings()
        assert settings.auto_roll
        assert not settings.confirm_zero_score
        assert settings.random_seed == 42
        assert settings.log_level == "WARNING"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_debug_forces_debug_level(self):
        assert Settings(debug=True, log_level="ERROR").effective_log_level == logging.DEBUG
        assert Settings(debug=False, log_level="ERROR").effective_log_level == logging.ERROR


class TestConfigureLogging:
    def test_sets_package_level(self):
        logger = logging.getLogger("maxi_yatzy")
        previous = logger.level
        try:
            configure_logging(Settings(log_level="DEBUG"))
            assert logger.level == logging.DEBUG
            configure_logging(Settings(log_level="WARNING"))
            assert logger.level == logging.WARNING
        finally:
            logger.setLevel(previous)
