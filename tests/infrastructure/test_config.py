"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from marketplace.infrastructure.config import Settings


def test_defaults():
    settings = Settings.from_env({})

    assert settings.data_dir == Path("data")
    assert settings.environment == "development"
    assert settings.log_level == "DEBUG"
    assert settings.page_size == 20
    assert not settings.is_production


def test_production_defaults_to_info():
    settings = Settings.from_env({"ENVIRONMENT": "Production"})

    assert settings.environment == "production"
    assert settings.log_level == "INFO"
    assert settings.is_production


def test_explicit_values(tmp_path):
    settings = Settings.from_env(
        {
            "MARKETPLACE_DATA_DIR": str(tmp_path),
            "LOG_LEVEL": "warning",
            "MARKETPLACE_PAGE_SIZE": "5",
        }
    )

    assert settings.data_dir == tmp_path
    assert settings.log_level == "WARNING"
    assert settings.page_size == 5


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_bad_page_size(value):
    with pytest.raises(ValueError, match="MARKETPLACE_PAGE_SIZE"):
        Settings.from_env({"MARKETPLACE_PAGE_SIZE": value})
