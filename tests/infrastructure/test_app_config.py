import pytest

from src.infrastructure.config.app_config import AppConfig


def test_defaults():
    config = AppConfig.from_env({})

    assert config.provider == "synthetic"
    assert config.history_days == 30
    assert config.synthetic_seeded is True
    assert config.allowed_origin == "*"
    assert config.data_store_enabled is False


def test_full_environment():
    config = AppConfig.from_env(
        {
            "MARKET_DATA_PROVIDER": " AlphaVantage ",
            "MARKET_DATA_API_KEY": "key",
            "MARKET_DATA_TIMEOUT_S": "2.5",
            "HISTORY_DAYS": "90",
            "SYNTHETIC_SEEDED": "no",
            "SUPABASE_URL": "https://project.supabase.co/",
            "SUPABASE_SERVICE_ROLE_KEY": "service",
            "SUPABASE_JWT_SECRET": "secret",
            "ALLOWED_ORIGINS": "https://app.example.com",
            "LOG_LEVEL": "debug",
        }
    )

    assert config.provider == "alphavantage"
    assert config.provider_timeout_s == 2.5
    assert config.history_days == 90
    assert config.synthetic_seeded is False
    assert config.base_url == "https://project.supabase.co"
    assert config.data_store_enabled is True
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize(
    "environ",
    [
        {"MARKET_DATA_PROVIDER": "bloomberg"},
        {"MARKET_DATA_PROVIDER": "alphavantage"},
        {"MARKET_DATA_TIMEOUT_S": "0"},
        {"HISTORY_DAYS": "-1"},
        {"HISTORY_DAYS": "thirty"},
        {"SYNTHETIC_SEEDED": "maybe"},
    ],
)
def test_invalid_values(environ):
    with pytest.raises(ValueError):
        AppConfig.from_env(environ)
