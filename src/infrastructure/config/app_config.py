"""
Application configuration read once at the Composition Root.

Only entrypoints call AppConfig.from_env(); every other layer receives the
values it needs through constructor arguments and never touches os.environ.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

PROVIDERS = ("synthetic", "alphavantage", "yfinance")
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class AppConfig:
    provider: str = "synthetic"
    api_key: Optional[str] = None
    provider_timeout_s: float = 5.0
    history_days: int = 30
    synthetic_seeded: bool = True
    base_url: Optional[str] = None
    data_store_key: Optional[str] = None
    jwt_secret: Optional[str] = None
    allowed_origin: str = "*"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.provider not in PROVIDERS:
            raise ValueError(f"MARKET_DATA_PROVIDER must be one of {PROVIDERS}, got {self.provider!r}")
        if self.provider == "alphavantage" and not self.api_key:
            raise ValueError("MARKET_DATA_API_KEY is required for the alphavantage provider")
        if self.provider_timeout_s <= 0:
            raise ValueError("MARKET_DATA_TIMEOUT_S must be positive")
        if self.history_days <= 0:
            raise ValueError("HISTORY_DAYS must be positive")

    @property
    def data_store_enabled(self) -> bool:
        return bool(self.base_url and self.data_store_key)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build the config from *environ* (defaults to os.environ).

        Raises:
            ValueError: on unknown providers or malformed numeric/boolean values.
        """
        env = os.environ if environ is None else environ
        return cls(
            provider=env.get("MARKET_DATA_PROVIDER", "synthetic").strip().lower(),
            api_key=env.get("MARKET_DATA_API_KEY") or None,
            provider_timeout_s=float(env.get("MARKET_DATA_TIMEOUT_S", "5.0")),
            history_days=int(env.get("HISTORY_DAYS", "30")),
            synthetic_seeded=_parse_bool("SYNTHETIC_SEEDED", env.get("SYNTHETIC_SEEDED", "true")),
            base_url=(env.get("SUPABASE_URL") or "").rstrip("/") or None,
            data_store_key=env.get("SUPABASE_SERVICE_ROLE_KEY") or None,
            jwt_secret=env.get("SUPABASE_JWT_SECRET") or None,
            allowed_origin=env.get("ALLOWED_ORIGINS", "*"),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
