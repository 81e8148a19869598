"""
Port (interface) for upstream stock data providers.
Infrastructure adapters (e.g. AlphaVantageStockDataProvider,
YFinanceStockDataProvider) must implement this interface.

Adapters resolve provider JSON into ProviderPayload variants and raise
UpstreamUnavailable on any failure, timeout, or rate-limit signal.
"""

from abc import ABC, abstractmethod

from src.domain.entities.provider_payload import (
    DailySeries,
    GlobalQuote,
    ProviderPayload,
)


class IStockDataProvider(ABC):
    @abstractmethod
    def get_quote(self, symbol: str) -> GlobalQuote: ...

    @abstractmethod
    def get_daily_series(self, symbol: str, days: int) -> DailySeries:
        """Return at most ``days + 1`` daily bars, oldest first."""
        ...

    @abstractmethod
    def fetch(self, symbol: str, function: str) -> ProviderPayload:
        """Run an arbitrary provider *function* for *symbol*."""
        ...
