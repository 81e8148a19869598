"""
Use-case: quote and daily history for a symbol, live when possible.
Depends only on Domain ports and entities, no infrastructure imports.

The upstream provider is optional and best-effort: any UpstreamUnavailable is
answered immediately with synthetic data (no retry) so callers never block on
a flaky or rate-limited feed.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.application.services.synthetic_market import SyntheticMarketService
from src.domain.entities.provider_payload import DailySeries, GlobalQuote, RawPassthrough
from src.domain.entities.stock_price import PriceSeries, Quote
from src.domain.exceptions import InvalidArgument, UpstreamUnavailable
from src.domain.ports.stock_data_port import IStockDataProvider
from src.domain.services.quote_summarizer import from_global_quote, summarize

logger = logging.getLogger(__name__)

GLOBAL_QUOTE = "GLOBAL_QUOTE"
TIME_SERIES_DAILY = "TIME_SERIES_DAILY"
MAX_HISTORY_DAYS = 3650


@dataclass(frozen=True)
class MarketData:
    quote: Optional[Quote]
    history: Optional[PriceSeries] = None
    passthrough: Optional[RawPassthrough] = None

    @property
    def is_mock(self) -> bool:
        return self.quote is not None and self.quote.is_mock


class GetMarketDataUseCase:
    def __init__(
        self,
        synthetic: SyntheticMarketService,
        provider: Optional[IStockDataProvider] = None,
        history_days: int = 30,
    ) -> None:
        self._synthetic = synthetic
        self._provider = provider
        self._history_days = history_days

    def execute(
        self,
        symbol: Optional[str],
        function: Optional[str] = None,
        days: Optional[int] = None,
    ) -> MarketData:
        """Fetch market data for *symbol* (uppercased).

        Args:
            symbol:   Ticker symbol (case-insensitive).
            function: ``GLOBAL_QUOTE`` for the quote alone, ``TIME_SERIES_DAILY``
                      (the default) for quote plus history, anything else is
                      forwarded to the provider untouched.
            days:     History length in days before today. Defaults to the
                      configured history window.

        Raises:
            InvalidArgument: if *symbol* is blank or *days* is out of range.
        """
        if not symbol or not symbol.strip():
            raise InvalidArgument("Symbol parameter is required")
        symbol = symbol.upper().strip()
        days = self._history_days if days is None else days
        if days <= 0 or days > MAX_HISTORY_DAYS:
            raise InvalidArgument(f"days must be between 1 and {MAX_HISTORY_DAYS}")
        function = (function or TIME_SERIES_DAILY).strip().upper()

        if self._provider is None:
            return self._synthetic_data(symbol, function, days)
        try:
            return self._live_data(self._provider, symbol, function, days)
        except UpstreamUnavailable as exc:
            logger.warning("Falling back to synthetic data for %s: %s", symbol, exc)
            return self._synthetic_data(symbol, function, days)

    def fallback_quote(self, symbol: Optional[str]) -> Quote:
        """Synthetic quote used as a best-effort payload on internal errors."""
        symbol = (symbol or "").upper().strip() or "UNKNOWN"
        return self._synthetic.quote(symbol, self._history_days)

    def _synthetic_data(self, symbol: str, function: str, days: int) -> MarketData:
        quote, series = self._synthetic.snapshot(symbol, days)
        if function == GLOBAL_QUOTE:
            return MarketData(quote=quote)
        return MarketData(quote=quote, history=series)

    def _live_data(
        self,
        provider: IStockDataProvider,
        symbol: str,
        function: str,
        days: int,
    ) -> MarketData:
        if function == GLOBAL_QUOTE:
            payload: GlobalQuote = provider.get_quote(symbol)
            return MarketData(quote=from_global_quote(payload))

        if function == TIME_SERIES_DAILY:
            daily: DailySeries = provider.get_daily_series(symbol, days)
            bars = daily.bars[-(days + 1):]
            if len(bars) < 2:
                raise UpstreamUnavailable(f"provider returned {len(bars)} bar(s) for {symbol}")
            series = PriceSeries(symbol=symbol, points=tuple(bars))
            return MarketData(quote=summarize(series, is_mock=False), history=series)

        payload = provider.fetch(symbol, function)
        if isinstance(payload, RawPassthrough):
            return MarketData(quote=None, passthrough=payload)
        if isinstance(payload, GlobalQuote):
            return MarketData(quote=from_global_quote(payload))
        series = PriceSeries(symbol=symbol, points=payload.bars[-(days + 1):])
        if len(series) < 2:
            raise UpstreamUnavailable(f"provider returned {len(series)} bar(s) for {symbol}")
        return MarketData(quote=summarize(series, is_mock=False), history=series)
