"""
Infrastructure adapter: yfinance → IStockDataProvider.
All yfinance-specific details (ticker.info, fast_info, history()) are confined here;
the rest of the codebase depends only on IStockDataProvider.

yfinance raises a wide range of transport and parsing errors and some of its
lookups take no timeout; every call runs on a worker thread bounded by
``timeout_s`` and every failure is surfaced as UpstreamUnavailable so callers
can fall back to synthetic data.
"""

import math
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from datetime import date, timedelta
from typing import Any, Callable, Optional, TypeVar

import yfinance as yf

from src.domain.entities.provider_payload import (
    DailySeries,
    GlobalQuote,
    ProviderPayload,
    RawPassthrough,
)
from src.domain.entities.stock_price import PricePoint
from src.domain.exceptions import UpstreamUnavailable
from src.domain.ports.stock_data_port import IStockDataProvider

T = TypeVar("T")


def _finite(value: Any) -> float:
    number = float(value)
    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"non-finite value {value!r}")
    return number


def _optional_round(value: Any, digits: int = 4) -> Optional[float]:
    if value is None:
        return None
    number = float(value)
    return None if math.isnan(number) else round(number, digits)


class YFinanceStockDataProvider(IStockDataProvider):
    """Fetches stock market data from Yahoo Finance via the yfinance library."""

    DEFAULT_DAYS = 30

    def __init__(
        self,
        timeout_s: float = 5.0,
        clock: Callable[[], date] = date.today,
        max_workers: int = 4,
    ) -> None:
        self._timeout_s = timeout_s
        self._clock = clock
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="yfinance")

    def get_quote(self, symbol: str) -> GlobalQuote:
        return self._bounded(symbol, "quote", lambda: self._read_quote(symbol))

    def get_daily_series(self, symbol: str, days: int) -> DailySeries:
        return self._bounded(symbol, "history", lambda: self._read_history(symbol, days))

    def fetch(self, symbol: str, function: str) -> ProviderPayload:
        if function == "GLOBAL_QUOTE":
            return self.get_quote(symbol)
        if function == "TIME_SERIES_DAILY":
            return self.get_daily_series(symbol, self.DEFAULT_DAYS)
        info = self._bounded(symbol, "info", lambda: dict(yf.Ticker(symbol).info))
        return RawPassthrough(symbol=symbol, function=function, data=info)

    # ------------------------------------------------------------------
    # Private helpers (run on the worker thread)
    # ------------------------------------------------------------------

    def _bounded(self, symbol: str, call: str, fn: Callable[[], T]) -> T:
        future = self._executor.submit(fn)
        try:
            return future.result(timeout=self._timeout_s)
        except FutureTimeout as exc:
            future.cancel()
            raise UpstreamUnavailable(
                f"yfinance {call} timed out after {self._timeout_s}s for {symbol!r}"
            ) from exc
        except UpstreamUnavailable:
            raise
        except Exception as exc:
            raise UpstreamUnavailable(f"yfinance {call} failed for {symbol!r}: {exc}") from exc

    def _read_quote(self, symbol: str) -> GlobalQuote:
        fast_info = yf.Ticker(symbol).fast_info
        current_price = _optional_round(getattr(fast_info, "last_price", None))
        previous_close = _optional_round(getattr(fast_info, "previous_close", None))
        if current_price is None or not previous_close:
            raise UpstreamUnavailable(f"No price data available for symbol: {symbol!r}")

        volume = getattr(fast_info, "last_volume", None)
        return GlobalQuote(
            symbol=symbol,
            price=current_price,
            previous_close=previous_close,
            open=_optional_round(getattr(fast_info, "open", None)),
            high=_optional_round(getattr(fast_info, "day_high", None)),
            low=_optional_round(getattr(fast_info, "day_low", None)),
            volume=int(_finite(volume)) if volume is not None else 0,
        )

    def _read_history(self, symbol: str, days: int) -> DailySeries:
        start = self._clock() - timedelta(days=days)
        history = yf.Ticker(symbol).history(
            start=start.isoformat(),
            interval="1d",
            timeout=self._timeout_s,
        )
        if history.empty:
            raise UpstreamUnavailable(f"No historical data available for symbol: {symbol!r}")

        try:
            bars = tuple(
                PricePoint(
                    date=timestamp.date(),
                    open=round(_finite(row["Open"]), 2),
                    high=round(_finite(row["High"]), 2),
                    low=round(_finite(row["Low"]), 2),
                    close=round(_finite(row["Close"]), 2),
                    volume=int(_finite(row["Volume"])),
                )
                for timestamp, row in history.iterrows()
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamUnavailable(f"yfinance history for {symbol!r} is malformed: {exc}") from exc
        return DailySeries(symbol=symbol, bars=bars)
