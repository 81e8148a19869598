"""
Infrastructure adapter: Alpha Vantage REST API → IStockDataProvider.

The provider answers HTTP 200 even when it refuses a call, signalling problems
in the body instead:
  - "Note" / "Information": rate limit or plan restriction.
  - "Error Message":        unknown symbol or bad function.
All of these, plus transport errors and timeouts, raise UpstreamUnavailable.
There are no retries: a failed call falls back to synthetic data immediately.
"""

from datetime import date
from typing import Any, Optional

import httpx

from src.domain.entities.provider_payload import (
    DailySeries,
    GlobalQuote,
    ProviderPayload,
    RawPassthrough,
)
from src.domain.entities.stock_price import PricePoint
from src.domain.exceptions import UpstreamUnavailable
from src.domain.ports.stock_data_port import IStockDataProvider

_REFUSAL_KEYS = ("Note", "Information", "Error Message")


class AlphaVantageStockDataProvider(IStockDataProvider):
    """Queries https://www.alphavantage.co/query with a per-request timeout."""

    BASE_URL = "https://www.alphavantage.co/query"

    def __init__(
        self,
        api_key: str,
        timeout_s: float = 5.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._api_key = api_key
        self._client = client or httpx.Client(timeout=timeout_s)
        self._timeout_s = timeout_s

    # ------------------------------------------------------------------
    # IStockDataProvider interface
    # ------------------------------------------------------------------

    def get_quote(self, symbol: str) -> GlobalQuote:
        body = self._query("GLOBAL_QUOTE", symbol)
        return self._parse_global_quote(symbol, body)

    def get_daily_series(self, symbol: str, days: int) -> DailySeries:
        body = self._query("TIME_SERIES_DAILY", symbol, outputsize="compact" if days < 100 else "full")
        series = self._parse_daily_series(symbol, body)
        return DailySeries(symbol=symbol, bars=series.bars[-(days + 1):])

    def fetch(self, symbol: str, function: str) -> ProviderPayload:
        body = self._query(function, symbol)
        if function == "GLOBAL_QUOTE":
            return self._parse_global_quote(symbol, body)
        if function == "TIME_SERIES_DAILY":
            return self._parse_daily_series(symbol, body)
        return RawPassthrough(symbol=symbol, function=function, data=body)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _query(self, function: str, symbol: str, **extra: str) -> dict[str, Any]:
        params = {"function": function, "symbol": symbol, "apikey": self._api_key, **extra}
        try:
            response = self._client.get(self.BASE_URL, params=params, timeout=self._timeout_s)
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailable(f"Alpha Vantage timed out for {symbol!r}") from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable(f"Alpha Vantage request failed for {symbol!r}: {exc}") from exc
        except ValueError as exc:
            raise UpstreamUnavailable(f"Alpha Vantage returned invalid JSON for {symbol!r}") from exc

        if not isinstance(body, dict):
            raise UpstreamUnavailable(f"Alpha Vantage returned an unexpected payload for {symbol!r}")
        for key in _REFUSAL_KEYS:
            if key in body:
                raise UpstreamUnavailable(f"Alpha Vantage refused {function} for {symbol!r}: {body[key]}")
        return body

    @staticmethod
    def _parse_global_quote(symbol: str, body: dict[str, Any]) -> GlobalQuote:
        raw = body.get("Global Quote") or {}
        try:
            return GlobalQuote(
                symbol=raw.get("01. symbol", symbol),
                price=float(raw["05. price"]),
                previous_close=float(raw["08. previous close"]),
                open=_optional_float(raw.get("02. open")),
                high=_optional_float(raw.get("03. high")),
                low=_optional_float(raw.get("04. low")),
                volume=int(raw.get("06. volume") or 0),
                latest_trading_day=_optional_date(raw.get("07. latest trading day")),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamUnavailable(f"Alpha Vantage quote for {symbol!r} is incomplete") from exc

    @staticmethod
    def _parse_daily_series(symbol: str, body: dict[str, Any]) -> DailySeries:
        raw = body.get("Time Series (Daily)")
        if not isinstance(raw, dict) or not raw:
            raise UpstreamUnavailable(f"Alpha Vantage returned no daily series for {symbol!r}")
        try:
            bars = tuple(
                PricePoint(
                    date=date.fromisoformat(day),
                    open=round(float(values["1. open"]), 2),
                    high=round(float(values["2. high"]), 2),
                    low=round(float(values["3. low"]), 2),
                    close=round(float(values["4. close"]), 2),
                    volume=int(values["5. volume"]),
                )
                for day, values in sorted(raw.items())
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamUnavailable(f"Alpha Vantage daily series for {symbol!r} is malformed") from exc
        return DailySeries(symbol=symbol, bars=bars)


def _optional_float(value: Optional[str]) -> Optional[float]:
    return None if value in (None, "") else float(value)


def _optional_date(value: Optional[str]) -> Optional[date]:
    return None if not value else date.fromisoformat(value)
