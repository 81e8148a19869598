"""
Domain entities for upstream market-data provider responses.

Provider JSON is resolved once at the adapter boundary into one of three
variants so the rest of the codebase never indexes into untyped maps:

  - GlobalQuote:    latest quote for a symbol.
  - DailySeries:    daily OHLCV bars, oldest first.
  - RawPassthrough: any other provider function, forwarded untouched.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional, Union

from src.domain.entities.stock_price import PricePoint


@dataclass(frozen=True)
class GlobalQuote:
    symbol: str
    price: float
    previous_close: float
    open: Optional[float]
    high: Optional[float]
    low: Optional[float]
    volume: int
    latest_trading_day: Optional[date] = None


@dataclass(frozen=True)
class DailySeries:
    symbol: str
    bars: tuple[PricePoint, ...]


@dataclass(frozen=True)
class RawPassthrough:
    symbol: str
    function: str
    data: dict[str, Any] = field(default_factory=dict)


ProviderPayload = Union[GlobalQuote, DailySeries, RawPassthrough]
