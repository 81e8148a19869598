"""
Domain entities for stock price data.
Zero external dependencies, pure Python dataclasses only.

PriceSeries and Quote are produced fresh for each request and never persisted.
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PricePoint:
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass(frozen=True)
class PriceSeries:
    """Chronologically ordered daily points, oldest first."""

    symbol: str
    points: tuple[PricePoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    @property
    def last(self) -> PricePoint:
        return self.points[-1]


@dataclass(frozen=True)
class Quote:
    symbol: str
    price: float
    change: float
    change_percent: str
    high: float
    low: float
    volume: int
    is_mock: bool = True


@dataclass(frozen=True)
class StockSummary:
    symbol: str
    name: str
    price: float
    change: float
    change_percent: str
    is_mock: bool = True
