"""
Infrastructure adapter: in-process list of large-cap tickers → IStockCatalog.
"""

from typing import Optional

from src.domain.ports.stock_catalog_port import IStockCatalog

DEFAULT_STOCKS: tuple[tuple[str, str], ...] = (
    ("AAPL", "Apple Inc."),
    ("MSFT", "Microsoft Corporation"),
    ("GOOGL", "Alphabet Inc."),
    ("AMZN", "Amazon.com Inc."),
    ("META", "Meta Platforms Inc."),
    ("TSLA", "Tesla Inc."),
    ("NVDA", "NVIDIA Corporation"),
    ("NFLX", "Netflix Inc."),
    ("DIS", "The Walt Disney Company"),
    ("JPM", "JPMorgan Chase & Co."),
)


class StaticStockCatalog(IStockCatalog):
    def __init__(self, stocks: tuple[tuple[str, str], ...] = DEFAULT_STOCKS) -> None:
        self._stocks = stocks
        self._names = dict(stocks)

    def search(self, query: str = "") -> list[tuple[str, str]]:
        needle = query.strip().lower()
        if not needle:
            return list(self._stocks)
        return [
            (symbol, name)
            for symbol, name in self._stocks
            if needle in symbol.lower() or needle in name.lower()
        ]

    def name_for(self, symbol: str) -> Optional[str]:
        return self._names.get(symbol.upper())
