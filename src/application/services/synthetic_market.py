"""
Application service: synthetic market data for a ticker symbol.

Business decisions owned here:
  - Randomness policy: seeded from the symbol hash (reproducible series) or an
    unseeded source (a fresh walk on every request).
  - Which day counts as "today" (injected clock).

The hasher, simulator and summarizer are pure domain functions; this service
only wires them together and owns the random source lifetime (one per call).
"""

import random
from datetime import date
from typing import Callable

from src.domain.entities.stock_price import PriceSeries, Quote
from src.domain.services.price_simulator import simulate
from src.domain.services.quote_summarizer import summarize
from src.domain.services.symbol_hasher import hash_symbol


class SyntheticMarketService:
    def __init__(
        self,
        seeded: bool = True,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._seeded = seeded
        self._clock = clock

    def _random_source(self, seed: int) -> random.Random:
        return random.Random(seed) if self._seeded else random.Random()

    def series(self, symbol: str, days: int) -> PriceSeries:
        seed = hash_symbol(symbol)
        return simulate(
            seed,
            days,
            rng=self._random_source(seed),
            today=self._clock(),
            symbol=symbol,
        )

    def snapshot(self, symbol: str, days: int) -> tuple[Quote, PriceSeries]:
        """Return the quote together with the series it was summarized from."""
        series = self.series(symbol, days)
        return summarize(series, is_mock=True), series

    def quote(self, symbol: str, days: int) -> Quote:
        return self.snapshot(symbol, days)[0]
