"""
Synthetic daily OHLCV generator.

Produces ``days + 1`` consecutive calendar days ending at *today*. Each day's
open is the previous day's close (the first open is the base price) and the
close moves by a bounded random walk step. Zero external dependencies.
"""

import random
from datetime import date, timedelta
from typing import Callable, Optional

from src.domain.entities.stock_price import PricePoint, PriceSeries
from src.domain.exceptions import InvalidArgument

MAX_DAILY_CHANGE = 0.05
MAX_BAND_EXPANSION = 0.02
MIN_VOLUME = 500_000
MAX_VOLUME = 10_500_000
MIN_PRICE = 0.01


def default_base_price(seed: int) -> float:
    """Base price rule: 100 plus the seed folded into [0, 900)."""
    return float(100 + seed % 900)


def _price(value: float) -> float:
    return max(round(value, 2), MIN_PRICE)


def simulate(
    seed: int,
    days: int,
    base_price_fn: Callable[[int], float] = default_base_price,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
    symbol: str = "",
) -> PriceSeries:
    """Generate a synthetic price series.

    Args:
        seed:          Symbol seed, usually from ``hash_symbol``.
        days:          Historical days to generate in addition to today.
        base_price_fn: Maps the seed to the opening price of the first day.
        rng:           Random source. Defaults to ``random.Random(seed)`` so the
                       output is reproducible for a given seed.
        today:         Last date of the series. Defaults to ``date.today()``.
        symbol:        Ticker recorded on the returned series.

    Raises:
        InvalidArgument: if *days* is not a positive integer.
    """
    if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
        raise InvalidArgument(f"days must be a positive integer, got {days!r}")

    rng = rng if rng is not None else random.Random(seed)
    end = today or date.today()
    price = _price(base_price_fn(seed))

    points: list[PricePoint] = []
    for offset in range(days, -1, -1):
        open_ = price
        close = _price(open_ * (1 + rng.uniform(-MAX_DAILY_CHANGE, MAX_DAILY_CHANGE)))
        # Rounding is monotone and open/close are already at 2dp, so the
        # expanded band can never cross back inside [min, max].
        high = _price(max(open_, close) * (1 + rng.uniform(0, MAX_BAND_EXPANSION)))
        low = _price(min(open_, close) * (1 - rng.uniform(0, MAX_BAND_EXPANSION)))
        points.append(
            PricePoint(
                date=end - timedelta(days=offset),
                open=open_,
                high=high,
                low=low,
                close=close,
                volume=rng.randint(MIN_VOLUME, MAX_VOLUME),
            )
        )
        price = close

    return PriceSeries(symbol=symbol, points=tuple(points))
