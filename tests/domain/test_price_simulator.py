import random
from datetime import date, timedelta

import pytest

from src.domain.exceptions import InvalidArgument
from src.domain.services.price_simulator import (
    MAX_VOLUME,
    MIN_VOLUME,
    default_base_price,
    simulate,
)
from src.domain.services.symbol_hasher import hash_symbol

TODAY = date(2024, 3, 15)


class DownhillRandom(random.Random):
    """Always takes the largest allowed daily drop."""

    def uniform(self, a, b):
        return a


@pytest.fixture
def series():
    return simulate(hash_symbol("AAPL"), 30, today=TODAY, symbol="AAPL")


def test_length_and_symbol(series):
    assert len(series) == 31
    assert series.symbol == "AAPL"


def test_first_open_is_base_price(series):
    assert series.points[0].open == default_base_price(hash_symbol("AAPL")) == 836.0


def test_dates_are_consecutive_and_end_today(series):
    dates = [p.date for p in series.points]
    assert dates[-1] == TODAY
    assert dates[0] == TODAY - timedelta(days=30)
    assert all(b - a == timedelta(days=1) for a, b in zip(dates, dates[1:]))


@pytest.mark.parametrize("symbol", ["AAPL", "TSLA", "", "BRK.B", "X" * 40])
@pytest.mark.parametrize("days", [1, 7, 90, 365])
def test_series_invariants(symbol, days):
    result = simulate(hash_symbol(symbol), days, today=TODAY)
    points = result.points

    assert len(points) == days + 1
    for prev, point in zip(points, points[1:]):
        assert point.open == prev.close
    for point in points:
        assert min(point.open, point.close, point.high, point.low) > 0
        assert point.high >= max(point.open, point.close)
        assert point.low <= min(point.open, point.close)
        assert MIN_VOLUME <= point.volume <= MAX_VOLUME


def test_daily_moves_are_bounded(series):
    for point in series.points:
        assert abs(point.close - point.open) <= point.open * 0.05 + 0.01


def test_default_random_source_is_seeded():
    seed = hash_symbol("NVDA")
    assert simulate(seed, 30, today=TODAY) == simulate(seed, 30, today=TODAY)


def test_injected_random_source_is_used():
    seed = hash_symbol("NVDA")
    a = simulate(seed, 30, rng=random.Random(1), today=TODAY)
    b = simulate(seed, 30, rng=random.Random(2), today=TODAY)
    assert a.points[0].open == b.points[0].open
    assert a != b


def test_custom_base_price():
    result = simulate(7, 5, base_price_fn=lambda seed: 2500.0, today=TODAY)
    assert result.points[0].open == 2500.0


def test_prices_never_reach_zero():
    result = simulate(1, 500, base_price_fn=lambda seed: 1.0, rng=DownhillRandom(), today=TODAY)
    assert all(p.close > 0 and p.low > 0 for p in result.points)
    assert result.last.close <= 0.1


@pytest.mark.parametrize("days", [0, -1, True, 2.5, "30"])
def test_rejects_invalid_days(days):
    with pytest.raises(InvalidArgument):
        simulate(1, days)


def test_defaults_to_today():
    assert simulate(1, 2).last.date == date.today()
