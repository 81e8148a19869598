from datetime import date

import pytest

from src.domain.entities.provider_payload import GlobalQuote
from src.domain.entities.stock_price import PricePoint, PriceSeries
from src.domain.exceptions import InvalidArgument
from src.domain.services.quote_summarizer import from_global_quote, summarize


def _point(day: int, close: float, high: float = 0.0, low: float = 0.0, volume: int = 1_000) -> PricePoint:
    return PricePoint(
        date=date(2024, 3, day),
        open=close,
        high=high or close,
        low=low or close,
        close=close,
        volume=volume,
    )


def test_change_and_percent():
    series = PriceSeries("AAPL", (_point(14, 100.0), _point(15, 105.0, high=106.5, low=99.0, volume=42)))

    quote = summarize(series)

    assert quote.symbol == "AAPL"
    assert quote.price == 105.0
    assert quote.change == 5
    assert quote.change_percent == "5.00"
    assert (quote.high, quote.low, quote.volume) == (106.5, 99.0, 42)
    assert quote.is_mock is True


def test_negative_change_is_formatted_to_two_decimals():
    quote = summarize(PriceSeries("X", (_point(14, 105.0), _point(15, 100.0))), is_mock=False)
    assert quote.change == -5.0
    assert quote.change_percent == "-4.76"
    assert quote.is_mock is False


def test_uses_only_the_last_two_points():
    series = PriceSeries("X", (_point(13, 1.0), _point(14, 200.0), _point(15, 210.0)))
    assert summarize(series).change_percent == "5.00"


@pytest.mark.parametrize("points", [(), (_point(15, 100.0),)])
def test_requires_two_points(points):
    with pytest.raises(InvalidArgument):
        summarize(PriceSeries("X", points))


def test_from_global_quote():
    quote = from_global_quote(
        GlobalQuote(
            symbol="IBM",
            price=190.5,
            previous_close=188.0,
            open=188.5,
            high=191.0,
            low=None,
            volume=3_000_000,
        )
    )
    assert quote.change == 2.5
    assert quote.change_percent == "1.33"
    assert quote.high == 191.0
    assert quote.low == 190.5
    assert quote.is_mock is False
