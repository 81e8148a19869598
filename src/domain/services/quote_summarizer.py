"""
Latest-quote view derived from the tail of a PriceSeries.
"""

from src.domain.entities.provider_payload import GlobalQuote
from src.domain.entities.stock_price import PriceSeries, Quote
from src.domain.exceptions import InvalidArgument


def format_percent(change: float, previous: float) -> str:
    return f"{change / previous * 100:.2f}"


def summarize(series: PriceSeries, is_mock: bool = True) -> Quote:
    """Summarize the last two points of *series*.

    ``high``, ``low`` and ``volume`` are the last point's own values.

    Raises:
        InvalidArgument: if the series holds fewer than two points.
    """
    if len(series.points) < 2:
        raise InvalidArgument("at least two price points are required to build a quote")

    previous, last = series.points[-2], series.points[-1]
    change = last.close - previous.close
    return Quote(
        symbol=series.symbol,
        price=last.close,
        change=round(change, 2),
        change_percent=format_percent(change, previous.close),
        high=last.high,
        low=last.low,
        volume=last.volume,
        is_mock=is_mock,
    )


def from_global_quote(quote: GlobalQuote) -> Quote:
    """Build a live Quote from an upstream provider's latest quote."""
    change = quote.price - quote.previous_close
    percent = format_percent(change, quote.previous_close) if quote.previous_close else "0.00"
    return Quote(
        symbol=quote.symbol,
        price=round(quote.price, 2),
        change=round(change, 2),
        change_percent=percent,
        high=round(quote.high if quote.high is not None else quote.price, 2),
        low=round(quote.low if quote.low is not None else quote.price, 2),
        volume=quote.volume,
        is_mock=False,
    )
