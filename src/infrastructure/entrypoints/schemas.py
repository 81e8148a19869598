"""
Pydantic request/response models for the HTTP API.

Field names are snake_case in Python and camelCase on the wire, matching the
JSON shapes the dashboard front end already consumes.
"""

import datetime as dt
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.application.use_cases.manage_portfolio import Holding
from src.application.use_cases.request_prediction import PredictionResult
from src.domain.entities.news_item import NewsItem
from src.domain.entities.portfolio import PortfolioStock
from src.domain.entities.prediction import UserCredits
from src.domain.entities.provider_payload import RawPassthrough
from src.domain.entities.stock_price import PricePoint, PriceSeries, Quote, StockSummary

T = TypeVar("T")


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Envelope(ApiModel, Generic[T]):
    success: bool = True
    data: T


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class MarketDataRequest(ApiModel):
    symbol: Optional[str] = None
    function: Optional[str] = None
    days: Optional[int] = None


class SymbolRequest(ApiModel):
    symbol: Optional[str] = None


class AddStockRequest(ApiModel):
    symbol: Optional[str] = None
    name: Optional[str] = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class PricePointOut(ApiModel):
    date: dt.date
    open: float
    high: float
    low: float
    close: float
    volume: int

    @classmethod
    def from_entity(cls, point: PricePoint) -> "PricePointOut":
        return cls(
            date=point.date,
            open=point.open,
            high=point.high,
            low=point.low,
            close=point.close,
            volume=point.volume,
        )

    @classmethod
    def from_series(cls, series: PriceSeries) -> list["PricePointOut"]:
        return [cls.from_entity(point) for point in series.points]


class QuoteOut(ApiModel):
    symbol: str
    price: float
    change: float
    change_percent: str
    high: float
    low: float
    volume: int
    is_mock: bool

    @classmethod
    def from_entity(cls, quote: Quote) -> "QuoteOut":
        return cls(
            symbol=quote.symbol,
            price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
            high=quote.high,
            low=quote.low,
            volume=quote.volume,
            is_mock=quote.is_mock,
        )


class MarketDataOut(QuoteOut):
    historical_data: Optional[list[PricePointOut]] = None


class PassthroughOut(ApiModel):
    symbol: str
    function: str
    data: dict[str, Any]
    is_mock: bool = False

    @classmethod
    def from_entity(cls, payload: RawPassthrough) -> "PassthroughOut":
        return cls(symbol=payload.symbol, function=payload.function, data=payload.data)


class StockSummaryOut(ApiModel):
    symbol: str
    name: str
    price: float
    change: float
    change_percent: str
    is_mock: bool

    @classmethod
    def from_entity(cls, stock: StockSummary) -> "StockSummaryOut":
        return cls(
            symbol=stock.symbol,
            name=stock.name,
            price=stock.price,
            change=stock.change,
            change_percent=stock.change_percent,
            is_mock=stock.is_mock,
        )


class NewsImpactOut(ApiModel):
    direction: str
    strength: int
    sectors: list[str]


class NewsItemOut(ApiModel):
    id: int
    title: str
    summary: str
    published_at: dt.datetime
    category: str
    source: str
    impact: NewsImpactOut

    @classmethod
    def from_entity(cls, item: NewsItem) -> "NewsItemOut":
        return cls(
            id=item.id,
            title=item.title,
            summary=item.summary,
            published_at=item.published_at,
            category=item.category,
            source=item.source,
            impact=NewsImpactOut(
                direction=item.impact.direction,
                strength=item.impact.strength,
                sectors=list(item.impact.sectors),
            ),
        )


class StockOverviewOut(ApiModel):
    stock: StockSummaryOut
    prices: list[PricePointOut]
    news: list[NewsItemOut]


class CreditsOut(ApiModel):
    credits_remaining: int
    plan_type: str

    @classmethod
    def from_entity(cls, credits: UserCredits) -> "CreditsOut":
        return cls(credits_remaining=credits.credits_remaining, plan_type=credits.plan_type)


class PredictionOut(ApiModel):
    symbol: str
    direction: str
    confidence: int
    target: float
    timeframe: str
    advice: str
    credits_remaining: int

    @classmethod
    def from_result(cls, result: PredictionResult) -> "PredictionOut":
        prediction = result.prediction
        return cls(
            symbol=prediction.symbol,
            direction=prediction.direction,
            confidence=prediction.confidence,
            target=prediction.target,
            timeframe=prediction.timeframe,
            advice=prediction.advice,
            credits_remaining=result.credits.credits_remaining,
        )


class PortfolioStockOut(ApiModel):
    symbol: str
    name: str
    added_at: Optional[dt.datetime] = None

    @classmethod
    def from_entity(cls, stock: PortfolioStock) -> "PortfolioStockOut":
        return cls(symbol=stock.symbol, name=stock.name, added_at=stock.added_at)


class HoldingOut(PortfolioStockOut):
    price: float
    change: float
    change_percent: str
    is_mock: bool

    @classmethod
    def from_holding(cls, holding: Holding) -> "HoldingOut":
        return cls(
            symbol=holding.stock.symbol,
            name=holding.stock.name,
            added_at=holding.stock.added_at,
            price=holding.quote.price,
            change=holding.quote.change,
            change_percent=holding.quote.change_percent,
            is_mock=holding.quote.is_mock,
        )
