from datetime import date, datetime, timezone
from typing import Optional

import pytest

from src.application.services.synthetic_market import SyntheticMarketService
from src.domain.entities.portfolio import PortfolioStock
from src.domain.entities.prediction import Prediction, UserCredits
from src.domain.entities.provider_payload import (
    DailySeries,
    GlobalQuote,
    ProviderPayload,
    RawPassthrough,
)
from src.domain.exceptions import UpstreamUnavailable
from src.domain.ports.credits_port import ICreditsRepository
from src.domain.ports.portfolio_port import IPortfolioRepository
from src.domain.ports.prediction_store_port import IPredictionStore
from src.domain.ports.stock_data_port import IStockDataProvider

TODAY = date(2024, 3, 15)
NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


class FakeStockDataProvider(IStockDataProvider):
    """Returns canned payloads, or raises *error* from every call."""

    def __init__(
        self,
        quote: Optional[GlobalQuote] = None,
        daily: Optional[DailySeries] = None,
        raw: Optional[dict] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.quote = quote
        self.daily = daily
        self.raw = raw or {}
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def _check(self, call: str, symbol: str) -> None:
        self.calls.append((call, symbol))
        if self.error is not None:
            raise self.error

    def get_quote(self, symbol: str) -> GlobalQuote:
        self._check("quote", symbol)
        return self.quote

    def get_daily_series(self, symbol: str, days: int) -> DailySeries:
        self._check("daily", symbol)
        return self.daily

    def fetch(self, symbol: str, function: str) -> ProviderPayload:
        self._check(function, symbol)
        return RawPassthrough(symbol=symbol, function=function, data=self.raw)


class InMemoryCredits(ICreditsRepository):
    def __init__(self, balances: Optional[dict[str, int]] = None, steal_on_write: bool = False) -> None:
        self.balances = dict(balances or {})
        self.steal_on_write = steal_on_write

    def get(self, user_id: str) -> Optional[UserCredits]:
        if user_id not in self.balances:
            return None
        return UserCredits(user_id=user_id, credits_remaining=self.balances[user_id], plan_type="free")

    def compare_and_set(self, user_id: str, expected: int, new_value: int) -> Optional[UserCredits]:
        if self.steal_on_write:
            # Simulates another request spending a credit first.
            self.balances[user_id] -= 1
        if self.balances.get(user_id) != expected:
            return None
        self.balances[user_id] = new_value
        return self.get(user_id)


class InMemoryPredictionStore(IPredictionStore):
    def __init__(self, fail: bool = False) -> None:
        self.saved: list[tuple[str, Prediction]] = []
        self.fail = fail

    def save(self, user_id: str, prediction: Prediction) -> None:
        if self.fail:
            raise UpstreamUnavailable("insert failed")
        self.saved.append((user_id, prediction))


class InMemoryPortfolios(IPortfolioRepository):
    def __init__(self) -> None:
        self.portfolios: dict[str, str] = {}
        self.stocks: dict[str, list[PortfolioStock]] = {}

    def find_portfolio_id(self, user_id: str) -> Optional[str]:
        return self.portfolios.get(user_id)

    def create_portfolio(self, user_id: str) -> str:
        portfolio_id = f"pf-{len(self.portfolios) + 1}"
        self.portfolios[user_id] = portfolio_id
        self.stocks[portfolio_id] = []
        return portfolio_id

    def list_stocks(self, portfolio_id: str) -> list[PortfolioStock]:
        return list(self.stocks.get(portfolio_id, []))

    def add_stock(self, portfolio_id: str, symbol: str, name: str) -> PortfolioStock:
        stock = PortfolioStock(portfolio_id=portfolio_id, symbol=symbol, name=name, added_at=NOW)
        self.stocks[portfolio_id].append(stock)
        return stock

    def remove_stock(self, portfolio_id: str, symbol: str) -> bool:
        before = self.stocks.get(portfolio_id, [])
        after = [s for s in before if s.symbol != symbol]
        self.stocks[portfolio_id] = after
        return len(after) != len(before)


@pytest.fixture
def synthetic() -> SyntheticMarketService:
    return SyntheticMarketService(seeded=True, clock=lambda: TODAY)


@pytest.fixture
def credits() -> InMemoryCredits:
    return InMemoryCredits({"user-1": 3, "broke": 0})


@pytest.fixture
def prediction_store() -> InMemoryPredictionStore:
    return InMemoryPredictionStore()


@pytest.fixture
def portfolios() -> InMemoryPortfolios:
    return InMemoryPortfolios()
