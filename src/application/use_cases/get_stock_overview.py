"""
Use-case: stock listing and single-stock overview (quote, prices, news).
Depends only on Domain ports and entities, no infrastructure imports.
"""

from dataclasses import dataclass

from src.application.services.synthetic_market import SyntheticMarketService
from src.domain.entities.news_item import NewsItem
from src.domain.entities.stock_price import PriceSeries, StockSummary
from src.domain.exceptions import InvalidArgument
from src.domain.ports.news_source_port import INewsSource
from src.domain.ports.stock_catalog_port import IStockCatalog


@dataclass(frozen=True)
class StockOverview:
    stock: StockSummary
    prices: PriceSeries
    news: list[NewsItem]


class GetStockOverviewUseCase:
    NEWS_LIMIT: int = 5

    def __init__(
        self,
        catalog: IStockCatalog,
        news: INewsSource,
        synthetic: SyntheticMarketService,
        history_days: int = 30,
    ) -> None:
        self._catalog = catalog
        self._news = news
        self._synthetic = synthetic
        self._history_days = history_days

    def list_stocks(self, query: str = "") -> list[StockSummary]:
        """Summaries for every catalog entry matching *query* (all when blank)."""
        return [self._summary(symbol, name) for symbol, name in self._catalog.search(query)]

    def get_stock(self, symbol: str) -> StockOverview:
        """Quote, price history and latest headlines for *symbol*.

        Symbols outside the catalog are still served, named after the ticker.

        Raises:
            InvalidArgument: if *symbol* is blank.
        """
        if not symbol or not symbol.strip():
            raise InvalidArgument("Symbol parameter is required")
        symbol = symbol.upper().strip()
        name = self._catalog.name_for(symbol) or symbol
        quote, series = self._synthetic.snapshot(symbol, self._history_days)
        stock = StockSummary(
            symbol=symbol,
            name=name,
            price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
        )
        return StockOverview(stock=stock, prices=series, news=self._news.latest(limit=self.NEWS_LIMIT))

    def _summary(self, symbol: str, name: str) -> StockSummary:
        quote = self._synthetic.quote(symbol, self._history_days)
        return StockSummary(
            symbol=symbol,
            name=name,
            price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
        )
