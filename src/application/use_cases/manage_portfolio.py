"""
Use-case: list, add and remove the stocks in a user's portfolio.
Depends only on Domain ports and entities, no infrastructure imports.
"""

from dataclasses import dataclass
from typing import Optional

from src.application.services.synthetic_market import SyntheticMarketService
from src.domain.entities.portfolio import PortfolioStock
from src.domain.entities.stock_price import Quote
from src.domain.exceptions import DuplicateStock, InvalidArgument
from src.domain.ports.portfolio_port import IPortfolioRepository
from src.domain.ports.stock_catalog_port import IStockCatalog


@dataclass(frozen=True)
class Holding:
    stock: PortfolioStock
    quote: Quote


class ManagePortfolioUseCase:
    def __init__(
        self,
        portfolios: IPortfolioRepository,
        catalog: IStockCatalog,
        synthetic: SyntheticMarketService,
        history_days: int = 30,
    ) -> None:
        self._portfolios = portfolios
        self._catalog = catalog
        self._synthetic = synthetic
        self._history_days = history_days

    def holdings(self, user_id: str) -> list[Holding]:
        """Every stock in the user's portfolio with its current quote.

        Users without a portfolio get an empty list; nothing is created.
        """
        portfolio_id = self._portfolios.find_portfolio_id(user_id)
        if portfolio_id is None:
            return []
        return [
            Holding(stock=stock, quote=self._synthetic.quote(stock.symbol, self._history_days))
            for stock in self._portfolios.list_stocks(portfolio_id)
        ]

    def add(self, user_id: str, symbol: str, name: Optional[str] = None) -> PortfolioStock:
        """Add *symbol*, creating the user's portfolio on first use.

        Raises:
            InvalidArgument: if *symbol* is blank.
            DuplicateStock:  if *symbol* is already held.
        """
        if not symbol or not symbol.strip():
            raise InvalidArgument("Symbol parameter is required")
        symbol = symbol.upper().strip()

        portfolio_id = self._portfolios.find_portfolio_id(user_id)
        if portfolio_id is None:
            portfolio_id = self._portfolios.create_portfolio(user_id)
        elif any(s.symbol == symbol for s in self._portfolios.list_stocks(portfolio_id)):
            raise DuplicateStock(f"{symbol} is already in your portfolio")

        name = (name or "").strip() or self._catalog.name_for(symbol) or symbol
        return self._portfolios.add_stock(portfolio_id, symbol, name)

    def remove(self, user_id: str, symbol: str) -> bool:
        """Remove *symbol*; False when the user holds no such stock."""
        if not symbol or not symbol.strip():
            raise InvalidArgument("Symbol parameter is required")
        portfolio_id = self._portfolios.find_portfolio_id(user_id)
        if portfolio_id is None:
            return False
        return self._portfolios.remove_stock(portfolio_id, symbol.upper().strip())
