"""
Port (interface) for user portfolios and their stocks.
Infrastructure adapters (e.g. SupabasePortfolioRepository) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.portfolio import PortfolioStock


class IPortfolioRepository(ABC):
    @abstractmethod
    def find_portfolio_id(self, user_id: str) -> Optional[str]: ...

    @abstractmethod
    def create_portfolio(self, user_id: str) -> str:
        """Create an empty portfolio for *user_id* and return its id."""
        ...

    @abstractmethod
    def list_stocks(self, portfolio_id: str) -> list[PortfolioStock]: ...

    @abstractmethod
    def add_stock(self, portfolio_id: str, symbol: str, name: str) -> PortfolioStock: ...

    @abstractmethod
    def remove_stock(self, portfolio_id: str, symbol: str) -> bool:
        """Delete *symbol*; return False when it was not in the portfolio."""
        ...
