"""
Port (interface) for the list of tradable instruments offered to users.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IStockCatalog(ABC):
    @abstractmethod
    def search(self, query: str = "") -> list[tuple[str, str]]:
        """Return ``(symbol, name)`` pairs matching *query*; all when blank."""
        ...

    @abstractmethod
    def name_for(self, symbol: str) -> Optional[str]: ...
