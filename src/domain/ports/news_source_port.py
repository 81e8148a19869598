"""
Port (interface) for market news feeds.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.news_item import NewsItem


class INewsSource(ABC):
    @abstractmethod
    def latest(self, category: Optional[str] = None, limit: Optional[int] = None) -> list[NewsItem]:
        """Return news newest first, optionally filtered by *category*."""
        ...
