"""
Use-case: market news feed, optionally filtered by category.
Depends only on Domain ports and entities, no infrastructure imports.
"""

from typing import Optional

from src.domain.entities.news_item import NewsItem
from src.domain.exceptions import InvalidArgument
from src.domain.ports.news_source_port import INewsSource


class GetNewsUseCase:
    ALL_CATEGORIES = "all"

    def __init__(self, source: INewsSource) -> None:
        self._source = source

    def execute(self, category: Optional[str] = None, limit: Optional[int] = None) -> list[NewsItem]:
        """Return headlines newest first.

        ``category`` of ``None``, blank or ``"All"`` disables filtering.

        Raises:
            InvalidArgument: if *limit* is not positive.
        """
        if limit is not None and limit <= 0:
            raise InvalidArgument("limit must be a positive integer")
        if category is None or not category.strip() or category.strip().lower() == self.ALL_CATEGORIES:
            category = None
        return self._source.latest(category=category, limit=limit)
