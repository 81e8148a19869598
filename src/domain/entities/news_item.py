"""
Domain entity for a market news headline.
Zero external dependencies, pure Python dataclasses only.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class NewsImpact:
    direction: str
    strength: int
    sectors: tuple[str, ...]


@dataclass(frozen=True)
class NewsItem:
    id: int
    title: str
    summary: str
    published_at: datetime
    category: str
    source: str
    impact: NewsImpact
