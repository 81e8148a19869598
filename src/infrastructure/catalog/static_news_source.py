"""
Infrastructure adapter: curated headline list → INewsSource.

Headlines carry publication times relative to the injected clock, so the feed
always reads as recent.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from src.domain.entities.news_item import NewsImpact, NewsItem
from src.domain.ports.news_source_port import INewsSource

# (id, hours ago, category, source, title, summary, direction, strength, sectors)
_HEADLINES = (
    (
        1, 2, "Economy", "Bloomberg",
        "Federal Reserve holds interest rates steady, signals potential cuts later this year",
        "The Federal Reserve kept its benchmark rate unchanged but signalled that cuts may "
        "be on the horizon as inflation continues to cool.",
        "up", 2, ("Banking", "Real Estate"),
    ),
    (
        2, 4, "Markets", "CNBC",
        "Tech stocks surge as inflation fears ease and AI adoption accelerates",
        "Major technology stocks rallied after inflation data came in cooler than expected, "
        "with AI-focused companies leading the gains.",
        "up", 3, ("Technology", "Semiconductors"),
    ),
    (
        3, 6, "Economy", "Reuters",
        "Retail sales beat expectations, boosting consumer sector outlook",
        "Retail sales rose faster than economists expected, pointing to resilient consumer "
        "spending despite higher interest rates.",
        "up", 2, ("Retail", "Consumer Goods"),
    ),
    (
        4, 8, "Commodities", "Financial Times",
        "Oil prices fall on higher-than-expected inventory build",
        "Crude dropped after weekly inventories rose well above analyst forecasts, adding to "
        "concerns about softer global demand.",
        "down", 2, ("Energy", "Oil & Gas"),
    ),
    (
        5, 10, "Crypto", "CoinDesk",
        "Cryptocurrency market rebounds after weekend sell-off",
        "Bitcoin and Ether recovered most of their weekend losses as buyers returned to the "
        "market.",
        "up", 3, ("Crypto", "Blockchain"),
    ),
    (
        6, 12, "Economy", "South China Morning Post",
        "China announces new stimulus package to boost slowing economy",
        "Beijing unveiled infrastructure investment and consumer-spending measures aimed at "
        "reviving growth.",
        "up", 2, ("Chinese ADRs", "Commodities"),
    ),
    (
        7, 14, "Technology", "The Verge",
        "Chipmakers extend gains on strong data-center demand",
        "Semiconductor suppliers reported order backlogs stretching into next year on demand "
        "for AI accelerators.",
        "up", 3, ("Semiconductors", "Cloud"),
    ),
    (
        8, 18, "Stocks", "MarketWatch",
        "Bank shares slip as lenders warn on commercial real estate exposure",
        "Several regional lenders raised loan-loss provisions tied to office properties, "
        "weighing on the financial sector.",
        "down", 2, ("Banking", "Real Estate"),
    ),
)


class StaticNewsSource(INewsSource):
    def __init__(self, clock: Callable[[], datetime] = lambda: datetime.now(tz=timezone.utc)) -> None:
        self._clock = clock

    def latest(self, category: Optional[str] = None, limit: Optional[int] = None) -> list[NewsItem]:
        now = self._clock()
        items = [
            NewsItem(
                id=item_id,
                title=title,
                summary=summary,
                published_at=now - timedelta(hours=hours_ago),
                category=item_category,
                source=source,
                impact=NewsImpact(direction=direction, strength=strength, sectors=sectors),
            )
            for (item_id, hours_ago, item_category, source, title, summary,
                 direction, strength, sectors) in _HEADLINES
            if category is None or item_category.lower() == category.strip().lower()
        ]
        items.sort(key=lambda item: item.published_at, reverse=True)
        return items if limit is None else items[:limit]
