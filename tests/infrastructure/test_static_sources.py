from datetime import timedelta

from conftest import NOW

from src.infrastructure.catalog.static_news_source import StaticNewsSource
from src.infrastructure.catalog.static_stock_catalog import DEFAULT_STOCKS, StaticStockCatalog


def test_catalog_search_is_case_insensitive():
    catalog = StaticStockCatalog()
    assert catalog.search("APPLE") == [("AAPL", "Apple Inc.")]
    assert catalog.search("  ") == list(DEFAULT_STOCKS)
    assert catalog.search("nothing-matches") == []


def test_catalog_name_lookup():
    catalog = StaticStockCatalog()
    assert catalog.name_for("jpm") == "JPMorgan Chase & Co."
    assert catalog.name_for("ZZZZ") is None


def test_news_is_relative_to_clock():
    items = StaticNewsSource(clock=lambda: NOW).latest()

    assert items[0].published_at == NOW - timedelta(hours=2)
    assert items[-1].published_at == NOW - timedelta(hours=18)
    assert len({item.id for item in items}) == len(items)


def test_news_filter_and_limit():
    source = StaticNewsSource(clock=lambda: NOW)
    assert [item.id for item in source.latest(category=" CRYPTO ")] == [5]
    assert len(source.latest(limit=3)) == 3
