import pytest

from src.application.use_cases.manage_portfolio import ManagePortfolioUseCase
from src.domain.exceptions import DuplicateStock, InvalidArgument
from src.infrastructure.catalog.static_stock_catalog import StaticStockCatalog


@pytest.fixture
def use_case(portfolios, synthetic):
    return ManagePortfolioUseCase(portfolios, StaticStockCatalog(), synthetic)


def test_empty_without_portfolio(use_case, portfolios):
    assert use_case.holdings("user-1") == []
    assert portfolios.portfolios == {}


def test_add_creates_portfolio_and_names_from_catalog(use_case, portfolios):
    stock = use_case.add("user-1", " nvda ")

    assert stock.symbol == "NVDA"
    assert stock.name == "NVIDIA Corporation"
    assert portfolios.find_portfolio_id("user-1") == stock.portfolio_id


def test_explicit_name_wins(use_case):
    assert use_case.add("user-1", "ZZZZ", "Zed Corp").name == "Zed Corp"
    assert use_case.add("user-1", "YYYY").name == "YYYY"


def test_duplicate_symbol(use_case):
    use_case.add("user-1", "AAPL")
    with pytest.raises(DuplicateStock):
        use_case.add("user-1", "aapl")


def test_holdings_carry_quotes(use_case, synthetic):
    use_case.add("user-1", "AAPL")
    use_case.add("user-1", "MSFT")

    holdings = use_case.holdings("user-1")

    assert [h.stock.symbol for h in holdings] == ["AAPL", "MSFT"]
    assert holdings[0].quote == synthetic.quote("AAPL", 30)


def test_remove(use_case):
    use_case.add("user-1", "AAPL")
    assert use_case.remove("user-1", "aapl") is True
    assert use_case.remove("user-1", "AAPL") is False
    assert use_case.remove("nobody", "AAPL") is False


def test_blank_symbol(use_case):
    with pytest.raises(InvalidArgument):
        use_case.add("user-1", "")
    with pytest.raises(InvalidArgument):
        use_case.remove("user-1", "")


def test_holdings_use_configured_history_window(portfolios, synthetic):
    use_case = ManagePortfolioUseCase(portfolios, StaticStockCatalog(), synthetic, history_days=60)
    use_case.add("user-1", "AAPL")

    quote = use_case.holdings("user-1")[0].quote

    assert quote == synthetic.quote("AAPL", 60)
    assert quote.price != synthetic.quote("AAPL", 30).price
