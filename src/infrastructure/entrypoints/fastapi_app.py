"""
FastAPI entry point for the market-data API.

This module is the Composition Root: it reads AppConfig, wires infrastructure
adapters, and passes them to the application layer. Authentication is performed
by an ITokenValidator reading the Bearer JWT from each request.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

import json
import logging
import random
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from src.application.services.synthetic_market import SyntheticMarketService
from src.application.use_cases.get_credits import GetCreditsUseCase
from src.application.use_cases.get_market_data import GetMarketDataUseCase, MarketData
from src.application.use_cases.get_news import GetNewsUseCase
from src.application.use_cases.get_stock_overview import GetStockOverviewUseCase
from src.application.use_cases.manage_portfolio import ManagePortfolioUseCase
from src.application.use_cases.request_prediction import RequestPredictionUseCase
from src.domain.exceptions import InvalidArgument, Unauthorized
from src.domain.ports.credits_port import ICreditsRepository
from src.domain.ports.news_source_port import INewsSource
from src.domain.ports.portfolio_port import IPortfolioRepository
from src.domain.ports.prediction_store_port import IPredictionStore
from src.domain.ports.stock_catalog_port import IStockCatalog
from src.domain.ports.stock_data_port import IStockDataProvider
from src.domain.ports.token_validator_port import ITokenValidator
from src.infrastructure.auth.supabase_validator import SupabaseTokenValidator
from src.infrastructure.catalog.static_news_source import StaticNewsSource
from src.infrastructure.catalog.static_stock_catalog import StaticStockCatalog
from src.infrastructure.config.app_config import AppConfig
from src.infrastructure.entrypoints.http_errors import (
    cors_headers,
    error_response,
    install_cors,
    install_error_handlers,
)
from src.infrastructure.entrypoints.schemas import (
    AddStockRequest,
    CreditsOut,
    Envelope,
    HoldingOut,
    MarketDataOut,
    MarketDataRequest,
    NewsItemOut,
    PassthroughOut,
    PortfolioStockOut,
    PredictionOut,
    PricePointOut,
    QuoteOut,
    StockOverviewOut,
    StockSummaryOut,
    SymbolRequest,
)
from src.infrastructure.logging.logger import configure_logging
from src.infrastructure.persistence.supabase_repositories import (
    PostgrestClient,
    SupabaseCreditsRepository,
    SupabasePortfolioRepository,
    SupabasePredictionStore,
)
from src.infrastructure.stock_data.alpha_vantage_adapter import AlphaVantageStockDataProvider
from src.infrastructure.stock_data.yfinance_adapter import YFinanceStockDataProvider

logger = logging.getLogger(__name__)

DATA_STORE_DISABLED = "Data store is not configured"
AUTH_DISABLED = "Authentication is not configured"


# ---------------------------------------------------------------------------
# Default adapters, chosen from configuration
# ---------------------------------------------------------------------------


def build_stock_provider(config: AppConfig) -> Optional[IStockDataProvider]:
    if config.provider == "alphavantage":
        return AlphaVantageStockDataProvider(api_key=config.api_key, timeout_s=config.provider_timeout_s)
    if config.provider == "yfinance":
        return YFinanceStockDataProvider(timeout_s=config.provider_timeout_s)
    return None


def build_data_store(
    config: AppConfig,
) -> tuple[Optional[ICreditsRepository], Optional[IPredictionStore], Optional[IPortfolioRepository]]:
    if not config.data_store_enabled:
        return None, None, None
    client = PostgrestClient(config.base_url, config.data_store_key, timeout_s=config.provider_timeout_s)
    return (
        SupabaseCreditsRepository(client),
        SupabasePredictionStore(client),
        SupabasePortfolioRepository(client),
    )


def present_market_data(result: MarketData) -> dict[str, Any]:
    if result.passthrough is not None:
        return PassthroughOut.from_entity(result.passthrough).to_json()
    body = MarketDataOut(
        **QuoteOut.from_entity(result.quote).model_dump(),
        historical_data=None if result.history is None else PricePointOut.from_series(result.history),
    )
    return body.to_json()


async def read_market_data_request(request: Request) -> MarketDataRequest:
    """Merge query parameters with an optional JSON body (body wins)."""
    fields: dict[str, Any] = dict(request.query_params)
    if request.method == "POST":
        raw = await request.body()
        if raw.strip():
            try:
                body = json.loads(raw)
            except ValueError as exc:
                raise InvalidArgument("Request body must be valid JSON") from exc
            if not isinstance(body, dict):
                raise InvalidArgument("Request body must be a JSON object")
            fields.update(body)
    try:
        return MarketDataRequest.model_validate(fields)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise InvalidArgument(f"{field}: {first['msg']}") from exc


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


def create_app(
    config: AppConfig,
    *,
    stock_provider: Optional[IStockDataProvider] = None,
    token_validator: Optional[ITokenValidator] = None,
    credits: Optional[ICreditsRepository] = None,
    predictions: Optional[IPredictionStore] = None,
    portfolios: Optional[IPortfolioRepository] = None,
    catalog: Optional[IStockCatalog] = None,
    news: Optional[INewsSource] = None,
    synthetic: Optional[SyntheticMarketService] = None,
    rng_factory: Callable[[], random.Random] = random.Random,
) -> FastAPI:
    """Wire adapters into use cases and return the FastAPI app.

    Keyword arguments override the adapters that would otherwise be built
    from *config*; tests use them to inject fakes.
    """
    configure_logging(config.log_level)

    if stock_provider is None:
        stock_provider = build_stock_provider(config)
    if token_validator is None and config.jwt_secret:
        token_validator = SupabaseTokenValidator(config.jwt_secret)
    if credits is None and predictions is None and portfolios is None:
        credits, predictions, portfolios = build_data_store(config)
    catalog = catalog or StaticStockCatalog()
    news = news or StaticNewsSource()
    synthetic = synthetic or SyntheticMarketService(seeded=config.synthetic_seeded)

    market_data_uc = GetMarketDataUseCase(synthetic, stock_provider, history_days=config.history_days)
    overview_uc = GetStockOverviewUseCase(catalog, news, synthetic, history_days=config.history_days)
    news_uc = GetNewsUseCase(news)
    credits_uc = GetCreditsUseCase(credits) if credits else None
    prediction_uc = (
        RequestPredictionUseCase(
            credits,
            predictions,
            synthetic,
            rng_factory=rng_factory,
            history_days=config.history_days,
        )
        if credits and predictions
        else None
    )
    portfolio_uc = (
        ManagePortfolioUseCase(portfolios, catalog, synthetic, history_days=config.history_days)
        if portfolios
        else None
    )

    app = FastAPI(title="StockPulse Market Data API")
    install_error_handlers(app, config.allowed_origin)
    install_cors(app, config.allowed_origin)
    headers = cors_headers(config.allowed_origin)

    async def get_current_user(request: Request) -> str:
        """FastAPI dependency: user id from the Bearer token in the Authorization header."""
        if token_validator is None:
            raise HTTPException(status_code=503, detail=AUTH_DISABLED)
        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            raise Unauthorized("Missing or invalid Authorization header.")
        return token_validator.user_id(auth_header.split(" ", 1)[1])

    def require(use_case):
        if use_case is None:
            raise HTTPException(status_code=503, detail=DATA_STORE_DISABLED)
        return use_case

    # -- market data --------------------------------------------------------

    @app.api_route("/market-data", methods=["GET", "POST"])
    async def market_data(request: Request) -> JSONResponse:
        """Quote (and history) for one symbol; synthetic when no live data is available."""
        params = await read_market_data_request(request)
        try:
            result = await run_in_threadpool(
                market_data_uc.execute, params.symbol, params.function, params.days
            )
            body = present_market_data(result)
        except InvalidArgument:
            raise
        except Exception as exc:
            logger.exception("market-data failed for %r", params.symbol)
            mock = QuoteOut.from_entity(market_data_uc.fallback_quote(params.symbol)).to_json()
            return error_response(500, str(exc) or exc.__class__.__name__, headers, mockData=mock)
        return JSONResponse(content=body)

    @app.get("/stocks", response_model=Envelope[list[StockSummaryOut]])
    async def list_stocks(q: str = ""):
        stocks = overview_uc.list_stocks(q)
        return Envelope[list[StockSummaryOut]](data=[StockSummaryOut.from_entity(s) for s in stocks])

    @app.get("/stocks/{symbol}", response_model=Envelope[StockOverviewOut])
    async def get_stock(symbol: str):
        overview = overview_uc.get_stock(symbol)
        return Envelope[StockOverviewOut](
            data=StockOverviewOut(
                stock=StockSummaryOut.from_entity(overview.stock),
                prices=PricePointOut.from_series(overview.prices),
                news=[NewsItemOut.from_entity(item) for item in overview.news],
            )
        )

    @app.get("/news", response_model=Envelope[list[NewsItemOut]])
    async def list_news(
        category: Optional[str] = None,
        limit: Optional[int] = Query(default=None, ge=1, le=100),
    ):
        items = news_uc.execute(category, limit)
        return Envelope[list[NewsItemOut]](data=[NewsItemOut.from_entity(item) for item in items])

    # -- credits & predictions ----------------------------------------------

    @app.get("/credits", response_model=Envelope[CreditsOut])
    def get_credits(user_id: str = Depends(get_current_user)):
        result = require(credits_uc).execute(user_id)
        return Envelope[CreditsOut](data=CreditsOut.from_entity(result))

    @app.post("/predictions", response_model=Envelope[PredictionOut])
    def request_prediction(body: SymbolRequest, user_id: str = Depends(get_current_user)):
        result = require(prediction_uc).execute(user_id, body.symbol)
        return Envelope[PredictionOut](data=PredictionOut.from_result(result))

    # -- portfolio ----------------------------------------------------------

    @app.get("/portfolio", response_model=Envelope[list[HoldingOut]])
    def get_portfolio(user_id: str = Depends(get_current_user)):
        holdings = require(portfolio_uc).holdings(user_id)
        return Envelope[list[HoldingOut]](data=[HoldingOut.from_holding(h) for h in holdings])

    @app.post("/portfolio/stocks", status_code=201, response_model=Envelope[PortfolioStockOut])
    def add_portfolio_stock(body: AddStockRequest, user_id: str = Depends(get_current_user)):
        stock = require(portfolio_uc).add(user_id, body.symbol, body.name)
        return Envelope[PortfolioStockOut](data=PortfolioStockOut.from_entity(stock))

    @app.delete("/portfolio/stocks/{symbol}")
    def remove_portfolio_stock(symbol: str, user_id: str = Depends(get_current_user)):
        if not require(portfolio_uc).remove(user_id, symbol):
            raise HTTPException(status_code=404, detail=f"{symbol.upper()} is not in your portfolio")
        return {"success": True}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


# ---------------------------------------------------------------------------
# Composition Root: wire all dependencies once at startup
# ---------------------------------------------------------------------------
load_dotenv()
app = create_app(AppConfig.from_env())
