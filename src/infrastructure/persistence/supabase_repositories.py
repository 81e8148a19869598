"""
Infrastructure adapters: Supabase (PostgREST over httpx) → data-store ports.

Tables used: user_credits, predictions, portfolios, portfolio_stocks.
Requests are authenticated with the service-role key; every query filters on
the caller's user id explicitly. Transport failures and non-2xx answers raise
UpstreamUnavailable. No multi-table transactions are assumed.
"""

from datetime import datetime
from typing import Any, Optional

import httpx

from src.domain.entities.portfolio import PortfolioStock
from src.domain.entities.prediction import Prediction, UserCredits
from src.domain.exceptions import UpstreamUnavailable
from src.domain.ports.credits_port import ICreditsRepository
from src.domain.ports.portfolio_port import IPortfolioRepository
from src.domain.ports.prediction_store_port import IPredictionStore


class PostgrestClient:
    """Thin JSON client for a Supabase project's ``/rest/v1`` endpoint."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        timeout_s: float = 5.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._rest_url = f"{base_url.rstrip('/')}/rest/v1"
        self._client = client or httpx.Client(timeout=timeout_s)
        self._headers = {
            "apikey": service_key,
            "Authorization": f"Bearer {service_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }

    def request(
        self,
        method: str,
        table: str,
        params: Optional[dict[str, str]] = None,
        json: Any = None,
    ) -> list[dict[str, Any]]:
        try:
            response = self._client.request(
                method,
                f"{self._rest_url}/{table}",
                params=params,
                json=json,
                headers=self._headers,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable(f"Data store {method} {table} failed: {exc}") from exc
        if not response.content:
            return []
        try:
            body = response.json()
        except ValueError as exc:
            raise UpstreamUnavailable(f"Data store {method} {table} returned invalid JSON") from exc
        return body if isinstance(body, list) else [body]


class SupabaseCreditsRepository(ICreditsRepository):
    TABLE = "user_credits"

    def __init__(self, client: PostgrestClient) -> None:
        self._client = client

    def get(self, user_id: str) -> Optional[UserCredits]:
        rows = self._client.request(
            "GET",
            self.TABLE,
            params={"user_id": f"eq.{user_id}", "select": "user_id,credits_remaining,plan_type"},
        )
        return self._to_entity(rows[0]) if rows else None

    def compare_and_set(self, user_id: str, expected: int, new_value: int) -> Optional[UserCredits]:
        rows = self._client.request(
            "PATCH",
            self.TABLE,
            params={"user_id": f"eq.{user_id}", "credits_remaining": f"eq.{expected}"},
            json={"credits_remaining": new_value},
        )
        return self._to_entity(rows[0]) if rows else None

    @staticmethod
    def _to_entity(row: dict[str, Any]) -> UserCredits:
        return UserCredits(
            user_id=row["user_id"],
            credits_remaining=int(row["credits_remaining"]),
            plan_type=row.get("plan_type") or "free",
        )


class SupabasePredictionStore(IPredictionStore):
    TABLE = "predictions"

    def __init__(self, client: PostgrestClient) -> None:
        self._client = client

    def save(self, user_id: str, prediction: Prediction) -> None:
        self._client.request(
            "POST",
            self.TABLE,
            json={
                "user_id": user_id,
                "stock_symbol": prediction.symbol,
                "prediction": prediction.direction,
                "confidence": prediction.confidence,
            },
        )


class SupabasePortfolioRepository(IPortfolioRepository):
    PORTFOLIOS = "portfolios"
    STOCKS = "portfolio_stocks"

    def __init__(self, client: PostgrestClient) -> None:
        self._client = client

    def find_portfolio_id(self, user_id: str) -> Optional[str]:
        rows = self._client.request(
            "GET",
            self.PORTFOLIOS,
            params={"user_id": f"eq.{user_id}", "select": "id", "limit": "1"},
        )
        return str(rows[0]["id"]) if rows else None

    def create_portfolio(self, user_id: str) -> str:
        rows = self._client.request("POST", self.PORTFOLIOS, json={"user_id": user_id})
        if not rows:
            raise UpstreamUnavailable("Data store did not return the new portfolio")
        return str(rows[0]["id"])

    def list_stocks(self, portfolio_id: str) -> list[PortfolioStock]:
        rows = self._client.request(
            "GET",
            self.STOCKS,
            params={
                "portfolio_id": f"eq.{portfolio_id}",
                "select": "portfolio_id,stock_symbol,stock_name,added_at",
                "order": "added_at.asc",
            },
        )
        return [self._to_entity(row) for row in rows]

    def add_stock(self, portfolio_id: str, symbol: str, name: str) -> PortfolioStock:
        rows = self._client.request(
            "POST",
            self.STOCKS,
            json={"portfolio_id": portfolio_id, "stock_symbol": symbol, "stock_name": name},
        )
        if not rows:
            return PortfolioStock(portfolio_id=portfolio_id, symbol=symbol, name=name)
        return self._to_entity(rows[0])

    def remove_stock(self, portfolio_id: str, symbol: str) -> bool:
        rows = self._client.request(
            "DELETE",
            self.STOCKS,
            params={"portfolio_id": f"eq.{portfolio_id}", "stock_symbol": f"eq.{symbol}"},
        )
        return bool(rows)

    @staticmethod
    def _to_entity(row: dict[str, Any]) -> PortfolioStock:
        added_at = row.get("added_at")
        return PortfolioStock(
            portfolio_id=str(row["portfolio_id"]),
            symbol=row["stock_symbol"],
            name=row.get("stock_name") or row["stock_symbol"],
            added_at=datetime.fromisoformat(added_at) if added_at else None,
        )
