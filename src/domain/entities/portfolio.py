"""
Domain entity for a stock held in a user's portfolio.
Zero external dependencies, pure Python dataclasses only.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class PortfolioStock:
    portfolio_id: str
    symbol: str
    name: str
    added_at: Optional[datetime] = None
