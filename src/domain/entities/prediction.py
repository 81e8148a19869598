"""
Domain entities for the credits-gated prediction feature.
Zero external dependencies, pure Python dataclasses only.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserCredits:
    user_id: str
    credits_remaining: int
    plan_type: str


@dataclass(frozen=True)
class Prediction:
    symbol: str
    direction: str
    confidence: int
    target: float
    timeframe: str
    advice: str
