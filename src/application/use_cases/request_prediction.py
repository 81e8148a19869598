"""
Use-case: spend one credit on a placeholder price prediction.
Depends only on Domain ports and entities, no infrastructure imports.

The prediction is a randomized stand-in, not a forecast. Credits are debited
with a compare-and-set write because the data store offers no transactions.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable

from src.application.services.synthetic_market import SyntheticMarketService
from src.domain.entities.prediction import Prediction, UserCredits
from src.domain.exceptions import (
    CreditsConflict,
    InsufficientCredits,
    InvalidArgument,
    UpstreamUnavailable,
)
from src.domain.ports.credits_port import ICreditsRepository
from src.domain.ports.prediction_store_port import IPredictionStore

logger = logging.getLogger(__name__)

_ADVICE = {
    "up": (
        "Based on technical indicators and current market sentiment, this stock shows "
        "strong buying momentum. Consider adding positions over the next 48 hours."
    ),
    "down": (
        "Technical indicators suggest a potential short-term pullback. Consider waiting "
        "for better entry points or reducing exposure."
    ),
}


@dataclass(frozen=True)
class PredictionResult:
    prediction: Prediction
    credits: UserCredits


class RequestPredictionUseCase:
    MIN_CONFIDENCE: int = 70
    MAX_CONFIDENCE: int = 99
    TARGET_MOVE: float = 0.05
    TIMEFRAME: str = "1-2 weeks"

    def __init__(
        self,
        credits: ICreditsRepository,
        predictions: IPredictionStore,
        synthetic: SyntheticMarketService,
        rng_factory: Callable[[], random.Random] = random.Random,
        history_days: int = 30,
    ) -> None:
        self._credits = credits
        self._predictions = predictions
        self._synthetic = synthetic
        self._rng_factory = rng_factory
        self._history_days = history_days

    def execute(self, user_id: str, symbol: str) -> PredictionResult:
        """Debit one credit for *user_id* and return a prediction for *symbol*.

        Raises:
            InvalidArgument:     if *symbol* is blank.
            InsufficientCredits: if the user has no credits row or a zero balance.
            CreditsConflict:     if the balance changed while being debited.
        """
        if not symbol or not symbol.strip():
            raise InvalidArgument("Symbol parameter is required")
        symbol = symbol.upper().strip()

        balance = self._credits.get(user_id)
        if balance is None or balance.credits_remaining <= 0:
            raise InsufficientCredits("No prediction credits remaining; upgrade your plan")

        updated = self._credits.compare_and_set(
            user_id,
            expected=balance.credits_remaining,
            new_value=balance.credits_remaining - 1,
        )
        if updated is None:
            raise CreditsConflict("Credits changed while processing the request; try again")

        prediction = self._draw(symbol)
        try:
            self._predictions.save(user_id, prediction)
        except UpstreamUnavailable:
            # The credit is already spent; the user still gets the answer.
            logger.exception("Could not record prediction for %s", symbol)
        return PredictionResult(prediction=prediction, credits=updated)

    def _draw(self, symbol: str) -> Prediction:
        rng = self._rng_factory()
        direction = "up" if rng.random() > 0.5 else "down"
        price = self._synthetic.quote(symbol, self._history_days).price
        move = self.TARGET_MOVE if direction == "up" else -self.TARGET_MOVE
        return Prediction(
            symbol=symbol,
            direction=direction,
            confidence=rng.randint(self.MIN_CONFIDENCE, self.MAX_CONFIDENCE),
            target=round(price * (1 + move), 2),
            timeframe=self.TIMEFRAME,
            advice=_ADVICE[direction],
        )
