"""
Use-case: current prediction credits for a user.
"""

from src.domain.entities.prediction import UserCredits
from src.domain.ports.credits_port import ICreditsRepository

DEFAULT_PLAN = "free"


class GetCreditsUseCase:
    def __init__(self, credits: ICreditsRepository) -> None:
        self._credits = credits

    def execute(self, user_id: str) -> UserCredits:
        """Users without a credits row are reported with zero credits on the free plan."""
        found = self._credits.get(user_id)
        if found is None:
            return UserCredits(user_id=user_id, credits_remaining=0, plan_type=DEFAULT_PLAN)
        return found
