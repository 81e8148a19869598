"""
Port (interface) for the per-user prediction credits table.
Infrastructure adapters (e.g. SupabaseCreditsRepository) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.prediction import UserCredits


class ICreditsRepository(ABC):
    @abstractmethod
    def get(self, user_id: str) -> Optional[UserCredits]: ...

    @abstractmethod
    def compare_and_set(self, user_id: str, expected: int, new_value: int) -> Optional[UserCredits]:
        """Write *new_value* only if the stored balance still equals *expected*.

        Returns the updated row, or None when the balance had changed.
        """
        ...
