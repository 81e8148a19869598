"""
Port (interface) for access-token validators.
Infrastructure adapters (e.g. SupabaseTokenValidator) must implement validate();
user_id() is the narrow view the HTTP layer needs.
"""

from abc import ABC, abstractmethod

from src.domain.exceptions import Unauthorized


class ITokenValidator(ABC):
    @abstractmethod
    def validate(self, token: str) -> dict:
        """Verify *token* and return its decoded claims.

        Raises:
            Unauthorized: on a bad signature, expiry or audience mismatch.
        """
        ...

    def user_id(self, token: str) -> str:
        """The ``sub`` claim every user-owned row is keyed on."""
        subject = self.validate(token).get("sub")
        if not subject:
            raise Unauthorized("Token has no subject claim")
        return str(subject)
