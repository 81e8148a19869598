"""
Infrastructure adapter: Supabase access tokens → ITokenValidator.

Supabase signs user access tokens with the project's JWT secret (HS256). We
verify signature, expiry and audience, and require a ``sub`` claim since it is
the user id every data-store row is keyed on.
"""

from jose import JWTError, jwt

from src.domain.exceptions import Unauthorized
from src.domain.ports.token_validator_port import ITokenValidator


class SupabaseTokenValidator(ITokenValidator):
    """Validates Supabase access tokens against the project's JWT secret."""

    ALGORITHMS = ["HS256"]

    def __init__(self, jwt_secret: str, audience: str = "authenticated") -> None:
        self._jwt_secret = jwt_secret
        self._audience = audience

    def validate(self, token: str) -> dict:
        """Decode and validate a Supabase access token.

        Raises:
            Unauthorized: on any validation failure (bad signature, expiry,
                          wrong audience, missing subject).
        """
        try:
            claims = jwt.decode(
                token,
                self._jwt_secret,
                algorithms=self.ALGORITHMS,
                audience=self._audience,
            )
        except JWTError as exc:
            raise Unauthorized(f"Token validation failed: {exc}") from exc

        if not claims.get("sub"):
            raise Unauthorized("Token has no subject claim")
        return claims
