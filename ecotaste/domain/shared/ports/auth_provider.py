"""Authentication provider port (interface).

Credentials never reach this service: the identity provider issues
access tokens and the API only verifies them.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class InvalidTokenError(Exception):
    """Token is malformed, expired, or has the wrong audience or issuer."""

    pass


class JWKSError(Exception):
    """The identity provider's signing keys could not be fetched."""

    pass


class IAuthProvider(ABC):
    """Authentication provider interface.

    Examples:
        >>> claims = await provider.verify_token(token)
        >>> claims["sub"]
        'auth0|123456'
    """

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """Verify a JWT access token and return its claims.

        Raises:
            InvalidTokenError: Token rejected
            JWKSError: Signing keys unavailable
        """
        pass
