"""JWT authentication provider backed by the identity provider's JWKS."""

from typing import Any, Dict, Optional
import logging

import aiohttp
import jwt
from cachetools import TTLCache
from jwt import PyJWK
from jwt.exceptions import ExpiredSignatureError
from jwt.exceptions import InvalidTokenError as JWTError

from ecotaste.domain.shared.account import AccountContext, Role
from ecotaste.domain.shared.ports.auth_provider import IAuthProvider, InvalidTokenError, JWKSError
from ecotaste.infrastructure.config import (
    get_auth_audience,
    get_auth_issuer_domain,
    get_role_claim,
)

logger = logging.getLogger(__name__)


class JWTAuthProvider(IAuthProvider):
    """Verifies RS256 access tokens against the issuer's JWKS.

    Features:
    - JWKS caching with 1-hour TTL, refreshed on unknown ``kid``
    - Audience and issuer validation

    Environment Variables:
    - AUTH_ISSUER_DOMAIN: Identity provider domain (e.g., "ecotaste.eu.auth0.com")
    - AUTH_AUDIENCE: API identifier/audience
    """

    def __init__(
        self,
        domain: Optional[str] = None,
        audience: Optional[str] = None,
        jwks_cache_ttl: int = 3600,
    ):
        """
        Raises:
            ValueError: If domain or audience is missing
        """
        self.domain = domain or get_auth_issuer_domain()
        self.audience = audience or get_auth_audience()

        if not self.domain:
            raise ValueError("AUTH_ISSUER_DOMAIN is required")
        if not self.audience:
            raise ValueError("AUTH_AUDIENCE is required")

        self.jwks_cache: TTLCache[str, Dict[str, Any]] = TTLCache(maxsize=10, ttl=jwks_cache_ttl)

    async def verify_token(self, token: str) -> Dict[str, Any]:
        try:
            kid = jwt.get_unverified_header(token).get("kid")
            if not kid:
                raise InvalidTokenError("Token header missing 'kid'")

            if kid not in self.jwks_cache:
                await self._refresh_jwks()

            key_dict = self.jwks_cache.get(kid)
            if not key_dict:
                raise InvalidTokenError(f"JWKS key {kid} not found")

            payload: Dict[str, Any] = jwt.decode(
                token,
                PyJWK.from_dict(key_dict).key,
                algorithms=["RS256"],
                audience=self.audience,
                issuer=f"https://{self.domain}/",
            )
            return payload

        except (InvalidTokenError, JWKSError):
            raise
        except ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except JWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

    async def _refresh_jwks(self) -> None:
        jwks_url = f"https://{self.domain}/.well-known/jwks.json"
        try:
            async with aiohttp.ClientSession() as session:
                timeout = aiohttp.ClientTimeout(total=5)
                async with session.get(jwks_url, timeout=timeout) as resp:
                    resp.raise_for_status()
                    jwks = await resp.json()
        except aiohttp.ClientError as e:
            raise JWKSError(f"Failed to fetch JWKS: {e}") from e

        for key in jwks.get("keys", []):
            kid = key.get("kid")
            if kid:
                self.jwks_cache[kid] = key
        logger.info("JWKS refreshed", extra={"key_count": len(self.jwks_cache)})


def account_from_claims(claims: Dict[str, Any], role_claim: Optional[str] = None) -> AccountContext:
    """Build the account context from verified token claims.

    ``sub`` becomes the account id. The namespaced role claim selects the
    role, defaulting to student.

    Raises:
        InvalidTokenError: Claims without ``sub``
    """
    sub = claims.get("sub")
    if not sub:
        raise InvalidTokenError("Token has no subject")

    raw_role = claims.get(role_claim or get_role_claim())
    role = Role.CAFETERIA if raw_role == Role.CAFETERIA.value else Role.STUDENT
    return AccountContext(account_id=sub, role=role)
