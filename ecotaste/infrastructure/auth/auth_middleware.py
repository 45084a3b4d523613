"""FastAPI authentication middleware."""

from typing import Any, Iterable, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ecotaste.domain.shared.ports.auth_provider import IAuthProvider, InvalidTokenError, JWKSError
from ecotaste.infrastructure.config import is_auth_required

PUBLIC_PATHS = ("/health", "/version")


class AuthMiddleware(BaseHTTPMiddleware):
    """Verifies bearer tokens and sets ``request.state.auth_claims``.

    Environment Variables:
    - AUTH_REQUIRED: "true" to reject requests without a token (default: "false")

    Examples:
        >>> app.add_middleware(AuthMiddleware, auth_provider=JWTAuthProvider())
        >>> # In a resolver:
        >>> claims = request.state.auth_claims
    """

    def __init__(
        self,
        app: Any,
        auth_provider: Optional[IAuthProvider] = None,
        auth_required: Optional[bool] = None,
        public_paths: Iterable[str] = PUBLIC_PATHS,
    ) -> None:
        super().__init__(app)
        self.auth_provider = auth_provider
        self.auth_required = is_auth_required() if auth_required is None else auth_required
        self.public_paths = tuple(public_paths)

        if self.auth_required and self.auth_provider is None:
            raise ValueError("AUTH_REQUIRED=true needs an auth provider")

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        request.state.auth_claims = None

        if request.url.path in self.public_paths:
            return await call_next(request)

        token = self._extract_token(request.headers.get("Authorization"))

        if not token or self.auth_provider is None:
            if self.auth_required:
                return JSONResponse(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    content={"error": "unauthorized", "message": "Missing authorization token"},
                )
            return await call_next(request)

        try:
            request.state.auth_claims = await self.auth_provider.verify_token(token)
        except InvalidTokenError as e:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "invalid_token", "message": str(e)},
            )
        except JWKSError:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "error": "authentication_error",
                    "message": "Authentication service error",
                },
            )

        return await call_next(request)

    @staticmethod
    def _extract_token(auth_header: Optional[str]) -> Optional[str]:
        """
        Examples:
            >>> AuthMiddleware._extract_token("Bearer eyJ...")
            'eyJ...'
            >>> AuthMiddleware._extract_token("eyJ...") is None
            True
        """
        if not auth_header:
            return None
        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            return None
        return parts[1]
