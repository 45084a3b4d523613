"""Unit tests for AuthMiddleware and token claim mapping."""

from unittest.mock import AsyncMock, MagicMock

import jwt
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ecotaste.domain.shared.account import Role
from ecotaste.domain.shared.ports.auth_provider import InvalidTokenError, JWKSError
from ecotaste.infrastructure.auth.auth_middleware import AuthMiddleware
from ecotaste.infrastructure.auth.jwt_provider import JWTAuthProvider, account_from_claims

ROLE_CLAIM = "https://ecotaste.app/role"


async def mock_call_next(req):
    return JSONResponse(content={"message": "success"})


class TestAuthMiddleware:
    """Test AuthMiddleware implementation."""

    @pytest.fixture
    def mock_auth_provider(self):
        provider = MagicMock(spec=JWTAuthProvider)
        provider.verify_token = AsyncMock()
        return provider

    @pytest.fixture
    def middleware(self, mock_auth_provider):
        return AuthMiddleware(FastAPI(), auth_provider=mock_auth_provider, auth_required=False)

    @pytest.fixture
    def mock_request(self):
        request = MagicMock(spec=Request)
        request.headers = {}
        request.state = MagicMock()
        request.url = MagicMock(path="/graphql")
        return request

    @pytest.mark.asyncio
    async def test_successful_authentication(
        self, middleware, mock_request, mock_auth_provider
    ) -> None:
        mock_request.headers = {"Authorization": "Bearer valid_token"}
        claims = {"sub": "auth0|123", ROLE_CLAIM: "cafeteria"}
        mock_auth_provider.verify_token.return_value = claims

        response = await middleware.dispatch(mock_request, mock_call_next)

        assert response.status_code == 200
        assert mock_request.state.auth_claims == claims
        mock_auth_provider.verify_token.assert_called_once_with("valid_token")

    @pytest.mark.asyncio
    async def test_missing_token_with_auth_required(self, middleware, mock_request) -> None:
        middleware.auth_required = True

        response = await middleware.dispatch(mock_request, mock_call_next)

        assert response.status_code == 401
        assert "Missing authorization token" in response.body.decode()

    @pytest.mark.asyncio
    async def test_missing_token_without_auth_required(self, middleware, mock_request) -> None:
        response = await middleware.dispatch(mock_request, mock_call_next)

        assert response.status_code == 200
        assert mock_request.state.auth_claims is None

    @pytest.mark.asyncio
    async def test_invalid_token(self, middleware, mock_request, mock_auth_provider) -> None:
        mock_request.headers = {"Authorization": "Bearer expired"}
        mock_auth_provider.verify_token.side_effect = InvalidTokenError("Token has expired")

        response = await middleware.dispatch(mock_request, mock_call_next)

        assert response.status_code == 401
        assert "Token has expired" in response.body.decode()

    @pytest.mark.asyncio
    async def test_jwks_unavailable(self, middleware, mock_request, mock_auth_provider) -> None:
        mock_request.headers = {"Authorization": "Bearer token"}
        mock_auth_provider.verify_token.side_effect = JWKSError("down")

        response = await middleware.dispatch(mock_request, mock_call_next)

        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_public_paths_skip_auth(self, middleware, mock_request) -> None:
        middleware.auth_required = True
        mock_request.url = MagicMock(path="/health")

        response = await middleware.dispatch(mock_request, mock_call_next)

        assert response.status_code == 200

    def test_extract_token(self) -> None:
        assert AuthMiddleware._extract_token("Bearer abc") == "abc"
        assert AuthMiddleware._extract_token("bearer abc") == "abc"
        assert AuthMiddleware._extract_token("abc") is None
        assert AuthMiddleware._extract_token(None) is None

    def test_auth_required_needs_provider(self) -> None:
        with pytest.raises(ValueError, match="auth provider"):
            AuthMiddleware(FastAPI(), auth_provider=None, auth_required=True)


class TestAccountFromClaims:
    def test_cafeteria_role(self) -> None:
        account = account_from_claims({"sub": "auth0|1", ROLE_CLAIM: "cafeteria"}, ROLE_CLAIM)

        assert account.account_id == "auth0|1"
        assert account.role is Role.CAFETERIA

    def test_defaults_to_student(self) -> None:
        account = account_from_claims({"sub": "auth0|2", ROLE_CLAIM: "admin"}, ROLE_CLAIM)

        assert account.role is Role.STUDENT

    def test_missing_subject(self) -> None:
        with pytest.raises(InvalidTokenError):
            account_from_claims({ROLE_CLAIM: "cafeteria"}, ROLE_CLAIM)


class TestJWTAuthProvider:
    def test_requires_domain(self, monkeypatch) -> None:
        monkeypatch.delenv("AUTH_ISSUER_DOMAIN", raising=False)

        with pytest.raises(ValueError, match="AUTH_ISSUER_DOMAIN"):
            JWTAuthProvider(audience="https://api.ecotaste.app")

    def test_requires_audience(self, monkeypatch) -> None:
        monkeypatch.delenv("AUTH_AUDIENCE", raising=False)

        with pytest.raises(ValueError, match="AUTH_AUDIENCE"):
            JWTAuthProvider(domain="ecotaste.eu.auth0.com")

    @pytest.mark.asyncio
    async def test_token_without_kid(self) -> None:
        provider = JWTAuthProvider(domain="ecotaste.eu.auth0.com", audience="api")
        token = jwt.encode({"sub": "auth0|1"}, "s" * 32, algorithm="HS256")

        with pytest.raises(InvalidTokenError, match="kid"):
            await provider.verify_token(token)
