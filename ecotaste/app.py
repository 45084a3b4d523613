"""EcoTaste backend: FastAPI app with the GraphQL API.

Run with:
    uvicorn ecotaste.app:app --reload
"""

from __future__ import annotations

import logging as _logging
import os
from contextlib import asynccontextmanager
from typing import Any, Final

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from strawberry.fastapi import GraphQLRouter

from ecotaste.application.event_handlers import register_event_handlers
from ecotaste.application.tracking.commands import InFlightScans
from ecotaste.graphql_api.context import GraphQLContext, create_context
from ecotaste.graphql_api.schema import create_schema
from ecotaste.infrastructure.auth.auth_middleware import AuthMiddleware
from ecotaste.infrastructure.auth.jwt_provider import JWTAuthProvider
from ecotaste.infrastructure.config import (
    get_app_version,
    get_auth_issuer_domain,
    get_role_claim,
    get_timezone,
    is_auth_required,
)
from ecotaste.infrastructure.detection.factory import create_food_detection_provider
from ecotaste.infrastructure.events.in_memory_bus import InMemoryEventBus
from ecotaste.infrastructure.persistence.cache_aside import CacheAsideLedgerRepository
from ecotaste.infrastructure.persistence.factory import (
    get_ledger_repository,
    get_menu_repository,
)

load_dotenv()

# --- Basic logging configuration (minimal) ---
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_logging.basicConfig(
    level=getattr(_logging, _LOG_LEVEL, _logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

APP_VERSION = get_app_version()

# ============================================
# Singletons shared by every request
# ============================================

# REPOSITORY_BACKEND: "inmemory" (default) | "mongodb"
_ledger_repository = get_ledger_repository()
_menu_repository = get_menu_repository()

_event_bus = InMemoryEventBus()
register_event_handlers(_event_bus)

# DETECTION_PROVIDER: "stub" (default) | "openai"
# Entered in the lifespan, which replaces it with the initialized instance
_detection_provider: Any = create_food_detection_provider()
_in_flight_scans = InFlightScans()
_timezone = get_timezone()
_auth_required = is_auth_required()


def _durable_tier(repository: Any) -> Any:
    if isinstance(repository, CacheAsideLedgerRepository):
        return repository.durable
    return repository


@asynccontextmanager
async def lifespan(_: FastAPI) -> Any:
    """Open the detection client and MongoDB resources, close them on shutdown."""
    logger = _logging.getLogger("startup")

    api_key = os.getenv("OPENAI_API_KEY")
    logger.info(
        "startup.config",
        extra={
            "openai_key_present": bool(api_key),
            "auth_required": _auth_required,
            "version": APP_VERSION,
        },
    )

    global _detection_provider
    async with _detection_provider as initialized_provider:
        _detection_provider = initialized_provider

        ledger = _durable_tier(_ledger_repository)
        if hasattr(ledger, "ensure_indexes"):
            await ledger.ensure_indexes()

        logger.info(
            "lifespan.ready",
            extra={
                "detection": type(initialized_provider).__name__,
                "ledger": type(_ledger_repository).__name__,
                "menu": type(_menu_repository).__name__,
            },
        )
        yield

        logger.info("lifespan.shutdown", extra={"status": "cleanup"})
        for repository in (ledger, _menu_repository):
            if hasattr(repository, "close"):
                repository.close()


app = FastAPI(
    title="EcoTaste Backend",
    version=APP_VERSION,
    lifespan=lifespan,
)

if _auth_required or get_auth_issuer_domain():
    app.add_middleware(
        AuthMiddleware,
        auth_provider=JWTAuthProvider(),
        auth_required=_auth_required,
    )


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
async def version() -> dict[str, str]:
    return {"version": APP_VERSION}


# ============================================
# GraphQL
# ============================================


def get_graphql_context(request: Request) -> GraphQLContext:
    """Create the per-request GraphQL context around the shared singletons."""
    return create_context(
        ledger_repository=_ledger_repository,
        menu_repository=_menu_repository,
        event_bus=_event_bus,
        detection_provider=_detection_provider,
        in_flight_scans=_in_flight_scans,
        tz=_timezone,
        auth_required=_auth_required,
        role_claim=get_role_claim(),
        request=request,
    )


schema = create_schema()

graphql_app: Final[GraphQLRouter[Any, Any]] = GraphQLRouter(
    schema, context_getter=get_graphql_context
)
app.include_router(graphql_app, prefix="/graphql")
