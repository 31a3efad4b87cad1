#!/usr/bin/env python3
"""
GasByGas API - HTTP API for gas-cylinder pickup requests.

This is the main FastAPI application that serves the mobile client. It exposes:
- Individual and organization registration, login and profile
- Outlet listing and search
- Cylinder pickup request submission
- Active pickup token and completed order history
- Cylinder price list per tenant kind
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gasbygas.logging_config import configure_logging, get_logger

from .dependencies import authenticate_pb
from .errors import register_exception_handlers
from .settings import get_settings

# Format: 2026-01-06T14:05:52Z [api] LEVEL message
configure_logging(source="api")
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle - startup and shutdown."""
    settings = get_settings()

    if not settings.skip_pb_auth:
        await authenticate_pb()
    else:
        logger.warning("Skipping PocketBase authentication (SKIP_PB_AUTH=true)")

    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="GasByGas API", description="Gas cylinder pickup request API", lifespan=lifespan)

    register_exception_handlers(app)

    settings = get_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    from .routers import cylinders, outlets, requests, tenants, tokens

    app.include_router(tenants.router)
    app.include_router(outlets.router)
    app.include_router(requests.router)
    app.include_router(tokens.router)
    app.include_router(cylinders.router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "service": "gasbygas-api"}

    return app


# Create app instance for uvicorn
app = create_app()
