"""
Shared dependencies for the GasByGas API.

This module provides:
- PocketBase client management (global instance, admin authentication)
- Document store and component factories (overridable in tests)
- Tenant session resolution from the Authorization header
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import Depends, HTTPException, Request

from gasbygas.credentials import CredentialCodec
from gasbygas.data import DocumentStore, PocketBaseDocumentStore
from gasbygas.models import TenantKind, TenantSession
from gasbygas.outlet_directory import OutletDirectory
from gasbygas.request_submission import RequestSubmissionEngine
from gasbygas.sessions import extract_bearer_token, read_session_token
from gasbygas.tenant_directory import TenantDirectory
from gasbygas.token_resolver import TokenResolver
from pocketbase import PocketBase

from .settings import get_settings

logger = logging.getLogger(__name__)

# ========================================
# PocketBase Client
# ========================================

# One shared client, authenticated as admin on startup. The PocketBase API is
# stateless; only the auth store is shared and it holds the admin token.
_settings = get_settings()
pb_url = _settings.pocketbase_url
pb = PocketBase(pb_url)


async def authenticate_pb() -> None:
    """Authenticate with PocketBase as admin."""
    settings = get_settings()
    try:
        await asyncio.to_thread(
            pb.collection("_superusers").auth_with_password,
            settings.pocketbase_admin_email,
            settings.pocketbase_admin_password,
        )
        logger.info("Successfully authenticated with PocketBase")
    except Exception as e:
        logger.error(f"Failed to authenticate with PocketBase: {e}")
        raise


# ========================================
# Components
# ========================================


def get_store() -> DocumentStore:
    """FastAPI dependency for the document store."""
    return PocketBaseDocumentStore(pb, page_size=get_settings().store_page_size)


def get_tenant_directory(store: DocumentStore = Depends(get_store)) -> TenantDirectory:
    return TenantDirectory(store, CredentialCodec(get_settings().credential_salt))


def get_outlet_directory(store: DocumentStore = Depends(get_store)) -> OutletDirectory:
    return OutletDirectory(store)


def get_request_engine(
    store: DocumentStore = Depends(get_store),
    tenants: TenantDirectory = Depends(get_tenant_directory),
) -> RequestSubmissionEngine:
    return RequestSubmissionEngine(store, tenants)


def get_token_resolver(
    store: DocumentStore = Depends(get_store),
    tenants: TenantDirectory = Depends(get_tenant_directory),
) -> TokenResolver:
    return TokenResolver(store, tenants)


# ========================================
# Tenant Sessions
# ========================================


def get_current_session(request: Request) -> TenantSession:
    """
    Dependency resolving the acting tenant from the bearer session token.

    Usage:
        @router.get("/protected")
        async def protected_route(session: TenantSession = Depends(get_current_session)):
            return {"key": session.key}
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    session = read_session_token(token, get_settings().session_secret)
    if session is None:
        raise HTTPException(status_code=401, detail="Session expired or invalid. Please log in again.")

    return session


def require_organization(session: TenantSession = Depends(get_current_session)) -> TenantSession:
    """Dependency restricting a route to organization sessions."""
    if session.kind != TenantKind.ORGANIZATION:
        raise HTTPException(status_code=403, detail="Organization account required")
    return session


__all__ = [
    "pb",
    "pb_url",
    "authenticate_pb",
    "get_store",
    "get_tenant_directory",
    "get_outlet_directory",
    "get_request_engine",
    "get_token_resolver",
    "get_current_session",
    "require_organization",
]
