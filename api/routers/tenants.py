"""
Tenants Router - registration, login and profile endpoints.

Registration and login answer with a signed session token. Every other
endpoint reads the acting tenant from that token.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from gasbygas.models import TenantKind, TenantSession
from gasbygas.sessions import issue_session_token
from gasbygas.tenant_directory import TenantDirectory

from ..dependencies import get_current_session, get_tenant_directory
from ..schemas.tenants import (
    IndividualRegistration,
    LoginRequest,
    OrganizationRegistration,
    SessionResponse,
    TenantProfile,
)
from ..settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["tenants"])


def _session_response(kind: TenantKind, key: str) -> SessionResponse:
    settings = get_settings()
    session = TenantSession(kind=kind, key=key)
    token = issue_session_token(session, settings.session_secret, settings.session_ttl_minutes)
    return SessionResponse(kind=kind, key=key, access_token=token)


@router.post("/individual/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def register_individual(
    body: IndividualRegistration,
    directory: TenantDirectory = Depends(get_tenant_directory),
) -> SessionResponse:
    """Register an individual customer keyed by NIC."""
    key = await directory.register(body.to_tenant())
    return _session_response(TenantKind.INDIVIDUAL, key)


@router.post("/organization/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def register_organization(
    body: OrganizationRegistration,
    directory: TenantDirectory = Depends(get_tenant_directory),
) -> SessionResponse:
    """Register an organization keyed by business registration number."""
    key = await directory.register(body.to_tenant())
    return _session_response(TenantKind.ORGANIZATION, key)


@router.post("/{kind}/login", response_model=SessionResponse)
async def login(
    kind: TenantKind,
    body: LoginRequest,
    directory: TenantDirectory = Depends(get_tenant_directory),
) -> SessionResponse:
    """Authenticate by email and password. Failures do not reveal whether the email exists."""
    key = await directory.login(kind, body.email, body.password)
    return _session_response(kind, key)


@router.get("/me", response_model=TenantProfile)
async def get_profile(
    session: TenantSession = Depends(get_current_session),
    directory: TenantDirectory = Depends(get_tenant_directory),
) -> TenantProfile:
    """Profile of the tenant behind the session token."""
    tenant = await directory.profile(session)
    return TenantProfile.from_tenant(tenant)
