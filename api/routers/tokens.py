"""
Tokens Router - active pickup token and completed order history.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from gasbygas.models import TenantSession
from gasbygas.token_resolver import TokenResolver

from ..dependencies import get_current_session, get_token_resolver, require_organization
from ..schemas.tokens import TokenResponse

router = APIRouter(prefix="/api/tokens", tags=["tokens"])


@router.get("/active", response_model=TokenResponse)
async def get_active_token(
    session: TenantSession = Depends(require_organization),
    resolver: TokenResolver = Depends(get_token_resolver),
) -> TokenResponse | Response:
    """The organization's pickup token; 204 when none has been issued."""
    token = await resolver.resolve_active_token(session.key)
    if token is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return TokenResponse.from_token(token)


@router.get("/completed", response_model=list[TokenResponse])
async def get_completed_orders(
    session: TenantSession = Depends(get_current_session),
    resolver: TokenResolver = Depends(get_token_resolver),
) -> list[TokenResponse]:
    """Completed orders for the tenant, most recent first."""
    tokens = await resolver.resolve_completed_orders(session)
    return [TokenResponse.from_token(token) for token in tokens]
