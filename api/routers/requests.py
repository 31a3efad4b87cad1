"""
Requests Router - cylinder pickup request submission and status.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response, status

from gasbygas.models import TenantSession
from gasbygas.request_submission import RequestSubmissionEngine

from ..dependencies import get_current_session, get_request_engine
from ..schemas.requests import GasRequestCreate, GasRequestResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/requests", tags=["requests"])


@router.post("", response_model=GasRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_request(
    body: GasRequestCreate,
    session: TenantSession = Depends(get_current_session),
    engine: RequestSubmissionEngine = Depends(get_request_engine),
) -> GasRequestResponse:
    """Submit a pickup request. Replaces any earlier request for the same tenant."""
    request = await engine.submit(session, body.to_form())
    return GasRequestResponse.from_request(request)


@router.get("/current", response_model=GasRequestResponse)
async def get_current_request(
    session: TenantSession = Depends(get_current_session),
    engine: RequestSubmissionEngine = Depends(get_request_engine),
) -> GasRequestResponse | Response:
    """The tenant's live request; 204 when nothing has been submitted."""
    request = await engine.current(session)
    if request is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return GasRequestResponse.from_request(request)
