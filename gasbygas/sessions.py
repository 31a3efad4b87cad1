"""Signed session tokens carrying the acting tenant's kind and business key."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import jwt
from jwt.exceptions import InvalidTokenError

from .models import TenantKind, TenantSession

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
TOKEN_TYPE = "tenant_session"


def issue_session_token(session: TenantSession, secret: str, ttl_minutes: int) -> str:
    """Sign a session token for the tenant."""
    if not secret:
        raise ValueError("Session secret must not be empty")
    claims = {
        "sub": session.key,
        "kind": session.kind.value,
        "type": TOKEN_TYPE,
        "exp": datetime.now(UTC) + timedelta(minutes=ttl_minutes),
    }
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def read_session_token(token: str, secret: str) -> TenantSession | None:
    """Verify a session token. Returns None if it is invalid, expired or of another type."""
    if not secret:
        raise ValueError("Session secret must not be empty")
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except InvalidTokenError as e:
        logger.debug(f"Session token rejected: {type(e).__name__}")
        return None

    key = payload.get("sub")
    if not key or payload.get("type") != TOKEN_TYPE:
        return None

    try:
        kind = TenantKind(payload.get("kind"))
    except ValueError:
        return None

    return TenantSession(kind=kind, key=str(key))


def extract_bearer_token(authorization_header: str | None) -> str | None:
    """Extract bearer token from Authorization header."""
    if not authorization_header:
        return None

    parts = authorization_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]
