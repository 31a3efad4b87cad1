"""
Pydantic schemas for pickup token endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel

from gasbygas.models import Token


class TokenResponse(BaseModel):
    token: str
    created_at: int | None = None
    cylinder_type: str
    cylinder_count: int
    status: str
    outlet_id: str | None = None

    @classmethod
    def from_token(cls, token: Token) -> TokenResponse:
        return cls(
            token=token.token,
            created_at=token.created_at,
            cylinder_type=token.cylinder_type,
            cylinder_count=token.cylinder_count,
            status=token.status,
            outlet_id=token.outlet_id,
        )
