"""
Pydantic schemas for the GasByGas API.

Re-exports all schemas for convenient importing.
"""

from __future__ import annotations

from .cylinders import CylinderPriceResponse
from .outlets import OutletResponse
from .requests import GasRequestCreate, GasRequestResponse
from .tenants import (
    IndividualRegistration,
    LoginRequest,
    OrganizationRegistration,
    SessionResponse,
    TenantProfile,
)
from .tokens import TokenResponse

__all__ = [
    # Tenants
    "IndividualRegistration",
    "OrganizationRegistration",
    "LoginRequest",
    "SessionResponse",
    "TenantProfile",
    # Requests
    "GasRequestCreate",
    "GasRequestResponse",
    # Outlets
    "OutletResponse",
    # Tokens
    "TokenResponse",
    # Cylinders
    "CylinderPriceResponse",
]
