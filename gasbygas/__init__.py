"""
GasByGas - Core logic for gas-cylinder pickup requests.

This package contains:
- credentials: Credential codec used for stored secrets
- tenant_directory: Registration, login and lookup of individuals and organizations
- outlet_directory: Outlet listing and name search
- request_submission: Validation and storage of pickup requests
- token_resolver: Active-token and completed-history views over the tokens collection
- data: Document store contract and its PocketBase backend
"""

from gasbygas.credentials import CredentialCodec
from gasbygas.errors import (
    AuthError,
    FormatError,
    GasServiceError,
    IncompleteFormError,
    InvalidCylinderTypeError,
    NotFoundError,
    QuantityPolicyError,
    StoreError,
    ValidationError,
    WeakSecretError,
)
from gasbygas.models import (
    CylinderPrice,
    GasRequest,
    Individual,
    Organization,
    Outlet,
    Tenant,
    TenantKind,
    TenantSession,
    Token,
)
from gasbygas.outlet_directory import OutletDirectory
from gasbygas.request_submission import RequestForm, RequestSubmissionEngine
from gasbygas.tenant_directory import TenantDirectory
from gasbygas.token_resolver import TokenResolver

__all__ = [
    "CredentialCodec",
    "TenantDirectory",
    "OutletDirectory",
    "RequestForm",
    "RequestSubmissionEngine",
    "TokenResolver",
    # Models
    "GasRequest",
    "Individual",
    "Organization",
    "Outlet",
    "Tenant",
    "TenantKind",
    "TenantSession",
    "Token",
    "CylinderPrice",
    # Errors
    "GasServiceError",
    "ValidationError",
    "IncompleteFormError",
    "FormatError",
    "WeakSecretError",
    "QuantityPolicyError",
    "InvalidCylinderTypeError",
    "AuthError",
    "NotFoundError",
    "StoreError",
]
