"""Error taxonomy for the GasByGas core components.

Every component raises a subclass of GasServiceError. The API boundary
recovers all of them and answers a typed JSON body built from `code`,
`field` and `retryable`, so no component error escapes as an unhandled fault.
"""

from __future__ import annotations


class GasServiceError(Exception):
    """Base exception for all component errors."""

    code = "service_error"
    retryable = False

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict[str, object]:
        return {
            "error": self.code,
            "detail": self.message,
            "field": self.field,
            "retryable": self.retryable,
        }


class ValidationError(GasServiceError):
    """Missing or malformed input, raised before any store call."""

    code = "validation_error"


class IncompleteFormError(ValidationError):
    """A required form field is blank."""

    code = "incomplete_form"


class FormatError(ValidationError):
    """Email does not look like local@domain.tld."""

    code = "format_error"


class WeakSecretError(ValidationError):
    """Credential shorter than the minimum length."""

    code = "weak_secret"


class QuantityPolicyError(ValidationError):
    """Cylinder count violates the tenant kind's quantity rule."""

    code = "quantity_policy"


class InvalidCylinderTypeError(ValidationError):
    """Cylinder type is not in the tenant kind's catalog."""

    code = "invalid_cylinder_type"


class AuthError(GasServiceError):
    """Login failed. Unknown email and wrong secret are not distinguished."""

    code = "auth_error"


class NotFoundError(GasServiceError):
    """A tenant record the caller relies on does not exist."""

    code = "not_found"


class StoreError(GasServiceError):
    """The document store call failed (network, permission, serialization)."""

    code = "store_error"
    retryable = True
