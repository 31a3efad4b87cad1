"""Tenant Directory - registration, login and lookup of individuals and organizations.

Tenants are stored under their business key (NIC or business registration
number). Registration overwrites whatever is already stored under that key;
no duplicate check is made for keys or emails.
"""

from __future__ import annotations

import asyncio
import logging
import re

from .credentials import MIN_SECRET_LENGTH, CredentialCodec
from .data.document_store import DocumentStore
from .errors import AuthError, FormatError, IncompleteFormError, NotFoundError, WeakSecretError
from .joins import first_document_by_email
from .models import TENANT_MODELS, Tenant, TenantKind, TenantSession, parse_record, policy_for, wire_name

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

INVALID_LOGIN_MESSAGE = "Invalid email or password"


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


class TenantDirectory:
    """Registers and looks up tenant records keyed by business key."""

    def __init__(self, store: DocumentStore, codec: CredentialCodec | None = None) -> None:
        self.store = store
        self.codec = codec or CredentialCodec()

    def _validate_registration(self, tenant: Tenant) -> None:
        for field_name in tenant.required_fields:
            value = getattr(tenant, field_name)
            if not str(value or "").strip():
                raise IncompleteFormError("Please fill all the details", field=wire_name(type(tenant), field_name))

        if not is_valid_email(tenant.email):
            raise FormatError("Please enter a valid email address", field="email")

        if len(tenant.password) < MIN_SECRET_LENGTH:
            raise WeakSecretError(
                f"Password must be at least {MIN_SECRET_LENGTH} characters long",
                field="password",
            )

    async def register(self, tenant: Tenant) -> str:
        """Validate and store a tenant under its business key.

        Args:
            tenant: Individual or Organization carrying the plaintext secret.

        Returns:
            The business key the record was stored under.

        Raises:
            IncompleteFormError: A required field is blank.
            FormatError: Email does not look like local@domain.tld.
            WeakSecretError: Secret shorter than MIN_SECRET_LENGTH.
            StoreError: The write failed.
        """
        self._validate_registration(tenant)

        policy = policy_for(tenant.kind)
        stored = tenant.model_copy(update={"password": self.codec.encode(tenant.password)})

        await asyncio.to_thread(self.store.put, policy.registration_collection, tenant.key, stored.to_store())

        logger.info(f"Registered {tenant.kind.value} tenant {tenant.key}")
        return tenant.key

    async def login(self, kind: TenantKind, email: str, secret: str) -> str:
        """Authenticate by email and secret, returning the tenant's business key.

        An unknown email and a wrong secret raise the same AuthError so callers
        cannot discover which emails are registered. If several records share the
        email, the first one in store order is checked.
        """
        if not email or not secret:
            raise IncompleteFormError("Please enter both email and password", field="email" if not email else "password")

        if not is_valid_email(email):
            raise FormatError("Please enter a valid email address", field="email")

        policy = policy_for(kind)
        candidates = await asyncio.to_thread(self.store.find_by_field, policy.registration_collection, "email", email)
        document = first_document_by_email(candidates, email)

        if document is None or not self.codec.matches(secret, str(document.fields.get("password", ""))):
            logger.info(f"Rejected {policy.kind.value} login")
            raise AuthError(INVALID_LOGIN_MESSAGE)

        logger.info(f"{policy.kind.value.capitalize()} tenant logged in: {document.key}")
        return document.key

    async def get_by_key(self, kind: TenantKind, key: str) -> Tenant | None:
        """Direct lookup by business key. None means no such tenant."""
        policy = policy_for(kind)
        document = await asyncio.to_thread(self.store.get, policy.registration_collection, key)
        if document is None:
            return None
        return parse_record(TENANT_MODELS[policy.kind], document)

    async def profile(self, session: TenantSession) -> Tenant:
        """Tenant record for profile display."""
        tenant = await self.get_by_key(session.kind, session.key)
        if tenant is None:
            label = "Organization" if session.kind == TenantKind.ORGANIZATION else "Customer"
            raise NotFoundError(f"{label} details not found.")
        return tenant
