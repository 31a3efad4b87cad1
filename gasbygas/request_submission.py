"""Request Submission Engine - validates and stores cylinder pickup requests.

One live request is kept per tenant business key; a new submission replaces
the previous one. Validation short-circuits on the first failure, in this
order: required fields, quantity rule, cylinder catalog.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date

from .data.document_store import DocumentStore
from .errors import IncompleteFormError, InvalidCylinderTypeError, NotFoundError, QuantityPolicyError
from .models import (
    REQUEST_MODELS,
    STATUS_PENDING,
    GasRequest,
    IndividualRequest,
    OrganizationRequest,
    TenantKind,
    TenantSession,
    format_cylinder_type,
    parse_record,
    policy_for,
)
from .tenant_directory import TenantDirectory

logger = logging.getLogger(__name__)


@dataclass
class RequestForm:
    """What the tenant filled in on the request form."""

    name: str = ""
    phone_number: str = ""
    email: str = ""
    outlet: str = ""
    cylinder_type: str = ""
    cylinder_count: int | None = None
    request_date: date | None = None


# (attribute, store field) in the order the form is checked
_REQUIRED_FIELDS = (
    ("name", "name"),
    ("phone_number", "phoneNumber"),
    ("email", "email"),
    ("outlet", "outlet"),
    ("cylinder_type", "cylinderType"),
    ("cylinder_count", "cylinderCount"),
    ("request_date", "requestDate"),
)


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


class RequestSubmissionEngine:
    def __init__(self, store: DocumentStore, tenants: TenantDirectory) -> None:
        self.store = store
        self.tenants = tenants

    def validate(self, kind: TenantKind, form: RequestForm) -> None:
        """Run the form checks without touching the store."""
        for attribute, store_field in _REQUIRED_FIELDS:
            if _is_blank(getattr(form, attribute)):
                raise IncompleteFormError("Fill all the details", field=store_field)

        policy = policy_for(kind)
        count = int(form.cylinder_count or 0)
        if not policy.allows_count(count):
            raise QuantityPolicyError(policy.describe_count_rule(), field="cylinderCount")

        if form.cylinder_type.strip() not in policy.cylinder_catalog:
            raise InvalidCylinderTypeError(
                f"Cylinder type must be one of: {', '.join(policy.cylinder_catalog)} kg",
                field="cylinderType",
            )

    def _build_request(self, session: TenantSession, form: RequestForm) -> GasRequest:
        common = {
            "email": form.email,
            "outlet": form.outlet,
            "cylinder_type": format_cylinder_type(form.cylinder_type.strip()),
            "cylinder_count": int(form.cylinder_count or 0),
            "request_date": form.request_date,
            "status": STATUS_PENDING,
        }
        if session.kind == TenantKind.ORGANIZATION:
            return OrganizationRequest(
                busi_reg_no=session.key,
                org_name=form.name,
                org_phone_number=form.phone_number,
                **common,
            )
        return IndividualRequest(nic=session.key, name=form.name, phone_number=form.phone_number, **common)

    async def submit(self, session: TenantSession, form: RequestForm) -> GasRequest:
        """Validate a request form and store it as the tenant's pending request.

        Raises:
            IncompleteFormError: A required field (including outlet and date) is blank.
            QuantityPolicyError: Count outside the tenant kind's rule.
            InvalidCylinderTypeError: Type not in the tenant kind's catalog.
            NotFoundError: The acting tenant no longer exists.
            StoreError: A store call failed.
        """
        self.validate(session.kind, form)

        tenant = await self.tenants.get_by_key(session.kind, session.key)
        if tenant is None:
            raise NotFoundError("Tenant not found. Please log in again.")

        request = self._build_request(session, form)
        await asyncio.to_thread(self.store.put, session.policy.request_collection, session.key, request.to_store())

        logger.info(
            f"Stored {session.kind.value} request for {session.key}: "
            f"{request.cylinder_count} x {request.cylinder_type} at '{request.outlet}'"
        )
        return request

    async def current(self, session: TenantSession) -> GasRequest | None:
        """The tenant's live request, or None if nothing was submitted."""
        document = await asyncio.to_thread(self.store.get, session.policy.request_collection, session.key)
        if document is None:
            return None
        return parse_record(REQUEST_MODELS[session.kind], document)
