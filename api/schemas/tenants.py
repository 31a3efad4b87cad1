"""
Pydantic schemas for tenant registration, login and profile endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from gasbygas.models import Individual, Organization, Tenant, TenantKind


class IndividualRegistration(BaseModel):
    """Request model for registering an individual customer.

    Fields default to blank so missing input is reported by the directory
    as an inline form error rather than a schema error.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    nic: str = ""
    name: str = ""
    phone_number: str = ""
    email: str = ""
    password: str = ""

    def to_tenant(self) -> Individual:
        return Individual(
            nic=self.nic,
            name=self.name,
            phone_number=self.phone_number,
            email=self.email,
            password=self.password,
        )


class OrganizationRegistration(BaseModel):
    """Request model for registering an organization."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    busi_reg_no: str = ""
    org_name: str = ""
    org_phone_number: str = ""
    email: str = ""
    password: str = ""
    address: str = ""
    validation_image: str | None = None

    def to_tenant(self) -> Organization:
        return Organization(
            busi_reg_no=self.busi_reg_no,
            org_name=self.org_name,
            org_phone_number=self.org_phone_number,
            email=self.email,
            password=self.password,
            address=self.address,
            validation_image=self.validation_image,
        )


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class SessionResponse(BaseModel):
    """Issued after a successful registration or login."""

    kind: TenantKind
    key: str
    access_token: str
    token_type: str = "bearer"


class TenantProfile(BaseModel):
    """Profile view of a tenant. The stored credential is never returned."""

    kind: TenantKind
    key: str
    display_name: str
    email: str
    contact_phone: str
    address: str | None = None
    has_validation_image: bool = False

    @classmethod
    def from_tenant(cls, tenant: Tenant) -> TenantProfile:
        return cls(
            kind=tenant.kind,
            key=tenant.key,
            display_name=tenant.display_name,
            email=tenant.email,
            contact_phone=tenant.contact_phone,
            address=getattr(tenant, "address", None),
            has_validation_image=bool(getattr(tenant, "validation_image", None)),
        )
