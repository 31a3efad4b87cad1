"""Domain records for tenants, outlets, cylinder requests and tokens.

Records are validated at the store boundary. Field names on the Python side
are snake_case; the aliases are the camelCase names the mobile client wrote
into the store, and `to_store()` always serializes with those aliases.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import StoreError

if TYPE_CHECKING:
    from .data.document_store import Document

# Collections addressed as <collection>/<key>
CUSTOMER_COLLECTION = "CustomerRegistration"
ORGANIZATION_COLLECTION = "OrganizationRegistration"
OUTLET_COLLECTION = "gasOutletReg"
INDIVIDUAL_REQUEST_COLLECTION = "IndCustGasRequests"
ORGANIZATION_REQUEST_COLLECTION = "OrgGasRequests"
TOKEN_COLLECTION = "tokens"

# Business-key field per collection; collections not listed use generated keys
KEY_FIELDS: dict[str, str] = {
    CUSTOMER_COLLECTION: "nic",
    ORGANIZATION_COLLECTION: "busiRegNo",
    INDIVIDUAL_REQUEST_COLLECTION: "nic",
    ORGANIZATION_REQUEST_COLLECTION: "busiRegNo",
}

STATUS_PENDING = "pending"
STATUS_APPROVED = "Approved"
STATUS_COMPLETED = "Completed"

# Retail price per cylinder size, in rupees
CYLINDER_PRICES: dict[str, Decimal] = {
    "3.2": Decimal("803.37"),
    "5": Decimal("1629.57"),
    "12.5": Decimal("3940.37"),
    "37.5": Decimal("12425.18"),
}


@dataclass(frozen=True)
class CylinderPrice:
    size: str
    price: Decimal

    @property
    def label(self) -> str:
        return format_cylinder_type(self.size)


class TenantKind(str, Enum):
    """The two kinds of tenant that can register and request cylinders."""

    INDIVIDUAL = "individual"
    ORGANIZATION = "organization"


@dataclass(frozen=True)
class TenantPolicy:
    """Storage layout and ordering rules for one tenant kind."""

    kind: TenantKind
    registration_collection: str
    request_collection: str
    key_field: str
    min_count: int
    max_count: int | None
    cylinder_catalog: tuple[str, ...]

    def allows_count(self, count: int) -> bool:
        if count < self.min_count:
            return False
        return self.max_count is None or count <= self.max_count

    def describe_count_rule(self) -> str:
        if self.max_count is None:
            return f"Cylinder count must be {self.min_count} or more."
        return f"Cylinder count must be between {self.min_count} and {self.max_count}."

    def price_list(self) -> list[CylinderPrice]:
        """Orderable sizes with their prices, in catalog order."""
        return [CylinderPrice(size=size, price=CYLINDER_PRICES[size]) for size in self.cylinder_catalog]


POLICIES: dict[TenantKind, TenantPolicy] = {
    TenantKind.INDIVIDUAL: TenantPolicy(
        kind=TenantKind.INDIVIDUAL,
        registration_collection=CUSTOMER_COLLECTION,
        request_collection=INDIVIDUAL_REQUEST_COLLECTION,
        key_field="nic",
        min_count=1,
        max_count=3,
        cylinder_catalog=("3.2", "5", "12.5"),
    ),
    TenantKind.ORGANIZATION: TenantPolicy(
        kind=TenantKind.ORGANIZATION,
        registration_collection=ORGANIZATION_COLLECTION,
        request_collection=ORGANIZATION_REQUEST_COLLECTION,
        key_field="busiRegNo",
        min_count=5,
        max_count=None,
        cylinder_catalog=("3.2", "5", "12.5", "37.5"),
    ),
}


def policy_for(kind: TenantKind) -> TenantPolicy:
    return POLICIES[TenantKind(kind)]


@dataclass(frozen=True)
class TenantSession:
    """Identity of the acting tenant, passed explicitly into every call."""

    kind: TenantKind
    key: str

    @property
    def policy(self) -> TenantPolicy:
        return policy_for(self.kind)


class StoreRecord(BaseModel):
    """Base for flat records kept in the document store."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    def to_store(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


R = TypeVar("R", bound=StoreRecord)


def parse_record(model: type[R], document: Document) -> R:
    """Validate a stored document, treating a bad shape as a store fault."""
    try:
        return model.model_validate(document.fields)
    except PydanticValidationError as e:
        raise StoreError(f"Corrupt {model.__name__} record '{document.key}': {e.error_count()} invalid field(s)") from e


# ========================================
# Tenants
# ========================================


class Individual(StoreRecord):
    kind: ClassVar[TenantKind] = TenantKind.INDIVIDUAL
    required_fields: ClassVar[tuple[str, ...]] = ("nic", "name", "phone_number", "email", "password")

    nic: str = ""
    name: str = ""
    phone_number: str = Field(default="", alias="phoneNumber")
    email: str = ""
    password: str = ""

    @property
    def key(self) -> str:
        return self.nic

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def contact_phone(self) -> str:
        return self.phone_number


class Organization(StoreRecord):
    kind: ClassVar[TenantKind] = TenantKind.ORGANIZATION
    required_fields: ClassVar[tuple[str, ...]] = (
        "busi_reg_no",
        "org_name",
        "org_phone_number",
        "email",
        "password",
        "address",
    )

    busi_reg_no: str = Field(default="", alias="busiRegNo")
    org_name: str = Field(default="", alias="orgName")
    org_phone_number: str = Field(default="", alias="orgPhoneNumber")
    email: str = ""
    password: str = ""
    address: str = ""
    # data:image/jpeg;base64,... attached at registration
    validation_image: str | None = Field(default=None, alias="validationImage")

    @property
    def key(self) -> str:
        return self.busi_reg_no

    @property
    def display_name(self) -> str:
        return self.org_name

    @property
    def contact_phone(self) -> str:
        return self.org_phone_number


Tenant = Individual | Organization

TENANT_MODELS: dict[TenantKind, type[Individual] | type[Organization]] = {
    TenantKind.INDIVIDUAL: Individual,
    TenantKind.ORGANIZATION: Organization,
}


def wire_name(model: type[StoreRecord], field_name: str) -> str:
    """Store-side (alias) name of a model field."""
    info = model.model_fields[field_name]
    return info.alias or field_name


# ========================================
# Outlets
# ========================================


class Outlet(StoreRecord):
    outlet_name: str = Field(alias="outletName")
    outlet_manager_name: str = Field(default="", alias="outletManagerName")
    phone_number: str = Field(default="", alias="phoneNumber")
    outlet_address: str = Field(default="", alias="outletAddress")
    registration_number: str = Field(default="", alias="registrationNumber")


# ========================================
# Cylinder requests
# ========================================


def format_cylinder_type(value: str) -> str:
    """Catalog value to stored form: '12.5' -> '12.5 kg'."""
    return f"{value} kg"


class GasRequestBase(StoreRecord):
    email: str
    outlet: str
    cylinder_type: str = Field(alias="cylinderType")
    cylinder_count: int = Field(alias="cylinderCount")
    request_date: date = Field(alias="requestDate")
    status: str = STATUS_PENDING


class IndividualRequest(GasRequestBase):
    nic: str
    name: str
    phone_number: str = Field(alias="phoneNumber")

    @property
    def key(self) -> str:
        return self.nic


class OrganizationRequest(GasRequestBase):
    busi_reg_no: str = Field(alias="busiRegNo")
    org_name: str = Field(alias="orgName")
    org_phone_number: str = Field(alias="orgPhoneNumber")

    @property
    def key(self) -> str:
        return self.busi_reg_no


GasRequest = IndividualRequest | OrganizationRequest

REQUEST_MODELS: dict[TenantKind, type[IndividualRequest] | type[OrganizationRequest]] = {
    TenantKind.INDIVIDUAL: IndividualRequest,
    TenantKind.ORGANIZATION: OrganizationRequest,
}


# ========================================
# Tokens
# ========================================


class Token(StoreRecord):
    """Pickup token issued by the external approval workflow."""

    token: str = ""
    created_at: int | None = Field(default=None, alias="createdAt")
    cylinder_type: str = Field(default="", alias="cylinderType")
    cylinder_count: int = Field(default=0, alias="cylinderCount")
    status: str = ""
    busi_reg_no: str | None = Field(default=None, alias="busiRegNo")
    email: str | None = None
    outlet_id: str | None = Field(default=None, alias="outletId")

    @classmethod
    def from_document(cls, document: Document) -> Token:
        parsed = cls.model_validate(document.fields)
        if not parsed.token:
            parsed = parsed.model_copy(update={"token": document.key})
        return parsed
