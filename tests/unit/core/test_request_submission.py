"""Tests for cylinder request validation and submission."""

from __future__ import annotations

from datetime import date

import pytest

from gasbygas.errors import (
    IncompleteFormError,
    InvalidCylinderTypeError,
    NotFoundError,
    QuantityPolicyError,
    ValidationError,
)
from gasbygas.models import (
    CUSTOMER_COLLECTION,
    INDIVIDUAL_REQUEST_COLLECTION,
    ORGANIZATION_COLLECTION,
    ORGANIZATION_REQUEST_COLLECTION,
    TenantKind,
    TenantSession,
)
from gasbygas.request_submission import RequestForm, RequestSubmissionEngine

ORG_SESSION = TenantSession(kind=TenantKind.ORGANIZATION, key="B1")
IND_SESSION = TenantSession(kind=TenantKind.INDIVIDUAL, key="991234567V")


def make_form(**overrides) -> RequestForm:
    values = {
        "name": "Lanka Foods",
        "phone_number": "0112345678",
        "email": "ops@lankafoods.lk",
        "outlet": "Colombo Central",
        "cylinder_type": "5",
        "cylinder_count": 5,
        "request_date": date(2025, 1, 15),
    }
    values.update(overrides)
    return RequestForm(**values)


@pytest.fixture
def engine(memory_store, tenant_directory, sample_individual, sample_organization):
    memory_store.put(CUSTOMER_COLLECTION, sample_individual.key, sample_individual.to_store())
    memory_store.put(ORGANIZATION_COLLECTION, sample_organization.key, sample_organization.to_store())
    return RequestSubmissionEngine(memory_store, tenant_directory)


class TestValidate:
    @pytest.mark.parametrize("count", [5, 6, 5000])
    def test_organization_counts_accepted(self, memory_store, tenant_directory, count):
        engine = RequestSubmissionEngine(memory_store, tenant_directory)
        engine.validate(TenantKind.ORGANIZATION, make_form(cylinder_count=count))

    @pytest.mark.parametrize("count", [0, 1, 4])
    def test_organization_counts_rejected(self, memory_store, tenant_directory, count):
        engine = RequestSubmissionEngine(memory_store, tenant_directory)
        with pytest.raises(QuantityPolicyError) as exc_info:
            engine.validate(TenantKind.ORGANIZATION, make_form(cylinder_count=count))
        assert exc_info.value.field == "cylinderCount"

    @pytest.mark.parametrize("count,allowed", [(0, False), (1, True), (2, True), (3, True), (4, False)])
    def test_individual_counts(self, memory_store, tenant_directory, count, allowed):
        engine = RequestSubmissionEngine(memory_store, tenant_directory)
        form = make_form(cylinder_count=count)
        if allowed:
            engine.validate(TenantKind.INDIVIDUAL, form)
        else:
            with pytest.raises(QuantityPolicyError):
                engine.validate(TenantKind.INDIVIDUAL, form)

    def test_large_cylinder_only_for_organizations(self, memory_store, tenant_directory):
        engine = RequestSubmissionEngine(memory_store, tenant_directory)

        engine.validate(TenantKind.ORGANIZATION, make_form(cylinder_type="37.5"))
        with pytest.raises(InvalidCylinderTypeError):
            engine.validate(TenantKind.INDIVIDUAL, make_form(cylinder_type="37.5", cylinder_count=1))

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"name": ""}, "name"),
            ({"outlet": "  "}, "outlet"),
            ({"cylinder_type": ""}, "cylinderType"),
            ({"cylinder_count": None}, "cylinderCount"),
            ({"request_date": None}, "requestDate"),
        ],
    )
    def test_required_fields(self, memory_store, tenant_directory, overrides, field):
        engine = RequestSubmissionEngine(memory_store, tenant_directory)
        with pytest.raises(IncompleteFormError) as exc_info:
            engine.validate(TenantKind.ORGANIZATION, make_form(**overrides))
        assert exc_info.value.field == field

    def test_missing_field_reported_before_quantity(self, memory_store, tenant_directory):
        engine = RequestSubmissionEngine(memory_store, tenant_directory)
        with pytest.raises(IncompleteFormError):
            engine.validate(TenantKind.ORGANIZATION, make_form(outlet="", cylinder_count=1, cylinder_type="99"))

    def test_quantity_reported_before_catalog(self, memory_store, tenant_directory):
        engine = RequestSubmissionEngine(memory_store, tenant_directory)
        with pytest.raises(QuantityPolicyError):
            engine.validate(TenantKind.ORGANIZATION, make_form(cylinder_count=1, cylinder_type="99"))


class TestSubmit:
    @pytest.mark.asyncio
    async def test_organization_request_stored_pending(self, engine, memory_store):
        request = await engine.submit(ORG_SESSION, make_form())

        stored = memory_store.get(ORGANIZATION_REQUEST_COLLECTION, "B1")
        assert stored.fields["status"] == "pending"
        assert stored.fields["cylinderType"] == "5 kg"
        assert stored.fields["cylinderCount"] == 5
        assert stored.fields["busiRegNo"] == "B1"
        assert stored.fields["requestDate"] == "2025-01-15"
        assert request.key == "B1"

    @pytest.mark.asyncio
    async def test_individual_request_keyed_by_nic(self, engine, memory_store):
        form = make_form(name="Nimal Perera", cylinder_type="12.5", cylinder_count=2)

        await engine.submit(IND_SESSION, form)

        stored = memory_store.get(INDIVIDUAL_REQUEST_COLLECTION, "991234567V")
        assert stored.fields["nic"] == "991234567V"
        assert stored.fields["cylinderType"] == "12.5 kg"

    @pytest.mark.asyncio
    async def test_resubmission_overwrites(self, engine, memory_store):
        await engine.submit(ORG_SESSION, make_form(cylinder_count=5))
        await engine.submit(ORG_SESSION, make_form(cylinder_count=8))

        documents = memory_store.scan(ORGANIZATION_REQUEST_COLLECTION)
        assert len(documents) == 1
        assert documents[0].fields["cylinderCount"] == 8

    @pytest.mark.asyncio
    async def test_rejected_form_writes_nothing(self, engine, memory_store):
        with pytest.raises(ValidationError):
            await engine.submit(ORG_SESSION, make_form(cylinder_count=4))

        assert memory_store.get(ORGANIZATION_REQUEST_COLLECTION, "B1") is None

    @pytest.mark.asyncio
    async def test_unknown_tenant(self, engine):
        with pytest.raises(NotFoundError):
            await engine.submit(TenantSession(kind=TenantKind.ORGANIZATION, key="B404"), make_form())

    @pytest.mark.asyncio
    async def test_current(self, engine):
        assert await engine.current(ORG_SESSION) is None

        await engine.submit(ORG_SESSION, make_form())
        current = await engine.current(ORG_SESSION)

        assert current.cylinder_count == 5
        assert current.request_date == date(2025, 1, 15)
