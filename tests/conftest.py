"""
Root test configuration and fixtures for the gasbygas project.

This conftest.py provides common fixtures for all test categories:
- a mock PocketBase client for store-level tests
- an in-memory DocumentStore for component and router tests
- sample tenant, outlet and token records

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any
from unittest.mock import Mock, patch

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Settings are read at import time by api.dependencies
os.environ.setdefault("SESSION_SECRET", "test-session-secret-with-enough-bytes")
os.environ.setdefault("SKIP_PB_AUTH", "true")


def create_mock_pocketbase():
    """Create a mock PocketBase instance answering raw `send()` calls."""
    mock_pb = Mock()

    mock_collection = Mock()
    mock_collection.auth_with_password = Mock(return_value=True)
    mock_pb.collection = Mock(return_value=mock_collection)

    # Empty list page by default
    mock_pb.send = Mock(return_value={"page": 1, "perPage": 200, "items": []})

    mock_pb.auth_store = Mock()
    mock_pb.auth_store.base_token = "mock-token"
    mock_pb.auth_store.base_model = Mock()

    return mock_pb


class InMemoryDocumentStore:
    """DocumentStore kept in dicts, preserving insertion order per collection.

    Overwriting a key keeps its original position, matching a store that
    iterates by creation order.
    """

    def __init__(self, page_size: int = 2) -> None:
        self.page_size = page_size
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.fail_with: Exception | None = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _collection(self, collection: str) -> dict[str, dict[str, Any]]:
        return self.collections.setdefault(collection, {})

    def get(self, collection: str, key: str):
        from gasbygas.data import Document

        self._check()
        fields = self._collection(collection).get(key)
        if fields is None:
            return None
        return Document(key=key, fields=dict(fields))

    def put(self, collection: str, key: str, fields: dict[str, Any]):
        from gasbygas.data import Document

        self._check()
        self._collection(collection)[key] = dict(fields)
        return Document(key=key, fields=dict(fields))

    def find_by_field(self, collection: str, field_name: str, value: str):
        return [document for document in self.scan(collection) if document.fields.get(field_name) == value]

    def scan(self, collection: str):
        return [document for page in self.iter_pages(collection) for document in page]

    def iter_pages(self, collection: str) -> Iterator[list]:
        from gasbygas.data import Document

        self._check()
        page: list = []
        # Re-read the live collection so records added mid-iteration are seen
        index = 0
        while True:
            items = list(self._collection(collection).items())
            if index >= len(items):
                break
            key, fields = items[index]
            page.append(Document(key=key, fields=dict(fields)))
            index += 1
            if len(page) == self.page_size:
                yield page
                page = []
        if page:
            yield page


@pytest.fixture
def mock_pocketbase():
    """Create a mock PocketBase instance for tests that need it."""
    return create_mock_pocketbase()


@pytest.fixture(autouse=True)
def mock_all_external_services():
    """Automatically mock PocketBase to prevent real connections.

    Integration runs can opt out with SKIP_MOCKING=true.
    """
    if os.environ.get("SKIP_MOCKING") == "true":
        yield {}
        return

    mock_pb = create_mock_pocketbase()

    with patch("pocketbase.PocketBase") as mock_pb_class:
        mock_pb_class.return_value = mock_pb
        yield {"pocketbase": mock_pb}


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def tenant_directory(memory_store):
    from gasbygas.tenant_directory import TenantDirectory

    return TenantDirectory(memory_store)


@pytest.fixture
def sample_individual():
    """Sample individual registration (plaintext secret)."""
    from gasbygas.models import Individual

    return Individual(
        nic="991234567V",
        name="Nimal Perera",
        phone_number="0771234567",
        email="nimal@example.com",
        password="longenough1",
    )


@pytest.fixture
def sample_organization():
    """Sample organization registration (plaintext secret)."""
    from gasbygas.models import Organization

    return Organization(
        busi_reg_no="B1",
        org_name="Lanka Foods",
        org_phone_number="0112345678",
        email="ops@lankafoods.lk",
        password="longenough1",
        address="12 Main St, Colombo",
        validation_image="data:image/jpeg;base64,AAAA",
    )


@pytest.fixture
def sample_outlets():
    """Outlet records as the registration flow stores them."""
    return [
        {
            "outletName": "Colombo Central",
            "outletManagerName": "K. Silva",
            "phoneNumber": "0111111111",
            "outletAddress": "1 Fort Rd",
            "registrationNumber": "OUT-1",
        },
        {
            "outletName": "Kandy Hill",
            "outletManagerName": "R. Bandara",
            "phoneNumber": "0812222222",
            "outletAddress": "4 Lake Rd",
            "registrationNumber": "OUT-2",
        },
        {
            "outletName": "North Colombo",
            "outletManagerName": "",
            "phoneNumber": "",
            "outletAddress": "",
            "registrationNumber": "OUT-3",
        },
    ]
