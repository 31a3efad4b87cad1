"""Outlet Directory - read-only listing and name search over registered outlets.

Outlets are written by a separate registration flow. Requests reference an
outlet by its name string only.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

from pydantic import ValidationError as PydanticValidationError

from .data.document_store import Document, DocumentStore
from .models import OUTLET_COLLECTION, Outlet

logger = logging.getLogger(__name__)


def _parse_outlet(document: Document) -> Outlet | None:
    try:
        return Outlet.model_validate(document.fields)
    except PydanticValidationError as e:
        logger.warning(f"Skipping malformed outlet '{document.key}': {e.error_count()} invalid field(s)")
        return None


class OutletListing:
    """Restartable async iterable over the live outlet collection.

    Each `async for` starts again from the first page, so outlets registered
    while a listing is in progress may show up in later pages.
    """

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def __aiter__(self) -> AsyncIterator[Outlet]:
        pages = self.store.iter_pages(OUTLET_COLLECTION)
        while True:
            page = await asyncio.to_thread(next, pages, None)
            if page is None:
                return
            for document in page:
                outlet = _parse_outlet(document)
                if outlet is not None:
                    yield outlet


class OutletDirectory:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def list(self) -> OutletListing:
        return OutletListing(self.store)

    async def search_by_name(self, substring: str) -> list[Outlet]:
        """Case-insensitive containment match on outletName, filtered client-side."""
        needle = substring.lower()
        return [outlet async for outlet in self.list() if needle in outlet.outlet_name.lower()]

    async def names(self) -> list[str]:
        """Outlet names for request-form pickers, skipping blank names."""
        return [outlet.outlet_name async for outlet in self.list() if outlet.outlet_name.strip()]
