"""Key-value document store over PocketBase.

Records are addressed as ``<collection>/<key>``. Collections listed in
KEY_FIELDS keep their business key (NIC, business registration number) in a
field and `put` overwrites by that key. Every other collection uses the
PocketBase record id as its key.

Raw JSON is fetched through the client's ``send()`` instead of the SDK's
record decoding, because decoding renames camelCase fields (``busiRegNo``
becomes ``busi_reg_no``) and the stored names are part of the data contract.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol

from pocketbase.client import ClientResponseError  # type: ignore[attr-defined]

from pocketbase import PocketBase

from ..errors import StoreError
from ..logging_config import TRACE
from ..models import KEY_FIELDS

logger = logging.getLogger(__name__)

# PocketBase bookkeeping stripped from every document
SYSTEM_FIELDS = frozenset({"id", "collectionId", "collectionName", "created", "updated", "expand"})

DEFAULT_PAGE_SIZE = 200


@dataclass(frozen=True)
class Document:
    """A stored record: its key and its flat business fields."""

    key: str
    fields: dict[str, Any] = field(default_factory=dict)


class DocumentStore(Protocol):
    """Contract every store backend honors."""

    def get(self, collection: str, key: str) -> Document | None:
        """Look up one record by storage key."""
        ...

    def put(self, collection: str, key: str, fields: dict[str, Any]) -> Document:
        """Unconditionally write a record under its key (last writer wins)."""
        ...

    def find_by_field(self, collection: str, field_name: str, value: str) -> list[Document]:
        """Records whose field equals value, in store iteration order."""
        ...

    def scan(self, collection: str) -> list[Document]:
        """Every record of a collection, in store iteration order."""
        ...

    def iter_pages(self, collection: str) -> Iterator[list[Document]]:
        """Lazily yield a collection page by page."""
        ...


def quote_filter_value(value: str) -> str:
    """Quote a string for a PocketBase filter expression.

    Backslashes and single quotes are escaped so a value like O'Brien cannot
    terminate the literal early.
    """
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class PocketBaseDocumentStore:
    """DocumentStore backed by a PocketBase server.

    Usage:
        pb = PocketBase("http://127.0.0.1:8090")
        store = PocketBaseDocumentStore(pb)
        store.put("CustomerRegistration", "991234567V", {...})
    """

    def __init__(self, pb_client: PocketBase, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.pb = pb_client
        self.page_size = page_size

    # ----------------------------------------
    # Low-level transport
    # ----------------------------------------

    @staticmethod
    def _records_path(collection: str, record_id: str | None = None) -> str:
        path = f"/api/collections/{collection}/records"
        if record_id is not None:
            path = f"{path}/{record_id}"
        return path

    def _send(self, path: str, req_config: dict[str, Any]) -> Any:
        logger.log(TRACE, f"PocketBase {req_config.get('method')} {path} params={req_config.get('params')}")
        try:
            return self.pb.send(path, req_config)
        except ClientResponseError as e:
            logger.error(f"PocketBase {req_config.get('method')} {path} failed: {e}")
            raise StoreError(f"Store request failed: {e}") from e

    def _list_page(self, collection: str, page: int, filter_str: str | None = None) -> dict[str, Any]:
        params: dict[str, Any] = {"page": page, "perPage": self.page_size, "skipTotal": 1}
        if filter_str:
            params["filter"] = filter_str
        response = self._send(self._records_path(collection), {"method": "GET", "params": params})
        if not isinstance(response, dict):
            raise StoreError(f"Unexpected list response for collection '{collection}'")
        return response

    def _to_document(self, collection: str, raw: dict[str, Any]) -> Document:
        fields = {k: v for k, v in raw.items() if k not in SYSTEM_FIELDS}
        key_field = KEY_FIELDS.get(collection)
        key = fields.get(key_field) if key_field else raw.get("id")
        return Document(key=str(key if key is not None else raw.get("id", "")), fields=fields)

    def _iter_raw_pages(self, collection: str, filter_str: str | None = None) -> Iterator[list[dict[str, Any]]]:
        page = 1
        while True:
            response = self._list_page(collection, page, filter_str)
            items = response.get("items") or []
            if items:
                yield items
            # skipTotal leaves totalPages unset, so a short page marks the end
            if len(items) < self.page_size:
                return
            page += 1

    def _find_raw_by_key(self, collection: str, key: str) -> dict[str, Any] | None:
        key_field = KEY_FIELDS.get(collection)
        if key_field is None:
            try:
                return self.pb.send(self._records_path(collection, key), {"method": "GET"})
            except ClientResponseError as e:
                if getattr(e, "status", None) == 404:
                    return None
                logger.error(f"PocketBase GET {collection}/{key} failed: {e}")
                raise StoreError(f"Store request failed: {e}") from e

        filter_str = f"{key_field} = {quote_filter_value(key)}"
        for items in self._iter_raw_pages(collection, filter_str):
            return items[0]
        return None

    # ----------------------------------------
    # DocumentStore
    # ----------------------------------------

    def get(self, collection: str, key: str) -> Document | None:
        raw = self._find_raw_by_key(collection, key)
        if raw is None:
            return None
        return self._to_document(collection, raw)

    def put(self, collection: str, key: str, fields: dict[str, Any]) -> Document:
        body = dict(fields)
        key_field = KEY_FIELDS.get(collection)
        if key_field is not None:
            body[key_field] = key

        existing = self._find_raw_by_key(collection, key)
        if existing is not None:
            # Overwrite semantics: fields absent from the new body are cleared
            for stale in set(existing) - SYSTEM_FIELDS - set(body):
                body[stale] = None
            raw = self._send(
                self._records_path(collection, existing["id"]),
                {"method": "PATCH", "body": body},
            )
            logger.debug(f"Overwrote {collection}/{key}")
        else:
            if key_field is None:
                body["id"] = key
            raw = self._send(self._records_path(collection), {"method": "POST", "body": body})
            logger.debug(f"Created {collection}/{key}")

        return self._to_document(collection, raw)

    def find_by_field(self, collection: str, field_name: str, value: str) -> list[Document]:
        filter_str = f"{field_name} = {quote_filter_value(value)}"
        return [
            self._to_document(collection, raw) for items in self._iter_raw_pages(collection, filter_str) for raw in items
        ]

    def scan(self, collection: str) -> list[Document]:
        return [document for page in self.iter_pages(collection) for document in page]

    def iter_pages(self, collection: str) -> Iterator[list[Document]]:
        for items in self._iter_raw_pages(collection):
            yield [self._to_document(collection, raw) for raw in items]
