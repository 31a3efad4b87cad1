"""
Data access for GasByGas - the document store contract and its PocketBase backend.
"""

from .document_store import (
    Document,
    DocumentStore,
    PocketBaseDocumentStore,
    quote_filter_value,
)

__all__ = [
    "Document",
    "DocumentStore",
    "PocketBaseDocumentStore",
    "quote_filter_value",
]
