"""Business-field joins between collections.

None of the collections carry foreign keys. Tokens are matched to tenants by
comparing a business field during a linear scan, and the first match in
store iteration order wins. Each relationship is matched in exactly one
function here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from pydantic import ValidationError as PydanticValidationError

from .data.document_store import Document
from .models import STATUS_COMPLETED, Token

logger = logging.getLogger(__name__)


def iter_tokens(documents: Iterable[Document]) -> Iterator[Token]:
    """Parse token documents, skipping records the approval workflow wrote malformed."""
    for document in documents:
        try:
            yield Token.from_document(document)
        except PydanticValidationError as e:
            logger.warning(f"Skipping malformed token '{document.key}': {e.error_count()} invalid field(s)")


def first_token_for_business(documents: Iterable[Document], busi_reg_no: str) -> Token | None:
    """Organization -> Token by busiRegNo. First match in scan order, not latest."""
    for token in iter_tokens(documents):
        if token.busi_reg_no == busi_reg_no:
            return token
    return None


def completed_tokens_for_email(documents: Iterable[Document], email: str) -> list[Token]:
    """Tenant -> Tokens by email, keeping only status exactly 'Completed'."""
    return [token for token in iter_tokens(documents) if token.email == email and token.status == STATUS_COMPLETED]


def first_document_by_email(documents: Iterable[Document], email: str) -> Document | None:
    """Tenant lookup by email for login. Email is not unique in the store; the first record wins."""
    for document in documents:
        if document.fields.get("email") == email:
            return document
    return None
