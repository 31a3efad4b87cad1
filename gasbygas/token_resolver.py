"""Token & History Resolver - joins the shared tokens collection back to tenants.

Both views read the tenant record first and then scan every token, with no
caching and no atomicity between the two reads. If the tenant's email or
registration number changes in between, the scan can miss or return stale
matches.
"""

from __future__ import annotations

import asyncio
import logging

from .data.document_store import DocumentStore
from .errors import NotFoundError
from .joins import completed_tokens_for_email, first_token_for_business
from .models import TOKEN_COLLECTION, TenantKind, TenantSession, Token
from .tenant_directory import TenantDirectory

logger = logging.getLogger(__name__)

TENANT_MISSING_MESSAGE = "Tenant not found. Please log in again."


class TokenResolver:
    def __init__(self, store: DocumentStore, tenants: TenantDirectory) -> None:
        self.store = store
        self.tenants = tenants

    async def resolve_active_token(self, org_key: str) -> Token | None:
        """First token whose busiRegNo equals the organization's, in scan order.

        Returns None when no token matches. A missing organization record is a
        broken session and raises NotFoundError.
        """
        organization = await self.tenants.get_by_key(TenantKind.ORGANIZATION, org_key)
        if organization is None:
            raise NotFoundError(TENANT_MISSING_MESSAGE)
        documents = await asyncio.to_thread(self.store.scan, TOKEN_COLLECTION)
        token = first_token_for_business(documents, getattr(organization, "busi_reg_no", ""))

        logger.debug(f"Active token for {org_key}: {token.token if token else None}")
        return token

    async def resolve_completed_orders(self, session: TenantSession) -> list[Token]:
        """Completed tokens for the tenant's email, most recent first.

        Tokens without a createdAt stamp cannot be ordered and are left out.
        """
        tenant = await self.tenants.get_by_key(session.kind, session.key)
        if tenant is None:
            raise NotFoundError(TENANT_MISSING_MESSAGE)

        documents = await asyncio.to_thread(self.store.scan, TOKEN_COLLECTION)
        completed = []
        for token in completed_tokens_for_email(documents, tenant.email):
            if token.created_at is None:
                logger.warning(f"Skipping completed token '{token.token}' without createdAt")
                continue
            completed.append(token)
        completed.sort(key=lambda token: token.created_at or 0, reverse=True)

        logger.debug(f"Found {len(completed)} completed orders for {session.kind.value} {session.key}")
        return completed
