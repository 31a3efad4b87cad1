"""
Cylinders Router - orderable cylinder sizes and prices per tenant kind.
"""

from __future__ import annotations

from fastapi import APIRouter

from gasbygas.models import TenantKind, policy_for

from ..schemas.cylinders import CylinderPriceResponse

router = APIRouter(prefix="/api/cylinders", tags=["cylinders"])


@router.get("/{kind}", response_model=list[CylinderPriceResponse])
async def list_cylinder_prices(kind: TenantKind) -> list[CylinderPriceResponse]:
    """Sizes a tenant of this kind may order, with the current price of each."""
    return [CylinderPriceResponse.from_price(item) for item in policy_for(kind).price_list()]
