"""
Pydantic schemas for the cylinder price list.
"""

from __future__ import annotations

from pydantic import BaseModel

from gasbygas.models import CylinderPrice


class CylinderPriceResponse(BaseModel):
    """One orderable size. `size` is the value to send as a request's cylinder_type."""

    size: str
    label: str
    price: float

    @classmethod
    def from_price(cls, item: CylinderPrice) -> CylinderPriceResponse:
        return cls(size=item.size, label=item.label, price=float(item.price))
