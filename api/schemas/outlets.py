"""
Pydantic schemas for outlet read endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel

from gasbygas.models import Outlet


class OutletResponse(BaseModel):
    outlet_name: str
    outlet_manager_name: str
    phone_number: str
    outlet_address: str
    registration_number: str

    @classmethod
    def from_outlet(cls, outlet: Outlet) -> OutletResponse:
        return cls(**outlet.model_dump())
