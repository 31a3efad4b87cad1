"""
Pydantic schemas for cylinder request endpoints.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict

from gasbygas.models import GasRequest, IndividualRequest
from gasbygas.request_submission import RequestForm


class GasRequestCreate(BaseModel):
    """Request model for submitting a cylinder pickup request."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = ""
    phone_number: str = ""
    email: str = ""
    outlet: str = ""
    cylinder_type: str = ""
    cylinder_count: int | None = None
    request_date: date | None = None

    def to_form(self) -> RequestForm:
        return RequestForm(
            name=self.name,
            phone_number=self.phone_number,
            email=self.email,
            outlet=self.outlet,
            cylinder_type=self.cylinder_type,
            cylinder_count=self.cylinder_count,
            request_date=self.request_date,
        )


class GasRequestResponse(BaseModel):
    """Response model for a stored request."""

    key: str
    name: str
    phone_number: str
    email: str
    outlet: str
    cylinder_type: str
    cylinder_count: int
    request_date: date
    status: str

    @classmethod
    def from_request(cls, request: GasRequest) -> GasRequestResponse:
        if isinstance(request, IndividualRequest):
            name, phone = request.name, request.phone_number
        else:
            name, phone = request.org_name, request.org_phone_number
        return cls(
            key=request.key,
            name=name,
            phone_number=phone,
            email=request.email,
            outlet=request.outlet,
            cylinder_type=request.cylinder_type,
            cylinder_count=request.cylinder_count,
            request_date=request.request_date,
            status=request.status,
        )
