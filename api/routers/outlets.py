"""
Outlets Router - outlet listing, name search and request-form picker.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from gasbygas.outlet_directory import OutletDirectory

from ..dependencies import get_outlet_directory
from ..schemas.outlets import OutletResponse

router = APIRouter(prefix="/api/outlets", tags=["outlets"])


@router.get("", response_model=list[OutletResponse])
async def list_outlets(
    q: Annotated[str | None, Query(description="Case-insensitive substring of the outlet name")] = None,
    directory: OutletDirectory = Depends(get_outlet_directory),
) -> list[OutletResponse]:
    """All outlets, or those whose name contains `q`."""
    if q:
        outlets = await directory.search_by_name(q)
    else:
        outlets = [outlet async for outlet in directory.list()]
    return [OutletResponse.from_outlet(outlet) for outlet in outlets]


@router.get("/names", response_model=list[str])
async def list_outlet_names(
    directory: OutletDirectory = Depends(get_outlet_directory),
) -> list[str]:
    """Outlet names for the request form picker."""
    return await directory.names()
