"""
Manufacturer endpoints.

Same shapes as the car endpoints, without the join.  ``DELETE`` is
refused while any car is still assigned to the manufacturer.
"""

import sqlite3
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from ...core.db import get_db
from ...schemas.manufacturer import Manufacturer
from ...services.manufacturer_service import ManufacturerService
from ...services.validation import require_id
from ..deps import get_payload

router = APIRouter()


@router.get("", response_model=List[Manufacturer])
async def list_manufacturers(conn: sqlite3.Connection = Depends(get_db)) -> List[Dict[str, Any]]:
    """Return every manufacturer ordered by name (``[]`` if none)."""
    return await ManufacturerService.list_manufacturers(conn)


@router.get("/{manufacturer_id}", response_model=Dict[str, Any])
async def get_manufacturer(
    manufacturer_id: str, conn: sqlite3.Connection = Depends(get_db)
) -> Dict[str, Any]:
    return await ManufacturerService.get_manufacturer(conn, require_id(manufacturer_id))


@router.post("", response_model=Manufacturer)
async def create_manufacturer(
    payload: Dict[str, Any] = Depends(get_payload),
    conn: sqlite3.Connection = Depends(get_db),
) -> Manufacturer:
    return await ManufacturerService.create_manufacturer(conn, payload)


@router.put("/{manufacturer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_manufacturer(
    manufacturer_id: str,
    payload: Dict[str, Any] = Depends(get_payload),
    conn: sqlite3.Connection = Depends(get_db),
) -> None:
    record_id = require_id(manufacturer_id)
    await ManufacturerService.update_manufacturer(conn, record_id, payload)


@router.delete("/{manufacturer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_manufacturer(
    manufacturer_id: str, conn: sqlite3.Connection = Depends(get_db)
) -> None:
    """Delete a manufacturer (only if no car is assigned to it)."""
    await ManufacturerService.delete_manufacturer(conn, require_id(manufacturer_id))
