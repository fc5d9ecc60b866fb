"""
Car endpoints.

The ``{car_id}`` path segment is accepted as text and must parse to a
positive integer; anything else is answered with the ``invalid or
missing id`` error.  Reading a car that does not exist returns ``{}``
and deleting one is a no-op.
"""

import sqlite3
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from ...core.db import get_db
from ...schemas.car import Car, CarRead
from ...services.car_service import CarService
from ...services.validation import require_id
from ..deps import get_payload

router = APIRouter()


@router.get("", response_model=List[CarRead])
async def list_cars(conn: sqlite3.Connection = Depends(get_db)) -> List[Dict[str, Any]]:
    """Return every car joined with its manufacturer name (``[]`` if none)."""
    return await CarService.list_cars(conn)


@router.get("/{car_id}", response_model=Dict[str, Any])
async def get_car(car_id: str, conn: sqlite3.Connection = Depends(get_db)) -> Dict[str, Any]:
    """Return one car, or ``{}`` if nothing exists for the given id."""
    return await CarService.get_car(conn, require_id(car_id))


@router.post("", response_model=Car)
async def create_car(
    payload: Dict[str, Any] = Depends(get_payload),
    conn: sqlite3.Connection = Depends(get_db),
) -> Car:
    """Insert a car and return it with its new ``id``."""
    return await CarService.create_car(conn, payload)


@router.put("/{car_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_car(
    car_id: str,
    payload: Dict[str, Any] = Depends(get_payload),
    conn: sqlite3.Connection = Depends(get_db),
) -> None:
    """Overwrite the car with the given id."""
    record_id = require_id(car_id)
    await CarService.update_car(conn, record_id, payload)


@router.delete("/{car_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_car(car_id: str, conn: sqlite3.Connection = Depends(get_db)) -> None:
    await CarService.delete_car(conn, require_id(car_id))
