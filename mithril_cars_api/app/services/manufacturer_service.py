"""
Service layer for manufacturers.

A manufacturer can only be deleted once no car refers to it; the
dependent-car check runs before the DELETE statement.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Mapping

from ..core import db
from ..core.errors import ApiError
from ..schemas.manufacturer import Manufacturer, ManufacturerData
from .validation import (
    MANUFACTURER_IN_USE,
    car_exists_with_manufacturer,
    validate_manufacturer_data,
)

logger = logging.getLogger(__name__)

TABLE = "manufacturers"


class ManufacturerService:
    """Service class for managing manufacturers."""

    @classmethod
    async def list_manufacturers(cls, conn: sqlite3.Connection) -> List[Dict[str, Any]]:
        return db.query(conn, "SELECT * FROM manufacturers ORDER BY name")

    @classmethod
    async def get_manufacturer(cls, conn: sqlite3.Connection, manufacturer_id: int) -> Dict[str, Any]:
        """Return one manufacturer, or an empty dict when it does not exist."""
        rows = db.query(
            conn, "SELECT * FROM manufacturers WHERE id=:id LIMIT 1", {"id": manufacturer_id}
        )
        return rows[0] if rows else {}

    @classmethod
    async def create_manufacturer(
        cls, conn: sqlite3.Connection, payload: Mapping[str, Any]
    ) -> Manufacturer:
        error = validate_manufacturer_data(payload)
        if error:
            logger.warning("Rejected manufacturer: %s", error)
            raise ApiError(error)
        record = ManufacturerData(name=str(payload["name"]))
        manufacturer_id = db.insert_from_object(conn, TABLE, record.model_dump())
        logger.info("Created manufacturer %s (%s)", manufacturer_id, record.name)
        return Manufacturer(id=manufacturer_id, **record.model_dump())

    @classmethod
    async def update_manufacturer(
        cls, conn: sqlite3.Connection, manufacturer_id: int, payload: Mapping[str, Any]
    ) -> None:
        error = validate_manufacturer_data(payload)
        if error:
            logger.warning("Rejected update of manufacturer %s: %s", manufacturer_id, error)
            raise ApiError(error)
        record = ManufacturerData(name=str(payload["name"]))
        db.update_from_object(conn, TABLE, record.model_dump(), manufacturer_id)
        logger.info("Updated manufacturer %s", manufacturer_id)

    @classmethod
    async def delete_manufacturer(cls, conn: sqlite3.Connection, manufacturer_id: int) -> None:
        """Delete a manufacturer unless a car still refers to it."""
        if car_exists_with_manufacturer(conn, manufacturer_id):
            logger.warning("Refused to delete manufacturer %s: cars still assigned", manufacturer_id)
            raise ApiError(MANUFACTURER_IN_USE)
        db.delete(conn, TABLE, manufacturer_id)
        logger.info("Deleted manufacturer %s", manufacturer_id)
