"""
Service layer for cars.

Cars always belong to an existing manufacturer; the manufacturer is
looked up before every create and update.  Listing and single-car
reads join the manufacturer's name into each row.

Writes go through the typed ``CarData`` record, so only the
manufacturer id, model name and model year ever reach the generated
INSERT/UPDATE statements.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Mapping

from ..core import db
from ..core.errors import ApiError
from ..schemas.car import Car, CarData
from .validation import coerce_id, validate_car_data

logger = logging.getLogger(__name__)

TABLE = "cars"

_SELECT_JOINED = (
    "SELECT c.*, m.name AS manufacturer_name"
    " FROM cars c INNER JOIN manufacturers m"
    " ON c.manufacturer_id = m.id"
)


class CarService:
    """Service class for managing cars."""

    @staticmethod
    def _to_record(payload: Mapping[str, Any]) -> CarData:
        """Build the write record from a payload that passed validation."""
        return CarData(
            manufacturer_id=coerce_id(payload["manufacturer_id"]),
            model_name=str(payload["model_name"]),
            model_year=str(payload["model_year"]),
        )

    @classmethod
    async def list_cars(cls, conn: sqlite3.Connection) -> List[Dict[str, Any]]:
        """Return every car, ordered by manufacturer name, model name and year."""
        return db.query(
            conn, _SELECT_JOINED + " ORDER BY manufacturer_name, model_name, model_year"
        )

    @classmethod
    async def get_car(cls, conn: sqlite3.Connection, car_id: int) -> Dict[str, Any]:
        """Return one car, or an empty dict when ``car_id`` does not exist."""
        rows = db.query(conn, _SELECT_JOINED + " WHERE c.id=:id LIMIT 1", {"id": car_id})
        return rows[0] if rows else {}

    @classmethod
    async def create_car(cls, conn: sqlite3.Connection, payload: Mapping[str, Any]) -> Car:
        error = validate_car_data(conn, payload)
        if error:
            logger.warning("Rejected car: %s", error)
            raise ApiError(error)
        record = cls._to_record(payload)
        car_id = db.insert_from_object(conn, TABLE, record.model_dump())
        logger.info("Created car %s (%s %s)", car_id, record.model_name, record.model_year)
        return Car(id=car_id, **record.model_dump())

    @classmethod
    async def update_car(
        cls, conn: sqlite3.Connection, car_id: int, payload: Mapping[str, Any]
    ) -> None:
        """Replace every writable field of car ``car_id``.

        Updating an id that does not exist is not an error; no row changes.
        """
        error = validate_car_data(conn, payload)
        if error:
            logger.warning("Rejected update of car %s: %s", car_id, error)
            raise ApiError(error)
        record = cls._to_record(payload)
        db.update_from_object(conn, TABLE, record.model_dump(), car_id)
        logger.info("Updated car %s", car_id)

    @classmethod
    async def delete_car(cls, conn: sqlite3.Connection, car_id: int) -> None:
        db.delete(conn, TABLE, car_id)
        logger.info("Deleted car %s", car_id)
