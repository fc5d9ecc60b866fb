"""
Validation rules for car and manufacturer payloads.

The ``validate_*`` functions return the message of the first rule a
payload breaks, or an empty string when it is valid.  Car rules are
checked in a fixed order and stop at the first failure: required
fields, then the model year format, then the manufacturer lookup.
Only the last rule touches the database.

A field counts as missing when it is absent or "empty": ``None``,
``False``, ``0``, ``""``, ``"0"`` or an empty container.
"""

import re
import sqlite3
from typing import Any, Mapping

from ..core.db import query
from ..core.errors import ApiError

INVALID_ID = "invalid or missing id"
MISSING_CAR_DATA = "missing required data (you must provide manufacturer_id, model_name, and model_year)"
INVALID_MODEL_YEAR = "model year is invalid (it must be a 4-digit number)"
INVALID_MANUFACTURER_ID = "manufacturer_id is invalid"
MISSING_MANUFACTURER_DATA = "missing required data (you must provide a name)"
MANUFACTURER_IN_USE = "cannot delete manufacturer because it is assigned to one or more cars"

CAR_REQUIRED_FIELDS = ("manufacturer_id", "model_name", "model_year")

_INTEGER = re.compile(r"[+-]?[0-9]+")
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


def is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (list, tuple, dict, set)):
        return not value
    return False


def coerce_id(value: Any) -> int:
    """Convert an id from a path or payload into an int; 0 when it is not one.

    Only whole numbers in SQLite's signed 64-bit range count as ids.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and _INTEGER.fullmatch(value.strip()):
        digits = value.strip().lstrip("+-").lstrip("0")
        # Longer strings are out of range anyway and may exceed int()'s digit limit.
        if len(digits) > 19:
            return 0
        number = int(value.strip())
    else:
        return 0
    return number if _MIN_ID <= number <= _MAX_ID else 0


def require_id(raw_id: Any) -> int:
    """Return ``raw_id`` as a positive int or raise ``ApiError``."""
    record_id = coerce_id(raw_id)
    if record_id <= 0:
        raise ApiError(INVALID_ID)
    return record_id


def is_four_digit_year(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return False
    text = str(value)
    return len(text) == 4 and all(char in "0123456789" for char in text)


def manufacturer_exists(conn: sqlite3.Connection, manufacturer_id: Any) -> bool:
    rows = query(
        conn,
        "SELECT COUNT(*) AS cnt FROM manufacturers WHERE id=:id",
        {"id": coerce_id(manufacturer_id)},
    )
    return bool(rows[0]["cnt"])


def car_exists_with_manufacturer(conn: sqlite3.Connection, manufacturer_id: Any) -> bool:
    rows = query(
        conn,
        "SELECT COUNT(*) AS cnt FROM cars WHERE manufacturer_id=:manufacturer_id",
        {"manufacturer_id": coerce_id(manufacturer_id)},
    )
    return bool(rows[0]["cnt"])


def validate_car_data(conn: sqlite3.Connection, data: Mapping[str, Any]) -> str:
    if any(is_empty(data.get(field)) for field in CAR_REQUIRED_FIELDS):
        return MISSING_CAR_DATA
    if not is_four_digit_year(data["model_year"]):
        return INVALID_MODEL_YEAR
    if not manufacturer_exists(conn, data["manufacturer_id"]):
        return INVALID_MANUFACTURER_ID
    return ""


def validate_manufacturer_data(data: Mapping[str, Any]) -> str:
    if is_empty(data.get("name")):
        return MISSING_MANUFACTURER_DATA
    return ""
