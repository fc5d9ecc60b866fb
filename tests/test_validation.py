"""Validation rules: required fields, year format, manufacturer lookup.

Invariants:
    - Car rules short-circuit in order: required → year format → manufacturer
    - An empty string means "valid"
"""

import pytest

from mithril_cars_api.app.core import db
from mithril_cars_api.app.core.errors import ApiError
from mithril_cars_api.app.services.validation import (
    INVALID_ID,
    INVALID_MANUFACTURER_ID,
    INVALID_MODEL_YEAR,
    MISSING_CAR_DATA,
    MISSING_MANUFACTURER_DATA,
    car_exists_with_manufacturer,
    coerce_id,
    is_empty,
    is_four_digit_year,
    manufacturer_exists,
    require_id,
    validate_car_data,
    validate_manufacturer_data,
)


@pytest.fixture
def acme_id(conn):
    return db.insert_from_object(conn, "manufacturers", {"name": "Acme"})


@pytest.mark.parametrize("value", [None, False, 0, 0.0, "", "0", [], {}])
def test_empty_values(value):
    assert is_empty(value)


@pytest.mark.parametrize("value", ["a", "00", " ", 1, -1, True, [0], "false"])
def test_non_empty_values(value):
    assert not is_empty(value)


@pytest.mark.parametrize(
    "value, expected",
    [
        (7, 7), ("7", 7), (" 12 ", 12), ("-3", -3), (4.0, 4), (4.5, 0), ("abc", 0), ("1_0", 0),
        ("", 0), (None, 0), (True, 0), ("12abc", 0), ("2.5", 0),
    ],
)
def test_coerce_id(value, expected):
    assert coerce_id(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (2**63 - 1, 2**63 - 1),
        (-(2**63), -(2**63)),
        (str(2**63 - 1), 2**63 - 1),
        ("00000000000000000000042", 42),
        (2**63, 0),
        (str(2**63), 0),
        ("99999999999999999999", 0),
        ("9" * 5000, 0),
        (1e20, 0),
        (float("inf"), 0),
    ],
)
def test_coerce_id_stays_within_64_bits(value, expected):
    assert coerce_id(value) == expected


def test_require_id_accepts_positive_integers():
    assert require_id("42") == 42


@pytest.mark.parametrize("raw", ["0", "", "-1", "abc", "1.5", "99999999999999999999"])
def test_require_id_rejects_invalid(raw):
    with pytest.raises(ApiError) as info:
        require_id(raw)
    assert info.value.text == INVALID_ID
    assert info.value.status_code == 400


@pytest.mark.parametrize("value", ["1965", "0001", 1999])
def test_four_digit_years(value):
    assert is_four_digit_year(value)


@pytest.mark.parametrize("value", ["196", "19650", "19a5", " 965", "-965", "１９６５", 19.65, None, True])
def test_invalid_years(value):
    assert not is_four_digit_year(value)


def test_valid_car(conn, acme_id):
    data = {"manufacturer_id": acme_id, "model_name": "Rocket", "model_year": "1965"}
    assert validate_car_data(conn, data) == ""


@pytest.mark.parametrize("missing", ["manufacturer_id", "model_name", "model_year"])
def test_car_missing_field(conn, acme_id, missing):
    data = {"manufacturer_id": acme_id, "model_name": "Rocket", "model_year": "1965"}
    del data[missing]
    assert validate_car_data(conn, data) == MISSING_CAR_DATA


def test_car_required_check_runs_before_year_check(conn):
    assert validate_car_data(conn, {"model_name": "", "model_year": "x"}) == MISSING_CAR_DATA


def test_car_year_check_runs_before_manufacturer_check(conn):
    data = {"manufacturer_id": 999, "model_name": "Rocket", "model_year": "65"}
    assert validate_car_data(conn, data) == INVALID_MODEL_YEAR


def test_car_unknown_manufacturer(conn, acme_id):
    data = {"manufacturer_id": acme_id + 1, "model_name": "Rocket", "model_year": "1965"}
    assert validate_car_data(conn, data) == INVALID_MANUFACTURER_ID


def test_car_non_numeric_manufacturer(conn, acme_id):
    data = {"manufacturer_id": "acme", "model_name": "Rocket", "model_year": "1965"}
    assert validate_car_data(conn, data) == INVALID_MANUFACTURER_ID


def test_manufacturer_name_required():
    assert validate_manufacturer_data({}) == MISSING_MANUFACTURER_DATA
    assert validate_manufacturer_data({"name": ""}) == MISSING_MANUFACTURER_DATA
    assert validate_manufacturer_data({"name": "Acme"}) == ""


def test_existence_checks(conn, acme_id):
    assert manufacturer_exists(conn, acme_id)
    assert manufacturer_exists(conn, str(acme_id))
    assert not manufacturer_exists(conn, acme_id + 1)
    assert not car_exists_with_manufacturer(conn, acme_id)

    db.insert_from_object(
        conn, "cars", {"manufacturer_id": acme_id, "model_name": "Rocket", "model_year": "1965"}
    )
    assert car_exists_with_manufacturer(conn, acme_id)
