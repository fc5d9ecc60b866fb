"""
Pydantic models for car data.

``CarData`` is the write record: the only fields a client can set on
a car.  ``Car`` adds the store-assigned ``id`` and is what ``POST
/cars`` returns.  ``CarRead`` is a row of the car listing, joined with
the manufacturer's name.
"""

from pydantic import BaseModel, Field


class CarData(BaseModel):
    manufacturer_id: int = Field(..., examples=[1])
    model_name: str = Field(..., examples=["Rocket"])
    model_year: str = Field(..., examples=["1965"], description="Four-digit model year")


class Car(CarData):
    """Schema for a stored car."""

    id: int

    model_config = {
        "from_attributes": True,
    }


class CarRead(Car):
    """Schema for a car joined with its manufacturer."""

    manufacturer_name: str = Field(..., examples=["Acme"])
