"""
Pydantic models for manufacturer data.
"""

from pydantic import BaseModel, Field


class ManufacturerData(BaseModel):
    """Schema for the writable fields of a manufacturer."""

    name: str = Field(..., examples=["Acme"])


class Manufacturer(ManufacturerData):
    """Schema for a stored manufacturer."""

    id: int

    model_config = {
        "from_attributes": True,
    }
