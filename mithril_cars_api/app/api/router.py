"""
Top-level router.

Aggregates the index and per-resource routers.  Resources are served
from the root path (``/cars``, ``/manufacturers``).
"""

from fastapi import APIRouter

from .endpoints import cars, index, manufacturers

router = APIRouter()

router.include_router(index.router, tags=["index"])
router.include_router(cars.router, prefix="/cars", tags=["cars"])
router.include_router(manufacturers.router, prefix="/manufacturers", tags=["manufacturers"])
