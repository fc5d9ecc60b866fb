"""
Human-readable API index and a health probe.
"""

from typing import Dict

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from ...core.config import settings

router = APIRouter()

# (method, path, description) for every resource route, in display order.
ROUTES = [
    ("GET", "/cars", "returns array of car objects (or empty array if no car records exist)"),
    ("GET", "/cars/:id", "returns one car object (or empty object if nothing exists for the given id)"),
    ("POST", "/cars", "accepts JSON object of car data and inserts it as a new record; returns new record"),
    ("PUT", "/cars/:id", "accepts JSON object of car data and updates the existing record with the given id; returns nothing"),
    ("DELETE", "/cars/:id", "deletes the car record with the given id; returns nothing"),
    ("GET", "/manufacturers", "returns array of manufacturer objects (or empty array if no manufacturer records exist)"),
    ("GET", "/manufacturers/:id", "returns one manufacturer object (or empty object if nothing exists for the given id)"),
    ("POST", "/manufacturers", "accepts JSON object of manufacturer data and inserts it as a new record; returns new record"),
    ("PUT", "/manufacturers/:id", "accepts JSON object of manufacturer data and updates the existing record with the given id; returns nothing"),
    ("DELETE", "/manufacturers/:id", "deletes the manufacturer record with the given id (but only if the id is not currently assigned to any car records); returns nothing"),
]


def render_index() -> str:
    items = []
    for method, path, description in ROUTES:
        # Visual gap between the car and manufacturer groups.
        style = ' style="padding-bottom: 10px;"' if path == "/cars/:id" and method == "DELETE" else ""
        items.append(f"<li{style}><code>{method}</code> <b>{path}</b> - {description}</li>")
    return f"<h2>{settings.project_name}</h2><ul>{''.join(items)}</ul>"


@router.get("/", response_class=HTMLResponse)
async def index() -> str:
    """Describe the available endpoints."""
    return render_index()


@router.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}
