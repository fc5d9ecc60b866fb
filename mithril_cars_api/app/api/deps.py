"""
Request-scoped dependencies shared by the endpoint modules.
"""

import json
import logging
from typing import Any, Dict

from fastapi import Request

logger = logging.getLogger(__name__)


async def get_payload(request: Request) -> Dict[str, Any]:
    """Return the request body as a JSON object.

    A missing body, malformed JSON or a JSON value that is not an object
    all yield an empty dict, which the validators then reject as missing
    required data.
    """
    body = await request.body()
    if not body:
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        logger.debug("Ignoring malformed JSON body on %s", request.url.path)
        return {}
    return data if isinstance(data, dict) else {}
