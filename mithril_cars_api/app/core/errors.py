"""
Exceptions rendered as the API error envelope.

Every failure reported to a client has the same JSON shape::

    {"error": {"text": "<message>"}}

``ApiError`` covers input validation and referential-integrity
failures detected before the store is touched.  ``StoreError`` wraps
failures raised by SQLite itself; its text is the driver's message.
"""

from typing import Any, Dict


def error_envelope(text: str) -> Dict[str, Any]:
    return {"error": {"text": text}}


class ApiError(Exception):
    """A request failure reported to the client."""

    status_code: int = 400

    def __init__(self, text: str, status_code: int | None = None) -> None:
        super().__init__(text)
        self.text = text
        if status_code is not None:
            self.status_code = status_code

    def to_response(self) -> Dict[str, Any]:
        return error_envelope(self.text)


class StoreError(ApiError):
    """The database rejected or failed a statement."""

    status_code = 500
