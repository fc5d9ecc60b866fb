"""
HTTP layer.

``router`` aggregates the per-resource routers from ``endpoints``;
``deps`` holds request-scoped dependencies and ``error_handlers``
renders every failure as the JSON error envelope.
"""
