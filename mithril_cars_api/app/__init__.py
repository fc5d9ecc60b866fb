"""
FastAPI application for the Mithril Cars API.

``main.create_app`` assembles the application from the ``core``
(configuration, logging, database), ``services`` (validation and
business rules), ``schemas`` (typed records) and ``api`` (routes)
subpackages.
"""
