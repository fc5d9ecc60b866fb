"""Entry point for serving the Mithril Cars API.

Host, port and log level come from the ``HOST``, ``PORT`` and
``LOG_LEVEL`` environment variables (see
``mithril_cars_api/app/core/config.py``).  The database file is
created on first start.

Usage:
    python run.py
"""
import logging

from uvicorn import Config, Server

from mithril_cars_api.app.core.config import settings
from mithril_cars_api.app.main import app


def main() -> None:
    """Serve the API with uvicorn until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Serving %s on %s:%s", settings.project_name, settings.host, settings.port)
    server.run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
