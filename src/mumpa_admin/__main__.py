"""Serve the API: python -m mumpa_admin"""

import logging

import uvicorn

from mumpa_admin.config import get_settings

logger = logging.getLogger(__name__)


def serve(reload: bool = False) -> None:
    settings = get_settings()
    logger.info("Serving Mumpa admin API on %s:%d", settings.host, settings.port)
    uvicorn.run(
        "mumpa_admin.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload,
    )


if __name__ == "__main__":
    serve()
