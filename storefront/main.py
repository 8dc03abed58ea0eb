"""Entry point: python -m storefront.main"""
from __future__ import annotations

from aiohttp import web

from logging_config import logger, setup_logging
from storefront.api.server import create_app
from storefront.core.config import load_settings
from storefront.core.storage import build_storage


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)
    storage = build_storage(settings)
    app = create_app(storage, max_sessions=settings.api.max_sessions)
    logger.info(
        "Starting storefront API on %s:%s (storage=%s)",
        settings.api.host,
        settings.api.port,
        settings.storage.backend,
    )
    web.run_app(app, host=settings.api.host, port=settings.api.port, print=None)


if __name__ == "__main__":
    main()
