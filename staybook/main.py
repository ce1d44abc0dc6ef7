"""
Staybook API - process entry point.

    staybook            # serve on API_HOST:API_PORT
    python -m staybook.main
"""

from __future__ import annotations

import logging

import uvicorn

from staybook.config import get_settings


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "staybook.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    main()
