"""
hotel_desk.api.__main__

`python -m hotel_desk.api` / `hotel-desk` entrypoint.
"""

from __future__ import annotations

import uvicorn

from hotel_desk.api.app import create_app
from hotel_desk.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        # Logging is owned by structlog; RequestContextMiddleware writes the access line.
        log_config=None,
        access_log=False,
        proxy_headers=settings.env == "prod",
    )


if __name__ == "__main__":
    main()
