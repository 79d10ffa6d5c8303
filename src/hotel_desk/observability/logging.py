"""
hotel_desk.observability.logging

structlog configuration.

Responsibilities:
- Route structlog through stdlib logging with JSON output (console output in dev).
- Stamp every event with the service name and an ISO UTC timestamp.
- Mask credential-bearing keys (access codes, session tokens) before rendering.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

# Event keys that may carry a credential.
MASKED_KEYS = frozenset({"code", "token", "session"})

# Libraries whose INFO chatter is noise next to our own request log.
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


def configure_logging(*, service_name: str, level: str, json_logs: bool = True) -> None:
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    def stamp_service(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            stamp_service,
            mask_credentials,
            structlog.processors.dict_tracebacks if json_logs else structlog.dev.set_exc_info,
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def mask_credentials(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in MASKED_KEYS & event_dict.keys():
        event_dict[key] = "***"
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
