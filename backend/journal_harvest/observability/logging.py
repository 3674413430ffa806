from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


_CONFIGURED = False

# Shared by structlog events and foreign (stdlib, botocore) records.
_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def renderer_for(fmt: str):
    """JSON lines for deployed runs; coloured key=value output for a terminal."""
    if str(fmt or "").strip().lower() == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging(
    *,
    level: str | int = "INFO",
    fmt: str = "json",
    botocore_level: str | int = "WARNING",
) -> None:
    """
    Route structlog and stdlib logging through one stdout handler.

    Dispatch context (journal_id, system) bound with structlog.contextvars is merged
    into every event, including the ones emitted by the sender.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer_for(fmt),
            foreign_pre_chain=_SHARED_PROCESSORS,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in ("botocore", "boto3", "urllib3"):
        logging.getLogger(name).setLevel(botocore_level)

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True


def get_logger(name: str | None = None):
    return structlog.get_logger(name)
