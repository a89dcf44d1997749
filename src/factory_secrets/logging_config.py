# Structured logging setup
#
# structlog on top of stdlib logging, same processor chain the host
# application uses for its own logs. Secret values and passwords are never
# passed to a logger; events carry the secret *name* and tier only.

import logging
import sys
from typing import Union

import structlog


def configure_logging(level: Union[int, str] = "INFO", json_output: bool = False) -> None:
    """
    Configure structlog + stdlib logging for factory_secrets.

    Args:
        level: Root log level (name or number)
        json_output: Render JSON lines instead of the console format
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level!r}")

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))  # structlog handles formatting

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if getattr(existing, "_factory_secrets", False):
            root_logger.removeHandler(existing)
    handler._factory_secrets = True
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
