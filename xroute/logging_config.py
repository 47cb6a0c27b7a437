"""structlog setup shared by entry points."""

import logging

import structlog


def configure_logging(level: int = logging.INFO) -> None:
    """Configure structlog console output filtered at ``level``."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
