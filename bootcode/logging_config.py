import logging
import sys

import structlog
from structlog.stdlib import LoggerFactory

# Shared by console and JSON output
BASE_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]


def configure_logging(log_level="WARNING", json_logs=False, force=False):
    """
    Route structlog events through stdlib logging on stderr.

    Args:
        log_level: Name of the minimum level to emit.
        json_logs: Render one JSON object per event instead of console lines.
        force: Reconfigure even if structlog was configured before.
    """
    # Check if already configured
    if structlog.is_configured() and not force:
        return

    # stdout is reserved for reports
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper(), logging.WARNING),
        stream=sys.stderr,
        force=True,
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=BASE_PROCESSORS + [renderer],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    structlog.get_logger("bootcode").debug(
        "Logging configured", log_level=log_level, json_logs=json_logs
    )
