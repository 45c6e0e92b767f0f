"""Structured logging for Reddit Psychiatrist.

All three surfaces (CLI, JSON API, HTML form) call setup_logging() once at
startup. Library modules never configure logging themselves; they only ask for
a logger, either via get_logger() here or structlog.get_logger() directly.

Every entry is one JSON object per line carrying at least `event`, `level`,
`timestamp` (ISO 8601, UTC) and `logger`, plus whatever keyword context the
caller bound:

    {"event": "analysis_started", "level": "info", "username": "spez", ...}

Example:
    >>> setup_logging()
    >>> get_logger(__name__).info("analysis_started", username="spez")
"""

import logging
import sys
from pathlib import Path
from typing import List

import structlog

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILENAME = "psyche.log"


def _shared_processors() -> List:
    """Processors applied to structlog events and stdlib records alike."""
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        structlog.processors.StackInfoRenderer(),
    ]


def _handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_dir: str = DEFAULT_LOG_DIR,
    log_filename: str = DEFAULT_LOG_FILENAME,
    console_level: int = logging.INFO,
) -> None:
    """Route structlog through stdlib logging and render everything as JSON.

    The file receives every level from DEBUG up; stdout only receives
    `console_level` and above. Calling this again replaces the previous
    handlers.

    Args:
        log_dir: Directory for the log file, created if missing (default: "logs")
        log_filename: Log file name inside log_dir (default: "psyche.log")
        console_level: Minimum level echoed to stdout. The CLI raises this to
            CRITICAL so log lines don't interleave with the printed analysis.
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    processors = _shared_processors()
    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # foreign_pre_chain gives uvicorn/httpx records the same fields as structlog events
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=processors,
    )

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()
    root.addHandler(_handler(
        logging.FileHandler(str(log_path / log_filename), encoding="utf-8"), logging.DEBUG, formatter
    ))
    root.addHandler(_handler(logging.StreamHandler(sys.stdout), console_level, formatter))

    # httpx logs every OpenAI request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str = None):
    """Return a structlog logger, optionally named (typically __name__)."""
    return structlog.get_logger(name)
