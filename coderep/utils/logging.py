import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import structlog

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"

MB = 1024 * 1024


def _rotating_handler(
    path: Path, level: int, max_mb: int, backups: int
) -> logging.handlers.RotatingFileHandler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_mb * MB, backupCount=backups
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def _structlog_processors(json_output: bool) -> list:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.set_exc_info,
        renderer,
    ]


def setup_logging(
    log_level: str = "INFO", log_to_file: bool = False, logs_dir: str = "logs"
) -> None:
    """Configure stdlib logging and structlog for the whole process.

    Structured events render as JSON when file logging is on and as console
    key=value lines otherwise. Either way they go through the stdlib root
    logger, so one set of handlers sees everything.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (case-insensitive)
        log_to_file: Also write rotating ``app.log`` and ``errors.log``
        logs_dir: Directory for the log files, created on demand
    """
    level = getattr(logging, log_level.upper())

    structlog.configure(
        processors=_structlog_processors(json_output=log_to_file),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(console)

    if not log_to_file:
        return

    directory = Path(logs_dir)
    directory.mkdir(parents=True, exist_ok=True)
    root.addHandler(_rotating_handler(directory / "app.log", logging.INFO, 10, 5))
    root.addHandler(_rotating_handler(directory / "errors.log", logging.ERROR, 5, 10))


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Structured logger routed through the stdlib logger ``name``."""
    return structlog.get_logger(name or "coderep")
