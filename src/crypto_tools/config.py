"""Runtime configuration: environment overrides and structlog setup."""
import logging
import os
import sys
from typing import Optional

import structlog


LOG_LEVEL_ENV = "CRYPTO_TOOLS_LOG_LEVEL"
LOG_JSON_ENV = "CRYPTO_TOOLS_LOG_JSON"
PASSPHRASE_ENV = "CRYPTO_TOOLS_PASSPHRASE"

DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes")


LOG_LEVEL = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
LOG_JSON = _env_flag(LOG_JSON_ENV)


def _stderr_logger_factory(*args) -> structlog.PrintLogger:
    # Resolved per logger so a redirected sys.stderr is honoured.
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """Configure structlog to write filtered events to stderr.
    Arguments left as None fall back to the environment, then to the defaults."""
    level_name = (level or LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, None)
    if not isinstance(log_level, int):
        raise ValueError(f"Invalid log level: {level_name}")

    if json_logs is None:
        json_logs = LOG_JSON

    if json_logs:
        renderer = structlog.processors.JSONRenderer(indent=2)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )
