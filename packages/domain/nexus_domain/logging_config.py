"""
Logging configuration.

The domain modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves. Hosts (API workers, the maturity job) call
``configure_logging()`` once at startup.

Configuration:
- Development: Human-readable console output
- Production: JSON lines to stdout

Environment variables:
- LOG_FORMAT: "json" or "console" (default: json unless debug)
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO, DEBUG when debug)
"""
import json
import logging
import logging.config
import os
from datetime import datetime, timezone


def get_logging_config(debug: bool = False) -> dict:
    """
    Build a ``logging.config.dictConfig`` dictionary.

    Args:
        debug: Whether running in debug mode

    Returns:
        dictConfig dict
    """
    log_level = os.environ.get("LOG_LEVEL", "DEBUG" if debug else "INFO")
    log_format = os.environ.get("LOG_FORMAT", "console" if debug else "json")

    config = {
        "version": 1,
        "disable_existing_loggers": False,
    }

    if log_format == "json":
        config["formatters"] = {
            "json": {
                "()": "nexus_domain.logging_config.JsonFormatter",
            },
        }
        formatter = "json"
    else:
        config["formatters"] = {
            "verbose": {
                "format": "[{asctime}] {levelname} {name} {message}",
                "style": "{",
            },
        }
        formatter = "verbose"

    config["handlers"] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": formatter,
            "stream": "ext://sys.stdout",
        },
    }

    config["loggers"] = {
        "": {
            "handlers": ["console"],
            "level": log_level,
        },
        "nexus_domain": {
            "handlers": ["console"],
            "level": log_level,
            "propagate": False,
        },
        "nexus_excel": {
            "handlers": ["console"],
            "level": log_level,
            "propagate": False,
        },
    }

    return config


def configure_logging(debug: bool = False) -> None:
    """Apply get_logging_config() to the logging module."""
    logging.config.dictConfig(get_logging_config(debug))


class JsonFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Outputs JSON lines with consistent fields:
    - timestamp: ISO 8601 timestamp (UTC)
    - level: Log level name
    - logger: Logger name
    - message: Log message
    - extra: Any extra fields passed to the logger
    """

    STANDARD_ATTRS = {
        "name", "msg", "args", "levelname", "levelno", "pathname",
        "filename", "module", "lineno", "funcName", "created",
        "msecs", "relativeCreated", "thread", "threadName",
        "processName", "process", "exc_info", "exc_text", "stack_info",
        "message", "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self.STANDARD_ATTRS
        }
        if extras:
            log_entry["extra"] = extras

        # Decimals and dates fall back to str
        return json.dumps(log_entry, default=str)
