"""Logging configuration for the Feed API."""

import json
import logging
import logging.config

from feed_api.config import Settings

# SDK loggers that are chatty at INFO (credential lookups, connection pools)
QUIET_LOGGERS = ("boto3", "botocore", "urllib3", "google.auth", "aiosqlite")


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shippers in production."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def build_logging_config(settings: Settings) -> dict:
    """Build a ``logging.config.dictConfig`` mapping for the environment."""
    formatter = "json" if settings.env == "prod" else "console"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JsonFormatter},
            "console": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": formatter,
            },
        },
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
        "root": {"handlers": ["stdout"], "level": settings.log_level},
    }


def setup_logging(settings: Settings) -> None:
    """Install the stdout handler on the root logger."""
    logging.config.dictConfig(build_logging_config(settings))
