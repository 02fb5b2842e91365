# recipe_api/shared/utils/logging_config.py

"""
Configuração de logging.

Every record carries the correlation id of the request being served (or "-"
outside a request). The id lives in a ContextVar set by
SecurityHeadersMiddleware, so it follows the request across awaits.
"""

import logging
import logging.config
from contextvars import ContextVar
from datetime import datetime, timezone

from pythonjsonlogger.json import JsonFormatter

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="-")

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [cid=%(correlation_id)s]: %(message)s"


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get()
        return True


class CorrelationJsonFormatter(JsonFormatter):
    """One JSON object per line, for log shippers."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["correlation_id"] = getattr(record, "correlation_id", "-")


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "correlation_id": {"()": CorrelationIdFilter},
        },
        "formatters": {
            "text": {"format": TEXT_FORMAT},
            "json": {"()": CorrelationJsonFormatter, "fmt": "%(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json" if json_output else "text",
                "filters": ["correlation_id"],
            },
        },
        "loggers": {
            "recipe_api": {"level": level, "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": "WARNING"},
            "sqlalchemy.engine": {"level": "WARNING"},
        },
        "root": {"level": "WARNING", "handlers": ["console"]},
    })
