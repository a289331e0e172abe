import logging
import json
import sys
from datetime import datetime
from typing import Any

from review_grid.core.config import get_settings

# Record attributes carried into JSON output when passed through `extra`
CONTEXT_FIELDS = ("operation", "column_id", "reason")


class JsonFormatter(logging.Formatter):
    """
    One JSON object per record. Engine context (operation, column id, reason)
    is lifted to top-level keys so rejected operations can be grepped.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_record[field] = getattr(record, field)
        if hasattr(record, "extra_fields"):
            log_record.update(record.extra_fields)
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def log_rejected(
    logger: logging.Logger, operation: str, reason: str, level: int = logging.DEBUG, **context: Any
):
    """Record an operation that was ignored and left engine state unchanged."""
    logger.log(
        level,
        f"{operation} ignored: {reason}",
        extra={"operation": operation, "reason": reason, "extra_fields": context},
    )


def setup_logger(name: str = "review_grid") -> logging.Logger:
    """
    Package logger. Level and text/json format come from Settings; module
    loggers under `review_grid.` propagate into its single stdout handler.
    """
    settings = get_settings()
    logger = logging.getLogger(name)
    logger.setLevel(settings.LOG_LEVEL.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        if settings.LOG_FORMAT == "json":
            handler.setFormatter(JsonFormatter())
        else:
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)-5s [%(name)s] %(message)s")
            )
        logger.addHandler(handler)

    return logger


logger = setup_logger()
