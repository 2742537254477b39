"""Logging setup for bank-rules.

Rule methods attach the entity they act on through ``extra``. Build it
with ``log_fields``, so a JSON log line carries ``account_number`` or
``transaction_id`` as its own key and not only inside the message.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Record attributes promoted to top-level keys by JsonFormatter
CONTEXT_FIELDS = ("account_number", "transaction_id", "transaction_type", "status", "amount")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure the root logger for bank-rules.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown names
        fall back to INFO.
    format_type : str
        ``"json"`` for one JSON object per line, anything else for the
        pipe-separated text format.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # stdout is reserved for scenario output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("bank_rules").setLevel(log_level)

    # Faker logs locale loading at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


def log_fields(**fields: Any) -> dict[str, Any]:
    """Build an ``extra`` mapping for a log call, dropping ``None`` values.

    Enum values are logged by their ``value``.

    Examples
    --------
    >>> logger.info("Closed account %s", number, extra=log_fields(account_number=number))
    """
    extra = {}
    for name, value in fields.items():
        if name not in CONTEXT_FIELDS:
            raise ValueError(f"Unknown log field: {name}")
        if value is None:
            continue
        extra[name] = getattr(value, "value", value)
    return extra


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra"):
            log_data.update(record.extra)

        # Decimal amounts are written as strings
        return json.dumps(log_data, default=str)
