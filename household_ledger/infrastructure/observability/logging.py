"""Structured JSON logging for report runs"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, TextIO

from pythonjsonlogger import jsonlogger

from household_ledger.config import settings


LOG_FORMAT = "%(timestamp)s %(level)s %(name)s %(message)s"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record, stamped with UTC time, level and service"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Route all logging through a single JSON handler (stdout by default)"""
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(CustomJsonFormatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers[:] = [handler]


def log_report(
    household_id: str,
    report: str,
    period: str,
    duration_ms: float,
    **fields: Any,
) -> None:
    """Log structured report outcome for analysis"""
    logging.getLogger("household_ledger.reports").info(
        "Report completed",
        extra={
            "household_id": household_id,
            "report": report,
            "period": period,
            "duration_ms": duration_ms,
            **fields,
        },
    )
