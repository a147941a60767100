"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from branchwatch.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_assessment(
    request_id: str,
    branch_id: str,
    score: int,
    level: str,
    factor_count: int,
) -> None:
    """Log structured risk assessment outcome"""
    logging.info(
        "Risk assessed",
        extra={
            "request_id": request_id,
            "branch_id": branch_id,
            "step": "risk_assessment",
            "risk_score": score,
            "risk_level": level,
            "factor_count": factor_count,
        },
    )


def log_record_change(
    request_id: str,
    branch_id: str,
    operation: str,
    previous_level: str,
    current_level: str,
) -> None:
    """Log a performance record write and its effect on branch risk"""
    logging.info(
        "Performance record %s",
        operation,
        extra={
            "request_id": request_id,
            "branch_id": branch_id,
            "step": "record_change",
            "operation": operation,
            "previous_risk_level": previous_level,
            "risk_level": current_level,
            "risk_level_changed": previous_level != current_level,
        },
    )
