"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from pocket_ledger.config import settings


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


def log_transaction_recorded(
    request_id: str,
    user_id: str,
    transaction_id: str,
    transaction_type: str,
    bills_created: int,
    duration_ms: float,
) -> None:
    """Log structured transaction outcome"""
    logging.info(
        "Transaction recorded",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "transaction_recorded",
            "transaction_id": transaction_id,
            "transaction_type": transaction_type,
            "bills_created": bills_created,
            "duration_ms": duration_ms,
        },
    )


def log_loan_scheduled(user_id: str, loan_id: str, installments: int, frequency: str) -> None:
    logging.info(
        "Loan installments scheduled",
        extra={
            "user_id": user_id,
            "step": "loan_scheduled",
            "loan_id": loan_id,
            "installments": installments,
            "frequency": frequency,
        },
    )
