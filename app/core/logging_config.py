"""
Logging configuration for the API process and the Celery worker.

JSON records in production, plain text in development. A filter on the
console handler masks bearer tokens and JWTs so a stray f-string can never
put a credential in the logs.
"""

import logging
import re
import sys
from typing import Any, Dict
from datetime import datetime, timezone
from pythonjsonlogger import jsonlogger

SERVICE_NAME = "job-board-api"

_SECRET_PATTERNS = [
    (re.compile(r'(Bearer\s+)[A-Za-z0-9\-_.=]+', re.IGNORECASE), r'\1[REDACTED]'),
    (re.compile(r'\beyJ[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+'), '[REDACTED_JWT]'),
    (re.compile(r'("?password"?\s*[:=]\s*)("[^"]*"|\S+)', re.IGNORECASE), r'\1[REDACTED]'),
]


def redact_secrets(message: str) -> str:
    """Mask bearer tokens, JWTs and password assignments in a log message."""
    for pattern, replacement in _SECRET_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


class RedactSecretsFilter(logging.Filter):
    """Rewrites each record's message with redact_secrets() before formatting."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter adding service, timestamp and source fields to every record.
    """

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['service'] = SERVICE_NAME
        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name

        # Source location only for warnings and above
        if record.levelno >= logging.WARNING:
            log_record['module'] = record.module
            log_record['function'] = record.funcName
            log_record['line'] = record.lineno


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Replace the root logger's handlers with a single stdout handler.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: JSON records (production) or plain text (development)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.addFilter(RedactSecretsFilter())

    if json_logs:
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(logger)s %(message)s')
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    console_handler.setFormatter(formatter)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.addHandler(console_handler)

    for name, level in (
        ("sqlalchemy.engine", logging.WARNING),
        ("passlib", logging.ERROR),
        ("boto3", logging.WARNING),
        ("botocore", logging.WARNING),
        ("uvicorn.access", logging.WARNING),  # replaced by the request log in main.py
        ("celery", logging.INFO),
    ):
        logging.getLogger(name).setLevel(level)
