"""
Structured logging for document generation.
Provides JSON/text formatters and a document lifecycle logger.
"""
import json
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from facturacr.core.config import settings


class LogLevel(str, Enum):
    """Log levels for structured logging"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogCategory(str, Enum):
    """Log categories for filtering and analysis"""
    DOCUMENT_LIFECYCLE = "document_lifecycle"


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        message = record.getMessage()
        if message.startswith('{') and message.endswith('}'):
            # Already JSON formatted
            return message

        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class StructuredFormatter(logging.Formatter):
    """Structured text formatter for human-readable logs"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> logging.Logger:
    """
    Configure the package root logger.

    Args:
        level: Log level name (defaults to settings.LOG_LEVEL)
        log_format: "json" or "text" (defaults to settings.LOG_FORMAT)

    Returns:
        The configured "facturacr" logger
    """
    logger = logging.getLogger("facturacr")

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if (log_format or settings.LOG_FORMAT).lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(StructuredFormatter())

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper()))
    return logger


class DocumentLogger:
    """
    Emits structured document lifecycle events on a named logger
    """

    def __init__(self, name: str = "facturacr.documents"):
        self.logger = logging.getLogger(name)

    def log_structured(
        self,
        level: LogLevel,
        category: LogCategory,
        message: str,
        **kwargs: Any
    ) -> None:
        """
        Log structured message with metadata

        Args:
            level: Log level
            category: Log category
            message: Log message
            **kwargs: Additional metadata
        """
        log_level = getattr(logging, level.value)
        if not self.logger.isEnabledFor(log_level):
            return

        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level.value,
            "category": category.value,
            "message": message,
            **kwargs
        }
        # Remove None values
        log_data = {k: v for k, v in log_data.items() if v is not None}

        self.logger.log(log_level, json.dumps(log_data, default=str))

    def log_document_event(
        self,
        event_type: str,
        document_type: Optional[str] = None,
        document_key: Optional[str] = None,
        consecutive_number: Optional[str] = None,
        field_errors: Optional[dict] = None,
        error_message: Optional[str] = None
    ) -> None:
        """Log a document lifecycle event"""
        if error_message:
            level = LogLevel.CRITICAL
        elif field_errors:
            level = LogLevel.WARNING
        else:
            level = LogLevel.DEBUG

        self.log_structured(
            level=level,
            category=LogCategory.DOCUMENT_LIFECYCLE,
            message=f"Document {event_type}",
            event_type=event_type,
            document_type=document_type,
            document_key=document_key,
            consecutive_number=consecutive_number,
            field_errors=field_errors,
            error_message=error_message
        )


# Global document logger instance
document_logger = DocumentLogger()
