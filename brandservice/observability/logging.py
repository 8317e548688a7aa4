"""
Structured logging for observability
Logs in JSON format. The stdio transport owns stdout, so the console
handler writes to stderr.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO
from contextvars import ContextVar
import uuid

# Context variable for request ID
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

_STANDARD_ATTRS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs', 'message',
    'pathname', 'process', 'processName', 'relativeCreated', 'thread',
    'threadName', 'exc_info', 'exc_text', 'stack_info', 'getMessage',
    'taskName'
}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = request_id_var.get()
        if request_id:
            log_data["request_id"] = request_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Fields passed through `extra=` land on the record as attributes
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith('_'):
                log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None, stream: Optional[TextIO] = None):
    """
    Setup structured logging

    Args:
        level: Logging level (INFO, DEBUG, WARNING, ERROR)
        log_file: Optional path to log file. If provided, logs will also be written to file.
        stream: Console stream, stderr when omitted
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance"""
    return logging.getLogger(name)


def set_request_id(request_id: str):
    """Set request ID in context"""
    request_id_var.set(request_id)


def get_request_id() -> Optional[str]:
    """Get current request ID"""
    return request_id_var.get()


def generate_request_id() -> str:
    """Generate a new request ID"""
    return str(uuid.uuid4())
