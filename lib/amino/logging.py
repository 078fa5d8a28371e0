"""Structured logging for the set-top box monitor."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Default logger
_logger: logging.Logger | None = None
_json_mode = False

# Extra record attributes carried into JSON output
_EXTRA_FIELDS = ("device_ip", "command", "field")


def setup_logging(
    level: int = logging.INFO,
    json_output: bool = False,
    log_file: str | None = None,
) -> None:
    """Set up logging configuration.

    Parameters
    ----------
    level : int, optional
        Logging level, by default logging.INFO
    json_output : bool, optional
        Enable JSON output format, by default False
    log_file : str | None, optional
        Log file path, by default None (stdout)
    """
    global _logger, _json_mode

    _json_mode = json_output
    _logger = logging.getLogger("lib.amino")
    _logger.setLevel(level)
    _logger.handlers.clear()

    formatter: logging.Formatter = JsonFormatter() if json_output else TextFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JsonFormatter() if json_output else TextFormatter())
        _logger.addHandler(file_handler)

    _logger.addHandler(handler)


def get_logger() -> logging.Logger:
    """Get the monitor logger.

    Returns
    -------
    logging.Logger
        Logger instance
    """
    global _logger

    if _logger is None:
        setup_logging()

    return _logger


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Parameters
        ----------
        record : logging.LogRecord
            Log record

        Returns
        -------
        str
            JSON-formatted log entry
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class TextFormatter(logging.Formatter):
    """Bracketed text formatter."""

    def __init__(self) -> None:
        """Initialize text formatter."""
        super().__init__(
            fmt="[%(asctime)s] [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text.

        Parameters
        ----------
        record : logging.LogRecord
            Log record

        Returns
        -------
        str
            Text-formatted log entry
        """
        # Prefix a copy so other handlers see the original message
        device_ip = getattr(record, "device_ip", None)
        if device_ip:
            record = logging.makeLogRecord(record.__dict__)
            record.msg = f"[{device_ip}] {record.getMessage()}"
            record.args = None

        return super().format(record)


def _log(level: int, message: str, device_ip: str | None, **kwargs: Any) -> None:
    logger = get_logger()
    extra = kwargs.copy()
    if device_ip:
        extra["device_ip"] = device_ip
    logger.log(level, message, extra=extra)


def log_info(message: str, device_ip: str | None = None, **kwargs: Any) -> None:
    """Log info message.

    Parameters
    ----------
    message : str
        Log message
    device_ip : str | None, optional
        Device IP address, by default None
    **kwargs : Any
        Additional log fields
    """
    _log(logging.INFO, message, device_ip, **kwargs)


def log_debug(message: str, device_ip: str | None = None, **kwargs: Any) -> None:
    """Log debug message."""
    _log(logging.DEBUG, message, device_ip, **kwargs)


def log_error(message: str, device_ip: str | None = None, **kwargs: Any) -> None:
    """Log error message.

    Parameters
    ----------
    message : str
        Log message
    device_ip : str | None, optional
        Device IP address, by default None
    **kwargs : Any
        Additional log fields
    """
    _log(logging.ERROR, message, device_ip, **kwargs)


def log_warn(message: str, device_ip: str | None = None, **kwargs: Any) -> None:
    """Log warning message.

    Parameters
    ----------
    message : str
        Log message
    device_ip : str | None, optional
        Device IP address, by default None
    **kwargs : Any
        Additional log fields
    """
    _log(logging.WARNING, message, device_ip, **kwargs)

