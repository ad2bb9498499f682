# SafePass - Event Log
#
# Structured JSON logging of vault activity (key creation, service
# create/reveal/delete, clipboard scrubs, failed operations).
#
# Never pass passwords, tokens or key material in `details`.
# Service names and usernames are fine.

import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

import structlog


class EventType(str, Enum):
    """Kinds of events the vault records."""

    KEY_CREATED = "key.created"

    SERVICE_CREATED = "service.created"
    SERVICE_REVEALED = "service.revealed"
    SERVICE_REVEAL_FAILED = "service.reveal_failed"
    SERVICES_DELETED = "services.deleted"

    CLIPBOARD_SCRUBBED = "clipboard.scrubbed"
    OPERATION_FAILED = "operation.failed"

    SYSTEM_START = "system.start"
    SYSTEM_STOP = "system.stop"


class EventSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    def to_log_level(self) -> int:
        """Map severity to the stdlib logging level."""
        level_map = {
            EventSeverity.INFO: logging.INFO,
            EventSeverity.WARNING: logging.WARNING,
            EventSeverity.ERROR: logging.ERROR,
        }
        return level_map[self]


class EventLogger:
    """
    Structured logger for vault events.

    Features:
    - JSON lines via structlog
    - One file per day under log_dir
    - Automatic timestamp and event ID
    """

    LOGGER_NAME = "safepass.events"

    def __init__(self, log_dir: Optional[Path] = None):
        """
        Initialize event logger.

        Args:
            log_dir: Directory for log files (default: ~/.safepass/logs)
        """
        self.log_dir = Path(log_dir) if log_dir else Path.home() / ".safepass" / "logs"
        self.log_dir.mkdir(parents=True, exist_ok=True)

        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer()
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=False,
        )

        self.log_file = self._setup_file_handler()
        self.logger = structlog.get_logger(self.LOGGER_NAME)

    def _setup_file_handler(self) -> Path:
        """Attach a daily file handler to the events logger (not root).

        Keeping it off the root logger stops the JSON lines from leaking
        into the terminal through whatever handlers the host configured.
        """
        today = datetime.now().strftime("%Y-%m-%d")
        log_file = self.log_dir / f"safepass_{today}.log"

        stdlib_logger = logging.getLogger(self.LOGGER_NAME)
        for handler in list(stdlib_logger.handlers):
            stdlib_logger.removeHandler(handler)
            handler.close()

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter('%(message)s'))  # structlog formats

        stdlib_logger.addHandler(file_handler)
        stdlib_logger.setLevel(logging.INFO)
        stdlib_logger.propagate = False
        return log_file

    def log_event(
        self,
        event_type: EventType,
        severity: EventSeverity,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Log a vault event.

        Args:
            event_type: Type of event (from EventType enum)
            severity: Severity level (from EventSeverity enum)
            message: Human-readable event description
            details: Additional event details (never secrets)

        Returns:
            str: Event ID (UUID) for reference
        """
        event_id = str(uuid4())

        event_data = {
            "event_id": event_id,
            "event_type": event_type.value,
            "severity": severity.value,
            "message": message,
            "details": details or {},
        }

        self.logger.log(severity.to_log_level(), "vault_event", **event_data)

        return event_id

    def close(self):
        """Detach and close the file handler."""
        stdlib_logger = logging.getLogger(self.LOGGER_NAME)
        for handler in list(stdlib_logger.handlers):
            stdlib_logger.removeHandler(handler)
            handler.close()


# Global logger instance
_event_logger: Optional[EventLogger] = None


def configure_event_logger(log_dir: Optional[Path] = None) -> EventLogger:
    """Replace the global event logger with one writing to log_dir."""
    global _event_logger
    if _event_logger is not None:
        _event_logger.close()
    _event_logger = EventLogger(log_dir=log_dir)
    return _event_logger


def get_event_logger() -> EventLogger:
    """Get global event logger (singleton pattern)."""
    global _event_logger
    if _event_logger is None:
        _event_logger = EventLogger()
    return _event_logger


def log_vault_event(
    event_type: EventType,
    severity: EventSeverity,
    message: str,
    **kwargs
) -> str:
    """
    Convenience function for logging vault events.

    Usage:
        log_vault_event(
            EventType.SERVICE_CREATED,
            EventSeverity.INFO,
            "Service created",
            details={"name": "github", "username": "bob"}
        )
    """
    return get_event_logger().log_event(event_type, severity, message, **kwargs)
