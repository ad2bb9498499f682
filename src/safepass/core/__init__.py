# SafePass - Core Module
#
# Shared plumbing used by the vault and the command loop:
# - SQLite connection helper
# - Structured event logging

from .db import connect
from .event_log import (
    EventLogger,
    EventSeverity,
    EventType,
    configure_event_logger,
    get_event_logger,
    log_vault_event,
)

__all__ = [
    "connect",
    # Event Logging
    "EventLogger",
    "EventType",
    "EventSeverity",
    "configure_event_logger",
    "get_event_logger",
    "log_vault_event",
]
