"""Domain types for project requests, change events and notification content."""

from .events import ChangeEvent, CreatedEvent, UpdatedEvent, parse_change_event
from .models import PLACEHOLDER, Credentials, NotificationPayload, Snapshot

__all__ = [
    "ChangeEvent",
    "CreatedEvent",
    "UpdatedEvent",
    "parse_change_event",
    "Credentials",
    "NotificationPayload",
    "Snapshot",
    "PLACEHOLDER",
]
