"""Notification pipeline for project request changes.

- NotificationHandler: entry point for created/updated change events
- TemplateRenderer: Jinja2 plain-text rendering per message role
- Dispatcher: one fault-contained send attempt per message
- SMTPClient: smtplib transport with TLS/SSL support
"""

from .dispatcher import Dispatcher, MailTransport
from .models import (
    DispatchResult,
    NotificationError,
    NotificationOutcome,
    NotificationTemplateError,
    RenderedMessage,
    SMTPDeliveryError,
)
from .service import NotificationHandler
from .smtp_client import SMTPClient, build_email_message, validate_recipient
from .templates import TemplateRenderer, build_sender_address

__all__ = [
    # Entry point
    "NotificationHandler",
    # Components
    "TemplateRenderer",
    "Dispatcher",
    "MailTransport",
    "SMTPClient",
    # Models and results
    "RenderedMessage",
    "DispatchResult",
    "NotificationOutcome",
    # Exceptions
    "NotificationError",
    "NotificationTemplateError",
    "SMTPDeliveryError",
    # Utilities
    "build_email_message",
    "build_sender_address",
    "validate_recipient",
]
