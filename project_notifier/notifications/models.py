"""Data models and exceptions for the notification pipeline."""

from dataclasses import dataclass, field
from typing import List, Optional

from project_notifier.classification.models import Decision, MessageRole


class NotificationError(Exception):
    """Base exception for notification-related errors."""

    pass


class NotificationTemplateError(NotificationError):
    """Raised when a message template cannot be rendered."""

    pass


class SMTPDeliveryError(NotificationError):
    """Raised when the mail transport rejects or fails to submit a message."""

    pass


@dataclass(frozen=True)
class RenderedMessage:
    """A plain-text message ready for submission.

    Attributes:
        role: Template role the message was rendered for
        from_address: Formatted sender, e.g. ``"Rolling Translations <ops@x.com>"``
        to: Recipient address (may be empty when unresolved; sending then fails)
        subject: Single-line subject
        body: Plain-text body
    """

    role: MessageRole
    from_address: str
    to: str
    subject: str
    body: str


@dataclass
class DispatchResult:
    """Outcome of one send attempt."""

    role: MessageRole
    recipient: str
    status: str  # "sent" or "failed"
    error: Optional[str] = None

    def is_success(self) -> bool:
        return self.status == "sent"


@dataclass
class NotificationOutcome:
    """Everything one trigger invocation decided, rendered and sent.

    Attributes:
        record_id: Document id of the triggering record
        trigger: ``created`` or ``updated``
        decision: Classifier decision, None if the handler failed before classifying
        messages: Messages that rendered successfully
        results: One DispatchResult per attempted message
        error: Set when the handler's own fault boundary caught an error
    """

    record_id: str
    trigger: str
    decision: Optional[Decision] = None
    messages: List[RenderedMessage] = field(default_factory=list)
    results: List[DispatchResult] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def sent_count(self) -> int:
        return sum(1 for r in self.results if r.is_success())

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.is_success())
