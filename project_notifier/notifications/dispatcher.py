"""Message dispatch with per-message fault isolation.

Every message gets exactly one send attempt. A failure is logged with its
role, recipient and cause, and the next message is still attempted. Nothing
escapes ``dispatch``: an exception reaching the change feed would make it
redeliver the event and send the client a duplicate.
"""

import logging
from email.message import EmailMessage
from typing import Iterable, List, Optional, Protocol

from project_notifier.logging import get_logger
from project_notifier.logging.context import log_context

from .models import DispatchResult, RenderedMessage
from .smtp_client import build_email_message

logger = get_logger(__name__, component="dispatcher")


class MailTransport(Protocol):
    """Outbound mail contract: return on success, raise on failure."""

    def send(self, message: EmailMessage) -> None: ...


class Dispatcher:
    """Submits rendered messages through a mail transport."""

    def __init__(
        self,
        transport: MailTransport,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize the dispatcher.

        Args:
            transport: Long-lived transport shared across invocations (e.g. SMTPClient)
            logger_instance: Logger instance (uses module logger if None)
        """
        self.transport = transport
        self.logger = logger_instance or logger

    def dispatch(self, messages: Iterable[RenderedMessage]) -> List[DispatchResult]:
        """Attempt to send each message once.

        Returns:
            One DispatchResult per message, in input order. Never raises.
        """
        results = [self.send_one(message) for message in messages]

        sent = sum(1 for r in results if r.is_success())
        failed = len(results) - sent
        if results:
            self.logger.info(
                f"Dispatch complete: {sent} sent, {failed} failed (total: {len(results)})",
                extra={"event": "notification.dispatch.complete", "sent": sent, "failed": failed},
            )
        return results

    def send_one(self, message: RenderedMessage) -> DispatchResult:
        """Send a single message inside its own fault boundary."""
        role = message.role
        with log_context(role=role.value, recipient=message.to or None):
            try:
                email_message = build_email_message(message)
                self.transport.send(email_message)
            except Exception as e:
                error_type = type(e).__name__
                cause = e.__cause__ or e
                self.logger.error(
                    f"Failed to send {role.value} message to {message.to or '<unresolved>'}: {e}",
                    exc_info=True,
                    extra={
                        "event": "notification.send.failure",
                        "error_type": error_type,
                        "root_cause": f"{type(cause).__name__}: {cause}",
                    },
                )
                return DispatchResult(
                    role=role, recipient=message.to, status="failed", error=str(e)
                )

            self.logger.info(
                f"Sent {role.value} message to {email_message['To']}",
                extra={"event": "notification.send.success", "subject": message.subject},
            )
            return DispatchResult(role=role, recipient=message.to, status="sent")
