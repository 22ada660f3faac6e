"""Change classification: does this event deserve a notification?

Creation always notifies the internal team, and the client too when an
address is on file. Updates notify the client only when ``status`` changed;
edits to any other field are ignored.
"""

import logging
from typing import Mapping, Optional

from project_notifier.domain.models import Snapshot
from project_notifier.extraction.fields import get_field, is_blank
from project_notifier.logging import get_logger

from .models import Decision, MessageRole

logger = get_logger(__name__, component="classifier")


def _status(snapshot: Snapshot) -> str:
    # Missing, None and "" all mean "no status yet"
    value = get_field(snapshot, "status", "")
    return value if isinstance(value, str) else str(value)


def _has_email(snapshot: Snapshot) -> bool:
    value = get_field(snapshot, "email")
    return isinstance(value, str) and not is_blank(value)


class ChangeClassifier:
    """Gate for the notification pipeline."""

    def __init__(self, logger_instance: Optional[logging.Logger] = None):
        self.logger = logger_instance or logger

    def on_create(self, after: Optional[Snapshot]) -> Decision:
        """Classify a creation event.

        Returns:
            Skip when the snapshot is missing, otherwise INTERNAL_NEW plus
            CLIENT_CONFIRMATION when ``after.email`` is set
        """
        if not isinstance(after, Mapping):
            return self._skip("missing_snapshot", "Created event carried no snapshot")

        if _has_email(after):
            return Decision.notify(
                MessageRole.INTERNAL_NEW, MessageRole.CLIENT_CONFIRMATION, reason="created"
            )

        self.logger.info(
            "No client email on new request, sending internal notification only",
            extra={"event": "notification.client.skipped", "reason": "missing_client_email"},
        )
        return Decision.notify(MessageRole.INTERNAL_NEW, reason="created")

    def on_update(self, before: Optional[Snapshot], after: Optional[Snapshot]) -> Decision:
        """Classify an update event.

        Notifies only when ``status`` differs between the snapshots and the
        updated record has a client email.
        """
        if not isinstance(after, Mapping):
            return self._skip("missing_snapshot", "Updated event carried no after-snapshot")

        previous = _status(before if isinstance(before, Mapping) else {})
        current = _status(after)
        if previous == current:
            return self._skip("status_unchanged", "Status did not change, skipping")

        if not _has_email(after):
            return self._skip("missing_client_email", "Missing client email, skipping")

        return Decision.notify(
            MessageRole.CLIENT_STATUS_CHANGE, reason=f"status_changed:{previous or '-'}->{current or '-'}"
        )

    def _skip(self, reason: str, message: str) -> Decision:
        self.logger.info(message, extra={"event": "notification.skip", "reason": reason})
        return Decision.skip(reason)


_default_classifier = ChangeClassifier()


def on_create(after: Optional[Snapshot]) -> Decision:
    """Module-level shortcut for ``ChangeClassifier().on_create``."""
    return _default_classifier.on_create(after)


def on_update(before: Optional[Snapshot], after: Optional[Snapshot]) -> Decision:
    """Module-level shortcut for ``ChangeClassifier().on_update``."""
    return _default_classifier.on_update(before, after)
