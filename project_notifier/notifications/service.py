"""Trigger handlers for project request change events.

``NotificationHandler`` is the entry point the change feed invokes. It runs:
1. Classify the event (skip unless it is notification-worthy)
2. Normalize the after-snapshot into a payload
3. Render one message per role, each render contained on its own
4. Dispatch the rendered messages, each send contained on its own

The whole flow sits inside a fault boundary: the handler logs and returns,
it never raises back to the feed.
"""

import logging
from typing import List, Optional

from project_notifier.classification.classifier import ChangeClassifier
from project_notifier.classification.models import Decision
from project_notifier.domain.events import ChangeEvent, CreatedEvent, UpdatedEvent
from project_notifier.domain.models import NotificationPayload
from project_notifier.logging import get_logger
from project_notifier.logging.context import log_context
from project_notifier.normalization.service import normalize

from .dispatcher import Dispatcher
from .models import NotificationOutcome, RenderedMessage
from .templates import TemplateRenderer

logger = get_logger(__name__, component="notification")


class NotificationHandler:
    """Handles created/updated events for project requests.

    Holds only read-only collaborators built at startup, so one instance can
    serve concurrent invocations.
    """

    def __init__(
        self,
        renderer: TemplateRenderer,
        dispatcher: Dispatcher,
        classifier: Optional[ChangeClassifier] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self.renderer = renderer
        self.dispatcher = dispatcher
        self.classifier = classifier or ChangeClassifier()
        self.logger = logger_instance or logger

    def handle(self, event: ChangeEvent) -> NotificationOutcome:
        """Route an event to the matching handler."""
        if isinstance(event, UpdatedEvent):
            return self.handle_updated(event)
        if isinstance(event, CreatedEvent):
            return self.handle_created(event)

        self.logger.error(
            f"Unsupported change event type: {type(event).__name__}",
            extra={"event": "notification.handler.failure", "error_type": "TypeError"},
        )
        return NotificationOutcome(
            record_id=str(getattr(event, "record_id", "")),
            trigger="unknown",
            error=f"Unsupported change event type: {type(event).__name__}",
        )

    def handle_created(self, event: CreatedEvent) -> NotificationOutcome:
        """Notify the internal team, and the client when possible, about a new request."""
        return self._run(event, lambda: self.classifier.on_create(event.after))

    def handle_updated(self, event: UpdatedEvent) -> NotificationOutcome:
        """Notify the client when the request's status changed."""
        return self._run(event, lambda: self.classifier.on_update(event.before, event.after))

    def _run(self, event: ChangeEvent, classify) -> NotificationOutcome:
        outcome = NotificationOutcome(record_id=event.record_id, trigger=event.trigger)

        with log_context(record_id=event.record_id, trigger=event.trigger):
            try:
                decision: Decision = classify()
                outcome.decision = decision
                if not decision.should_notify:
                    return outcome

                payload = normalize(event.after, record_id=event.record_id)
                outcome.messages = self._render_all(decision, payload)
                outcome.results = self.dispatcher.dispatch(outcome.messages)

            except Exception as e:
                # Never propagates to the change feed
                outcome.error = str(e)
                self.logger.error(
                    f"Notification handler failed for {event.trigger} event {event.record_id}: {e}",
                    exc_info=True,
                    extra={
                        "event": "notification.handler.failure",
                        "error_type": type(e).__name__,
                    },
                )
                return outcome

            self.logger.info(
                f"{event.trigger} event {event.record_id}: "
                f"{outcome.sent_count} sent, {outcome.failed_count} failed",
                extra={
                    "event": "notification.handler.complete",
                    "sent": outcome.sent_count,
                    "failed": outcome.failed_count,
                },
            )
            return outcome

    def _render_all(self, decision: Decision, payload: NotificationPayload) -> List[RenderedMessage]:
        messages = []
        for role in decision.roles:
            try:
                messages.append(self.renderer.render(role, payload))
            except Exception as e:
                self.logger.error(
                    f"Could not render {role.value} message for project {payload.project_id}: {e}",
                    extra={
                        "event": "notification.render.failure",
                        "role": role.value,
                        "error_type": type(e).__name__,
                    },
                )
        return messages
