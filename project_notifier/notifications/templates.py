"""Plain-text message rendering using Jinja2.

Each ``MessageRole`` owns a subject template and a body template in the
``email_templates`` package directory, named ``<role>_subject.j2`` and
``<role>_body.txt.j2``.
"""

import logging
from typing import Any, Dict, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from project_notifier.classification.models import MessageRole
from project_notifier.config.models import SenderConfig
from project_notifier.domain.models import PLACEHOLDER, Credentials, NotificationPayload

from .models import NotificationTemplateError, RenderedMessage

logger = logging.getLogger(__name__)

RUSH_LABELS = {True: "YES", False: "NO"}


def build_sender_address(credentials: Credentials, sender: SenderConfig) -> str:
    """Build the From header.

    Uses the resolved sender account, or the configured no-reply address when
    the account is unresolved so a message never goes out without a sender.

    Returns:
        Formatted sender address (e.g., "Rolling Translations <ops@example.com>")
    """
    address = credentials.sender_user or sender.fallback_address
    return f"{sender.display_name} <{address}>"


class TemplateRenderer:
    """Renders role-specific subject and body text from a notification payload.

    Templates are loaded once through the Jinja2 environment cache and reused
    for every event handled by the process.
    """

    def __init__(
        self,
        credentials: Credentials,
        sender: Optional[SenderConfig] = None,
        template_dir: str = "email_templates",
    ):
        """Initialize the renderer.

        Args:
            credentials: Resolved credentials (sender identity and internal recipient)
            sender: Display settings for the From header and sign-off
            template_dir: Directory name within the notifications package
        """
        self.credentials = credentials
        self.sender = sender or SenderConfig()
        self.from_address = build_sender_address(credentials, self.sender)

        # Plain text only: no HTML escaping
        self.env = Environment(
            loader=PackageLoader("project_notifier.notifications", template_dir),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )

        logger.debug(f"Initialized TemplateRenderer with templates from {template_dir}")

    def recipient_for(self, role: MessageRole, payload: NotificationPayload) -> str:
        """Internal messages go to the admin recipient, client messages to the client."""
        if role is MessageRole.INTERNAL_NEW:
            return self.credentials.admin_recipient
        return payload.client_email or ""

    def build_context(self, payload: NotificationPayload) -> Dict[str, Any]:
        """Template variables: payload fields plus display helpers."""
        return {
            **payload.model_dump(),
            "client_email_display": payload.client_email or PLACEHOLDER,
            "greeting_name": payload.client_name if payload.has_client_name else "there",
            "rush_label": RUSH_LABELS[payload.rush],
            "sender_name": self.sender.display_name,
        }

    def render(self, role: MessageRole, payload: NotificationPayload) -> RenderedMessage:
        """Render the message for ``role``.

        Raises:
            NotificationTemplateError: If a template is missing or fails to render
        """
        role = MessageRole(role)
        context = self.build_context(payload)

        try:
            subject_template = self.env.get_template(f"{role.value}_subject.j2")
            body_template = self.env.get_template(f"{role.value}_body.txt.j2")

            subject = " ".join(subject_template.render(context).split())
            body = body_template.render(context).strip()
        except TemplateError as e:
            error_msg = f"Template rendering failed for {role.value}: {e}"
            logger.error(error_msg, exc_info=True)
            raise NotificationTemplateError(error_msg) from e
        except Exception as e:
            error_msg = f"Unexpected error during template rendering for {role.value}: {e}"
            logger.error(error_msg, exc_info=True)
            raise NotificationTemplateError(error_msg) from e

        logger.debug(f"Rendered {role.value} message for project {payload.project_id}")

        return RenderedMessage(
            role=role,
            from_address=self.from_address,
            to=self.recipient_for(role, payload),
            subject=subject,
            body=body,
        )
