"""SMTP transport for outgoing notifications.

A single ``SMTPClient`` is built at startup with the resolved credentials
and reused by every trigger invocation. It holds no connection between
sends, so concurrent invocations never share mutable state.
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Callable, Optional

from email_validator import EmailNotValidError, validate_email

from project_notifier.config.models import SmtpConfig
from project_notifier.domain.models import Credentials

from .models import RenderedMessage, SMTPDeliveryError

logger = logging.getLogger(__name__)

IMPLICIT_TLS_PORT = 465


class SMTPClient:
    """Wrapper around smtplib implementing the ``send(message)`` transport contract.

    Handles TLS/SSL negotiation, authentication and connection cleanup.
    Factories are injectable so tests never open sockets.
    """

    def __init__(
        self,
        settings: SmtpConfig,
        credentials: Credentials,
        smtp_factory: Optional[Callable] = None,
        smtp_ssl_factory: Optional[Callable] = None,
    ):
        """Initialize the client.

        Args:
            settings: Host, port, TLS and timeout settings
            credentials: Resolved credentials; login is skipped when user or password is empty
            smtp_factory: Factory for plain SMTP connections (for mocking)
            smtp_ssl_factory: Factory for implicit-TLS connections (for mocking)
        """
        self.settings = settings
        self.credentials = credentials
        self.smtp_factory = smtp_factory or smtplib.SMTP
        self.smtp_ssl_factory = smtp_ssl_factory or smtplib.SMTP_SSL

    def send(self, message: EmailMessage) -> None:
        """Submit one message.

        Raises:
            SMTPDeliveryError: If connecting, authenticating or sending fails
        """
        host, port = self.settings.host, self.settings.port
        smtp = None
        try:
            if port == IMPLICIT_TLS_PORT:
                logger.debug(f"Connecting to {host}:{port} with implicit TLS")
                smtp = self.smtp_ssl_factory(
                    host, port, timeout=self.settings.timeout, context=ssl.create_default_context()
                )
            else:
                logger.debug(f"Connecting to {host}:{port}")
                smtp = self.smtp_factory(host, port, timeout=self.settings.timeout)
                if self.settings.use_tls:
                    logger.debug("Upgrading connection with STARTTLS")
                    smtp.starttls(context=ssl.create_default_context())

            if self.credentials.sender_user and self.credentials.sender_pass:
                logger.debug(f"Authenticating as {self.credentials.sender_user}")
                smtp.login(self.credentials.sender_user, self.credentials.sender_pass)
            else:
                logger.debug("No authentication credentials resolved, sending without login")

            smtp.send_message(message)
            logger.debug(f"Message sent to {message['To']}")

        except smtplib.SMTPException as e:
            raise SMTPDeliveryError(f"SMTP error during message delivery: {e}") from e
        except OSError as e:
            raise SMTPDeliveryError(f"Network error during SMTP connection: {e}") from e
        finally:
            if smtp is not None:
                try:
                    smtp.quit()
                except (smtplib.SMTPException, OSError) as e:
                    logger.warning(f"Error closing SMTP connection: {e}")


def validate_recipient(address: str) -> str:
    """Validate a single recipient address and return its normalized form.

    Raises:
        ValueError: If the address is empty or malformed
    """
    address = (address or "").strip()
    if not address:
        raise ValueError("Recipient address is empty")
    try:
        return validate_email(address, check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise ValueError(f"Invalid recipient address '{address}': {e}") from e


def build_email_message(rendered: RenderedMessage) -> EmailMessage:
    """Convert a rendered message into a plain-text ``EmailMessage``.

    Raises:
        ValueError: If the recipient address is missing or invalid
    """
    message = EmailMessage()
    message["Subject"] = rendered.subject
    message["From"] = rendered.from_address
    message["To"] = validate_recipient(rendered.to)
    message.set_content(rendered.body)
    return message
