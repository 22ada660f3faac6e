"""Command-line entry point for the project request notifier.

Startup resolves configuration and credentials once, builds the shared SMTP
client and handler, then replays a change event document through the same
code path the change feed uses.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from dotenv import load_dotenv

from project_notifier.config.credentials import resolve_credentials
from project_notifier.config.environment import EnvironmentConfig
from project_notifier.config.exceptions import ConfigurationError
from project_notifier.config.loader import load_config
from project_notifier.config.models import AppConfig
from project_notifier.domain.events import ChangeEvent, parse_change_event
from project_notifier.domain.models import Credentials
from project_notifier.logging import get_logger
from project_notifier.logging.config import configure_logging
from project_notifier.notifications.dispatcher import Dispatcher
from project_notifier.notifications.service import NotificationHandler
from project_notifier.notifications.smtp_client import SMTPClient
from project_notifier.notifications.templates import TemplateRenderer

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level.

    Log level priority: CLI > LOG_LEVEL environment variable > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    return app_config, env_config


def build_handler(
    app_config: AppConfig,
    credentials: Credentials,
    smtp_factory: Optional[Callable] = None,
    smtp_ssl_factory: Optional[Callable] = None,
) -> NotificationHandler:
    """Wire the long-lived notification components for this process."""
    smtp_client = SMTPClient(
        app_config.smtp,
        credentials,
        smtp_factory=smtp_factory,
        smtp_ssl_factory=smtp_ssl_factory,
    )
    renderer = TemplateRenderer(credentials, sender=app_config.sender)
    return NotificationHandler(renderer=renderer, dispatcher=Dispatcher(smtp_client))


def read_event(source: str) -> ChangeEvent:
    """Read a change event document from a file path, or stdin for ``-``.

    Raises:
        ValueError: If the document is not valid JSON or not a known event
    """
    try:
        if source == "-":
            document = json.load(sys.stdin)
        else:
            with open(source, "r", encoding="utf-8") as f:
                document = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Change event is not valid JSON: {e}") from e
    except OSError as e:
        raise ValueError(f"Could not read change event from {source}: {e}") from e

    return parse_change_event(document)


def describe_credentials(credentials: Credentials) -> str:
    lines = [
        f"sender_user:     {credentials.sender_user or '<unresolved>'}",
        f"sender_pass:     {'<set>' if credentials.sender_pass else '<unresolved>'}",
        f"admin_recipient: {credentials.admin_recipient or '<unresolved>'}",
    ]
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code: 0 when the event was handled (delivery failures are logged,
        not fatal), 1 for configuration or input errors.
    """
    parser = argparse.ArgumentParser(
        description="Project Request Notifier - email notifications for project request changes"
    )
    parser.add_argument(
        "--event",
        help="Path to a change event JSON document, or '-' to read from stdin",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml or config/config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Report which credentials resolved and exit without sending",
    )
    args = parser.parse_args(argv)

    if not args.event and not args.check_config:
        parser.error("one of --event or --check-config is required")

    load_dotenv()

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        credentials = resolve_credentials(config=app_config.credential_namespaces())

        if args.check_config:
            print(describe_credentials(credentials))
            print(f"smtp:            {app_config.smtp.host}:{app_config.smtp.port}")
            return 0

        handler = build_handler(app_config, credentials)
        event = read_event(args.event)

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Input Error: {e}", file=sys.stderr)
        logger.error(str(e), extra={"event": "cli.input.error"})
        return 1

    outcome = handler.handle(event)
    logger.info(
        f"Handled {outcome.trigger} event {outcome.record_id}",
        extra={
            "event": "cli.event.handled",
            "notified": bool(outcome.decision and outcome.decision.should_notify),
            "sent": outcome.sent_count,
            "failed": outcome.failed_count,
        },
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
