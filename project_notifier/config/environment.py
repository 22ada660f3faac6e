"""Environment variable loading and validation."""

import os
from typing import Mapping, Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Deployment overrides read from the process environment.

    Credentials are not read here: ``EMAIL_USER``/``EMAIL_PASS``/``ADMIN_EMAIL``
    belong to the credential fallback chain in ``config.credentials``.
    """

    def __init__(
        self,
        smtp_host: Optional[str] = None,
        smtp_port: Optional[int] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.log_level = log_level
        self.environment = environment or "local"


def load_environment_config(environ: Optional[Mapping[str, str]] = None) -> EnvironmentConfig:
    """
    Load and validate the optional environment overrides.

    Recognised variables:
    - SMTP_HOST: overrides ``smtp.host``
    - SMTP_PORT: overrides ``smtp.port`` (1-65535)
    - LOG_LEVEL: overrides ``logging.level``
    - ENVIRONMENT: label attached to every log record (default: local)

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    env = os.environ if environ is None else environ
    errors = []

    smtp_host = (env.get("SMTP_HOST") or "").strip() or None
    smtp_port_str = (env.get("SMTP_PORT") or "").strip()
    log_level = (env.get("LOG_LEVEL") or "").strip() or None
    environment = (env.get("ENVIRONMENT") or "").strip() or None

    smtp_port = None
    if smtp_port_str:
        try:
            smtp_port = int(smtp_port_str)
            if not 1 <= smtp_port <= 65535:
                errors.append(f"Invalid SMTP_PORT: {smtp_port}. Must be between 1 and 65535.")
        except ValueError:
            errors.append(f"Invalid SMTP_PORT: '{smtp_port_str}'. Must be a valid integer.")

    if log_level:
        log_level = log_level.upper()
        if log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the values in your .env file",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        smtp_host=smtp_host,
        smtp_port=smtp_port,
        log_level=log_level,
        environment=environment,
    )
