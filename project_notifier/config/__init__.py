"""Configuration management for the project request notifier."""

from .credentials import CREDENTIAL_SOURCES, resolve_credential, resolve_credentials
from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config
from .models import (
    AppConfig,
    EmailNamespace,
    GmailNamespace,
    LogFormat,
    LoggingConfig,
    LogLevel,
    SenderConfig,
    SmtpConfig,
)

__all__ = [
    # Loaders
    "load_config",
    "load_environment_config",
    "resolve_credentials",
    "resolve_credential",
    "CREDENTIAL_SOURCES",
    # Models
    "AppConfig",
    "EmailNamespace",
    "GmailNamespace",
    "SmtpConfig",
    "SenderConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
