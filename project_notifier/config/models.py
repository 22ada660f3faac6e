"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class EmailNamespace(BaseModel):
    """Primary credential namespace (``email.user`` / ``email.pass`` / ``email.admin``)."""

    model_config = ConfigDict(populate_by_name=True)

    user: str = Field("", description="Sender account used to authenticate and as From")
    password: str = Field("", alias="pass", description="Sender account password")
    admin: str = Field("", description="Internal recipient for new-request alerts")


class GmailNamespace(BaseModel):
    """Legacy credential namespace kept for older deployments."""

    email: str = Field("", description="Legacy sender account")
    password: str = Field("", description="Legacy sender password")
    admin: str = Field("", description="Legacy internal recipient")


class SmtpConfig(BaseModel):
    """Mail submission server settings."""

    host: str = Field("smtp.gmail.com", min_length=1, description="SMTP server hostname")
    port: int = Field(465, ge=1, le=65535, description="SMTP server port")
    use_tls: bool = Field(True, description="Use STARTTLS when not on implicit-TLS port 465")
    timeout: float = Field(30.0, gt=0, le=300, description="Connection timeout in seconds")

    @field_validator("host")
    @classmethod
    def strip_host(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("host cannot be empty")
        return stripped


class SenderConfig(BaseModel):
    """Identity shown on outgoing messages."""

    display_name: str = Field("Rolling Translations", min_length=1)
    fallback_address: str = Field(
        "no-reply@rolling-translations.com",
        min_length=3,
        description="From address used when the sender credential is unresolved",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = ConfigDict(use_enum_values=True)


class AppConfig(BaseModel):
    """Root configuration object for the notifier."""

    email: EmailNamespace = Field(default_factory=EmailNamespace)
    gmail: GmailNamespace = Field(default_factory=GmailNamespace)
    smtp: SmtpConfig = Field(default_factory=SmtpConfig)
    sender: SenderConfig = Field(default_factory=SenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def credential_namespaces(self) -> Dict[str, Any]:
        """Nested mapping of the credential namespaces, keyed as in the config file."""
        return {
            "email": self.email.model_dump(by_alias=True),
            "gmail": self.gmail.model_dump(),
        }
