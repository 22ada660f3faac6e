"""Non-fatal checks on the raw configuration document."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Inspect a raw configuration mapping for settings that work but deserve attention.

    Args:
        config_dict: Configuration as parsed from YAML

    Returns:
        List of warning messages (empty when nothing stands out)
    """
    warning_messages = []

    email = config_dict.get("email")
    if isinstance(email, dict) and email.get("pass"):
        warning_messages.append(
            "email.pass is stored in the configuration file; prefer the EMAIL_PASS environment variable"
        )

    gmail = config_dict.get("gmail")
    if isinstance(gmail, dict) and any(gmail.get(key) for key in ("email", "password", "admin")):
        warning_messages.append(
            "The gmail.* namespace is deprecated; move these values under email.user/email.pass/email.admin"
        )

    smtp = config_dict.get("smtp")
    if isinstance(smtp, dict) and smtp.get("use_tls") is False and smtp.get("port", 465) != 465:
        warning_messages.append("smtp.use_tls is disabled; credentials will be sent in clear text")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message through Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
