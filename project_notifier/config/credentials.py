"""Sender credential resolution.

Each credential is taken from the first source that provides a non-empty value:

1. explicit runtime parameter
2. environment variable
3. primary configuration namespace (``email.*``)
4. legacy configuration namespace (``gmail.*``)
5. empty string

Resolution happens once at process start. Missing values are logged, not
raised: the notifier stays constructible and delivery fails at send time.
"""

import os
from typing import Any, Mapping, NamedTuple, Optional

from project_notifier.domain.models import Credentials
from project_notifier.extraction.fields import get_field
from project_notifier.logging import get_logger

logger = get_logger(__name__, component="credentials")


class CredentialSource(NamedTuple):
    """Where one credential may be found, in precedence order after the explicit value."""

    env_var: str
    primary_path: str
    legacy_path: str


CREDENTIAL_SOURCES = {
    "sender_user": CredentialSource("EMAIL_USER", "email.user", "gmail.email"),
    "sender_pass": CredentialSource("EMAIL_PASS", "email.pass", "gmail.password"),
    "admin_recipient": CredentialSource("ADMIN_EMAIL", "email.admin", "gmail.admin"),
}


def _clean(value: Any) -> str:
    if value is None or isinstance(value, (dict, list, tuple)):
        return ""
    return str(value).strip()


def resolve_credential(
    name: str,
    explicit: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> str:
    """Resolve a single credential by walking its fallback chain.

    Args:
        name: One of ``sender_user``, ``sender_pass``, ``admin_recipient``
        explicit: Runtime parameters keyed by credential name
        environ: Environment mapping (defaults to ``os.environ``)
        config: Nested configuration mapping holding the ``email``/``gmail`` namespaces

    Returns:
        The first non-empty value, or ``""``
    """
    source = CREDENTIAL_SOURCES[name]
    env = os.environ if environ is None else environ

    candidates = (
        (explicit or {}).get(name),
        env.get(source.env_var),
        get_field(config, source.primary_path),
        get_field(config, source.legacy_path),
    )
    for candidate in candidates:
        value = _clean(candidate)
        if value:
            return value
    return ""


def resolve_credentials(
    explicit: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> Credentials:
    """
    Resolve sender user, sender password and internal recipient.

    Logs a single warning naming every credential left empty. Never raises.

    Example:
        >>> creds = resolve_credentials(environ={"EMAIL_USER": "ops@x.com"}, config={})
        >>> creds.sender_user
        'ops@x.com'
    """
    credentials = Credentials(
        **{
            name: resolve_credential(name, explicit=explicit, environ=environ, config=config)
            for name in CREDENTIAL_SOURCES
        }
    )

    missing = credentials.missing()
    if missing:
        hints = [CREDENTIAL_SOURCES[name] for name in missing]
        logger.warning(
            f"Email credentials not fully set: {', '.join(missing)}. "
            f"Provide {', '.join(h.env_var for h in hints)} or set "
            f"{', '.join(h.primary_path for h in hints)} in the configuration file",
            extra={"event": "credentials.unresolved", "missing": missing},
        )
    else:
        logger.info(
            f"Mail credentials loaded for user: {credentials.sender_user}",
            extra={"event": "credentials.resolved", "sender_user": credentials.sender_user},
        )

    return credentials
