"""Payload normalization for project request notifications.

Turns a raw snapshot into a ``NotificationPayload``:
1. Resolve identifiers and client fields
2. Build the ``"<source> → <target>"`` language pair
3. Reduce the file field to a display list of bare file names
4. Coerce the rush flag

Each step degrades to ``PLACEHOLDER`` on bad data; ``normalize`` never raises.
"""

from typing import Any, Callable, Iterable, List, Mapping, Optional, TypeVar
from urllib.parse import urlsplit

from project_notifier.domain.models import PLACEHOLDER, NotificationPayload, Snapshot
from project_notifier.extraction.fields import (
    SOURCE_LANGUAGE_FIELDS,
    TARGET_LANGUAGE_FIELDS,
    AbsentFiles,
    FileField,
    ListOfFileObjects,
    ListOfNames,
    SingleName,
    extract_files,
    first_present,
    flatten_text,
    get_field,
    is_blank,
)
from project_notifier.logging import get_logger

logger = get_logger(__name__, component="normalization")

T = TypeVar("T")

GENERIC_FILE_NAME = "file"
LANGUAGE_SEPARATOR = " → "
TRUTHY_TOKENS = frozenset({"true", "yes", "y", "1", "on"})


def normalize(after: Optional[Snapshot], record_id: Optional[str] = None) -> NotificationPayload:
    """
    Build the notification payload for a project request snapshot.

    Args:
        after: Snapshot of the record after the change (may be None)
        record_id: Document id from the change feed, used when ``projectId`` is absent

    Returns:
        NotificationPayload with every display field filled
    """
    snapshot = after if isinstance(after, Mapping) else {}

    client_email = _guarded("client_email", lambda: _text(get_field(snapshot, "email")), None)

    return NotificationPayload(
        project_id=_guarded(
            "project_id",
            lambda: _text(get_field(snapshot, "projectId")) or _text(record_id) or PLACEHOLDER,
            PLACEHOLDER,
        ),
        client_name=_guarded(
            "client_name", lambda: _text(get_field(snapshot, "fullname")) or PLACEHOLDER, PLACEHOLDER
        ),
        client_email=client_email or None,
        language_pair=_guarded(
            "language_pair",
            lambda: language_pair(snapshot),
            f"{PLACEHOLDER}{LANGUAGE_SEPARATOR}{PLACEHOLDER}",
        ),
        file_list=_guarded("file_list", lambda: format_file_list(extract_files(snapshot)), PLACEHOLDER),
        rush=_guarded("rush", lambda: coerce_bool(get_field(snapshot, "rush")), False),
        notes=_guarded("notes", lambda: _text(get_field(snapshot, "notes")) or PLACEHOLDER, PLACEHOLDER),
        new_status=_guarded(
            "new_status", lambda: _text(get_field(snapshot, "status")) or PLACEHOLDER, PLACEHOLDER
        ),
    )


def language_pair(snapshot: Optional[Snapshot]) -> str:
    """Render ``"<source> → <target>"``, joining multi-language sides with ``", "``."""
    source = ", ".join(flatten_text(first_present(snapshot, SOURCE_LANGUAGE_FIELDS)))
    target = ", ".join(flatten_text(first_present(snapshot, TARGET_LANGUAGE_FIELDS)))
    return f"{source or PLACEHOLDER}{LANGUAGE_SEPARATOR}{target or PLACEHOLDER}"


def format_file_list(files: FileField) -> str:
    """Comma-join display names for a file field; ``PLACEHOLDER`` when nothing remains."""
    if isinstance(files, AbsentFiles):
        names: List[str] = []
    elif isinstance(files, SingleName):
        names = [file_name_from_string(files.name)]
    elif isinstance(files, ListOfNames):
        names = [file_name_from_string(name) for name in files.names]
    elif isinstance(files, ListOfFileObjects):
        names = [file_name_from_object(obj) for obj in files.objects]
    else:
        raise TypeError(f"Unsupported file field: {type(files).__name__}")

    return ", ".join(_non_empty(names)) or PLACEHOLDER


def file_name_from_string(value: str) -> str:
    """Last path segment of a name, path or URL (query and fragment ignored)."""
    value = (value or "").strip()
    if not value:
        return ""

    path = value
    if "://" in value:
        parts = urlsplit(value)
        path = parts.path or value

    last = path.rstrip("/").split("/")[-1]
    return last or value


def file_name_from_object(obj: Mapping[str, Any]) -> str:
    """Display name for a structured file entry.

    Preference: ``name``, ``fileName``, last segment of ``path``, last segment
    of ``url``, then a generic placeholder.
    """
    for key in ("name", "fileName"):
        value = obj.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    for key in ("path", "url"):
        value = obj.get(key)
        if isinstance(value, str) and value.strip():
            name = file_name_from_string(value)
            if name:
                return name
    return GENERIC_FILE_NAME


def coerce_bool(value: Any) -> bool:
    """Interpret a loosely-typed flag; strings count only when they spell yes."""
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_TOKENS
    return bool(value)


def _text(value: Any) -> str:
    if is_blank(value) or isinstance(value, (dict, list, tuple)):
        return ""
    return str(value).strip()


def _non_empty(values: Iterable[str]) -> List[str]:
    return [value for value in values if value]


def _guarded(field: str, compute: Callable[[], T], fallback: T) -> T:
    try:
        return compute()
    except Exception as e:
        logger.warning(
            f"Could not normalize field {field}, using placeholder: {e}",
            extra={"event": "normalization.field.fallback", "field": field},
        )
        return fallback
