"""Tolerant field access on loosely-shaped record snapshots.

Snapshots come from a document store that has accumulated several field
spellings over time (``sourceLang`` vs ``sourceLanguage``, ``files`` vs
``file``) and several file shapes. Nothing in this module raises on missing,
``None`` or oddly-typed data.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from project_notifier.domain.models import Snapshot

SOURCE_LANGUAGE_FIELDS = ("sourceLang", "sourceLanguage")
TARGET_LANGUAGE_FIELDS = ("targetLang", "targetLanguage")
FILE_FIELDS = ("files", "file")


def get_field(snapshot: Optional[Snapshot], path: str, fallback: Any = None) -> Any:
    """
    Return the value at a dotted ``path`` or ``fallback``.

    Mapping segments are looked up by key and numeric segments index into
    lists. A missing segment, a ``None`` along the way or a value that cannot
    be descended into all yield ``fallback``.

    Example:
        >>> get_field({"email": {"user": "ops@x.com"}}, "email.user")
        'ops@x.com'
        >>> get_field({"email": None}, "email.user", "")
        ''
    """
    current: Any = snapshot
    for segment in path.split("."):
        if current is None:
            return fallback
        if isinstance(current, Mapping):
            current = current.get(segment)
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            if not segment.lstrip("-").isdigit():
                return fallback
            index = int(segment)
            if not -len(current) <= index < len(current):
                return fallback
            current = current[index]
        else:
            return fallback
    return fallback if current is None else current


def is_blank(value: Any) -> bool:
    """True for None, empty/whitespace strings and empty collections."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def first_present(snapshot: Optional[Snapshot], names: Iterable[str], fallback: Any = None) -> Any:
    """Return the first non-blank value among ``names``, preferring earlier names."""
    for name in names:
        value = get_field(snapshot, name)
        if not is_blank(value):
            return value
    return fallback


def flatten_text(value: Any) -> List[str]:
    """Turn a string or list of strings into a list of non-empty, stripped strings."""
    if value is None:
        return []
    items = value if isinstance(value, (list, tuple)) else [value]
    flattened = []
    for item in items:
        if item is None or isinstance(item, (dict, list, tuple)):
            continue
        text = str(item).strip()
        if text:
            flattened.append(text)
    return flattened


@dataclass(frozen=True)
class AbsentFiles:
    """No ``files``/``file`` field, or an empty one."""


@dataclass(frozen=True)
class SingleName:
    """A bare string: one file name, path or URL."""

    name: str


@dataclass(frozen=True)
class ListOfNames:
    """A list of file names, paths or URLs."""

    names: Tuple[str, ...]


@dataclass(frozen=True)
class ListOfFileObjects:
    """A list of objects carrying ``name``/``fileName``/``path``/``url``.

    Plain strings mixed into such a list are carried as ``{"path": value}``.
    """

    objects: Tuple[Mapping[str, Any], ...]


FileField = Union[AbsentFiles, SingleName, ListOfNames, ListOfFileObjects]


def extract_files(snapshot: Optional[Snapshot]) -> FileField:
    """Classify the snapshot's file field into one of the ``FileField`` shapes."""
    raw = first_present(snapshot, FILE_FIELDS)

    if raw is None:
        return AbsentFiles()
    if isinstance(raw, str):
        return SingleName(raw)
    if isinstance(raw, Mapping):
        return ListOfFileObjects((raw,))
    if not isinstance(raw, (list, tuple)):
        return SingleName(str(raw))

    entries = [entry for entry in raw if not is_blank(entry)]
    if not entries:
        return AbsentFiles()

    if any(isinstance(entry, Mapping) for entry in entries):
        objects = []
        for entry in entries:
            if isinstance(entry, Mapping):
                objects.append(entry)
            elif isinstance(entry, str):
                objects.append({"path": entry})
        return ListOfFileObjects(tuple(objects))

    return ListOfNames(tuple(str(entry) for entry in entries if not isinstance(entry, (list, tuple))))
