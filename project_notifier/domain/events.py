"""Change events delivered by the document-store change feed."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .models import Snapshot


@dataclass(frozen=True)
class CreatedEvent:
    """A project request document was created.

    Attributes:
        record_id: Document id assigned by the feed (path parameter)
        after: Snapshot of the new document, or None for a malformed event
    """

    record_id: str
    after: Optional[Snapshot]

    trigger = "created"


@dataclass(frozen=True)
class UpdatedEvent:
    """A project request document was modified."""

    record_id: str
    before: Optional[Snapshot]
    after: Optional[Snapshot]

    trigger = "updated"


ChangeEvent = Union[CreatedEvent, UpdatedEvent]


def _snapshot_or_none(value: Any) -> Optional[Snapshot]:
    return value if isinstance(value, Mapping) else None


def parse_change_event(document: Mapping[str, Any]) -> ChangeEvent:
    """
    Build a change event from its JSON representation.

    Expected shape: ``{"type": "created"|"updated", "record_id": str,
    "before": {...}, "after": {...}}``. Snapshots that are not objects become
    ``None`` so the classifier can skip them instead of crashing.

    Raises:
        ValueError: If ``type`` is missing or unknown
    """
    if not isinstance(document, Mapping):
        raise ValueError("Change event must be a JSON object")

    event_type = str(document.get("type") or "").strip().lower()
    record_id = str(document.get("record_id") or document.get("id") or "")

    if event_type == "created":
        return CreatedEvent(record_id=record_id, after=_snapshot_or_none(document.get("after")))
    if event_type == "updated":
        return UpdatedEvent(
            record_id=record_id,
            before=_snapshot_or_none(document.get("before")),
            after=_snapshot_or_none(document.get("after")),
        )

    raise ValueError(
        f"Unknown change event type: {document.get('type')!r}. Expected 'created' or 'updated'."
    )
