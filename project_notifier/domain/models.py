"""Value types shared across the notification pipeline.

- Snapshot: loosely-typed view of one project request at one point in time
- NotificationPayload: render-ready fields derived from a snapshot
- Credentials: sender identity and internal recipient, resolved once per process
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# Record snapshots are owned upstream; the notifier only reads them
Snapshot = Mapping[str, Any]

PLACEHOLDER = "—"


class NotificationPayload(BaseModel):
    """Canonical notification content for one project request.

    Every display field is non-empty: absent data is carried as ``PLACEHOLDER``
    so templates always render the same shape. ``client_email`` is a routing
    address rather than display text and is ``None`` when unknown.
    """

    model_config = ConfigDict(frozen=True)

    project_id: str = Field(PLACEHOLDER, min_length=1)
    client_name: str = Field(PLACEHOLDER, min_length=1)
    client_email: Optional[str] = None
    language_pair: str = Field(f"{PLACEHOLDER} → {PLACEHOLDER}", min_length=1)
    file_list: str = Field(PLACEHOLDER, min_length=1)
    rush: bool = False
    notes: str = Field(PLACEHOLDER, min_length=1)
    new_status: str = Field(PLACEHOLDER, min_length=1)

    @property
    def has_client_name(self) -> bool:
        return self.client_name != PLACEHOLDER


class Credentials(BaseModel):
    """Sender credentials and internal recipient.

    Unresolved values are empty strings; sending is what fails, not construction.
    """

    model_config = ConfigDict(frozen=True)

    sender_user: str = ""
    sender_pass: str = ""
    admin_recipient: str = ""

    def missing(self) -> list:
        """Names of the credentials that did not resolve."""
        return [
            name
            for name in ("sender_user", "sender_pass", "admin_recipient")
            if not getattr(self, name)
        ]

    def __repr__(self) -> str:
        masked = "***" if self.sender_pass else "''"
        return (
            f"Credentials(sender_user={self.sender_user!r}, sender_pass={masked}, "
            f"admin_recipient={self.admin_recipient!r})"
        )

    __str__ = __repr__
