"""Classification outcomes and message roles."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class MessageRole(str, Enum):
    """Who a rendered message is for and which template it uses."""

    INTERNAL_NEW = "internal_new"
    CLIENT_CONFIRMATION = "client_confirmation"
    CLIENT_STATUS_CHANGE = "client_status_change"

    @property
    def is_client_facing(self) -> bool:
        return self is not MessageRole.INTERNAL_NEW


@dataclass(frozen=True)
class Decision:
    """Whether a change event should notify, and which messages to render.

    Attributes:
        should_notify: False when the event is skipped
        roles: Message roles to render, in send order
        reason: Short machine-readable reason, logged with skips
    """

    should_notify: bool
    roles: Tuple[MessageRole, ...] = ()
    reason: str = ""

    @classmethod
    def skip(cls, reason: str) -> "Decision":
        return cls(should_notify=False, roles=(), reason=reason)

    @classmethod
    def notify(cls, *roles: MessageRole, reason: str = "") -> "Decision":
        return cls(should_notify=True, roles=tuple(roles), reason=reason)
