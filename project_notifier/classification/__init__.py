"""Change classification for project request events."""

from .classifier import ChangeClassifier, on_create, on_update
from .models import Decision, MessageRole

__all__ = [
    "ChangeClassifier",
    "Decision",
    "MessageRole",
    "on_create",
    "on_update",
]
