"""Scoped logging context.

Fields bound here (``record_id``, ``trigger``, ``role``...) are merged into
every log record emitted inside the scope. Storage is a ``ContextVar`` so
concurrent trigger invocations never see each other's fields.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("notifier_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields bound in the current scope."""
    return LogContextVar.get().copy()


def push_log_context(**fields) -> Token:
    """Bind ``fields`` on top of the current context and return a reset token."""
    return LogContextVar.set({**LogContextVar.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the context captured by ``token``."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop every bound field. Used by tests."""
    LogContextVar.set({})


class log_context:
    """Context manager binding fields for the duration of a ``with`` block.

    Example:
        >>> with log_context(record_id="abc123", trigger="created"):
        ...     logger.info("Classifying change")
    """

    def __init__(self, **fields):
        self.fields = fields
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
