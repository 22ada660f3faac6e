"""Structured logging helpers shared by every notifier component."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that tags records with a component without hiding call-site extras."""

    def process(self, msg, kwargs):
        # Fields passed at the call site win over the adapter defaults
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Return a logger, wrapped so every record carries ``component`` when given.

    Example:
        >>> logger = get_logger(__name__, component="dispatcher")
        >>> logger.info("Message sent", extra={"event": "notification.send.success"})
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger
