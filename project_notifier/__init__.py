"""Email notifications for project request creation and status changes."""

__version__ = "1.0.0"
