"""Notification adapters - Event sink implementations."""

from .console import ConsoleNotificationSink

__all__ = ["ConsoleNotificationSink"]
