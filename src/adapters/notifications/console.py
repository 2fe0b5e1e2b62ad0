"""
Console notification sink adapter - Implements NotificationSink protocol.

This module provides a console-based implementation of the domain's
notification port, logging registry events for demo purposes.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleNotificationSink:
    """
    Implements NotificationSink protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints events to stdout.
    """

    def name_claimed(self, identity: str) -> None:
        """
        Log a name-claimed event.

        Args:
            identity: Identity that claimed the name
        """
        logger.info("[NAME_CLAIMED] Identity: %s", identity)

    def owner_changed(self, identity: str) -> None:
        """
        Log an owner-changed event.

        Args:
            identity: Identity of the new holder
        """
        logger.info("[OWNER_CHANGED] Identity: %s", identity)
