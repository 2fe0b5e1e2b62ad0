"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .records import RegistrySnapshot


class OfferState(str, Enum):
    """
    Offer status stored alongside each domain record.

    Closed set of three states. No business logic is attached to any of
    them; the registry only stores the value supplied at claim time.
    """

    NOT_OFFERING = "NotOffering"
    PRIVATE_OFFERING = "PrivateOffering"
    PUBLIC_OFFERING = "PublicOffering"


class NotificationSink(Protocol):
    """Port interface for domain event delivery."""

    def name_claimed(self, identity: str) -> None:
        """
        Announce that a name was claimed.

        Args:
            identity: Identity that claimed the name
        """
        ...

    def owner_changed(self, identity: str) -> None:
        """
        Announce that a domain record changed hands.

        Args:
            identity: Identity of the new holder
        """
        ...


class RegistryRepository(Protocol):
    """Port interface for durable registry state."""

    def load(self) -> "RegistrySnapshot | None":
        """
        Load the most recently saved registry state.

        Returns:
            Saved snapshot, or None if nothing has been saved yet
        """
        ...

    def save(self, snapshot: "RegistrySnapshot") -> None:
        """
        Upsert the counters and every row carried by the snapshot.

        Rows the snapshot does not carry are left as stored. Implementations
        must apply the snapshot atomically.

        Args:
            snapshot: Full registry state or an excerpt of touched rows
        """
        ...
