"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic of the name registry:
unique name claims, ownership transfer, and holder bookkeeping. It defines
its own port interfaces for infrastructure abstraction, ensuring true
hexagonal architecture decoupling.
"""

from .exceptions import (
    CallerIsNotOwner,
    DomainAlreadyOwned,
    NameAlreadyClaimed,
    NameAlreadyExists,
    NotAOwner,
    RegistryError,
    SameOwner,
)
from .ports import NotificationSink, OfferState, RegistryRepository
from .records import CallerContext, DomainRecord, RegistrySnapshot
from .registry import Registry
from .service import RegistryService

__all__ = [
    "CallerContext",
    "CallerIsNotOwner",
    "DomainAlreadyOwned",
    "DomainRecord",
    "NameAlreadyClaimed",
    "NameAlreadyExists",
    "NotAOwner",
    "NotificationSink",
    "OfferState",
    "Registry",
    "RegistryError",
    "RegistryRepository",
    "RegistryService",
    "RegistrySnapshot",
    "SameOwner",
]
