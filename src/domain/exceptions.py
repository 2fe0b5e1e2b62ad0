"""
Domain exceptions - Semantic error types for the name registry.

This module defines domain-specific exceptions that communicate
registry rule violations without leaking infrastructure details.
"""


class RegistryError(Exception):
    """Base class for registry domain errors."""

    pass


class DomainAlreadyOwned(RegistryError):
    """Name is already held by some identity."""

    pass


class NameAlreadyClaimed(RegistryError):
    """Freshly allocated domain ID is already flagged as claimed."""

    pass


class NotAOwner(RegistryError):
    """Caller is not the current holder of the domain record."""

    pass


class SameOwner(RegistryError):
    """Transfer target is already the current holder."""

    pass


class CallerIsNotOwner(RegistryError):
    """Reserved: caller is not the administrative owner. Not raised by any operation."""

    pass


class NameAlreadyExists(RegistryError):
    """Reserved: name already exists. Not raised by any operation."""

    pass
