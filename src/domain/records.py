"""
Registry value types - records, caller context, and state snapshots.
"""

from dataclasses import dataclass, field

from .ports import OfferState


@dataclass(frozen=True)
class CallerContext:
    """Identity of the party invoking a registry operation."""

    identity: str


@dataclass(frozen=True)
class DomainRecord:
    """
    One claimed name.

    Only `holder` is ever rewritten (by a transfer); the other fields are
    fixed at claim time.
    """

    name: str
    offer_state: OfferState
    offer_price: int
    holder: str


@dataclass
class RegistrySnapshot:
    """Complete copy of registry state, used for durable storage."""

    administrative_owner: str
    next_id: int = 1
    total_claimed: int = 0
    records: dict[int, DomainRecord] = field(default_factory=dict)
    name_owner: dict[str, str] = field(default_factory=dict)
    claimed: dict[int, bool] = field(default_factory=dict)
    holding_count: dict[str, int] = field(default_factory=dict)
