"""
Name registry domain - claim/transfer state machine.

This module contains the core business logic of the registry: unique name
claims, per-record ownership transfer, and the bookkeeping counters kept in
step with both.

Registry State
==============

- next_id:        monotonically increasing domain ID allocator (starts at 1)
- records:        domain ID -> DomainRecord (never deleted)
- name_owner:     name -> identity that claimed it (global uniqueness)
- claimed:        domain ID -> claim flag
- holding_count:  identity -> number of domains attributed to it
- total_claimed:  number of successful claims (never decremented)

Bookkeeping Behavior
====================

These behaviors are part of the contract and are kept as-is:

- claim() consumes a domain ID even when it fails with DomainAlreadyOwned,
  leaving a gap in the ID sequence.
- transfer_ownership() toggles claimed[id] instead of clearing it, so a
  second transfer of the same ID sets it back to True.
- transfer_ownership() decrements the outgoing holder's count but does not
  increment the incoming holder's count. Counts may go negative.
- transfer_ownership() on an unknown ID is a successful no-op that still
  emits an owner-changed notification.

Atomicity: every check runs before the first mutation, so a raised
RegistryError leaves the tables untouched (apart from the ID advance above).
"""

import copy
import logging
from dataclasses import replace

from .exceptions import DomainAlreadyOwned, NameAlreadyClaimed, NotAOwner, SameOwner
from .ports import NotificationSink, OfferState
from .records import CallerContext, DomainRecord, RegistrySnapshot

logger = logging.getLogger(__name__)


class Registry:
    """
    Authoritative name -> holder registry.

    Owns all registry tables exclusively. Callers pass their identity
    explicitly with every operation; events go to the injected sink.
    """

    def __init__(self, administrative_owner: str, notifications: NotificationSink) -> None:
        """
        Create an empty registry.

        Args:
            administrative_owner: Identity that deployed the registry
            notifications: Sink receiving name-claimed/owner-changed events
        """
        self._administrative_owner = administrative_owner
        self._notifications = notifications
        self._next_id = 1
        self._total_claimed = 0
        self._records: dict[int, DomainRecord] = {}
        self._name_owner: dict[str, str] = {}
        self._claimed: dict[int, bool] = {}
        self._holding_count: dict[str, int] = {}

    @classmethod
    def from_snapshot(
        cls, snapshot: RegistrySnapshot, notifications: NotificationSink
    ) -> "Registry":
        """Rebuild a registry from previously saved state."""
        registry = cls(snapshot.administrative_owner, notifications)
        registry._next_id = snapshot.next_id
        registry._total_claimed = snapshot.total_claimed
        registry._records = dict(snapshot.records)
        registry._name_owner = dict(snapshot.name_owner)
        registry._claimed = dict(snapshot.claimed)
        registry._holding_count = dict(snapshot.holding_count)
        return registry

    def snapshot(self) -> RegistrySnapshot:
        """Return a detached copy of the full registry state."""
        return RegistrySnapshot(
            administrative_owner=self._administrative_owner,
            next_id=self._next_id,
            total_claimed=self._total_claimed,
            records=copy.copy(self._records),
            name_owner=copy.copy(self._name_owner),
            claimed=copy.copy(self._claimed),
            holding_count=copy.copy(self._holding_count),
        )

    def excerpt(self, domain_ids: list[int], identities: list[str]) -> RegistrySnapshot:
        """
        Return counters plus only the rows keyed by the given IDs and identities.

        Keys with no entry are left out of the excerpt. Cost is proportional
        to the number of keys requested, not to the size of the registry.
        """
        excerpt = RegistrySnapshot(
            administrative_owner=self._administrative_owner,
            next_id=self._next_id,
            total_claimed=self._total_claimed,
        )
        for domain_id in domain_ids:
            record = self._records.get(domain_id)
            if record is not None:
                excerpt.records[domain_id] = record
                excerpt.name_owner[record.name] = self._name_owner[record.name]
            if domain_id in self._claimed:
                excerpt.claimed[domain_id] = self._claimed[domain_id]
        for identity in identities:
            if identity in self._holding_count:
                excerpt.holding_count[identity] = self._holding_count[identity]
        return excerpt

    def revert(
        self, excerpt: RegistrySnapshot, domain_ids: list[int], identities: list[str]
    ) -> None:
        """
        Put the given rows and the counters back to the values in an earlier excerpt.

        The excerpt must have been taken with the same domain_ids and identities.
        Notifications already emitted are not recalled.
        """
        self._next_id = excerpt.next_id
        self._total_claimed = excerpt.total_claimed
        for domain_id in domain_ids:
            current = self._records.get(domain_id)
            if current is not None and current.name not in excerpt.name_owner:
                self._name_owner.pop(current.name, None)
            _restore_entry(self._records, excerpt.records, domain_id)
            _restore_entry(self._claimed, excerpt.claimed, domain_id)
        for identity in identities:
            _restore_entry(self._holding_count, excerpt.holding_count, identity)
        logger.warning("Reverted registry rows %s / %s", domain_ids, identities)

    @property
    def next_id(self) -> int:
        """ID the next claim will be assigned."""
        return self._next_id

    def claim(
        self,
        name: str,
        offer_state: OfferState,
        offer_price: int,
        caller: CallerContext,
    ) -> int:
        """
        Claim a name for the calling identity.

        A fresh domain ID is allocated before any check runs, so a failed
        claim still consumes an ID.

        Args:
            name: Name to claim
            offer_state: Offer status to store with the record
            offer_price: Offer price to store with the record
            caller: Identity invoking the operation

        Returns:
            Domain ID assigned to the new record

        Raises:
            DomainAlreadyOwned: If the name is already held
            NameAlreadyClaimed: If the allocated ID is already flagged as claimed
        """
        domain_id = self._allocate_id()

        if name in self._name_owner:
            logger.warning("Claim rejected: name %r already owned (id %d wasted)", name, domain_id)
            raise DomainAlreadyOwned(name)

        # Unreachable while the allocator is monotonic
        if self._claimed.get(domain_id, False):
            logger.warning("Claim rejected: id %d already claimed", domain_id)
            raise NameAlreadyClaimed(domain_id)

        self._name_owner[name] = caller.identity
        self._records[domain_id] = DomainRecord(
            name=name,
            offer_state=offer_state,
            offer_price=offer_price,
            holder=caller.identity,
        )
        self._claimed[domain_id] = True
        self._total_claimed += 1
        self._holding_count[caller.identity] = self.get_holding_count(caller.identity) + 1

        logger.info("Name %r claimed as id %d by %s", name, domain_id, caller.identity)
        self._notifications.name_claimed(caller.identity)
        return domain_id

    def transfer_ownership(self, domain_id: int, new_holder: str, caller: CallerContext) -> None:
        """
        Hand a domain record over to a new holder.

        Unknown IDs are accepted as a no-op; the owner-changed notification
        is emitted either way.

        Args:
            domain_id: ID of the record to transfer
            new_holder: Identity that will hold the record
            caller: Identity invoking the operation

        Raises:
            NotAOwner: If the caller is not the record's current holder
            SameOwner: If new_holder already holds the record
        """
        record = self._records.get(domain_id)

        if record is not None:
            if record.holder != caller.identity:
                logger.warning(
                    "Transfer of id %d rejected: %s is not the holder", domain_id, caller.identity
                )
                raise NotAOwner(domain_id)
            if record.holder == new_holder:
                logger.warning(
                    "Transfer of id %d rejected: %s already holds it", domain_id, new_holder
                )
                raise SameOwner(domain_id)

            self._holding_count[caller.identity] = self.get_holding_count(caller.identity) - 1
            self._claimed[domain_id] = not self._claimed.get(domain_id, False)
            self._records[domain_id] = replace(record, holder=new_holder)
            logger.info("Id %d transferred from %s to %s", domain_id, caller.identity, new_holder)
        else:
            logger.info("Transfer of unknown id %d treated as no-op", domain_id)

        self._notifications.owner_changed(new_holder)

    def list_owned_domains(self, caller: CallerContext) -> list[DomainRecord]:
        """Return the caller's records in ascending ID order."""
        return [record for _, record in self.owned_domains(caller)]

    def owned_domains(self, caller: CallerContext) -> list[tuple[int, DomainRecord]]:
        """Return (domain ID, record) pairs held by the caller, in ascending ID order."""
        owned = []
        for domain_id in range(0, self._next_id):
            record = self._records.get(domain_id)
            if record is not None and record.holder == caller.identity:
                owned.append((domain_id, record))
        return owned

    def get_record(self, domain_id: int) -> DomainRecord | None:
        return self._records.get(domain_id)

    def get_administrative_owner(self) -> str:
        return self._administrative_owner

    def get_total_claimed(self) -> int:
        return self._total_claimed

    def get_holding_count(self, identity: str) -> int:
        return self._holding_count.get(identity, 0)

    def is_claimed(self, domain_id: int) -> bool:
        return self._claimed.get(domain_id, False)

    def _allocate_id(self) -> int:
        domain_id = self._next_id
        self._next_id += 1
        return domain_id


def _restore_entry(target: dict, source: dict, key) -> None:
    if key in source:
        target[key] = source[key]
    else:
        target.pop(key, None)
