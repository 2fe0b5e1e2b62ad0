"""
Registry domain service - persistence-aware facade over Registry.

Wires the in-memory Registry to an optional durable repository. Mutating
operations save only the rows they touched (counters, one domain ID, one
identity), so persistence cost does not grow with the registry.

Persistence outcomes:
- Operation succeeds, save succeeds: result returned.
- Operation raises RegistryError: the ID advance is still saved, then the
  domain error is re-raised. A save failure on this path is logged and never
  replaces the domain error.
- Operation succeeds, save fails: the touched rows are reverted in memory
  and the save error is re-raised, so memory and storage keep agreeing.
"""

import contextlib
import logging
from dataclasses import dataclass

from .exceptions import RegistryError
from .ports import OfferState, RegistryRepository
from .records import CallerContext, DomainRecord, RegistrySnapshot
from .registry import Registry

logger = logging.getLogger(__name__)


@dataclass
class RegistryService:
    """
    Domain service for name registry operations.

    Delegates all rule enforcement to the Registry and handles
    persistence of touched rows around mutating calls.
    """

    registry: Registry
    repository: RegistryRepository | None = None

    def claim(
        self,
        name: str,
        offer_state: OfferState,
        offer_price: int,
        caller: CallerContext,
    ) -> int:
        """
        Claim a name and persist the resulting state.

        Returns:
            Domain ID assigned to the new record

        Raises:
            DomainAlreadyOwned: If the name is already held
            NameAlreadyClaimed: If the allocated ID is already flagged as claimed
        """
        domain_ids = [self.registry.next_id]
        identities = [caller.identity]
        before = self.registry.excerpt(domain_ids, identities)

        try:
            domain_id = self.registry.claim(name, offer_state, offer_price, caller)
        except RegistryError:
            with contextlib.suppress(Exception):
                self._persist(domain_ids, identities, before)
            raise

        self._persist(domain_ids, identities, before)
        return domain_id

    def transfer_ownership(self, domain_id: int, new_holder: str, caller: CallerContext) -> None:
        """
        Transfer a domain record and persist the resulting state.

        Raises:
            NotAOwner: If the caller is not the record's current holder
            SameOwner: If new_holder already holds the record
        """
        domain_ids = [domain_id]
        identities = [caller.identity]
        before = self.registry.excerpt(domain_ids, identities)

        # Rejected transfers mutate nothing, so there is nothing to save
        self.registry.transfer_ownership(domain_id, new_holder, caller)
        self._persist(domain_ids, identities, before)

    def list_owned_domains(self, caller: CallerContext) -> list[DomainRecord]:
        return self.registry.list_owned_domains(caller)

    def owned_domains(self, caller: CallerContext) -> list[tuple[int, DomainRecord]]:
        return self.registry.owned_domains(caller)

    def get_administrative_owner(self) -> str:
        return self.registry.get_administrative_owner()

    def get_total_claimed(self) -> int:
        return self.registry.get_total_claimed()

    def get_holding_count(self, identity: str) -> int:
        return self.registry.get_holding_count(identity)

    def is_claimed(self, domain_id: int) -> bool:
        return self.registry.is_claimed(domain_id)

    def _persist(
        self, domain_ids: list[int], identities: list[str], before: RegistrySnapshot
    ) -> None:
        """
        Save the touched rows; on failure revert them in memory and re-raise.
        """
        if self.repository is None:
            return
        try:
            self.repository.save(self.registry.excerpt(domain_ids, identities))
        except Exception:
            logger.exception("Failed to persist registry rows %s / %s", domain_ids, identities)
            self.registry.revert(before, domain_ids, identities)
            raise
