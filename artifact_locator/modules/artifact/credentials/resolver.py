"""Repository credential resolution with a per-bag, resolve-once cache."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from ..domain import Credentials, DeploymentContext
from ..util.constants import LEGACY_DATABAG_ITEM, WILDCARD_DATABAG_ITEM
from ..util.exceptions import CredentialDecryptionError, CredentialsNotFoundError
from .secret_store import LookupStatus, SecretStore


@dataclass(frozen=True)
class CachedOutcome:
    """Definitive result for a bag: credentials, or ``None`` when every item missed."""

    credentials: Optional[Credentials]
    item_name: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.credentials is not None


class _Flight:
    """A load in progress; callers that arrive meanwhile wait on ``done``."""

    def __init__(self) -> None:
        self.done = threading.Event()
        self.outcome: Optional[CachedOutcome] = None
        self.error: Optional[BaseException] = None


class CredentialCache:
    """Bag name -> resolved outcome, kept for the lifetime of the owner.

    Only one load per bag runs at a time; callers arriving while it runs
    wait for it and share its outcome, including its exception. Different
    bags never wait on each other. Exceptions are handed to the waiters of
    that load but are not stored, so the next call loads again.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, CachedOutcome] = {}
        self._flights: Dict[str, _Flight] = {}
        self._guard = threading.Lock()

    def get(self, bag_name: str) -> Optional[CachedOutcome]:
        return self._entries.get(bag_name)

    def __contains__(self, bag_name: str) -> bool:
        return bag_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_load(self, bag_name: str, loader: Callable[[], CachedOutcome]) -> CachedOutcome:
        with self._guard:
            cached = self._entries.get(bag_name)
            if cached is not None:
                return cached
            flight = self._flights.get(bag_name)
            leader = flight is None
            if leader:
                flight = self._flights[bag_name] = _Flight()

        if not leader:
            flight.done.wait()
            if flight.error is not None:
                raise flight.error
            return flight.outcome

        try:
            outcome = loader()
        except BaseException as exc:
            flight.error = exc
            raise
        else:
            flight.outcome = outcome
            with self._guard:
                self._entries[bag_name] = outcome
            return outcome
        finally:
            with self._guard:
                self._flights.pop(bag_name, None)
            flight.done.set()


class CredentialResolver:
    """Finds Nexus credentials for a node in an encrypted data bag.

    Items are tried in order: the node's environment, ``_wildcard``, then the
    legacy ``nexus`` item. A decryption failure stops the search at once and
    is never cached, so fixing the key takes effect on the next call.
    """

    def __init__(
        self,
        store: SecretStore,
        cache: Optional[CredentialCache] = None,
        *,
        solo_mode: bool = False,
    ) -> None:
        self.store = store
        self.cache = cache if cache is not None else CredentialCache()
        self.solo_mode = solo_mode
        self.log = logging.getLogger(self.__class__.__name__)

    def resolve(self, bag_name: str, context: DeploymentContext) -> Credentials:
        if self.solo_mode:
            return self._load_solo(bag_name)
        outcome = self.cache.get_or_load(bag_name, lambda: self._lookup(bag_name, context))
        if outcome.credentials is None:
            raise CredentialsNotFoundError(bag_name)
        return outcome.credentials

    def candidate_items(self, context: DeploymentContext) -> Tuple[str, ...]:
        items = [WILDCARD_DATABAG_ITEM, LEGACY_DATABAG_ITEM]
        if context.environment:
            items.insert(0, context.environment)
        return tuple(items)

    def _lookup(self, bag_name: str, context: DeploymentContext) -> CachedOutcome:
        for item_name in self.candidate_items(context):
            result = self.store.load(bag_name, item_name)
            if result.status is LookupStatus.FOUND:
                self.log.info("Using repository credentials from data bag item %s/%s", bag_name, item_name)
                return CachedOutcome(Credentials(result.data), item_name)
            if result.status is LookupStatus.DECRYPTION_FAILED:
                self.log.error("Data bag item %s/%s could not be decrypted", bag_name, item_name)
                raise CredentialDecryptionError(bag_name, item_name, result.reason)
            self.log.debug("Data bag item %s/%s not found", bag_name, item_name)
        self.log.warning(
            "No repository credentials in data bag %s for environment=%s",
            bag_name,
            context.environment or "-",
        )
        return CachedOutcome(None)

    def _load_solo(self, bag_name: str) -> Credentials:
        # without a server there are no environments: the wildcard item is the config
        result = self.store.load(bag_name, WILDCARD_DATABAG_ITEM)
        if result.status is LookupStatus.DECRYPTION_FAILED:
            raise CredentialDecryptionError(bag_name, WILDCARD_DATABAG_ITEM, result.reason)
        if result.status is LookupStatus.NOT_FOUND:
            raise CredentialsNotFoundError(bag_name)
        return Credentials(result.data)
