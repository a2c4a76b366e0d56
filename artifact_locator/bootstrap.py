"""Service wiring shared by the ASGI app and tests."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from artifact_locator.modules.artifact.credentials import (
    CredentialCache,
    CredentialResolver,
    DirectorySecretStore,
    InMemorySecretStore,
    SecretStore,
)
from artifact_locator.modules.artifact.domain import DeploymentContext
from artifact_locator.modules.artifact.remote import NexusRemote, RemoteRepository
from artifact_locator.modules.artifact.service import ArtifactLocatorService
from .settings import Settings

log = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Owns the process-lifetime credential cache and the services built on it."""

    settings: Settings
    secret_store: Optional[SecretStore] = None
    remote: Optional[RemoteRepository] = None
    credential_cache: CredentialCache = field(init=False)
    credential_resolver: CredentialResolver = field(init=False)
    artifact_service: ArtifactLocatorService = field(init=False)
    default_context: DeploymentContext = field(init=False)

    def __post_init__(self) -> None:
        if self.secret_store is None:
            self.secret_store = self._default_secret_store()
        if self.remote is None:
            self.remote = NexusRemote(timeout=self.settings.nexus_timeout)
        self.credential_cache = CredentialCache()
        self.credential_resolver = CredentialResolver(
            self.secret_store,
            self.credential_cache,
            solo_mode=self.settings.artifact_solo_mode,
        )
        self.artifact_service = ArtifactLocatorService(
            self.credential_resolver,
            self.remote,
            bag_name=self.settings.artifact_data_bag,
        )
        self.default_context = DeploymentContext(environment=self.settings.artifact_environment)

    def _default_secret_store(self) -> SecretStore:
        if self.settings.secret_store_path:
            log.info("Loading data bags from %s", self.settings.secret_store_path)
            return DirectorySecretStore(self.settings.secret_store_path)
        log.warning("SECRET_STORE_PATH is not set; no repository credentials will be found")
        return InMemorySecretStore()

    def close(self) -> None:
        if isinstance(self.remote, NexusRemote):
            self.remote.close()
