"""Entry point used by deployment tooling to locate artifacts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from ..credentials import CredentialResolver
from ..domain import Credentials, DeploymentContext, DownloadResult, LocationKind, classify
from ..remote import RemoteRepository
from ..util.constants import DATA_BAG
from .deployed import DeployedVersionInspector
from .url_builder import UrlBuilder
from .version import VersionResolver


class ArtifactLocatorService:
    """Wires credential resolution, the remote repository and URL building together."""

    def __init__(
        self,
        credentials: CredentialResolver,
        remote: RemoteRepository,
        *,
        bag_name: str = DATA_BAG,
        inspector: Optional[DeployedVersionInspector] = None,
    ) -> None:
        self.credentials = credentials
        self.remote = remote
        self.bag_name = bag_name
        self.versions = VersionResolver(credentials, remote, bag_name)
        self.urls = UrlBuilder(credentials, bag_name)
        self.inspector = inspector or DeployedVersionInspector()
        self.log = logging.getLogger(self.__class__.__name__)

    def classify(self, location: str) -> LocationKind:
        return classify(location)

    def nexus_config_for(self, context: DeploymentContext) -> Credentials:
        return self.credentials.resolve(self.bag_name, context)

    def get_actual_version(self, context: DeploymentContext, artifact_location: str) -> str:
        return self.versions.resolve_version(context, artifact_location)

    def get_artifact_sha(self, context: DeploymentContext, artifact_location: str) -> str:
        return self.versions.get_artifact_sha(context, artifact_location)

    def artifact_download_url_for(self, context: DeploymentContext, source: str) -> str:
        return self.urls.build_download_url(context, source)

    def retrieve_from_nexus(
        self,
        context: DeploymentContext,
        source: str,
        destination_dir: Path | str,
        ssl_verify: Optional[bool] = None,
    ) -> DownloadResult:
        """Download ``source`` into ``destination_dir`` and describe the written file."""
        credentials = self.nexus_config_for(context)
        result = self.remote.pull_artifact(source, destination_dir, credentials, ssl_verify=ssl_verify)
        self.log.info("Retrieved %s -> %s (%d bytes)", source, result.file_path, result.size)
        return result

    def current_deployed_version(self, install_dir: Path | str) -> Tuple[Optional[str], bool]:
        return self.inspector.current_version(install_dir)
