"""Resolve ``latest`` versions and checksums against the remote repository."""

from __future__ import annotations

import logging

from ..credentials import CredentialResolver
from ..domain import ArtifactInfo, DeploymentContext, extract_version, is_latest
from ..remote import RemoteRepository
from ..util.constants import DATA_BAG
from ..util.exceptions import RemoteMetadataError


class VersionResolver:
    """Turns a coordinate's version field into a concrete version.

    Example::

        resolver.resolve_version(ctx, "com.myartifact:my-artifact:latest:tgz")  # "2.0.5"
        resolver.resolve_version(ctx, "com.myartifact:my-artifact:1.0.1:tgz")   # "1.0.1"
    """

    def __init__(
        self,
        credentials: CredentialResolver,
        remote: RemoteRepository,
        bag_name: str = DATA_BAG,
    ) -> None:
        self.credentials = credentials
        self.remote = remote
        self.bag_name = bag_name
        self.log = logging.getLogger(self.__class__.__name__)

    def resolve_version(self, context: DeploymentContext, raw_location: str) -> str:
        version = extract_version(raw_location)
        if not is_latest(version):
            return version
        resolved = self._metadata_field(context, raw_location, "version")
        self.log.info("Resolved %s to version %s", raw_location, resolved)
        return resolved

    def get_artifact_sha(self, context: DeploymentContext, raw_location: str) -> str:
        """Return the SHA1 checksum Nexus stores for the artifact."""
        extract_version(raw_location)
        return self._metadata_field(context, raw_location, "sha1")

    def artifact_info(self, context: DeploymentContext, raw_location: str) -> ArtifactInfo:
        credentials = self.credentials.resolve(self.bag_name, context)
        return self.remote.get_artifact_info(raw_location, credentials)

    def _metadata_field(self, context: DeploymentContext, raw_location: str, field: str) -> str:
        value = getattr(self.artifact_info(context, raw_location), field)
        if not value:
            raise RemoteMetadataError(field)
        return value
