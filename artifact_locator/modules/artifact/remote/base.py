"""Contracts for the remote artifact repository."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Protocol

from ..domain import ArtifactInfo, Credentials, DownloadResult
from ..util.exceptions import RemoteMetadataError


class RemoteRepository(Protocol):
    def get_artifact_info(self, coordinate: str, credentials: Credentials) -> ArtifactInfo:
        ...

    def pull_artifact(
        self,
        coordinate: str,
        destination_dir: Path | str,
        credentials: Credentials,
        ssl_verify: Optional[bool] = None,
    ) -> DownloadResult:
        ...


def _single_text(root: ET.Element, tag: str) -> Optional[str]:
    matches = list(root.iter(tag))
    if not matches:
        return None
    if len(matches) > 1:
        raise RemoteMetadataError(tag, "repeated")
    text = (matches[0].text or "").strip()
    return text or None


def parse_artifact_info(document: str | bytes) -> ArtifactInfo:
    """Parse a Nexus ``artifact-resolution`` document.

    Absent fields come back as ``None``; a field present more than once is
    ambiguous and rejected.
    """
    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        raise RemoteMetadataError("artifact-resolution", f"not well-formed ({exc})") from exc
    return ArtifactInfo(
        version=_single_text(root, "version"),
        sha1=_single_text(root, "sha1"),
        group_id=_single_text(root, "groupId"),
        artifact_id=_single_text(root, "artifactId"),
        extension=_single_text(root, "extension"),
        repository_path=_single_text(root, "repositoryPath"),
        snapshot=(_single_text(root, "snapshot") or "").lower() == "true",
    )
