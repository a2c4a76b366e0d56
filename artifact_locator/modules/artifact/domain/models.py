"""Value objects exchanged between the resolvers and their collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..util.exceptions import InvalidCredentialsError

_FALSE_STRINGS = {"false", "0", "no", "off"}


@dataclass(frozen=True)
class DeploymentContext:
    """The node's view of where it is being deployed."""

    environment: str


@dataclass(frozen=True)
class Credentials:
    """Read-only view over a decrypted data bag item.

    Keys are compared as strings so that items loaded from JSON and from
    Python dictionaries behave the same.
    """

    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized = {str(key): value for key, value in dict(self.values).items()}
        object.__setattr__(self, "values", MappingProxyType(normalized))

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def require(self, key: str) -> str:
        value = self.values.get(key)
        if value is None or value == "":
            raise InvalidCredentialsError(f"Repository credentials are missing {key!r}")
        return str(value)

    @property
    def url(self) -> str:
        return self.require("url")

    @property
    def repository(self) -> str:
        return self.require("repository")

    @property
    def username(self) -> Optional[str]:
        return self.values.get("username")

    @property
    def password(self) -> Optional[str]:
        return self.values.get("password")

    @property
    def ssl_verify(self) -> Optional[bool]:
        """Stored TLS verification flag, or None when the item does not set one."""
        value = self.values.get("ssl_verify")
        if value is None:
            return None
        if isinstance(value, str):
            return value.strip().lower() not in _FALSE_STRINGS
        return bool(value)

    def __repr__(self) -> str:
        # never print passwords or tokens
        return f"Credentials(url={self.values.get('url')!r}, repository={self.values.get('repository')!r})"


@dataclass(frozen=True)
class ArtifactInfo:
    """Typed view of the Nexus ``artifact/maven/resolve`` response."""

    version: Optional[str] = None
    sha1: Optional[str] = None
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    extension: Optional[str] = None
    repository_path: Optional[str] = None
    snapshot: bool = False


@dataclass
class DownloadResult:
    file_name: str
    file_path: Path
    version: str
    size: int = 0
