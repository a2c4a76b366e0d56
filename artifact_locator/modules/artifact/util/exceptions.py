"""Exceptions raised while resolving artifacts."""

from __future__ import annotations


class ArtifactError(Exception):
    """Base class for all artifact resolution failures."""


class MalformedCoordinateError(ArtifactError):
    """A coordinate string does not have the expected number of fields."""

    def __init__(self, raw: str, expected: str) -> None:
        super().__init__(f"Malformed artifact coordinate {raw!r}: expected {expected}")
        self.raw = raw


class ClassificationAmbiguousError(ArtifactError):
    """A location is neither an http(s) URL nor a repository coordinate."""

    def __init__(self, location: str) -> None:
        super().__init__(f"Location {location!r} is neither a repository coordinate nor an http(s) URL")
        self.location = location


class CredentialsNotFoundError(ArtifactError):
    """No environment, wildcard or legacy item exists in the data bag."""

    def __init__(self, bag_name: str) -> None:
        super().__init__(f"No repository credentials found in data bag {bag_name!r}")
        self.bag_name = bag_name


class CredentialDecryptionError(ArtifactError):
    """A data bag item exists but could not be decrypted or transformed."""

    def __init__(self, bag_name: str, item_name: str, reason: str = "") -> None:
        message = f"Data bag item {bag_name}/{item_name} could not be decrypted"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.bag_name = bag_name
        self.item_name = item_name


class InvalidCredentialsError(ArtifactError):
    """Resolved credentials lack a key required to talk to the repository."""


class SslVerifyConflictError(ArtifactError):
    """An explicit ssl_verify option disagrees with the stored credentials."""


class RemoteMetadataError(ArtifactError):
    """The repository metadata document is missing or repeats a field."""

    def __init__(self, field: str, reason: str = "missing") -> None:
        super().__init__(f"Artifact metadata field {field!r} is {reason}")
        self.field = field


class DeployedVersionError(ArtifactError):
    """The install directory's ``current`` entry is not a symlink."""
