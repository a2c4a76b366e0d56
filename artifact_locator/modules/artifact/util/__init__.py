"""Utility modules for the artifact module."""

from .constants import (
    CURRENT_LINK,
    DATA_BAG,
    LATEST,
    LEGACY_DATABAG_ITEM,
    REDIRECT_PATH,
    RESOLVE_PATH,
    WILDCARD_DATABAG_ITEM,
)
from .exceptions import (
    ArtifactError,
    ClassificationAmbiguousError,
    CredentialDecryptionError,
    CredentialsNotFoundError,
    DeployedVersionError,
    InvalidCredentialsError,
    MalformedCoordinateError,
    RemoteMetadataError,
    SslVerifyConflictError,
)

__all__ = [
    "CURRENT_LINK",
    "DATA_BAG",
    "LATEST",
    "LEGACY_DATABAG_ITEM",
    "REDIRECT_PATH",
    "RESOLVE_PATH",
    "WILDCARD_DATABAG_ITEM",
    "ArtifactError",
    "ClassificationAmbiguousError",
    "CredentialDecryptionError",
    "CredentialsNotFoundError",
    "DeployedVersionError",
    "InvalidCredentialsError",
    "MalformedCoordinateError",
    "RemoteMetadataError",
    "SslVerifyConflictError",
]
