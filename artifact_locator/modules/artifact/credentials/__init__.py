from .resolver import CachedOutcome, CredentialCache, CredentialResolver
from .secret_store import (
    DirectorySecretStore,
    InMemorySecretStore,
    LookupStatus,
    SecretLookup,
    SecretStore,
)

__all__ = [
    "CachedOutcome",
    "CredentialCache",
    "CredentialResolver",
    "DirectorySecretStore",
    "InMemorySecretStore",
    "LookupStatus",
    "SecretLookup",
    "SecretStore",
]
