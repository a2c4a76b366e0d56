"""Remote repository contracts and the Nexus implementation."""

from .base import RemoteRepository, parse_artifact_info
from .nexus import NexusRemote, effective_ssl_verify

__all__ = ["NexusRemote", "RemoteRepository", "effective_ssl_verify", "parse_artifact_info"]
