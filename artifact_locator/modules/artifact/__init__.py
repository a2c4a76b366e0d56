"""Artifact module exports."""

from .controller import router as artifact_router
from .service import ArtifactLocatorService

__all__ = ["ArtifactLocatorService", "artifact_router"]
