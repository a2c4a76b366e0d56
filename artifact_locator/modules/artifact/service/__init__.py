from .deployed import DeployedVersionInspector
from .manager import ArtifactLocatorService
from .url_builder import UrlBuilder
from .version import VersionResolver

__all__ = ["ArtifactLocatorService", "DeployedVersionInspector", "UrlBuilder", "VersionResolver"]
