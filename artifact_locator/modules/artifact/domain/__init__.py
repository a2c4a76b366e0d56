from .coordinate import Coordinate, extract_version, is_latest
from .location import LocationKind, classify, from_http, from_repository
from .models import ArtifactInfo, Credentials, DeploymentContext, DownloadResult

__all__ = [
    "ArtifactInfo",
    "Coordinate",
    "Credentials",
    "DeploymentContext",
    "DownloadResult",
    "LocationKind",
    "classify",
    "extract_version",
    "from_http",
    "from_repository",
    "is_latest",
]
