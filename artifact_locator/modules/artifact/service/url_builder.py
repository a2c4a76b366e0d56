"""Build Nexus redirect URLs that download an artifact directly."""

from __future__ import annotations

from ..credentials import CredentialResolver
from ..domain import Coordinate, DeploymentContext
from ..util.constants import DATA_BAG, REDIRECT_PATH
from ..util.urls import service_url


class UrlBuilder:
    def __init__(self, credentials: CredentialResolver, bag_name: str = DATA_BAG) -> None:
        self.credentials = credentials
        self.bag_name = bag_name

    def build_download_url(self, context: DeploymentContext, raw_location: str) -> str:
        """Return the redirect URL for ``raw_location``.

        Example::

            builder.build_download_url(ctx, "com.myartifact:my-artifact:1.0.1:tgz")
            # http://my-nexus:8081/nexus/service/local/artifact/maven/redirect?g=com.myartifact&a=my-artifact&v=1.0.1&e=tgz&r=my_repo
        """
        credentials = self.credentials.resolve(self.bag_name, context)
        coordinate = Coordinate.parse(raw_location)
        query = [
            ("g", coordinate.group_id),
            ("a", coordinate.artifact_id),
            ("v", coordinate.version),
            ("e", coordinate.extension),
            ("r", credentials.repository),
        ]
        return service_url(credentials.url, REDIRECT_PATH, query)
