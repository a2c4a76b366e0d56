from pathlib import Path

import pytest

from artifact_locator.modules.artifact.credentials import CredentialResolver, InMemorySecretStore
from artifact_locator.modules.artifact.domain import ArtifactInfo, DeploymentContext, DownloadResult, LocationKind
from artifact_locator.modules.artifact.service import ArtifactLocatorService
from artifact_locator.modules.artifact.util.exceptions import CredentialsNotFoundError

NEXUS_ITEM = {"url": "https://nexus.local", "repository": "releases", "ssl_verify": False}
CTX = DeploymentContext(environment="production")


class RecordingRemote:
    def __init__(self):
        self.pulls = []

    def get_artifact_info(self, coordinate, credentials):
        return ArtifactInfo(version="4.2.0", sha1="feed")

    def pull_artifact(self, coordinate, destination_dir, credentials, ssl_verify=None):
        self.pulls.append((coordinate, destination_dir, credentials.repository, ssl_verify))
        return DownloadResult(
            file_name="widget-4.2.0.tgz",
            file_path=Path(destination_dir) / "widget-4.2.0.tgz",
            version="4.2.0",
            size=10,
        )


def build_service(items=None, bag_name="artifact"):
    store = InMemorySecretStore(items if items is not None else {(bag_name, "production"): NEXUS_ITEM})
    remote = RecordingRemote()
    return ArtifactLocatorService(CredentialResolver(store), remote, bag_name=bag_name), remote


def test_retrieve_from_nexus_passes_credentials_and_options(tmp_path):
    service, remote = build_service()

    result = service.retrieve_from_nexus(CTX, "com.acme:widget:latest:tgz", tmp_path, ssl_verify=False)

    assert result.version == "4.2.0"
    assert remote.pulls == [("com.acme:widget:latest:tgz", tmp_path, "releases", False)]


def test_facade_operations():
    service, _ = build_service()

    assert service.classify("com.acme:widget:1.0:tgz") is LocationKind.REPOSITORY
    assert service.nexus_config_for(CTX).repository == "releases"
    assert service.get_actual_version(CTX, "com.acme:widget:latest:tgz") == "4.2.0"
    assert service.get_artifact_sha(CTX, "com.acme:widget:1.0:tgz") == "feed"
    assert service.artifact_download_url_for(CTX, "com.acme:widget:1.0:tgz").startswith(
        "https://nexus.local/nexus/service/local/artifact/maven/redirect?g=com.acme"
    )


def test_custom_bag_name():
    service, _ = build_service(bag_name="deploy-secrets")

    assert service.nexus_config_for(CTX).url == "https://nexus.local"


def test_retrieve_without_credentials(tmp_path):
    service, remote = build_service(items={})

    with pytest.raises(CredentialsNotFoundError):
        service.retrieve_from_nexus(CTX, "com.acme:widget:1.0:tgz", tmp_path)
    assert remote.pulls == []
