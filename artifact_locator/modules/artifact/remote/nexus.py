"""HTTP client for the Nexus 2 ``artifact/maven`` service endpoints."""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import httpx

from ..domain import ArtifactInfo, Credentials, DownloadResult
from ..domain.coordinate import is_latest, split_location
from ..util.constants import REDIRECT_PATH, RESOLVE_PATH
from ..util.exceptions import MalformedCoordinateError, RemoteMetadataError, SslVerifyConflictError
from ..util.urls import service_url
from .base import parse_artifact_info

DEFAULT_EXTENSION = "jar"


def effective_ssl_verify(credentials: Credentials, ssl_verify: Optional[bool] = None) -> bool:
    """Combine a caller's ssl_verify option with the value stored in the credentials."""
    stored = credentials.ssl_verify
    if ssl_verify is not None and stored is not None and ssl_verify != stored:
        raise SslVerifyConflictError(
            f"ssl_verify={ssl_verify} conflicts with ssl_verify={stored} stored for {credentials.get('url')}"
        )
    if ssl_verify is not None:
        return ssl_verify
    return True if stored is None else stored


class NexusRemote:
    """Query and download artifacts from a Nexus repository."""

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = 30) -> None:
        self.timeout = timeout
        self.log = logging.getLogger(self.__class__.__name__)
        self._client = client
        self._owned: Dict[bool, httpx.Client] = {}
        self._owned_lock = threading.Lock()

    def _client_for(self, verify: bool) -> httpx.Client:
        if self._client is not None:
            return self._client
        with self._owned_lock:
            client = self._owned.get(verify)
            if client is None:
                client = self._owned[verify] = httpx.Client(timeout=self.timeout, verify=verify)
            return client

    def close(self) -> None:
        with self._owned_lock:
            clients = list(self._owned.values())
            self._owned.clear()
        for client in clients:
            client.close()

    @staticmethod
    def _auth(credentials: Credentials) -> Optional[Tuple[str, str]]:
        if credentials.username and credentials.password:
            return (credentials.username, credentials.password)
        return None

    @staticmethod
    def _query(coordinate: str, credentials: Credentials, version: Optional[str] = None) -> List[Tuple[str, str]]:
        fields = split_location(coordinate)
        if len(fields) < 3 or not all(fields[:3]):
            raise MalformedCoordinateError(coordinate, "at least group:artifact:version")
        group_id, artifact_id, raw_version = fields[:3]
        extension = fields[3] if len(fields) > 3 and fields[3] else DEFAULT_EXTENSION
        if version is None:
            version = "LATEST" if is_latest(raw_version) else raw_version
        query = [("g", group_id), ("a", artifact_id), ("v", version), ("e", extension)]
        query.append(("r", credentials.repository))
        return query

    def get_artifact_info(self, coordinate: str, credentials: Credentials) -> ArtifactInfo:
        url = service_url(credentials.url, RESOLVE_PATH, self._query(coordinate, credentials))
        client = self._client_for(effective_ssl_verify(credentials))
        self.log.info("Resolving artifact %s via %s", coordinate, credentials.url)
        resp = client.get(url, auth=self._auth(credentials), headers={"Accept": "application/xml"})
        resp.raise_for_status()
        return parse_artifact_info(resp.content)

    def pull_artifact(
        self,
        coordinate: str,
        destination_dir: Path | str,
        credentials: Credentials,
        ssl_verify: Optional[bool] = None,
    ) -> DownloadResult:
        verify = effective_ssl_verify(credentials, ssl_verify)
        info = self.get_artifact_info(coordinate, credentials)
        if not info.version:
            raise RemoteMetadataError("version")

        query = self._query(coordinate, credentials, version=info.version)
        params = dict(query)
        file_name = f"{params['a']}-{info.version}.{params['e']}"
        target_dir = Path(destination_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / file_name

        url = service_url(credentials.url, REDIRECT_PATH, query)
        self.log.info("Downloading artifact %s version=%s url=%s", coordinate, info.version, url)
        start_time = time.time()
        part = target.with_name(target.name + ".part")
        try:
            downloaded = self._stream_to(self._client_for(verify), url, credentials, part)
        except BaseException:
            part.unlink(missing_ok=True)
            raise
        part.replace(target)
        elapsed = max(time.time() - start_time, 1e-3)
        self.log.info(
            "Downloaded artifact %s -> %s (%d bytes, %.2f MB/s, %.2fs)",
            coordinate,
            target,
            downloaded,
            (downloaded / 1024 / 1024) / elapsed,
            elapsed,
        )
        return DownloadResult(file_name=file_name, file_path=target, version=info.version, size=downloaded)

    def _stream_to(self, client: httpx.Client, url: str, credentials: Credentials, path: Path) -> int:
        downloaded = 0
        with client.stream("GET", url, auth=self._auth(credentials), follow_redirects=True) as response:
            response.raise_for_status()
            total = int(response.headers.get("content-length") or 0)
            next_percent = 10
            next_bytes_logged = 5 * 1024 * 1024
            with open(path, "wb") as fh:
                for chunk in response.iter_bytes(65536):
                    if not chunk:
                        continue
                    fh.write(chunk)
                    downloaded += len(chunk)
                    if total:
                        percent = int(downloaded * 100 / total)
                        if percent >= next_percent:
                            self.log.info(
                                "Download progress %s %s%% (%d/%d bytes)", path.name, percent, downloaded, total
                            )
                            next_percent += 10
                    elif downloaded >= next_bytes_logged:
                        self.log.info("Download progress %s %d bytes", path.name, downloaded)
                        next_bytes_logged += 5 * 1024 * 1024
        return downloaded
