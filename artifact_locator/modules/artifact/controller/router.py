"""FastAPI routes exposing artifact resolution."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request

from artifact_locator.modules.artifact.domain import DeploymentContext
from artifact_locator.modules.artifact.service.manager import ArtifactLocatorService
from artifact_locator.modules.artifact.util.exceptions import (
    ArtifactError,
    ClassificationAmbiguousError,
    CredentialsNotFoundError,
    MalformedCoordinateError,
    RemoteMetadataError,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/artifact", tags=["artifact"])


def get_service(request: Request) -> ArtifactLocatorService:
    container = getattr(request.app.state, "container", None)
    if not container or not getattr(container, "artifact_service", None):
        raise HTTPException(status_code=500, detail="Artifact service not initialized.")
    return container.artifact_service


def get_context(request: Request, environment: Optional[str] = None) -> DeploymentContext:
    if environment:
        return DeploymentContext(environment=environment)
    return request.app.state.container.default_context


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, (MalformedCoordinateError, ClassificationAmbiguousError)):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, CredentialsNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, (RemoteMetadataError, httpx.HTTPError)):
        log.warning("Remote repository failure: %s", exc)
        return HTTPException(status_code=502, detail=str(exc))
    log.error("Artifact resolution failed: %s", exc)
    return HTTPException(status_code=500, detail=str(exc))


@router.get("/classify")
async def classify_location(location: str, svc: ArtifactLocatorService = Depends(get_service)) -> Dict[str, str]:
    try:
        kind = svc.classify(location)
    except ArtifactError as exc:
        raise _to_http(exc) from exc
    return {"location": location, "kind": kind.value}


@router.get("/version")
def actual_version(
    location: str,
    context: DeploymentContext = Depends(get_context),
    svc: ArtifactLocatorService = Depends(get_service),
) -> Dict[str, str]:
    try:
        version = svc.get_actual_version(context, location)
    except (ArtifactError, httpx.HTTPError) as exc:
        raise _to_http(exc) from exc
    return {"location": location, "version": version}


@router.get("/sha1")
def artifact_sha(
    location: str,
    context: DeploymentContext = Depends(get_context),
    svc: ArtifactLocatorService = Depends(get_service),
) -> Dict[str, str]:
    try:
        sha1 = svc.get_artifact_sha(context, location)
    except (ArtifactError, httpx.HTTPError) as exc:
        raise _to_http(exc) from exc
    return {"location": location, "sha1": sha1}


@router.get("/download-url")
def download_url(
    location: str,
    context: DeploymentContext = Depends(get_context),
    svc: ArtifactLocatorService = Depends(get_service),
) -> Dict[str, str]:
    try:
        url = svc.artifact_download_url_for(context, location)
    except ArtifactError as exc:
        raise _to_http(exc) from exc
    return {"location": location, "url": url}


@router.get("/deployed-version")
def deployed_version(install_dir: str, svc: ArtifactLocatorService = Depends(get_service)) -> Dict[str, Any]:
    try:
        version, found = svc.current_deployed_version(install_dir)
    except ArtifactError as exc:
        raise _to_http(exc) from exc
    return {"install_dir": install_dir, "version": version, "found": found}
