"""Decide whether an artifact location lives in Nexus or on a plain http(s) server."""

from __future__ import annotations

import re
from enum import Enum

from ..util.exceptions import ClassificationAmbiguousError
from .coordinate import split_location

# scheme "://" then a non-empty authority; the port is any run of digits
_HTTP_URL = re.compile(r"^https?://[^/?#\s]+", re.IGNORECASE)
_HTTP_PREFIX = re.compile(r"^https?:", re.IGNORECASE)


class LocationKind(str, Enum):
    REPOSITORY = "repository"
    HTTP = "http"


def from_http(location: str) -> bool:
    """Return True when ``location`` starts with an absolute http or https URL."""
    return bool(_HTTP_URL.match(location))


def from_repository(location: str) -> bool:
    """Return True when ``location`` looks like a colon-separated coordinate.

    Anything carrying an http(s) scheme is excluded: a scheme plus a port
    already yields three colon-separated fields.
    """
    if from_http(location) or _HTTP_PREFIX.match(location):
        return False
    return len(split_location(location)) > 2


def classify(location: str) -> LocationKind:
    if from_http(location):
        return LocationKind.HTTP
    if from_repository(location):
        return LocationKind.REPOSITORY
    raise ClassificationAmbiguousError(location)
