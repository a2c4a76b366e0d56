"""Helpers for addressing Nexus service endpoints."""

from __future__ import annotations

import re
from typing import Iterable, Tuple
from urllib.parse import urlencode, urlsplit

from .exceptions import InvalidCredentialsError

_HTTPS = re.compile("https", re.IGNORECASE)
_DEFAULT_PORTS = {"http": 80, "https": 443}


def service_url(base_url: str, path: str, query: Iterable[Tuple[str, str]]) -> str:
    """Build ``<scheme>://<host>[:<port>]<path>?<query>`` from a repository base URL.

    Only the scheme, host and port of ``base_url`` are kept. The scheme is
    https whenever the configured scheme mentions https, otherwise http. The
    port is dropped when it is the default for that scheme.
    """
    parts = urlsplit(base_url)
    try:
        port = parts.port
    except ValueError as exc:
        raise InvalidCredentialsError(f"Repository url {base_url!r} has an invalid port") from exc
    if not parts.hostname:
        raise InvalidCredentialsError(f"Repository url {base_url!r} has no host")
    scheme = "https" if _HTTPS.search(parts.scheme) else "http"
    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    netloc = host if port is None or port == _DEFAULT_PORTS[scheme] else f"{host}:{port}"
    return f"{scheme}://{netloc}{path}?{urlencode(list(query))}"
