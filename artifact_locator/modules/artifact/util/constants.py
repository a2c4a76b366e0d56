"""Constants shared across the artifact module."""

DATA_BAG = "artifact"
WILDCARD_DATABAG_ITEM = "_wildcard"
LEGACY_DATABAG_ITEM = "nexus"

LATEST = "latest"
CURRENT_LINK = "current"

REDIRECT_PATH = "/nexus/service/local/artifact/maven/redirect"
RESOLVE_PATH = "/nexus/service/local/artifact/maven/resolve"
