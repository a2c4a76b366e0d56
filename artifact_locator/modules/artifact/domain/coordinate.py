"""Colon-delimited Maven coordinates (``group:artifact:version:extension``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..util.constants import LATEST
from ..util.exceptions import MalformedCoordinateError

SEPARATOR = ":"


def is_latest(version: str) -> bool:
    """Return True when ``version`` is the symbolic ``latest`` marker, in any case."""
    return version.casefold() == LATEST


def split_location(raw: str) -> List[str]:
    return raw.split(SEPARATOR)


def extract_version(raw: str) -> str:
    """Return the version field of ``raw``.

    Only ``group:artifact:version`` is required here; the extension may be
    absent because resolving a version never needs it.
    """
    fields = split_location(raw)
    if len(fields) < 3 or not fields[2]:
        raise MalformedCoordinateError(raw, "at least group:artifact:version")
    return fields[2]


@dataclass(frozen=True)
class Coordinate:
    """Represents a fully specified Nexus artifact coordinate."""

    group_id: str
    artifact_id: str
    version: str
    extension: str

    @classmethod
    def parse(cls, raw: str) -> "Coordinate":
        fields = split_location(raw)
        if len(fields) != 4 or not all(fields):
            raise MalformedCoordinateError(raw, "group:artifact:version:extension")
        group_id, artifact_id, version, extension = fields
        return cls(group_id=group_id, artifact_id=artifact_id, version=version, extension=extension)

    def is_latest(self) -> bool:
        return is_latest(self.version)

    def with_version(self, version: str) -> "Coordinate":
        return Coordinate(self.group_id, self.artifact_id, version, self.extension)

    @property
    def file_name(self) -> str:
        return f"{self.artifact_id}-{self.version}.{self.extension}"

    def __str__(self) -> str:
        return SEPARATOR.join((self.group_id, self.artifact_id, self.version, self.extension))
