"""Secret store (data bag) adapters returning explicit lookup outcomes."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple

log = logging.getLogger(__name__)


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    DECRYPTION_FAILED = "decryption_failed"


@dataclass(frozen=True)
class SecretLookup:
    """Outcome of loading a single data bag item."""

    status: LookupStatus
    data: Mapping[str, Any] = field(default_factory=dict)
    reason: str = ""

    @classmethod
    def found(cls, data: Mapping[str, Any]) -> "SecretLookup":
        return cls(LookupStatus.FOUND, data)

    @classmethod
    def not_found(cls) -> "SecretLookup":
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def decryption_failed(cls, reason: str) -> "SecretLookup":
        return cls(LookupStatus.DECRYPTION_FAILED, reason=reason)


class SecretStore(Protocol):
    def load(self, bag_name: str, item_name: str) -> SecretLookup:
        ...


class InMemorySecretStore:
    """Dictionary backed store; items mapped to ``None`` simulate a bad key."""

    def __init__(self, items: Optional[Mapping[Tuple[str, str], Optional[Mapping[str, Any]]]] = None) -> None:
        self.items: Dict[Tuple[str, str], Optional[Mapping[str, Any]]] = dict(items or {})
        self.calls: list[Tuple[str, str]] = []

    def put(self, bag_name: str, item_name: str, data: Optional[Mapping[str, Any]]) -> None:
        self.items[(bag_name, item_name)] = data

    def load(self, bag_name: str, item_name: str) -> SecretLookup:
        self.calls.append((bag_name, item_name))
        key = (bag_name, item_name)
        if key not in self.items:
            return SecretLookup.not_found()
        data = self.items[key]
        if data is None:
            return SecretLookup.decryption_failed("item could not be decrypted")
        return SecretLookup.found(data)


class DirectorySecretStore:
    """Reads data bag items laid out as ``<root>/<bag>/<item>.json``.

    Items are expected to be decrypted already; a file that cannot be read
    as a JSON object is reported the same way a failed decryption would be.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def _item_path(self, bag_name: str, item_name: str) -> Path:
        return self.root / bag_name / f"{item_name}.json"

    def load(self, bag_name: str, item_name: str) -> SecretLookup:
        path = self._item_path(bag_name, item_name)
        if not path.is_file():
            log.debug("Data bag item %s/%s not found at %s", bag_name, item_name, path)
            return SecretLookup.not_found()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            log.warning("Data bag item %s/%s is unreadable: %s", bag_name, item_name, exc)
            return SecretLookup.decryption_failed(str(exc))
        if not isinstance(data, dict):
            return SecretLookup.decryption_failed("item is not a JSON object")
        data.pop("id", None)
        return SecretLookup.found(data)
