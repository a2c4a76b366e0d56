"""Read the currently deployed version from the ``current`` symlink."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Tuple

from ..util.constants import CURRENT_LINK
from ..util.exceptions import DeployedVersionError
from . import fileops


class DeployedVersionInspector:
    """``<install_dir>/current -> <install_dir>/<version>``; the target's last segment is the version."""

    def current_version(self, install_dir: Path | str) -> Tuple[Optional[str], bool]:
        current = Path(install_dir) / CURRENT_LINK
        if not fileops.is_symlink(current):
            if current.exists():
                raise DeployedVersionError(f"{current} exists but is not a symlink")
            return None, False
        target = fileops.readlink(current).rstrip("/\\")
        version = os.path.basename(target.replace("\\", "/"))
        if not version:
            raise DeployedVersionError(f"{current} points to {target or '/'!r}, which names no version")
        return version, True
