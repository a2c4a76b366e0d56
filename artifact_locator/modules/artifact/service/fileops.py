"""Platform-specific filesystem helpers."""

from __future__ import annotations

import os
import platform
from pathlib import Path


def is_windows() -> bool:
    return platform.system().lower() == "windows"


def is_symlink(path: Path | str) -> bool:
    return os.path.islink(path)


def readlink(path: Path | str) -> str:
    """Return the raw target a symlink points to."""
    return os.readlink(path)


def copy_command_for(source: str, destination: str, *, windows: bool | None = None) -> str:
    """Return a shell command that copies ``source`` to ``destination``."""
    if windows is None:
        windows = is_windows()
    if windows:
        return f'copy "{source}" "{destination}"'.replace("/", "\\")
    return f"cp -r {source} {destination}"
