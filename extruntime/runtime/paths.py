"""Executable discovery on the process search path."""

from __future__ import annotations

import os
import stat

from pathlib import Path
from typing import Optional, Sequence, Tuple

IS_WINDOWS = os.name == "nt"
WINDOWS_EXECUTABLE_EXTENSIONS = frozenset(
    {".exe", ".com", ".bat", ".cmd", ".ps1"}
)


def _search_dirs(search_path: Optional[str]) -> list[str]:
    if search_path is None:
        search_path = os.environ.get("PATH", "")
    return [entry for entry in search_path.split(os.pathsep) if entry]


def is_executable_file(path: str | Path) -> bool:
    """Return True when ``path`` is a regular file the platform can run."""

    try:
        st = os.stat(path)
    except OSError:
        return False
    if not stat.S_ISREG(st.st_mode):
        return False
    if IS_WINDOWS:
        return Path(path).suffix.lower() in WINDOWS_EXECUTABLE_EXTENSIONS
    return bool(st.st_mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


def find_executable(
    name: str, search_path: Optional[str] = None
) -> Optional[str]:
    """Return the first executable ``name`` on the search path, or None.

    Directories are scanned in order and the first valid candidate wins.
    On Windows ``.exe`` is appended to the name before checking.
    """

    filename = name + ".exe" if IS_WINDOWS else name
    for directory in _search_dirs(search_path):
        candidate = os.path.join(directory, filename)
        if is_executable_file(candidate):
            return os.path.abspath(candidate)
    return None


def which(
    command: Sequence[str], search_path: Optional[str] = None
) -> Optional[Tuple[str, ...]]:
    """Resolve ``command[0]`` and return the full command, or None.

    Only the program element is replaced by its absolute path; fixed
    arguments are kept as given.
    """

    if not command:
        return None
    path = find_executable(command[0], search_path)
    if path is None:
        return None
    return (path, *command[1:])


__all__ = [
    "IS_WINDOWS",
    "WINDOWS_EXECUTABLE_EXTENSIONS",
    "find_executable",
    "is_executable_file",
    "which",
]
