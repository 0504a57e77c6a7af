#!/usr/bin/env python3
"""Filesystem type probes used by scoped patterns.

A probe answers "is this path a file, a directory, or neither?". Probing
never raises: any error (missing path, permission problem, a path removed
between listing and checking) degrades to ``PathType.UNKNOWN``.
"""

import os
import stat
from typing import Iterable, Protocol, runtime_checkable

from pathmatch.core.constants import PathType
from pathmatch.infrastructure.logger import get_logger

logger = get_logger()


@runtime_checkable
class FilesystemProbe(Protocol):
    """The filesystem capability the matching engine consumes.

    Implementations may raise; :func:`probe_path_type` logs the error and
    treats the path type as unknown.
    """

    def is_file(self, path: str) -> bool:
        ...

    def is_dir(self, path: str) -> bool:
        ...


class OSFilesystemProbe:
    """Probe backed by ``os.stat`` (symlinks are followed)."""

    def path_type(self, path: str) -> PathType:
        try:
            mode = os.stat(path).st_mode
        except (OSError, ValueError):
            return PathType.UNKNOWN

        if stat.S_ISREG(mode):
            return PathType.FILE
        if stat.S_ISDIR(mode):
            return PathType.DIRECTORY
        return PathType.UNKNOWN

    def is_file(self, path: str) -> bool:
        return self.path_type(path) is PathType.FILE

    def is_dir(self, path: str) -> bool:
        return self.path_type(path) is PathType.DIRECTORY

    def __repr__(self) -> str:
        return "OSFilesystemProbe()"


class StaticFilesystemProbe:
    """Probe answering from fixed sets of known files and directories.

    Useful for matching against a listing (an archive index, a remote
    manifest) without touching the local disk.

    Example:
        >>> probe = StaticFilesystemProbe(files=["logs/app.log"], directories=["logs"])
        >>> probe.path_type("logs")
        <PathType.DIRECTORY: 'directory'>
    """

    def __init__(self, files: Iterable[str] = (), directories: Iterable[str] = ()):
        self._files = frozenset(files)
        self._directories = frozenset(directories)

    def path_type(self, path: str) -> PathType:
        if path in self._files:
            return PathType.FILE
        if path in self._directories:
            return PathType.DIRECTORY
        return PathType.UNKNOWN

    def is_file(self, path: str) -> bool:
        return path in self._files

    def is_dir(self, path: str) -> bool:
        return path in self._directories

    def __repr__(self) -> str:
        return (
            f"StaticFilesystemProbe(files={len(self._files)}, "
            f"directories={len(self._directories)})"
        )


def probe_path_type(probe: FilesystemProbe, path: str) -> PathType:
    """Ask *probe* for the type of *path*, degrading any error to UNKNOWN.

    Probes providing their own ``path_type`` are asked once; otherwise
    ``is_file`` then ``is_dir`` are tried.

    Args:
        probe: Object implementing :class:`FilesystemProbe`
        path: Path to check

    Returns:
        The path type, ``PathType.UNKNOWN`` when it cannot be determined
    """
    try:
        path_type = getattr(probe, "path_type", None)
        if path_type is not None:
            return path_type(path)
        if probe.is_file(path):
            return PathType.FILE
        if probe.is_dir(path):
            return PathType.DIRECTORY
    except Exception as e:
        # Probes are caller-supplied; any failure means an unknown type
        logger.debug(
            "Filesystem probe failed",
            path=path,
            error_type=type(e).__name__,
            error=str(e),
        )
    return PathType.UNKNOWN
