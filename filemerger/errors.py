# filemerger/errors.py
from __future__ import annotations

from pathlib import Path
from typing import Sequence


class GatewayError(Exception):
    """Base class for every failure raised by the gateway core."""


class InvalidArguments(GatewayError, ValueError):
    """Empty input list, empty path, or malformed startup configuration."""


class AccessDenied(GatewayError, PermissionError):
    """A candidate path resolved outside every allowed root."""

    def __init__(self, path: Path, allowed_roots: Sequence[Path]):
        self.path = path
        self.allowed_roots = tuple(allowed_roots)
        roots = ", ".join(str(r) for r in self.allowed_roots)
        super().__init__(
            f"Access denied - path outside allowed directories: {path}, "
            f"only allowed directories are {roots}"
        )


class MergeError(GatewayError):
    """Base class for failures of a single merge call."""

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(message)


class InputUnreadable(MergeError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"Error accessing file: {path} - {reason}", path)


class OutputPathUnwritable(MergeError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"Cannot write output file: {path} - {reason}", path)


class MergeAborted(MergeError):
    """Copy phase failed after writing began; `index` is the failing input."""

    def __init__(self, index: int, path: Path, reason: str):
        self.index = index
        super().__init__(f"Merge aborted at input #{index} ({path}) - {reason}", path)
