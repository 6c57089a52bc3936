# filemerger/services/pathguard.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from filemerger.errors import AccessDenied, InvalidArguments

logger = logging.getLogger(__name__)


def canonicalize(raw: str, base: Optional[Path] = None) -> Path:
    """
    Turn a user-supplied path into an absolute, canonical Path.

    Relative paths are anchored at `base` (the current working directory
    unless given). `.`/`..` segments and redundant separators collapse,
    symlinks are followed where they exist, and the target does not need
    to exist (strict=False) so output paths can be validated before creation.
    A leading `~` is an ordinary path segment here, not the home directory.
    """
    path = Path(raw)
    if not path.is_absolute():
        path = (base or Path.cwd()) / path
    try:
        return path.resolve(strict=False)
    except (ValueError, RuntimeError, OSError) as exc:
        raise InvalidArguments(f"Cannot resolve path '{raw}': {exc}") from exc


@dataclass(frozen=True)
class AllowedRootSet:
    """
    Process-wide security policy: the directories all file access must stay in.
    An empty set means unrestricted.
    """
    roots: Tuple[Path, ...] = ()

    @property
    def is_unrestricted(self) -> bool:
        return not self.roots

    def contains(self, path: Path) -> bool:
        # Path.is_relative_to compares whole segments, so /data-private is not under /data
        return any(path == root or path.is_relative_to(root) for root in self.roots)

    def as_strings(self) -> List[str]:
        return [str(r) for r in self.roots]


def build_allowed_roots(raw_roots: Iterable[str], *, allow_all: bool = False) -> AllowedRootSet:
    """
    Build the allowed-root policy once at startup.

    Every root must exist and be a directory. With no roots the current
    working directory is used; `allow_all` yields the unrestricted set and
    cannot be combined with explicit roots.
    """
    raw = [r for r in raw_roots if r and r.strip()]
    if allow_all:
        if raw:
            raise InvalidArguments("Explicit directories cannot be combined with unrestricted mode")
        logger.warning("Allowed root set is empty: all paths are permitted")
        return AllowedRootSet()

    if not raw:
        return AllowedRootSet((Path.cwd().resolve(),))

    roots: List[Path] = []
    for entry in raw:
        root = canonicalize(os.path.expanduser(entry.strip()))
        if not root.exists():
            raise InvalidArguments(f"Error accessing directory {root}: no such directory")
        if not root.is_dir():
            raise InvalidArguments(f"Error: {root} is not a directory")
        if root not in roots:
            roots.append(root)
    return AllowedRootSet(tuple(roots))


class PathGuard:
    """
    Decide whether a candidate path may be touched by this process.
    Pure string work: nothing here checks that the target exists.
    """

    def __init__(self, roots: AllowedRootSet):
        self.roots = roots

    def validate(self, candidate: str) -> Path:
        if not candidate:
            raise InvalidArguments("Path must not be empty")

        path = canonicalize(candidate)
        if self.roots.is_unrestricted:
            return path

        if not self.roots.contains(path):
            logger.warning("access_denied path=%s", path)
            raise AccessDenied(path, self.roots.roots)
        return path

    def list_allowed_roots(self) -> List[str]:
        return self.roots.as_strings()
