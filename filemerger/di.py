# filemerger/di.py
from dataclasses import dataclass
from typing import Sequence

from filemerger.config import Settings
from filemerger.services.gateway import FileGatewayService
from filemerger.services.merger import FileMergerService
from filemerger.services.pathguard import AllowedRootSet, PathGuard, build_allowed_roots


@dataclass(frozen=True)
class Container:
    settings: Settings
    roots: AllowedRootSet
    guard: PathGuard
    merger: FileMergerService
    gateway: FileGatewayService


def build_container(settings: Settings | None = None,
                    roots: Sequence[str] | None = None) -> Container:
    """
    Build the object graph once at startup.
    `roots` (from the command line) take precedence over ALLOWED_DIRECTORIES.
    """
    s = settings or Settings()
    raw_roots = list(roots) if roots else s.allowed_directories()
    allowed = build_allowed_roots(raw_roots, allow_all=s.ALLOW_ALL_PATHS)

    guard = PathGuard(allowed)
    merger = FileMergerService(
        chunk_size=s.MERGE_CHUNK_SIZE,
        atomic=s.MERGE_ATOMIC_WRITES,
        stat_workers=s.MERGE_STAT_WORKERS,
    )
    gateway = FileGatewayService(guard, merger)

    return Container(s, allowed, guard, merger, gateway)
