# filemerger/services/merger.py
from __future__ import annotations

import logging
import os
import secrets
import stat
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Sequence, Tuple

from filemerger.errors import InputUnreadable, InvalidArguments, MergeAborted, OutputPathUnwritable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileStat:
    path: Path
    size_bytes: int

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class MergeReport:
    files_merged: Tuple[FileStat, ...]
    total_bytes: int
    output_path: Path

    @property
    def file_count(self) -> int:
        return len(self.files_merged)


def _stat_input(path: Path) -> FileStat:
    try:
        st = os.stat(path)
    except OSError as exc:
        raise InputUnreadable(path, exc.strerror or str(exc)) from exc
    if not stat.S_ISREG(st.st_mode):
        raise InputUnreadable(path, "not a regular file")
    return FileStat(path=path, size_bytes=st.st_size)


@dataclass
class FileMergerService:
    """
    Concatenate already-validated input files, in caller order, into one output.

    Inputs are stat'ed concurrently; their content is streamed strictly one
    after another through a single output handle, `chunk_size` bytes at a
    time. With `atomic` set the bytes land in a temporary sibling that is
    renamed over the output only once every input has been copied, so a
    failed merge never leaves a partial file at the output path.

    No access checks happen here: callers pass paths that PathGuard accepted.
    """
    chunk_size: int = 64 * 1024
    atomic: bool = True
    stat_workers: int = 8

    def __post_init__(self):
        if self.chunk_size < 1:
            raise InvalidArguments("chunk_size must be positive")
        if self.stat_workers < 1:
            raise InvalidArguments("stat_workers must be positive")

    # ---------- Public API ----------

    def merge(self, inputs: Sequence[Path], output: Path) -> MergeReport:
        if not inputs:
            raise InvalidArguments("At least one input file is required")

        stats = self._stat_all(inputs)
        self._prepare_output_dir(output)

        if self.atomic:
            total = self._merge_atomic(stats, output)
        else:
            with self._open_output(output) as out:
                total = self._copy_all(stats, out)

        report = MergeReport(files_merged=tuple(stats), total_bytes=total, output_path=output)
        logger.info("merged %d files into %s (%d bytes)", report.file_count, output, total)
        return report

    # ---------- Internals ----------

    def _stat_all(self, inputs: Sequence[Path]) -> List[FileStat]:
        workers = min(self.stat_workers, len(inputs))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # map yields in input order, so the first failing input is the one raised
            return list(pool.map(_stat_input, inputs))

    def _prepare_output_dir(self, output: Path) -> None:
        if output.is_dir():
            raise OutputPathUnwritable(output, "path is a directory")
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputPathUnwritable(output, exc.strerror or str(exc)) from exc

    def _open_output(self, output: Path) -> BinaryIO:
        try:
            return open(output, "wb")
        except OSError as exc:
            raise OutputPathUnwritable(output, exc.strerror or str(exc)) from exc

    def _merge_atomic(self, stats: List[FileStat], output: Path) -> int:
        tmp = output.parent / f".{output.name}.{secrets.token_hex(4)}.part"
        try:
            # a replaced file keeps its mode; a new one gets 0666 minus the umask, like open()
            existing = stat.S_IMODE(output.stat().st_mode) if output.exists() else None
            fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
        except OSError as exc:
            raise OutputPathUnwritable(output, exc.strerror or str(exc)) from exc

        try:
            with os.fdopen(fd, "wb") as out:
                if existing is not None:
                    try:
                        os.chmod(out.fileno(), existing)
                    except OSError as exc:
                        raise OutputPathUnwritable(output, exc.strerror or str(exc)) from exc
                total = self._copy_all(stats, out)
            try:
                os.replace(tmp, output)
            except OSError as exc:
                raise OutputPathUnwritable(output, exc.strerror or str(exc)) from exc
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
        return total

    def _copy_all(self, stats: List[FileStat], out: BinaryIO) -> int:
        total = 0
        for index, item in enumerate(stats):
            try:
                total += self._copy_one(item.path, out)
            except OSError as exc:
                logger.error("merge aborted at input #%d (%s): %s", index, item.path, exc)
                raise MergeAborted(index, item.path, exc.strerror or str(exc)) from exc

        try:
            out.flush()
            os.fsync(out.fileno())
        except OSError as exc:
            last = len(stats) - 1
            raise MergeAborted(last, stats[last].path, exc.strerror or str(exc)) from exc
        return total

    def _copy_one(self, path: Path, out: BinaryIO) -> int:
        written = 0
        with open(path, "rb") as src:
            while True:
                chunk = src.read(self.chunk_size)
                if not chunk:
                    break
                out.write(chunk)
                written += len(chunk)
        return written
