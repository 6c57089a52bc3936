# filemerger/services/gateway.py
from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from filemerger.errors import InvalidArguments
from filemerger.services.merger import FileMergerService, MergeReport
from filemerger.services.pathguard import PathGuard


class FileGatewayService:
    """
    The contract the host calls into: every path goes through the guard
    before the merger sees it.
    """

    def __init__(self, guard: PathGuard, merger: FileMergerService):
        self.guard = guard
        self.merger = merger

    def validate(self, path: str) -> Path:
        return self.guard.validate(path)

    def merge(self, inputs: Sequence[str], output: str) -> MergeReport:
        if not inputs:
            raise InvalidArguments("At least one input file is required")
        valid_inputs = [self.guard.validate(p) for p in inputs]
        valid_output = self.guard.validate(output)
        return self.merger.merge(valid_inputs, valid_output)

    def list_allowed_roots(self) -> List[str]:
        return self.guard.list_allowed_roots()
