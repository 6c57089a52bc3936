# filemerger_mcp/formatting.py
from typing import List

from filemerger.services.merger import MergeReport

SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def format_bytes(num: int) -> str:
    """Human-readable size, 1024-based: 0 -> '0 Bytes', 1536 -> '1.5 KB'."""
    if num <= 0:
        return "0 Bytes"
    i = 0
    while i < len(SIZE_UNITS) - 1 and num >= 1024 ** (i + 1):
        i += 1
    value = f"{num / 1024 ** i:.2f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[i]}"


def render_merge_report(report: MergeReport) -> str:
    file_list = "\n".join(f"- {f.name} ({format_bytes(f.size_bytes)})" for f in report.files_merged)
    return (
        f"Successfully merged {report.file_count} files into {report.output_path}\n\n"
        f"Total size: {format_bytes(report.total_bytes)}\n\n"
        f"Files merged:\n{file_list}"
    )


def render_allowed_roots(roots: List[str]) -> str:
    if not roots:
        return "No directory restrictions - all directories are allowed"
    return "Allowed directories:\n" + "\n".join(roots)
