# tests/test_tools.py
import asyncio
from pathlib import Path

import pytest
from fastmcp import Client, FastMCP

from filemerger.config import Settings
from filemerger.errors import InvalidArguments
from filemerger.services.merger import FileMergerService
from filemerger_mcp.formatting import format_bytes, render_allowed_roots, render_merge_report
from filemerger_mcp.main import create_app, main


@pytest.mark.parametrize(
    "num, expected",
    [
        (0, "0 Bytes"),
        (2, "2 Bytes"),
        (1023, "1023 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1024 ** 2, "1 MB"),
        (int(2.25 * 1024 ** 3), "2.25 GB"),
        (5 * 1024 ** 5, "5120 TB"),
    ],
)
def test_format_bytes(num, expected):
    assert format_bytes(num) == expected


def test_render_merge_report(tmp_path: Path):
    (tmp_path / "a.txt").write_bytes(b"AB")
    (tmp_path / "b.txt").write_bytes(b"CD")
    out = tmp_path / "merged.txt"
    report = FileMergerService().merge([tmp_path / "a.txt", tmp_path / "b.txt"], out)

    assert render_merge_report(report) == (
        f"Successfully merged 2 files into {out}\n\n"
        "Total size: 4 Bytes\n\n"
        "Files merged:\n"
        "- a.txt (2 Bytes)\n"
        "- b.txt (2 Bytes)"
    )


def test_render_allowed_roots():
    assert render_allowed_roots(["/a", "/b"]) == "Allowed directories:\n/a\n/b"
    assert render_allowed_roots([]) == "No directory restrictions - all directories are allowed"


def test_create_app(tmp_path: Path):
    app = create_app(Settings(_env_file=None), roots=[str(tmp_path)])
    assert isinstance(app, FastMCP)


def test_create_app_rejects_bad_root(tmp_path: Path):
    with pytest.raises(InvalidArguments):
        create_app(Settings(_env_file=None), roots=[str(tmp_path / "missing")])


def test_main_exits_on_bad_root(tmp_path: Path):
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / "missing")])
    assert info.value.code == 1


def _call(app: FastMCP, name: str, arguments: dict):
    """Call a tool over the in-memory transport; returns the raw CallToolResult."""
    async def run():
        async with Client(app) as client:
            return await client.call_tool_mcp(name, arguments)
    return asyncio.run(run())


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    ws = tmp_path / "workspace"
    ws.mkdir()
    (ws / "a.txt").write_bytes(b"AB")
    (ws / "b.txt").write_bytes(b"CD")
    return ws


def test_merge_files_tool(workspace: Path):
    app = create_app(Settings(_env_file=None), roots=[str(workspace)])
    out = workspace / "out" / "merged.txt"

    result = _call(app, "merge_files", {
        "inputPaths": [str(workspace / "a.txt"), str(workspace / "b.txt")],
        "outputPath": str(out),
    })

    assert not result.isError
    text = result.content[0].text
    assert text.startswith("Successfully merged 2 files into ")
    assert "Total size: 4 Bytes" in text
    assert "- a.txt (2 Bytes)\n- b.txt (2 Bytes)" in text
    assert out.read_bytes() == b"ABCD"


def test_merge_files_tool_access_denied(workspace: Path, tmp_path: Path):
    app = create_app(Settings(_env_file=None), roots=[str(workspace)])
    escaped = tmp_path / "escaped.txt"

    result = _call(app, "merge_files", {
        "inputPaths": [str(workspace / "a.txt")],
        "outputPath": str(escaped),
    })

    assert result.isError
    assert "Access denied" in result.content[0].text
    assert not escaped.exists()


def test_merge_files_tool_requires_inputs(workspace: Path):
    app = create_app(Settings(_env_file=None), roots=[str(workspace)])
    result = _call(app, "merge_files", {"inputPaths": [], "outputPath": str(workspace / "o.txt")})
    assert result.isError
    assert not (workspace / "o.txt").exists()


def test_list_allowed_directories_tool(workspace: Path):
    app = create_app(Settings(_env_file=None), roots=[str(workspace)])
    result = _call(app, "list_allowed_directories", {})
    assert not result.isError
    assert result.content[0].text == f"Allowed directories:\n{workspace.resolve()}"
