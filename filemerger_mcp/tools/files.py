# filemerger_mcp/tools/files.py
import logging
from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from filemerger.logging import log_tool_call
from filemerger.services.gateway import FileGatewayService
from filemerger_mcp.formatting import render_allowed_roots, render_merge_report

logger = logging.getLogger(__name__)

InputPaths = Annotated[list[str], Field(min_length=1, description="Array of file paths to merge")]
OutputPath = Annotated[str, Field(description="Path for the merged output file")]


def register_file_tools(mcp: FastMCP, gateway: FileGatewayService):
    """
    Very thin tool adapters:
    - arguments arrive top-level ({"inputPaths": [...], "outputPath": "..."})
    - the gateway enforces the sandbox and merges
    - the report is rendered as text; gateway errors surface as tool errors
    """

    @mcp.tool(
        name="merge_files",
        description="Merge multiple files into a single output file. Reads content from each "
        "input file in the order provided and writes it sequentially to the output file. "
        "Returns information about the merge operation including file sizes and total size. "
        "All specified paths must be within allowed directories if specified.",
    )
    def merge_files(inputPaths: InputPaths, outputPath: OutputPath) -> str:
        log_tool_call(logger, "merge_files", {"inputPaths": inputPaths, "outputPath": outputPath})
        report = gateway.merge(inputPaths, outputPath)
        return render_merge_report(report)

    @mcp.tool(
        name="list_allowed_directories",
        description="Returns the list of directories that this server is allowed to access. "
        "Use this to understand which directories are available before trying to merge files.",
    )
    def list_allowed_directories() -> str:
        log_tool_call(logger, "list_allowed_directories", {})
        return render_allowed_roots(gateway.list_allowed_roots())
