"""Tests for MCP tools."""

import json
from unittest.mock import patch

import pytest

from mailscan.config import Config
from mailscan.errors import TraversalError
from mailscan.mcp.tools import SearchLogsInput, register_tools
from mailscan.scanner import iter_log_files
from mcp.server.fastmcp import FastMCP


@pytest.fixture
def search_tool():
    """Register the tools on a fresh server and return the search tool."""
    mcp = FastMCP("test_mcp")
    register_tools(mcp, Config())
    tool = mcp._tool_manager._tools.get("mailscan_search_logs")
    assert tool is not None
    return tool


class TestMailscanSearchLogsTool:
    """Tests for mailscan_search_logs MCP tool."""

    @pytest.mark.asyncio
    async def test_search_success(self, search_tool, log_tree):
        """Test a successful search returns the JSON report."""
        params = SearchLogsInput(folder=str(log_tree), email="alice@example.com")

        data = json.loads(await search_tool.fn(params))

        assert "error" not in data
        assert data["criteria"]["email"] == "alice@example.com"
        assert data["summary"]["files_processed"] == 4
        assert data["summary"]["files_matched"] == 1
        assert data["summary"]["total_records"] == 8
        paths = [o["path"] for o in data["outcomes"]]
        assert paths == sorted(paths)
        matched = [o for o in data["outcomes"] if o["found"]]
        assert "alice@example.com" in matched[0]["content"]

    @pytest.mark.asyncio
    async def test_search_without_content(self, search_tool, log_tree):
        """Test matched text can be omitted."""
        params = SearchLogsInput(
            folder=str(log_tree), email="alice@example.com", include_content=False
        )

        data = json.loads(await search_tool.fn(params))

        assert all("content" not in o for o in data["outcomes"])

    @pytest.mark.asyncio
    async def test_search_with_workers(self, search_tool, log_tree):
        """Test the worker count is passed to the scan."""
        params = SearchLogsInput(folder=str(log_tree), email="a@x.com", workers=2)

        with patch("mailscan.mcp.tools.scan") as mock_scan:
            mock_scan.side_effect = TraversalError("stop here")
            await search_tool.fn(params)

        config = mock_scan.call_args.args[2]
        assert config.scan.workers == 2

    @pytest.mark.asyncio
    async def test_no_results(self, search_tool, log_tree):
        """Test a search without matches returns NO_RESULTS."""
        params = SearchLogsInput(folder=str(log_tree), email="nobody@example.com")

        data = json.loads(await search_tool.fn(params))

        assert data["error"]["code"] == "NO_RESULTS"
        assert "4 files" in data["error"]["message"]

    @pytest.mark.asyncio
    async def test_errors_reported_without_matches(self, search_tool, log_tree):
        """Test unreadable files are listed even when nothing matched."""
        missing = str(log_tree / "gone.log")
        paths = list(iter_log_files(str(log_tree))) + [missing]
        params = SearchLogsInput(folder=str(log_tree), email="nobody@example.com")

        with patch("mailscan.scanner.iter_log_files", return_value=paths):
            data = json.loads(await search_tool.fn(params))

        assert "error" not in data
        assert data["summary"]["files_processed"] == 5
        assert data["summary"]["files_matched"] == 0
        assert data["summary"]["files_errored"] == 1
        errored = [o for o in data["outcomes"] if o["error"]]
        assert [o["path"] for o in errored] == [missing]
        assert errored[0]["error"].startswith("open ")

    @pytest.mark.asyncio
    async def test_invalid_date(self, search_tool, log_tree):
        """Test a malformed date is rejected before scanning."""
        params = SearchLogsInput(folder=str(log_tree), email="a@x.com", date="01/02/2024")

        with patch("mailscan.mcp.tools.scan") as mock_scan:
            data = json.loads(await search_tool.fn(params))

        assert data["error"]["code"] == "INVALID_DATE_FORMAT"
        mock_scan.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_folder(self, search_tool, tmp_path):
        """Test a folder that cannot be walked returns TRAVERSAL_FAILED."""
        params = SearchLogsInput(folder=str(tmp_path / "missing"), email="a@x.com")

        data = json.loads(await search_tool.fn(params))

        assert data["error"]["code"] == "TRAVERSAL_FAILED"
        assert "Error walking directory" in data["error"]["message"]

    @pytest.mark.asyncio
    async def test_unexpected_error(self, search_tool, log_tree):
        """Test unexpected failures are reported as SCAN_FAILED."""
        params = SearchLogsInput(folder=str(log_tree), email="a@x.com")

        with patch("mailscan.mcp.tools.scan", side_effect=RuntimeError("boom")):
            data = json.loads(await search_tool.fn(params))

        assert data["error"]["code"] == "SCAN_FAILED"
        assert "boom" in data["error"]["message"]
