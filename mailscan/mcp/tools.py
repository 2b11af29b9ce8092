"""MCP tool definitions for mailscan."""

import asyncio
import json
import logging
from dataclasses import replace
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mailscan.config import Config
from mailscan.errors import TraversalError
from mailscan.models import SearchCriteria
from mailscan.report import format_json
from mailscan.scanner import scan
from mailscan.utils import date_validation
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

logger = logging.getLogger("mailscan.mcp")


class SearchLogsInput(BaseModel):
    """Input model for mailscan_search_logs tool."""

    model_config = ConfigDict(
        str_strip_whitespace=True, validate_assignment=True
    )

    folder: str = Field(
        ...,
        description="Directory containing the SMTP log files",
        min_length=1,
    )
    email: str = Field(
        ...,
        description="Email address to search for (plain substring match)",
        min_length=1,
    )
    date: Optional[str] = Field(
        default=None,
        description="Only match records that also contain this date (format: YYYY-MM-DD)",
    )
    workers: Optional[int] = Field(
        default=None,
        description="Number of files scanned in parallel",
        ge=1,
        le=1000,
    )
    include_content: bool = Field(
        default=True,
        description="Include the matched record text in the response",
    )

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: Optional[str]) -> Optional[str]:
        return v or None


def _error(code: str, message: str) -> str:
    return json.dumps({"error": {"code": code, "message": message}})


def register_tools(mcp: FastMCP, config: Config) -> None:
    """Register all mailscan tools with the MCP server."""

    @mcp.tool(
        name="mailscan_search_logs",
        annotations=ToolAnnotations(
            title="Search SMTP Logs",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=False,
        ),
    )
    async def mailscan_search_logs(params: SearchLogsInput) -> str:
        """Search a folder of SMTP logs for records mentioning an email address.

        Each log file is split into records (a timestamp line and the lines
        that follow it) and every record containing the email, and the date
        when given, is returned.

        Args:
            params: Search parameters including folder, email, and an
                optional date.

        Returns:
            JSON containing the search criteria, a summary with file and
            record totals, and one outcome per file sorted by path. The
            report is also returned when nothing matched but some files
            could not be read; NO_RESULTS means every file was scanned
            cleanly without a match.
        """
        error = date_validation(params.date)
        if error:
            return _error("INVALID_DATE_FORMAT", error)

        try:
            criteria = SearchCriteria(email=params.email, date=params.date or "")
            scan_config = config.scan
            if params.workers:
                scan_config = replace(scan_config, workers=params.workers)
            run_config = replace(config, scan=scan_config)

            report = await asyncio.to_thread(
                scan, params.folder, criteria, run_config
            )
        except TraversalError as e:
            return _error("TRAVERSAL_FAILED", str(e))
        except Exception as e:
            logger.exception("Error in mailscan_search_logs")
            return _error("SCAN_FAILED", f"Failed to scan logs: {e}")

        # Per-file errors are always reported, even without a match
        if not report.matched_files and not report.errored_files:
            return _error(
                "NO_RESULTS",
                f"No records mentioning {params.email} found in "
                f"{report.files_processed} files under {params.folder}.",
            )

        return format_json(
            report.sorted_by_path(),
            criteria,
            include_content=params.include_content,
        )
