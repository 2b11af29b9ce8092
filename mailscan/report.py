"""
Report formatting.

Everything here is a pure function of a ScanReport: colors are passed in as
a Palette value instead of living in module state.
"""

import json
import os
import re
from dataclasses import dataclass
from typing import IO

from mailscan.models import ScanReport, SearchCriteria

ICON_SUCCESS = "✔"
ICON_ERROR = "✖"

_EMAIL_RE = re.compile(r"[\w\.=-]+@[\w\.-]+\.[\w]{2,4}")


@dataclass(frozen=True)
class Palette:
    """ANSI escape codes used by the text report."""

    reset: str = ""
    red: str = ""
    green: str = ""
    yellow: str = ""
    cyan: str = ""
    email_highlight: str = ""
    other_emails: str = ""

    @classmethod
    def ansi(cls) -> "Palette":
        return cls(
            reset="\033[0m",
            red="\033[31m",
            green="\033[32m",
            yellow="\033[33m",
            cyan="\033[36m",
            email_highlight="\033[1;32m",
            other_emails="\033[33m",
        )

    @classmethod
    def plain(cls) -> "Palette":
        return cls()


def palette_for(color: bool) -> Palette:
    return Palette.ansi() if color else Palette.plain()


def should_use_color(mode: str, stream: IO | None = None) -> bool:
    """
    Decide whether to emit ANSI colors.

    Args:
        mode: "always", "never" or "auto"
        stream: Output stream checked for a terminal in auto mode

    Returns:
        bool: True if the report should be colorized
    """
    if mode == "always":
        return True
    if mode == "never":
        return False
    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def highlight_emails(content: str, email: str, palette: Palette) -> str:
    """
    Colorize every email address in the content.

    The searched address is highlighted, all other addresses are dimmed.
    """
    if not palette.reset:
        return content

    def _colorize(match: re.Match) -> str:
        found = match.group(0)
        color = (
            palette.email_highlight if found == email else palette.other_emails
        )
        return f"{color}{found}{palette.reset}"

    return _EMAIL_RE.sub(_colorize, content)


def format_report(
    report: ScanReport, criteria: SearchCriteria, color: bool = True
) -> str:
    """
    Render the report as text for a terminal.

    Args:
        report: Scan results
        criteria: Criteria the scan ran with
        color: Whether to emit ANSI colors

    Returns:
        str: The full report, matches first, then summary and errors
    """
    p = palette_for(color)
    out = [f"\n{p.cyan}{'─' * 30} SEARCH RESULTS {p.reset}"]

    for outcome in report.matched_files:
        out.append(
            f"\n{p.green}[{ICON_SUCCESS}]{p.reset} Match found in "
            f"{p.yellow}{outcome.path}{p.reset}"
        )
        out.append(f"{p.cyan}{'─' * 40}{p.reset}")
        out.append(highlight_emails(outcome.content, criteria.email, p))

    out.append(f"\n{p.cyan}{'─' * 35} SUMMARY {p.reset}")
    out.append(
        f"{p.cyan}Total files processed:{p.reset} {report.files_processed}"
    )
    out.append(
        f"{p.cyan}Files with matches:{p.reset}    "
        f"{p.green}{len(report.matched_files)}{p.reset}"
    )
    out.append(
        f"{p.cyan}Files without matches:{p.reset} "
        f"{p.red}{len(report.unmatched_files)}{p.reset}"
    )
    out.append(f"{p.cyan}Total records scanned:{p.reset} {report.total_records}")

    errored = report.errored_files
    if errored:
        out.append(f"\n{p.red}{'─' * 35} ERRORS {p.reset}")
        for outcome in errored:
            out.append(
                f"{p.red}[{ICON_ERROR}]{p.reset} {outcome.path} - {outcome.error}"
            )

    target = criteria.email
    if criteria.date:
        target = f"{target} on {criteria.date}"
    out.append(f"\n{p.cyan}Search target:{p.reset} {p.green}{target}{p.reset}")
    out.append("═" * 50)
    return "\n".join(out)


def format_json(
    report: ScanReport, criteria: SearchCriteria, include_content: bool = True
) -> str:
    """Render the report as a JSON document."""
    data = {
        "criteria": {"email": criteria.email, "date": criteria.date or None},
        **report.to_dict(include_content=include_content),
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
