"""
Directory scanning for mailscan.

This module ties the directory walk to the worker pool and can be used
both from the CLI and as a library.
"""

import logging
import os
from typing import Iterator

from mailscan.config import Config, ScanConfig
from mailscan.models import ScanReport, SearchCriteria
from mailscan.parser import PARSERS
from mailscan.pool import WorkerPool

logger = logging.getLogger("mailscan")


def _raise(error: OSError) -> None:
    raise error


def iter_log_files(root: str) -> Iterator[str]:
    """
    Recursively yield every regular file under root.

    Directories are walked in lexical order. A root that is itself a file is
    yielded as is.

    Args:
        root: Directory (or single file) to walk

    Yields:
        str: File paths

    Raises:
        OSError: If the root or any directory below it cannot be read
    """
    if os.path.isfile(root):
        yield root
        return

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for filename in sorted(filenames):
            path = os.path.join(dirpath, filename)
            if os.path.isfile(path):
                yield path


def build_pool(criteria: SearchCriteria, scan_config: ScanConfig) -> WorkerPool:
    """Create a worker pool from the scan configuration."""
    return WorkerPool(
        criteria,
        workers=scan_config.workers,
        queue_size=scan_config.queue_size,
        parser=PARSERS[scan_config.record_parser](),
        encoding=scan_config.encoding,
        encoding_errors=scan_config.encoding_errors,
    )


def scan(
    root: str, criteria: SearchCriteria, config: Config | None = None
) -> ScanReport:
    """
    Scan a log tree for records matching the criteria.

    Args:
        root: Directory containing the SMTP logs
        criteria: Email and optional date to look for
        config: Configuration, defaults apply when omitted

    Returns:
        ScanReport: Outcomes of every file under root

    Raises:
        TraversalError: If the tree cannot be walked
    """
    config = config or Config()
    pool = build_pool(criteria, config.scan)
    logger.info(
        "Scanning %s for %s%s with %d workers",
        root,
        criteria.email,
        f" on {criteria.date}" if criteria.date else "",
        pool.workers,
    )
    report = pool.run(iter_log_files(root))
    logger.info(
        "Scanned %d files (%d matched, %d errors) in %.2fs",
        report.files_processed,
        len(report.matched_files),
        len(report.errored_files),
        report.elapsed,
    )
    return report
