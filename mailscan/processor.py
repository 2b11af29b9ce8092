"""
Scanning of a single log file.

process_file never raises for I/O problems: open and read failures end up
on the returned FileOutcome so one bad file cannot stop a scan.
"""

from typing import IO, Iterator

from mailscan.errors import OpenFailure, ReadFailure
from mailscan.models import FileOutcome, SearchCriteria
from mailscan.parser import RecordParser, TimestampRecordParser

# Drawn after every matched record
SEPARATOR = "─" * 40


class _LineReader:
    """Iterates the lines of an open file and remembers why it stopped early."""

    def __init__(self, handle: IO[str]):
        self._handle = handle
        self.error: Exception | None = None

    def __iter__(self) -> Iterator[str]:
        try:
            for line in self._handle:
                yield _strip_terminator(line)
        except (OSError, UnicodeDecodeError) as e:
            self.error = e


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def process_file(
    path: str,
    criteria: SearchCriteria,
    parser: RecordParser | None = None,
    encoding: str = "utf-8",
    encoding_errors: str = "replace",
) -> FileOutcome:
    """
    Parse one log file into records and collect the ones matching the criteria.

    Args:
        path: File to scan
        criteria: Email and optional date a record must contain
        parser: Record boundary detector, timestamp headers by default
        encoding: Text encoding used to read the file
        encoding_errors: How undecodable bytes are handled (see open())

    Returns:
        FileOutcome: Match status, record counts and matched text. On a read
            failure the data gathered so far is kept and the error is set.
    """
    parser = parser or TimestampRecordParser()
    try:
        handle = open(
            path, encoding=encoding, errors=encoding_errors, newline="\n"
        )
    except OSError as e:
        return FileOutcome.failed(path, OpenFailure(path, e))

    blocks: list[str] = []
    records = 0
    with handle:
        reader = _LineReader(handle)
        for record in parser.split(reader):
            records += 1
            if criteria.matches(record.text):
                blocks.append(record.text + "\n" + SEPARATOR + "\n")

    return FileOutcome(
        path=path,
        found=bool(blocks),
        records=records,
        matched=len(blocks),
        content="".join(blocks),
        error=ReadFailure(path, reader.error) if reader.error else None,
    )
