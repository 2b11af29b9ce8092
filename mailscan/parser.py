import re
from abc import ABC, abstractmethod
from typing import Iterable, Iterator

from mailscan.models import LogRecord

# Record header: "2025-01-01 10:00:00" at the start of the line
RECORD_START_RE = re.compile(
    r"^[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}"
)

# RFC 5424 header: "2025-01-01T10:00:00"
_RFC5424_START_RE = re.compile(
    r"^[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}"
)

# RFC 3164 header: "Feb  1 10:00:00"
_RFC3164_START_RE = re.compile(
    r"^[A-Z][a-z]{2} +[0-9]{1,2} [0-9]{2}:[0-9]{2}:[0-9]{2}"
)


def check_record(email: str, date: str, record: str) -> bool:
    """
    Check whether a record satisfies the search criteria.

    Both checks are plain, case-sensitive substring tests.

    Args:
        email: Email address that must appear in the record
        date: Date that must also appear, or empty to accept any date
        record: The record text

    Returns:
        bool: True if the record contains the email (and the date, if given)
    """
    if email not in record:
        return False
    return not date or date in record


class RecordParser(ABC):
    """Abstract base class for splitting a line stream into log records."""

    @abstractmethod
    def is_record_start(self, line: str) -> bool:
        """
        Tell whether a line opens a new record.

        Args:
            line: A single line without its terminator

        Returns:
            bool: True if the line is a record header
        """

    def split(self, lines: Iterable[str]) -> Iterator[LogRecord]:
        """
        Group lines into records, one forward pass.

        A record runs from a header line up to the line before the next
        header. Lines that come before the first header are not dropped:
        together they form the first record.

        Args:
            lines: Lines in file order, without terminators

        Yields:
            LogRecord: Each complete record, in file order
        """
        buffer: list[str] = []
        start_line = 1
        for number, line in enumerate(lines, start=1):
            if buffer and self.is_record_start(line):
                yield LogRecord(text="".join(buffer), start_line=start_line)
                buffer = []
                start_line = number
            buffer.append(line + "\n")

        if buffer:
            yield LogRecord(text="".join(buffer), start_line=start_line)


class TimestampRecordParser(RecordParser):
    """
    Records open with a "YYYY-MM-DD HH:MM:SS" timestamp.

    Example:
      2025-01-01 10:00:00 [1234] connection from mx.example.com
      EHLO mx.example.com
      2025-01-01 10:00:01 [1234] MAIL FROM:<abc@example.com>
    """

    def is_record_start(self, line: str) -> bool:
        return bool(RECORD_START_RE.match(line))


class Rfc5424RecordParser(RecordParser):
    """
    Records open with an ISO 8601 timestamp.

    Example: 2025-01-01T10:00:00.123456+08:00 mailer1 postfix/qmgr[123456]: ...
    """

    def is_record_start(self, line: str) -> bool:
        return bool(_RFC5424_START_RE.match(line))


class Rfc3164RecordParser(RecordParser):
    """
    Records open with a BSD syslog timestamp.

    Example: Feb  1 10:00:00 mailer1 postfix/qmgr[123456]: ...
    """

    def is_record_start(self, line: str) -> bool:
        return bool(_RFC3164_START_RE.match(line))


def split_records(
    lines: Iterable[str], parser: RecordParser | None = None
) -> Iterator[LogRecord]:
    """Split lines into records with the given parser (timestamp headers by default)."""
    return (parser or TimestampRecordParser()).split(lines)


# Registry of available record parsers by name
PARSERS: dict[str, type[RecordParser]] = {
    "TimestampRecordParser": TimestampRecordParser,  # default
    "Rfc5424RecordParser": Rfc5424RecordParser,
    "Rfc3164RecordParser": Rfc3164RecordParser,
}
