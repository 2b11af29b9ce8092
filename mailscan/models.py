from dataclasses import dataclass, field

from mailscan.errors import FileScanError


@dataclass(frozen=True)
class LogRecord:
    """A single multi-line SMTP log record.

    Attributes:
        text: The record's lines in file order, each terminated by a newline
        start_line: 1-based line number of the record's first line
    """

    text: str
    start_line: int = 1

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines()


@dataclass(frozen=True)
class SearchCriteria:
    """What a record must contain to count as a match.

    Attributes:
        email: Email address (or any substring) that must appear in the record
        date: Optional date substring, empty string matches any date
    """

    email: str
    date: str = ""

    def __post_init__(self) -> None:
        if not self.email:
            raise ValueError("Email address must be provided")
        if self.date is None:
            object.__setattr__(self, "date", "")

    def matches(self, text: str) -> bool:
        # Lazy import to avoid circular dependency
        from mailscan.parser import check_record

        return check_record(self.email, self.date, text)


@dataclass(frozen=True)
class FileOutcome:
    """Result of scanning one file.

    Attributes:
        path: Path of the scanned file
        found: Whether at least one record matched
        records: Number of records parsed from the file
        matched: Number of records that matched
        content: Matched record text, one separated block per match
        error: Open or read failure, if any
    """

    path: str
    found: bool = False
    records: int = 0
    matched: int = 0
    content: str = ""
    error: FileScanError | None = None

    @classmethod
    def failed(cls, path: str, error: FileScanError) -> "FileOutcome":
        return cls(path=path, error=error)

    def to_dict(self, include_content: bool = True) -> dict:
        d = {
            "path": self.path,
            "found": self.found,
            "records": self.records,
            "matched": self.matched,
            "error": str(self.error) if self.error else None,
        }
        if include_content:
            d["content"] = self.content
        return d


@dataclass(frozen=True)
class ScanReport:
    """All file outcomes of one scan plus the totals derived from them.

    Outcomes are kept in completion order, which differs between runs.
    """

    outcomes: tuple[FileOutcome, ...] = ()
    elapsed: float = field(default=0.0, compare=False)

    @property
    def files_processed(self) -> int:
        return len(self.outcomes)

    @property
    def matched_files(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.error is None and o.found]

    @property
    def unmatched_files(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.error is None and not o.found]

    @property
    def errored_files(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.error is not None]

    @property
    def total_records(self) -> int:
        return sum(o.records for o in self.outcomes)

    @property
    def total_matches(self) -> int:
        return sum(o.matched for o in self.outcomes)

    def sorted_by_path(self) -> "ScanReport":
        return ScanReport(
            outcomes=tuple(sorted(self.outcomes, key=lambda o: o.path)),
            elapsed=self.elapsed,
        )

    def summary(self) -> dict:
        return {
            "files_processed": self.files_processed,
            "files_matched": len(self.matched_files),
            "files_unmatched": len(self.unmatched_files),
            "files_errored": len(self.errored_files),
            "total_records": self.total_records,
            "total_matches": self.total_matches,
            "elapsed": round(self.elapsed, 3),
        }

    def to_dict(self, include_content: bool = True) -> dict:
        return {
            "summary": self.summary(),
            "outcomes": [o.to_dict(include_content) for o in self.outcomes],
        }
