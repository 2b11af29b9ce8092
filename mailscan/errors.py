class ScanError(Exception):
    """Base class for errors raised while scanning a log tree."""


class FileScanError(ScanError):
    """A failure confined to a single log file.

    These are never raised out of the worker pool: they are stored on the
    file's FileOutcome so the rest of the scan carries on.

    Attributes:
        path: The file that failed
        cause: The underlying exception
    """

    stage = "scan"

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"{self.stage} {path}: {cause}")
        self.path = path
        self.cause = cause


class OpenFailure(FileScanError):
    """The file could not be opened (missing, permissions, directory, ...)."""

    stage = "open"


class ReadFailure(FileScanError):
    """Reading stopped part way through the file."""

    stage = "read"


class TraversalError(ScanError):
    """The directory tree could not be walked. Fatal for the whole run."""
