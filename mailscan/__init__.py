from .models import FileOutcome, LogRecord, ScanReport, SearchCriteria
from .pool import WorkerPool
from .scanner import scan

__all__ = [
    "FileOutcome",
    "LogRecord",
    "ScanReport",
    "SearchCriteria",
    "WorkerPool",
    "scan",
]
