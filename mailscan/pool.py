"""
Concurrent scan pipeline.

Paths flow from a producer thread through a bounded work queue to a fixed
set of worker threads; their outcomes flow through a bounded outcome queue
to a single aggregator thread. The queues are the only shared state.
"""

import logging
import queue
import threading
import time
from typing import Iterable

from mailscan.errors import FileScanError, TraversalError
from mailscan.models import FileOutcome, ScanReport, SearchCriteria
from mailscan.parser import RecordParser, TimestampRecordParser
from mailscan.processor import process_file

logger = logging.getLogger("mailscan")

DEFAULT_WORKERS = 50
DEFAULT_QUEUE_SIZE = 100

# Close signal for both queues
_DONE = object()


class _PathProducer(threading.Thread):
    """Feeds paths into the work queue, then closes it for every worker."""

    def __init__(self, paths: Iterable[str], work_queue: queue.Queue, workers: int):
        super().__init__(name="mailscan-producer", daemon=True)
        self._paths = paths
        self._work_queue = work_queue
        self._workers = workers
        self.error: Exception | None = None
        self.produced = 0

    def run(self) -> None:
        try:
            for path in self._paths:
                self._work_queue.put(path)
                self.produced += 1
        except Exception as e:
            self.error = e
        finally:
            for _ in range(self._workers):
                self._work_queue.put(_DONE)


class ResultAggregator(threading.Thread):
    """Drains the outcome queue into a list, in completion order."""

    def __init__(self, outcome_queue: queue.Queue):
        super().__init__(name="mailscan-aggregator", daemon=True)
        self._outcome_queue = outcome_queue
        self.outcomes: list[FileOutcome] = []

    def run(self) -> None:
        while True:
            outcome = self._outcome_queue.get()
            if outcome is _DONE:
                break
            logger.debug(
                "Collected %s (found=%s, records=%d)",
                outcome.path,
                outcome.found,
                outcome.records,
            )
            self.outcomes.append(outcome)

    def wait(self) -> list[FileOutcome]:
        """Block until the outcome queue is closed and fully drained."""
        self.join()
        return self.outcomes


class WorkerPool:
    """
    A fixed number of threads scanning files concurrently.

    Every path is attempted exactly once and failures stay confined to that
    path's FileOutcome. The pool size does not scale with the input; it
    bounds the number of files open at the same time.
    """

    def __init__(
        self,
        criteria: SearchCriteria,
        workers: int = DEFAULT_WORKERS,
        queue_size: int = DEFAULT_QUEUE_SIZE,
        parser: RecordParser | None = None,
        encoding: str = "utf-8",
        encoding_errors: str = "replace",
    ):
        if workers < 1:
            raise ValueError(f"Worker count must be at least 1, got {workers}")
        if queue_size < 1:
            raise ValueError(f"Queue size must be at least 1, got {queue_size}")
        self.criteria = criteria
        self.workers = workers
        self.queue_size = queue_size
        self.parser = parser or TimestampRecordParser()
        self.encoding = encoding
        self.encoding_errors = encoding_errors

    def _process(self, path: str) -> FileOutcome:
        try:
            return process_file(
                path,
                self.criteria,
                self.parser,
                encoding=self.encoding,
                encoding_errors=self.encoding_errors,
            )
        except Exception as e:
            logger.exception("Unexpected error while scanning %s", path)
            return FileOutcome.failed(path, FileScanError(path, e))

    def _work(self, work_queue: queue.Queue, outcome_queue: queue.Queue) -> None:
        while True:
            path = work_queue.get()
            if path is _DONE:
                return
            logger.debug("Scanning %s", path)
            outcome_queue.put(self._process(path))

    def run(self, paths: Iterable[str]) -> ScanReport:
        """
        Scan every path and collect the outcomes.

        Args:
            paths: Files to scan. Iterated on a separate thread, so a slow
                directory walk overlaps with scanning.

        Returns:
            ScanReport: One outcome per path, in completion order

        Raises:
            TraversalError: If iterating the paths raised. No report is
                produced in that case.
        """
        started_at = time.monotonic()
        work_queue: queue.Queue = queue.Queue(maxsize=self.queue_size)
        outcome_queue: queue.Queue = queue.Queue(maxsize=self.queue_size)

        aggregator = ResultAggregator(outcome_queue)
        aggregator.start()

        threads = [
            threading.Thread(
                target=self._work,
                args=(work_queue, outcome_queue),
                name=f"mailscan-worker-{i}",
                daemon=True,
            )
            for i in range(self.workers)
        ]
        for thread in threads:
            thread.start()

        producer = _PathProducer(paths, work_queue, self.workers)
        producer.start()

        # Completion barrier: every worker has seen the close signal
        for thread in threads:
            thread.join()
        outcome_queue.put(_DONE)
        outcomes = aggregator.wait()
        producer.join()

        if producer.error is not None:
            raise TraversalError(
                f"Error walking directory: {producer.error}"
            ) from producer.error

        logger.debug(
            "Scanned %d of %d files with %d workers",
            len(outcomes),
            producer.produced,
            self.workers,
        )
        return ScanReport(
            outcomes=tuple(outcomes), elapsed=time.monotonic() - started_at
        )
