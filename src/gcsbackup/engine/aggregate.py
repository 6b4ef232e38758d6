"""Thread-safe outcome counters shared by all workers."""

import threading

from gcsbackup.engine._shared import UploadOutcome, WorkerTally


class ResultAggregator:
    """Success, failure and skip counters guarded by a single lock."""

    def __init__(self):
        self._lock = threading.Lock()
        self._tally = WorkerTally()

    def record(self, outcome: UploadOutcome):
        with self._lock:
            self._tally.add(outcome)

    def snapshot(self) -> WorkerTally:
        """Copy of the current counts."""
        with self._lock:
            return WorkerTally(
                succeeded=self._tally.succeeded,
                failed=self._tally.failed,
                skipped=self._tally.skipped,
            )
