"""Shared types for the upload engine."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum, auto
from typing import Any

RUN_PREFIX_FORMAT = "%Y-%m-%d_%H:%M:%S"


class UploadOutcome(Enum):
    """Result of uploading a single file."""

    SUCCESS = auto()
    SKIPPED_MISSING = auto()
    SKIPPED_UNREADABLE = auto()
    TRANSFER_ERROR = auto()


@dataclass(frozen=True)
class WorkUnit:
    """Inclusive index range ``[start, end]`` into the manifest."""

    index: int
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start + 1

    def indices(self) -> range:
        return range(self.start, self.end + 1)


@dataclass(frozen=True)
class RunContext:
    """Per-run state shared read-only by every worker."""

    prefix: str
    bucket: Any
    timeout: float


@dataclass
class WorkerTally:
    """Outcome counts collected privately by one worker."""

    succeeded: int = 0
    failed: int = 0
    skipped: int = 0

    def add(self, outcome: UploadOutcome):
        if outcome is UploadOutcome.SUCCESS:
            self.succeeded += 1
        elif outcome is UploadOutcome.TRANSFER_ERROR:
            self.failed += 1
        else:
            self.skipped += 1


@dataclass
class RunReport:
    """Final aggregate of a backup run."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    elapsed: timedelta = field(default_factory=timedelta)
    prefix: str = ""
    workers: list[WorkerTally] = field(default_factory=list)


def make_run_prefix(now: datetime) -> str:
    """Format the run start time as the object key prefix, e.g. ``2026-10-18_09:05:03``."""
    return now.strftime(RUN_PREFIX_FORMAT)


def object_key(prefix: str, path: str) -> str:
    """Destination key for ``path``: the run prefix followed by the path verbatim."""
    return prefix + path
