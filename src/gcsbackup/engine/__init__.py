"""Concurrent batch-upload engine."""

from .coordinator import copy_files, print_report
from .partition import partition, worker_count
from .worker import upload_one, upload_unit

__all__ = ["copy_files", "print_report", "partition", "worker_count", "upload_one", "upload_unit"]
