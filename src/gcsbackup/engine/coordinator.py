"""Run coordinator: dispatches workers and builds the run report."""

import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta

from rich.console import Console

from gcsbackup.config import BackupConfig
from gcsbackup.engine._shared import RunContext, RunReport, make_run_prefix
from gcsbackup.engine.aggregate import ResultAggregator
from gcsbackup.engine.partition import partition
from gcsbackup.engine.worker import upload_unit
from gcsbackup.storage.client import get_bucket


def copy_files(
    manifest: Sequence[str],
    config: BackupConfig,
    console: Console | None = None,
    bucket=None,
    now: datetime | None = None,
) -> RunReport:
    """
    Upload the whole manifest, one thread per work unit.

    Flow:
    1. Build the run context (bucket handle, timestamp prefix)
    2. Partition the manifest by the configured batch size
    3. Start one worker per unit and wait for all of them
    4. Fold the results into a RunReport

    Args:
        manifest: Files to upload, in order
        config: Backup configuration
        console: Rich console for output
        bucket: Destination bucket; built from the config when omitted
        now: Run start time used for the prefix (defaults to the current time)

    Returns:
        RunReport with counts and elapsed time

    Raises:
        StorageSetupError: If the bucket handle cannot be constructed
    """
    if console is None:
        console = Console()

    started = time.monotonic()
    if now is None:
        now = datetime.now()

    prefix = make_run_prefix(now)
    report = RunReport(total=len(manifest), prefix=prefix)

    units = partition(len(manifest), config.upload.batch_size)
    if not units:
        console.print("[yellow]No files found to copy.[/yellow]")
        report.elapsed = timedelta(seconds=time.monotonic() - started)
        return report

    if bucket is None:
        bucket = get_bucket(config.google_cloud)

    context = RunContext(prefix=prefix, bucket=bucket, timeout=config.upload.timeout)
    aggregator = ResultAggregator()

    console.print(
        f"Copying {len(manifest)} files with {len(units)} workers "
        f"to {config.google_cloud.name_bucket} under {prefix}"
    )

    with ThreadPoolExecutor(max_workers=len(units), thread_name_prefix="upload") as executor:
        futures = [
            executor.submit(upload_unit, unit, manifest, context, aggregator, console)
            for unit in units
        ]
        # Barrier: result() re-raises anything a worker did not handle
        report.workers = [future.result() for future in futures]

    report.elapsed = timedelta(seconds=time.monotonic() - started)

    totals = aggregator.snapshot()
    report.succeeded = totals.succeeded
    report.failed = totals.failed
    report.skipped = totals.skipped
    return report


def print_report(report: RunReport, console: Console | None = None):
    """Print the end-of-run summary block."""
    if console is None:
        console = Console()

    console.print(f"\n\nTotal files to copy: {report.total}")
    console.print(f"Total files copied: {report.succeeded}")
    console.print(f"Total files with errors: {report.failed}")
    console.print(f"Total files skipped: {report.skipped}")
    console.print(f"Copy files took: {report.elapsed}")
