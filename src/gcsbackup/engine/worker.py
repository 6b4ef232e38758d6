"""Upload worker: processes one work unit."""

import os
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape

from gcsbackup.engine._shared import RunContext, UploadOutcome, WorkerTally, WorkUnit, object_key
from gcsbackup.engine.aggregate import ResultAggregator
from gcsbackup.storage.upload import stream_file


def upload_one(path: str, context: RunContext, console: Console) -> UploadOutcome:
    """
    Upload a single file and report what happened.

    The file is checked again before opening since it may have been removed
    after discovery. Failures are printed, never raised.
    """
    if not os.path.exists(path):
        console.print(f'[yellow][WARNING] File "{escape(path)}" not found[/yellow]')
        return UploadOutcome.SKIPPED_MISSING

    try:
        source = open(path, "rb")
    except OSError as e:
        console.print(f'[red][ERROR] File "{escape(path)}" could not be opened: {escape(str(e))}[/red]')
        return UploadOutcome.SKIPPED_UNREADABLE

    key = object_key(context.prefix, path)

    with source:
        try:
            stream_file(source, context.bucket, key, context.timeout)
        except Exception as e:
            console.print(f'[red][ERROR] File "{escape(path)}" upload failed: {escape(str(e))}[/red]')
            return UploadOutcome.TRANSFER_ERROR

    console.print(f'[green][OK] File "{escape(key)}" copied successfully[/green]')
    return UploadOutcome.SUCCESS


def upload_unit(
    unit: WorkUnit,
    manifest: Sequence[str],
    context: RunContext,
    aggregator: ResultAggregator,
    console: Console,
) -> WorkerTally:
    """
    Upload every file in ``unit`` in index order.

    Args:
        unit: Range of the manifest assigned to this worker
        manifest: Full list of files to back up
        context: Shared run state (prefix, bucket, timeout)
        aggregator: Shared counters, updated once per file
        console: Rich console for per-file output

    Returns:
        This worker's own counts
    """
    tally = WorkerTally()

    for n in unit.indices():
        outcome = upload_one(manifest[n], context, console)
        tally.add(outcome)
        aggregator.record(outcome)

    return tally
