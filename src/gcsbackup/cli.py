"""CLI entrypoint for gcsbackup."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gcsbackup.config import load_config
from gcsbackup.errors import BackupError

app = typer.Typer(
    name="gcsbackup",
    help="Back up local directories to a Google Cloud Storage bucket",
    no_args_is_help=True,
)
console = Console()

DEFAULT_CONFIG = Path("conf.yaml")


def print_plan(manifest: list[str], batch_size: int):
    """Show how the manifest would be split between workers."""
    from gcsbackup.engine import partition

    units = partition(len(manifest), batch_size)
    console.print(f"Found {len(manifest)} files, {len(units)} workers")

    table = Table(title="Upload plan", show_header=True)
    table.add_column("Worker", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("First file")
    table.add_column("Last file")

    for unit in units:
        table.add_row(
            str(unit.index + 1),
            str(len(unit)),
            escape(manifest[unit.start]),
            escape(manifest[unit.end]),
        )

    console.print(table)


@app.command()
def backup(
    config: Annotated[
        Path, typer.Option("--config", "-c", help="YAML file with the configuration")
    ] = DEFAULT_CONFIG,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="List what would be copied, don't upload")
    ] = False,
):
    """Copy every file under the configured directories to the bucket."""
    from gcsbackup.discovery import discover_files
    from gcsbackup.engine import copy_files, print_report

    try:
        backup_config = load_config(config)

        console.print(f"[bold]Target: gs://{backup_config.google_cloud.name_bucket}[/bold]")
        manifest = discover_files(backup_config.directories, console)

        if dry_run:
            console.print("[yellow]DRY RUN - no files will be copied[/yellow]\n")
            print_plan(manifest, backup_config.upload.batch_size)
            return

        report = copy_files(manifest, backup_config, console)
    except BackupError as e:
        console.print(f"[red][ERROR] {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    print_report(report, console)


@app.command()
def version():
    """Show version information."""
    from gcsbackup import __version__

    console.print(f"gcsbackup version {__version__}")


if __name__ == "__main__":
    app()
