"""Recursive discovery of the files to back up."""

import os

from rich.console import Console
from rich.markup import escape
from tqdm import tqdm

from gcsbackup.errors import DiscoveryError


def _raise_walk_error(error: OSError):
    raise DiscoveryError(str(error)) from error


def walk_directory(root: str) -> list[str]:
    """List every file below ``root`` in sorted order, without following links."""
    files = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            files.append(os.path.join(dirpath, name))
    return files


def discover_files(directories: list[str], console: Console | None = None) -> list[str]:
    """
    Build the manifest of files to upload.

    Roots are visited in configuration order. A root that does not exist is
    reported and skipped; a root that is a plain file is backed up as is.

    Args:
        directories: Configured source roots
        console: Rich console for output

    Returns:
        Absolute paths of all files found

    Raises:
        DiscoveryError: If a directory cannot be read during the walk
    """
    if console is None:
        console = Console()

    manifest: list[str] = []

    for directory in tqdm(directories, desc="Scanning directories", leave=False):
        root = os.path.abspath(os.path.expanduser(directory))

        if not os.path.exists(root):
            console.print(f'[yellow][WARNING] Dir "{escape(directory)}" not found[/yellow]')
            continue

        if os.path.isdir(root):
            manifest.extend(walk_directory(root))
        else:
            manifest.append(root)

    return manifest
