"""Splitting the manifest into work units."""

from gcsbackup.engine._shared import WorkUnit


def worker_count(total: int, batch_size: int) -> int:
    """
    Number of workers for ``total`` files at ``batch_size`` files each.

    ``total / batch_size`` rounded half up, never less than 1.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    if total < 0:
        raise ValueError(f"total must not be negative, got {total}")

    return max(1, (2 * total + batch_size) // (2 * batch_size))


def partition(total: int, batch_size: int) -> list[WorkUnit]:
    """
    Split ``total`` manifest entries into contiguous work units.

    Every unit but the last holds exactly ``batch_size`` entries; the last
    one ends at ``total - 1`` and absorbs the remainder. An empty manifest
    yields no units.

    Args:
        total: Manifest length
        batch_size: Target number of files per worker

    Returns:
        Work units in manifest order
    """
    count = worker_count(total, batch_size)
    if total == 0:
        return []

    units = []
    start = 0
    for i in range(count):
        end = total - 1 if i == count - 1 else start + batch_size - 1
        units.append(WorkUnit(index=i, start=start, end=end))
        start = end + 1

    return units
