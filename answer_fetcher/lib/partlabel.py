from __future__ import annotations

import logging
from pathlib import Path

from .command import CommandRunner, run_cmd
from .env import FetchPaths

logger = logging.getLogger(__name__)


def scan_partlabels(label: str, search_dir: str) -> Path:
    """Return the by-label link for ``label``, trying UPPER then lower case."""

    for candidate in (label.upper(), label.lower()):
        path = Path(search_dir) / candidate
        try:
            if path.exists():
                logger.info("Found partition with label '%s'", candidate)
                return path
            logger.info("Did not detect partition with label '%s'", candidate)
        except OSError as e:
            logger.info("Encountered issue, accessing '%s': %s", path, e)

    raise FileNotFoundError(f"Could not detect upper or lower case labels for '{label}'")


def is_mounted(mountpoint: str, mounts_table: str = "/proc/mounts") -> bool:
    """True if ``mountpoint`` is the exact mount target of a line in the mount table."""

    for line in Path(mounts_table).read_text(encoding="utf-8").splitlines():
        fields = line.split()
        if len(fields) > 1 and fields[1] == mountpoint:
            return True
    return False


def mount_answer_partition(paths: FetchPaths, *, runner: CommandRunner = run_cmd) -> str:
    """Mount the labelled config partition read-only at the answer mountpoint.

    Idempotent: an existing mount is reused. A failing ``mount`` is only
    logged, so readers of the mountpoint see missing files instead of an
    error. Raises FileNotFoundError if no labelled partition exists and
    RuntimeError if ``mount`` cannot be launched at all.
    """

    mountpoint = paths.answer_mountpoint
    try:
        if is_mounted(mountpoint, paths.mounts_table):
            logger.info("Skipping: '%s' is already mounted.", mountpoint)
            return mountpoint
    except OSError as e:
        logger.info("Could not read mount table %s: %s", paths.mounts_table, e)

    part_path = scan_partlabels(paths.partition_label, paths.label_search_dir)

    logger.info("Mounting partition at %s", mountpoint)
    Path(mountpoint).mkdir(parents=True, exist_ok=True)
    try:
        r = runner(["mount", "-o", "ro", str(part_path), mountpoint], check=False)
    except OSError as e:
        raise RuntimeError(f"Error mounting: {e}") from e

    if r.returncode != 0:
        logger.warning("Error mounting: %s", (r.stderr or "").strip())
    return mountpoint
