from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..lib.command import CommandRunner, run_cmd
from ..lib.env import FetchPaths
from ..lib.partlabel import mount_answer_partition
from .base import SourceOutcome, SourceStatus

logger = logging.getLogger(__name__)


def read_cert_fingerprint(paths: FetchPaths, *, runner: CommandRunner = run_cmd) -> str:
    """Mount the config partition and return the trimmed fingerprint file.

    Raises FileNotFoundError when there is no partition, no file, or the
    file is empty.
    """

    mount_path = mount_answer_partition(paths, runner=runner)
    cert_path = Path(mount_path) / paths.cert_fingerprint_file
    if not cert_path.is_file():
        raise FileNotFoundError(f"could not find cert fingerprint file expected at: {cert_path}")

    logger.info("Found certificate fingerprint file.")
    fingerprint = cert_path.read_text(encoding="utf-8").strip()
    if not fingerprint:
        raise FileNotFoundError(f"cert fingerprint file is empty: {cert_path}")
    return fingerprint


class PartitionFingerprintSource:
    source_id = "partition"

    def __init__(self, paths: FetchPaths, *, runner: CommandRunner = run_cmd) -> None:
        self.paths = paths
        self.runner = runner

    def probe(self, fingerprint: Optional[str]) -> SourceOutcome:
        if fingerprint:
            return SourceOutcome(self.source_id, SourceStatus.FOUND, fingerprint=fingerprint)
        try:
            fp = read_cert_fingerprint(self.paths, runner=self.runner)
        except FileNotFoundError as e:
            return SourceOutcome.absent(self.source_id, str(e))
        except (OSError, RuntimeError, UnicodeDecodeError) as e:
            return SourceOutcome.failed(self.source_id, str(e))
        return SourceOutcome(self.source_id, SourceStatus.FOUND, fingerprint=fp)
