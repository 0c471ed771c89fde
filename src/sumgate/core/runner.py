# ABOUTME: Drives a verification run from one or more checksum files.
# ABOUTME: Feeds every entry into the admission controller in order, then drains it.

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from sumgate.core.admission import AdmissionController
from sumgate.formats.checksums import iter_checksum_file

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Totals for a completed verification run."""

    verified: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.verified + self.failed


def run_verification(
    checksum_files: Iterable[Path],
    controller: AdmissionController,
    *,
    width: int,
) -> RunSummary:
    """Verify every file listed in checksum_files.

    Entries are submitted sequentially; the first error (unreadable
    checksum file, malformed line, stat failure, oversized file or I/O
    failure during verification) stops the run and propagates.
    """
    for checksum_path in checksum_files:
        logger.info("Reading checksums from %s", checksum_path)
        for entry in iter_checksum_file(checksum_path, width):
            controller.submit(entry.path, entry.digest)
    controller.join()
    return RunSummary(verified=controller.verified, failed=controller.failed)
