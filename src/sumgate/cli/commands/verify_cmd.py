# ABOUTME: The `sumgate verify` command for checking files against checksum lists.
# ABOUTME: Streams entries into the admission controller and prints OK/FAIL per file.

import logging
from functools import partial
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from sumgate.cli.options import (
    BYTES_PER_GB,
    DEFAULT_CHECKSUM_FILE,
    max_size_option,
    release_option,
    workers_option,
)
from sumgate.core.admission import AdmissionController, SizeExceededError, VerifyOutcome
from sumgate.core.release import ReleaseCommand
from sumgate.core.runner import run_verification
from sumgate.core.verifier import verify_file
from sumgate.formats.checksums import ChecksumFileError, ChecksumFormatError
from sumgate.fs.hashing import DEFAULT_ALGORITHM, digest_width

logger = logging.getLogger(__name__)


@click.command("verify")
@click.argument(
    "files",
    nargs=-1,
    type=click.Path(dir_okay=False, path_type=Path),
)
@max_size_option
@release_option
@workers_option
@click.option(
    "--algorithm",
    default=DEFAULT_ALGORITHM,
    show_default=True,
    help="Hash algorithm the checksum files were written with.",
)
def verify(
    files: tuple[Path, ...],
    max_size: int,
    release: str | None,
    workers: int | None,
    algorithm: str,
) -> None:
    """Verify the files listed in checksum FILES (default: ./md5sum)."""
    console = Console(stderr=True)
    checksum_files = list(files) or [Path(DEFAULT_CHECKSUM_FILE)]

    try:
        width = digest_width(algorithm)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--algorithm") from exc

    release_cmd = ReleaseCommand.parse(release)
    if release_cmd.is_configured:
        logger.info("Release command: %s", " ".join(release_cmd.argv))

    controller = AdmissionController(
        max_size * BYTES_PER_GB,
        release_cmd,
        max_workers=workers,
        reporter=echo_outcome,
        verify_fn=partial(verify_file, algorithm=algorithm),
    )
    with controller:
        try:
            summary = run_verification(checksum_files, controller, width=width)
        except (OSError, SizeExceededError, ChecksumFileError, ChecksumFormatError) as exc:
            console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True)
            raise SystemExit(1) from exc

    style = "red" if summary.failed else "green"
    console.print(
        f"[{style}]{summary.verified} file(s) verified, {summary.failed} failed.[/{style}]",
        soft_wrap=True,
    )


def echo_outcome(outcome: VerifyOutcome) -> None:
    """Print one `<path> OK|FAIL` line on stdout."""
    click.echo(str(outcome))
