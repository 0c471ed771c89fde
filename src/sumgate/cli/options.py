# ABOUTME: Shared Click options and defaults for sumgate CLI commands.
# ABOUTME: Provides the budget and release-hook flags with environment fallbacks.

import click

DEFAULT_CHECKSUM_FILE = "md5sum"
DEFAULT_MAX_SIZE_GB = 1024
BYTES_PER_GB = 1 << 30

max_size_option = click.option(
    "-m",
    "--max-size",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_SIZE_GB,
    show_default=True,
    envvar="SUMGATE_MAX_SIZE",
    help="Maximum total size of files being verified at the same time (in GB).",
)

release_option = click.option(
    "--release",
    "release",
    default=None,
    envvar="SUMGATE_RELEASE",
    help="Command run on each file after it is verified, e.g. 'mv -t archive/'.",
)

workers_option = click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Number of verification threads (default: Python's thread pool default).",
)
