# ABOUTME: Best-effort release hook run on each file once its verification is drained.
# ABOUTME: Spawns a configured command with the file path appended; failures are ignored.

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReleaseCommand:
    """An external command invoked as `program *arguments path`.

    An empty argv means no hook is configured and invoke() does nothing.
    """

    argv: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str | None) -> "ReleaseCommand":
        """Build a command from a whitespace-separated string (None -> no-op)."""
        if text is None:
            return cls()
        return cls(tuple(text.split()))

    @property
    def is_configured(self) -> bool:
        return bool(self.argv)

    @property
    def program(self) -> str | None:
        return self.argv[0] if self.argv else None

    @property
    def arguments(self) -> tuple[str, ...]:
        return self.argv[1:]

    def argv_for(self, path: Path) -> list[str]:
        """Full argument vector for releasing path."""
        return [*self.argv, str(path)]

    def invoke(self, path: Path) -> None:
        """Run the command for path and wait for it, ignoring the outcome."""
        if not self.argv:
            return
        argv = self.argv_for(path)
        try:
            completed = subprocess.run(argv, check=False)
        except OSError as exc:
            logger.warning("Release command %s failed to start: %s", self.program, exc)
            return
        if completed.returncode != 0:
            logger.debug(
                "Release command exited with %d for %s", completed.returncode, path
            )
