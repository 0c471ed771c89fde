# ABOUTME: Admission-controlled concurrent verification engine.
# ABOUTME: Runs verifications on a thread pool while capping the bytes in flight.

import logging
from collections.abc import Callable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType

from sumgate.core.release import ReleaseCommand
from sumgate.core.verifier import verify_file

logger = logging.getLogger(__name__)


class SizeExceededError(Exception):
    """Raised when a single file is larger than the whole byte budget."""

    def __init__(self, path: Path, size: int, max_bytes: int) -> None:
        super().__init__(
            f"{path} is bigger than the maximum allowed buffer size {max_bytes} "
            f"({size} bytes)"
        )
        self.path = path
        self.size = size
        self.max_bytes = max_bytes


@dataclass(frozen=True)
class PendingWork:
    """One admitted verification, owned by the controller until drained."""

    path: Path
    expected_digest: str
    declared_size: int


@dataclass(frozen=True)
class VerifyOutcome:
    """Result of a drained verification."""

    path: Path
    ok: bool

    @property
    def label(self) -> str:
        return "OK" if self.ok else "FAIL"

    def __str__(self) -> str:
        return f"{self.path} {self.label}"


Reporter = Callable[[VerifyOutcome], None]
VerifyFn = Callable[[Path, str], bool]


def print_outcome(outcome: VerifyOutcome) -> None:
    """Default reporter: one `<path> OK|FAIL` line on stdout."""
    print(outcome, flush=True)


class AdmissionController:
    """Schedules file verifications under a running byte budget.

    Work is admitted one file at a time by submit(). A file is only started
    once the sizes of all undrained files plus its own fit within max_bytes;
    until then submit() blocks, draining completed work. Completed work is
    drained in completion order, not submission order.

    All bookkeeping (the in-flight map and the byte total) is touched only by
    the thread calling submit/next/join. Worker threads only run verify_fn
    and hand their result back through a Future.
    """

    def __init__(
        self,
        max_bytes: int,
        release: ReleaseCommand | None = None,
        *,
        max_workers: int | None = None,
        reporter: Reporter = print_outcome,
        verify_fn: VerifyFn = verify_file,
    ) -> None:
        if max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive, got {max_bytes}")
        self._max_bytes = max_bytes
        self._release = release or ReleaseCommand()
        self._reporter = reporter
        self._verify_fn = verify_fn
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="sumgate-verify"
        )
        self._in_flight: dict[Future[bool], PendingWork] = {}
        self._in_flight_bytes = 0
        self._peak_bytes = 0
        self.verified = 0
        self.failed = 0

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    @property
    def in_flight_bytes(self) -> int:
        """Sum of declared sizes of all admitted, not yet drained files."""
        return self._in_flight_bytes

    @property
    def peak_bytes(self) -> int:
        """Highest in_flight_bytes seen since construction."""
        return self._peak_bytes

    @property
    def in_flight_count(self) -> int:
        return len(self._in_flight)

    def submit(self, path: Path | str, expected_digest: str) -> PendingWork:
        """Admit a file for verification, blocking until the budget allows it.

        Returns as soon as the verification is running; the result is
        reported later by next() or join().

        Raises:
            OSError: If the file's size cannot be read.
            SizeExceededError: If the file alone exceeds max_bytes. Nothing
                is started and the budget is untouched.
            VerificationIOError: If a file drained while waiting for room
                failed with an I/O error.
        """
        path = Path(path)
        size = path.stat().st_size
        if size > self._max_bytes:
            raise SizeExceededError(path, size, self._max_bytes)

        while self._in_flight_bytes + size > self._max_bytes:
            logger.debug(
                "Budget full (%d + %d > %d bytes), waiting for a verification",
                self._in_flight_bytes,
                size,
                self._max_bytes,
            )
            self.next()

        work = PendingWork(path=path, expected_digest=expected_digest, declared_size=size)
        future = self._executor.submit(self._verify_fn, work.path, work.expected_digest)
        self._in_flight[future] = work
        self._in_flight_bytes += size
        self._peak_bytes = max(self._peak_bytes, self._in_flight_bytes)
        logger.debug("Admitted %s (%d bytes, %d in flight)", path, size, self._in_flight_bytes)
        return work

    def next(self) -> VerifyOutcome | None:
        """Wait for one verification to finish and drain it.

        Returns None when nothing is in flight. The finished file's budget
        reservation is released before anything else happens, then it is
        reported and handed to the release hook. A file whose verification
        raised is still released, after which the error propagates.
        """
        if not self._in_flight:
            return None

        done, _ = wait(self._in_flight, return_when=FIRST_COMPLETED)
        future = next(f for f in self._in_flight if f in done)
        work = self._in_flight.pop(future)
        self._in_flight_bytes -= work.declared_size

        try:
            ok = future.result()
        except Exception:
            logger.debug("Verification of %s raised, releasing before propagating", work.path)
            self._release.invoke(work.path)
            raise

        outcome = VerifyOutcome(path=work.path, ok=ok)
        if ok:
            self.verified += 1
        else:
            self.failed += 1
        try:
            self._reporter(outcome)
        finally:
            self._release.invoke(work.path)
        return outcome

    def join(self) -> None:
        """Drain until nothing is in flight, stopping at the first error."""
        while self.next() is not None:
            pass

    def close(self, *, cancel_pending: bool = True) -> None:
        """Shut down the worker pool.

        With cancel_pending, verifications that have not started yet are
        cancelled and running ones are left to finish in the background
        without being waited for or reported. Without it, shutdown waits
        for every submitted verification. Any undrained work is dropped
        from the books.
        """
        if self._in_flight:
            logger.info("Abandoning %d undrained verification(s)", len(self._in_flight))
        self._executor.shutdown(wait=not cancel_pending, cancel_futures=cancel_pending)
        self._in_flight.clear()
        self._in_flight_bytes = 0

    def __enter__(self) -> "AdmissionController":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close(cancel_pending=exc_type is not None)
