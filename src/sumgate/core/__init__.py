# ABOUTME: Public API for the sumgate verification engine.
# ABOUTME: Exports the admission controller, the verifier, and the release hook.

from sumgate.core.admission import (
    AdmissionController,
    PendingWork,
    SizeExceededError,
    VerifyOutcome,
)
from sumgate.core.release import ReleaseCommand
from sumgate.core.verifier import VerificationIOError, verify_file

__all__ = [
    "AdmissionController",
    "PendingWork",
    "ReleaseCommand",
    "SizeExceededError",
    "VerificationIOError",
    "VerifyOutcome",
    "verify_file",
]
