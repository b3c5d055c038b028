"""Port interfaces between the validator, its host and the scanner process."""

from __future__ import annotations

import threading
from typing import Protocol, Sequence, runtime_checkable

from kics_validator.models import InvocationOutcome


@runtime_checkable
class ValidationContext(Protocol):
    """What the host hands to ``validate``: the templates to check."""

    @property
    def template_paths(self) -> Sequence[str]: ...


@runtime_checkable
class ScannerInvokerPort(Protocol):
    """Runs the scanner binary.

    Implementations must block until the process ends and must not treat a
    non-zero exit code as a failure on their own.
    """
    def is_available(self) -> bool: ...
    def run(
        self,
        args: Sequence[str],
        *,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> InvocationOutcome: ...
