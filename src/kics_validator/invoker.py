"""Process invoker for the KICS scanner.

Runs the scanner synchronously and classifies how it ended.  The exit code is
recorded but never turned into a verdict here: KICS exits non-zero whenever
findings cross the ``--fail-on`` threshold, and the JSON report is the
authority on what was found.
"""

from __future__ import annotations

import logging
import os
import subprocess
import threading
import time
from pathlib import Path
from typing import Sequence

from kics_validator import defaults
from kics_validator.models import InvocationOutcome, InvocationStatus

log = logging.getLogger(__name__)


class ProcessInvoker:
    """Spawn an executable with a flat argument vector and wait for it."""

    def __init__(
        self,
        executable: str | Path,
        *,
        poll_interval: float = defaults.POLL_INTERVAL_SECONDS,
    ) -> None:
        self.executable = str(executable)
        self.poll_interval = poll_interval

    def is_available(self) -> bool:
        return os.path.isfile(self.executable) and os.access(self.executable, os.X_OK)

    def run(
        self,
        args: Sequence[str],
        *,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> InvocationOutcome:
        """Run ``executable *args`` and block until it exits.

        *timeout* is in seconds (``None`` waits forever).  Setting *cancel*
        from another thread kills the process at the next poll.
        """
        cmd = [self.executable, *args]
        start = time.monotonic()
        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except (OSError, ValueError) as e:
            # ValueError: Popen rejects arguments with embedded NUL bytes
            log.error("Failed to start scanner %s: %s", self.executable, e)
            return InvocationOutcome(
                status=InvocationStatus.SPAWN_FAILED,
                duration=time.monotonic() - start,
                detail=str(e),
            )

        deadline = None if timeout is None else start + timeout
        stopped: InvocationStatus | None = None
        while True:
            try:
                _, stderr = proc.communicate(timeout=self.poll_interval)
                break
            except subprocess.TimeoutExpired:
                if cancel is not None and cancel.is_set():
                    stopped = InvocationStatus.CANCELLED
                elif deadline is not None and time.monotonic() >= deadline:
                    stopped = InvocationStatus.TIMED_OUT
                if stopped is not None:
                    proc.kill()
                    _, stderr = proc.communicate()
                    break

        duration = time.monotonic() - start
        stderr = (stderr or "")[-defaults.STDERR_LOG_LIMIT:]

        if stopped is not None:
            detail = f"killed after {duration:.1f}s"
            log.error("Scanner %s: %s", stopped.value, detail)
            return InvocationOutcome(
                status=stopped, exit_code=proc.returncode,
                stderr=stderr, duration=duration, detail=detail,
            )

        code = proc.returncode
        if code < 0 or code in defaults.ENGINE_ERROR_EXIT_CODES:
            detail = f"terminated by signal {-code}" if code < 0 else "engine error"
            log.error("Scanner crashed (exit code %d): %s", code, stderr.strip())
            return InvocationOutcome(
                status=InvocationStatus.CRASHED, exit_code=code,
                stderr=stderr, duration=duration, detail=detail,
            )

        log.debug("Scanner exited with code %d in %.2fs", code, duration)
        return InvocationOutcome(
            status=InvocationStatus.EXITED, exit_code=code,
            stderr=stderr, duration=duration,
        )
