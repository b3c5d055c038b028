"""Verdict aggregator.

Two independent signals feed the result: the ``ScanVerdict`` derived from the
parsed report, and any infrastructure error raised while invoking the scanner
or reading its output.  They are combined only in ``build_result``.
"""

from __future__ import annotations

import logging

from kics_validator.models import InvocationOutcome, ScanResult, ScanVerdict, Violation
from kics_validator.schema import KicsReport

log = logging.getLogger(__name__)


def verdict_for(report: KicsReport) -> ScanVerdict:
    # Any query left in the report fails the scan, whatever its severity:
    # exclusions were already applied by the scanner.
    return ScanVerdict.FINDINGS if report.queries else ScanVerdict.CLEAN


def build_result(
    *,
    violations: list[Violation] | None = None,
    verdict: ScanVerdict | None = None,
    error: Exception | None = None,
    outcome: InvocationOutcome | None = None,
) -> ScanResult:
    if error is not None:
        log.error(
            "Scan failed: %s", error,
            exc_info=error,
            extra=outcome.to_dict() if outcome else {},
        )
        return ScanResult(violations=[], success=False, error=error, outcome=outcome)
    if verdict is None:
        raise ValueError("build_result needs a verdict when no error is given")
    return ScanResult(
        violations=list(violations or []),
        success=verdict == ScanVerdict.CLEAN,
        outcome=outcome,
    )
