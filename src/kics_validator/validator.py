"""KICS validation plugin.

Entry point for the policy host: ``KicsValidator.validate(context)`` runs one
scan over the context's templates and always returns a ``ScanResult``.

Configuration (env vars):
    KICS_VALIDATOR_BINARY      — scanner executable, replaces the bundled one
    KICS_VALIDATOR_OUTPUT_DIR  — where reports are written (default: temp dir)
    KICS_VALIDATOR_TIMEOUT     — see ``kics_validator.config``
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Sequence

from kics_validator import defaults
from kics_validator.binary import resolve_binary
from kics_validator.config import render_filter_flags
from kics_validator.invoker import ProcessInvoker
from kics_validator.mapper import map_findings
from kics_validator.models import ScanConfig, ScanRequest, ScanResult, new_id
from kics_validator.ports import ScannerInvokerPort, ValidationContext
from kics_validator.report import read_report, report_path
from kics_validator.verdict import build_result, verdict_for

log = logging.getLogger(__name__)


class KicsValidator:
    """Validation plugin backed by the KICS scanner."""

    def __init__(
        self,
        config: ScanConfig | None = None,
        *,
        binary: str | Path | None = None,
        invoker: ScannerInvokerPort | None = None,
        output_dir: str | Path | None = None,
    ) -> None:
        self.name = defaults.PLUGIN_NAME
        self.config = config or ScanConfig()
        # Resolved eagerly: an unsupported architecture must fail here.
        self.binary = Path(binary) if binary is not None else resolve_binary()
        self.invoker = invoker or ProcessInvoker(self.binary)
        if not self.invoker.is_available():
            log.warning("Scanner binary not found or not executable: %s", self.binary)
        self._output_dir = output_dir

    @property
    def output_dir(self) -> Path:
        configured = self._output_dir or os.environ.get(defaults.ENV_OUTPUT_DIR)
        if configured:
            return Path(configured)
        return Path(os.path.realpath(tempfile.gettempdir()))

    def build_args(
        self,
        template_paths: Sequence[str],
        output_dir: str | Path,
        output_name: str,
        config: ScanConfig | None = None,
    ) -> list[str]:
        """Arguments for ``kics``, not including the executable itself."""
        config = config or self.config
        args = ["scan"]
        for template in template_paths:
            args.extend(["--path", str(template)])
        args.extend([
            "--output-path", str(output_dir),
            "--output-name", output_name,
            "--libraries-path", str(config.libraries_path),
            "--queries-path", str(config.queries_path),
        ])
        args.extend(render_filter_flags(config))
        args.extend(["--ci", "--report-formats", defaults.REPORT_FORMAT])
        return args

    def validate(
        self,
        context: ValidationContext,
        *,
        cancel: threading.Event | None = None,
    ) -> ScanResult:
        request = ScanRequest(template_paths=list(context.template_paths), config=self.config)
        return self.scan(request, cancel=cancel)

    def scan(
        self,
        request: ScanRequest,
        *,
        cancel: threading.Event | None = None,
    ) -> ScanResult:
        if not request.template_paths:
            log.warning("No templates to scan")
            return ScanResult(violations=[], success=True)

        scan_id = new_id()
        output_dir = self.output_dir
        output_name = f"{self.name}-{scan_id}"
        log.info(
            "Scanning %d template(s)", len(request.template_paths),
            extra={"scan_id": scan_id, "templates": request.template_paths},
        )

        outcome = None
        try:
            args = self.build_args(request.template_paths, output_dir, output_name, request.config)
            outcome = self.invoker.run(args, timeout=request.config.timeout, cancel=cancel)
            outcome.raise_for_status()
            report = read_report(output_dir, output_name)
            violations = map_findings(report.queries)
        except Exception as e:
            # InvocationError and ReportError are the expected cases; validate()
            # must hand the host a result whatever was raised
            return build_result(error=e, outcome=outcome)

        result = build_result(violations=violations, verdict=verdict_for(report), outcome=outcome)
        log.info(
            "Scan finished with %d violation(s)", len(violations),
            extra={
                "scan_id": scan_id,
                "report_path": str(report_path(output_dir, output_name)),
                **outcome.to_dict(),
            },
        )
        return result
