"""Report reader: load and validate the scanner's JSON output."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from kics_validator import defaults
from kics_validator.errors import ReportParseError, ReportReadError, ReportSchemaError
from kics_validator.schema import KicsReport

log = logging.getLogger(__name__)


def report_path(output_dir: str | Path, name: str) -> Path:
    return Path(output_dir) / f"{name}{defaults.REPORT_SUFFIX}"


def read_report(output_dir: str | Path, name: str) -> KicsReport:
    """Read ``<output_dir>/<name>.json`` and validate it.

    Raises ``ReportReadError`` when the file is missing (the scanner died
    before writing it), ``ReportParseError`` for invalid JSON and
    ``ReportSchemaError`` when the JSON does not look like a KICS report.
    """
    path = report_path(output_dir, name)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ReportReadError(f"Report not found: {path}", path=str(path)) from None
    except (OSError, UnicodeDecodeError) as e:
        raise ReportReadError(f"Cannot read report {path}: {e}", path=str(path)) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ReportParseError(f"Invalid JSON in report {path}: {e}", path=str(path)) from e

    return parse_report(data, path=str(path))


def parse_report(data: object, path: str = "") -> KicsReport:
    if not isinstance(data, dict):
        raise ReportSchemaError(
            f"Report must be a JSON object, got {type(data).__name__}", path=path,
        )
    try:
        report = KicsReport.model_validate(data)
    except ValidationError as e:
        raise ReportSchemaError(f"Report does not match KICS schema: {e}", path=path) from e

    major = report.major_version
    if major is None:
        if report.kics_version:
            log.warning("Unrecognised kics_version %r in %s", report.kics_version, path)
    elif major not in defaults.SUPPORTED_KICS_MAJOR_VERSIONS:
        raise ReportSchemaError(
            f"Unsupported KICS report version {report.kics_version}", path=path,
        )
    return report
