"""KICS validator: run the KICS scanner and normalize its findings.

The package logs through the standard ``logging`` hierarchy under
``kics_validator``.  Hosts that want single-line JSON diagnostics call
``setup_logging()`` once (level from ``KICS_VALIDATOR_LOG_LEVEL``, default INFO).
"""

from kics_validator.config import resolve_config
from kics_validator.errors import (
    ConfigurationError,
    InvocationError,
    KicsValidatorError,
    ReportError,
)
from kics_validator.models import (
    QueryCategory,
    ScanConfig,
    ScanRequest,
    ScanResult,
    Severity,
    ViolatingResource,
    Violation,
)
from kics_validator.observability import setup_logging
from kics_validator.validator import KicsValidator

__all__ = [
    "ConfigurationError",
    "InvocationError",
    "KicsValidator",
    "KicsValidatorError",
    "QueryCategory",
    "ReportError",
    "ScanConfig",
    "ScanRequest",
    "ScanResult",
    "Severity",
    "ViolatingResource",
    "Violation",
    "resolve_config",
    "setup_logging",
]
