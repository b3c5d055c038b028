"""Exception hierarchy for the KICS validator.

Only ``ConfigurationError`` ever reaches the host: it is raised while the
plugin is constructed.  Everything else is caught at the top of a scan and
attached to the returned ``ScanResult``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kics_validator.models import InvocationOutcome


class KicsValidatorError(Exception):
    """Base class for all validator errors."""
    pass


class ConfigurationError(KicsValidatorError):
    """Invalid options or an unsupported host platform."""
    pass


class InvocationError(KicsValidatorError):
    """The scanner could not be spawned or did not exit normally."""

    def __init__(self, message: str, outcome: InvocationOutcome | None = None) -> None:
        super().__init__(message)
        self.outcome = outcome


class ReportError(KicsValidatorError):
    """The scanner's JSON report could not be loaded."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class ReportReadError(ReportError):
    """Report file is missing or unreadable."""
    pass


class ReportParseError(ReportError):
    """Report file is not valid JSON."""
    pass


class ReportSchemaError(ReportParseError):
    """Report is valid JSON but does not match the expected schema or version."""
    pass
