"""Core data types for the KICS validator."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, TypeVar

from kics_validator import defaults
from kics_validator.errors import ConfigurationError, InvocationError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def new_id() -> str:
    return uuid.uuid4().hex[:12]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFO = "INFO"
    TRACE = "TRACE"


class QueryCategory(str, Enum):
    ACCESS_CONTROL = "Access Control"
    AVAILABILITY = "Availability"
    BACKUP = "Backup"
    BEST_PRACTICES = "Best Practices"
    BUILD_PROCESS = "Build Process"
    ENCRYPTION = "Encryption"
    INSECURE_CONFIGURATIONS = "Insecure Configurations"
    INSECURE_DEFAULTS = "Insecure Defaults"
    NETWORKING_AND_FIREWALL = "Networking and Firewall"
    OBSERVABILITY = "Observability"
    RESOURCE_MANAGEMENT = "Resource Management"
    SECRET_MANAGEMENT = "Secret Management"
    SUPPLY_CHAIN = "Supply-Chain"
    STRUCTURE_AND_SEMANTICS = "Structure and Semantics"
    BILL_OF_MATERIALS = "Bill Of Materials"


class InvocationStatus(str, Enum):
    EXITED = "exited"
    CRASHED = "crashed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"
    SPAWN_FAILED = "spawn_failed"


class ScanVerdict(str, Enum):
    CLEAN = "clean"
    FINDINGS = "findings"


DEFAULT_FAILURE_SEVERITIES: tuple[Severity, ...] = (Severity.HIGH, Severity.MEDIUM)

E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: type[E], value: E | str, label: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        pass
    # Severities are accepted case-insensitively ("high" -> HIGH)
    if isinstance(value, str) and enum_cls is Severity:
        try:
            return enum_cls(value.upper())
        except ValueError:
            pass
    allowed = ", ".join(m.value for m in enum_cls)
    raise ConfigurationError(f"Unknown {label} {value!r} (expected one of: {allowed})")


def coerce_all(enum_cls: type[E], values: Iterable[E | str], label: str) -> tuple[E, ...]:
    if isinstance(values, str):
        values = (values,)
    return tuple(coerce_enum(enum_cls, v, label) for v in values)


# ---------------------------------------------------------------------------
# Configuration and requests
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanConfig:
    exclude_queries: tuple[str, ...] = ()
    exclude_categories: tuple[QueryCategory, ...] = ()
    exclude_severities: tuple[Severity, ...] = ()
    failure_severities: tuple[Severity, ...] = DEFAULT_FAILURE_SEVERITIES
    timeout: float | None = defaults.SCAN_TIMEOUT_SECONDS
    libraries_path: Path = defaults.LIBRARIES_PATH    # bundled, not an option
    queries_path: Path = defaults.QUERIES_PATH        # bundled, not an option

    def __post_init__(self) -> None:
        # Frozen: assign coerced values through object.__setattr__
        queries = self.exclude_queries
        if isinstance(queries, str):
            queries = (queries,)
        object.__setattr__(self, "exclude_queries", tuple(str(q) for q in queries))
        object.__setattr__(self, "exclude_categories",
                           coerce_all(QueryCategory, self.exclude_categories, "category"))
        object.__setattr__(self, "exclude_severities",
                           coerce_all(Severity, self.exclude_severities, "severity"))
        object.__setattr__(self, "failure_severities",
                           coerce_all(Severity, self.failure_severities, "failure severity"))


@dataclass
class ScanRequest:
    template_paths: list[str]
    config: ScanConfig = field(default_factory=ScanConfig)


# ---------------------------------------------------------------------------
# Process outcome
# ---------------------------------------------------------------------------

@dataclass
class InvocationOutcome:
    status: InvocationStatus
    exit_code: int | None = None
    stderr: str = ""
    duration: float = 0.0
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status == InvocationStatus.EXITED

    def raise_for_status(self) -> None:
        """Raise ``InvocationError`` unless the process exited on its own.

        A non-zero exit code alone is not an error: KICS uses it to signal
        that findings crossed the ``--fail-on`` threshold.
        """
        if self.ok:
            return
        message = f"scanner {self.status.value}"
        if self.exit_code is not None:
            message += f" (exit code {self.exit_code})"
        if self.detail:
            message += f": {self.detail}"
        raise InvocationError(message, outcome=self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "exit_code": self.exit_code,
            "duration_ms": round(self.duration * 1000, 1),
            "detail": self.detail,
        }


# ---------------------------------------------------------------------------
# Normalized violations (host contract)
# ---------------------------------------------------------------------------

@dataclass
class ViolatingResource:
    resource_logical_id: str
    template_path: str
    locations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "resourceLogicalId": self.resource_logical_id,
            "templatePath": self.template_path,
            "locations": list(self.locations),
        }


@dataclass
class Violation:
    fix: str
    rule_name: str
    description: str
    severity: str
    violating_resources: list[ViolatingResource] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fix": self.fix,
            "ruleName": self.rule_name,
            "description": self.description,
            "severity": self.severity,
            "violatingResources": [r.to_dict() for r in self.violating_resources],
        }


@dataclass
class ScanResult:
    violations: list[Violation]
    success: bool
    error: Exception | None = None                # retained cause, never raised
    outcome: InvocationOutcome | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render the host-facing report shape."""
        return {
            "violations": [v.to_dict() for v in self.violations],
            "success": self.success,
        }
