"""Configuration resolver.

Turns user-supplied exclusion and failure-threshold options into an immutable
``ScanConfig`` and renders that config into KICS command-line fragments.

Configuration (env vars):
    KICS_VALIDATOR_TIMEOUT   — scanner timeout in seconds (default 300, 0 disables)
"""

from __future__ import annotations

import os
from typing import Iterable

from kics_validator import defaults
from kics_validator.errors import ConfigurationError
from kics_validator.models import (
    DEFAULT_FAILURE_SEVERITIES,
    QueryCategory,
    ScanConfig,
    Severity,
)


def resolve_config(
    *,
    exclude_queries: Iterable[str] | None = None,
    exclude_categories: Iterable[QueryCategory | str] | None = None,
    exclude_severities: Iterable[Severity | str] | None = None,
    failure_severities: Iterable[Severity | str] | None = None,
    timeout: float | None = None,
) -> ScanConfig:
    """Build a ``ScanConfig`` from loosely typed options.

    ``failure_severities=None`` means "use the default" (HIGH and MEDIUM);
    an explicit empty list is kept as is.  Enum coercion happens in
    ``ScanConfig`` itself.
    """
    return ScanConfig(
        exclude_queries=tuple(exclude_queries or ()),
        exclude_categories=tuple(exclude_categories or ()),
        exclude_severities=tuple(exclude_severities or ()),
        failure_severities=(
            DEFAULT_FAILURE_SEVERITIES if failure_severities is None
            else tuple(failure_severities)
        ),
        timeout=timeout_from_env() if timeout is None else _positive_or_none(timeout),
    )


def timeout_from_env() -> float | None:
    raw = os.environ.get(defaults.ENV_TIMEOUT)
    if raw is None:
        return defaults.SCAN_TIMEOUT_SECONDS
    raw = raw.strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(
            f"{defaults.ENV_TIMEOUT} must be a number of seconds, got {raw!r}"
        ) from None
    return _positive_or_none(value)


def _positive_or_none(value: float) -> float | None:
    return value if value > 0 else None


def render_filter_flags(config: ScanConfig) -> list[str]:
    """Render threshold and exclusion options as repeated KICS flags.

    Empty option lists contribute nothing; KICS would reject an empty flag.
    """
    flags: list[str] = []
    flags.extend(_repeat("--fail-on", [s.value for s in config.failure_severities]))
    flags.extend(_repeat("--exclude-queries", config.exclude_queries))
    flags.extend(_repeat("--exclude-categories", [c.value for c in config.exclude_categories]))
    flags.extend(_repeat("--exclude-severities", [s.value for s in config.exclude_severities]))
    return flags


def _repeat(flag: str, values: Iterable[str]) -> list[str]:
    out: list[str] = []
    for value in values:
        out.extend([flag, value])
    return out
