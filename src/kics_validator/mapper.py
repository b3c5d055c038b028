"""Finding mapper: KICS queries to host-facing violations."""

from __future__ import annotations

import os
from typing import Iterable

from kics_validator.models import ViolatingResource, Violation
from kics_validator.schema import RawFileMatch, RawFinding


def map_findings(findings: Iterable[RawFinding]) -> list[Violation]:
    """One violation per query, in report order."""
    return [to_violation(f) for f in findings]


def to_violation(finding: RawFinding) -> Violation:
    return Violation(
        fix=finding.query_url,
        rule_name=finding.query_name,
        description=finding.description,
        severity=finding.severity.value,
        violating_resources=[_to_resource(m) for m in finding.files],
    )


def _to_resource(match: RawFileMatch) -> ViolatingResource:
    return ViolatingResource(
        resource_logical_id=match.resource_name,
        template_path=normalize_template_path(match.file_name),
        locations=[match.search_key],
    )


def normalize_template_path(file_name: str) -> str:
    """Rejoin directory and base name using this host's separator."""
    return os.path.normpath(
        os.path.join(os.path.dirname(file_name), os.path.basename(file_name))
    )
