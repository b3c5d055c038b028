"""Pydantic models for the KICS JSON report.

Only the fields the validator consumes are declared; everything else the
scanner writes is tolerated and ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from kics_validator.models import Severity


class RawFileMatch(BaseModel):
    file_name: str
    resource_name: str = ""
    search_key: str = ""
    line: int | None = None

    model_config = {"extra": "ignore"}


class RawFinding(BaseModel):
    query_id: str = ""
    query_name: str = Field(..., description="Human-readable rule name")
    query_url: str = ""
    description: str = ""
    severity: Severity
    category: str = ""
    platform: str = ""
    files: list[RawFileMatch] = Field(default_factory=list)

    model_config = {"extra": "ignore"}


class KicsReport(BaseModel):
    kics_version: str = ""
    total_counter: int = 0
    queries: list[RawFinding]

    model_config = {"extra": "ignore"}

    @property
    def major_version(self) -> int | None:
        """Major version from ``kics_version`` ("v1.7.13" -> 1), if parseable."""
        head = self.kics_version.strip().lstrip("vV").split(".", 1)[0]
        return int(head) if head.isdigit() else None
