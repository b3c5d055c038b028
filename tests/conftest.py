"""Shared fixtures for kics_validator tests."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from kics_validator import KicsValidator, ScanConfig
from kics_validator.models import InvocationOutcome, InvocationStatus


# ---------------------------------------------------------------------------
# Auto-use fixtures: isolate environment overrides
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_env():
    """Drop KICS_VALIDATOR_* variables for the duration of each test."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("KICS_VALIDATOR_")}
    with patch.dict(os.environ, env, clear=True):
        yield


# ---------------------------------------------------------------------------
# Report builders
# ---------------------------------------------------------------------------

def make_file(resource_name="BucketA", file_name="/a/template.json",
              search_key="Resources.BucketA", **extra):
    return {
        "file_name": file_name,
        "resource_name": resource_name,
        "search_key": search_key,
        **extra,
    }


def make_query(files=None, severity="HIGH", **extra):
    query = {
        "query_name": "S3 Bucket Without Server-side-encryption",
        "query_id": "b2e8752c-3497-4255-98d2-e4ae5b46bbf5",
        "query_url": "https://docs.aws.amazon.com/AmazonS3/latest/dev/bucket-encryption.html",
        "severity": severity,
        "platform": "CloudFormation",
        "category": "Encryption",
        "description": "S3 Buckets should have server-side encryption at rest enabled",
        "files": files if files is not None else [make_file()],
    }
    query.update(extra)
    return query


def make_report(queries=None, version="v1.7.13"):
    return {
        "kics_version": version,
        "files_scanned": 1,
        "total_counter": len(queries or []),
        "queries": queries or [],
    }


# ---------------------------------------------------------------------------
# Fake scanner
# ---------------------------------------------------------------------------

class FakeInvoker:
    """Stands in for the KICS process: writes a canned report where asked.

    ``report=None`` means the scanner produced no output file; a ``str``
    is written verbatim (for malformed JSON cases).
    """

    def __init__(self, report=None, outcome=None):
        self.report = report
        self.outcome = outcome or InvocationOutcome(status=InvocationStatus.EXITED, exit_code=0)
        self.calls = []

    def is_available(self):
        return True

    def run(self, args, *, timeout=None, cancel=None):
        self.calls.append({"args": list(args), "timeout": timeout, "cancel": cancel})
        if self.report is not None:
            out_dir = args[args.index("--output-path") + 1]
            name = args[args.index("--output-name") + 1]
            body = self.report if isinstance(self.report, str) else json.dumps(self.report)
            Path(out_dir, f"{name}.json").write_text(body, encoding="utf-8")
        return self.outcome


class Context:
    def __init__(self, *paths):
        self.template_paths = list(paths)


@pytest.fixture
def make_validator(tmp_path):
    """Factory for validators wired to a FakeInvoker writing into tmp_path."""

    def _make(report=None, config=None, outcome=None):
        invoker = FakeInvoker(report=report, outcome=outcome)
        validator = KicsValidator(
            config or ScanConfig(),
            binary="/opt/kics/bin/kics",
            invoker=invoker,
            output_dir=tmp_path,
        )
        return validator, invoker

    return _make
