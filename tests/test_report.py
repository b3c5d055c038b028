"""Tests for loading KICS JSON reports."""

import json

import pytest

from conftest import make_file, make_query, make_report
from kics_validator import ReportError, Severity
from kics_validator.errors import ReportParseError, ReportReadError, ReportSchemaError
from kics_validator.report import parse_report, read_report, report_path


def _write(tmp_path, name, body):
    path = tmp_path / f"{name}.json"
    path.write_text(body if isinstance(body, str) else json.dumps(body), encoding="utf-8")
    return path


class TestReadReport:
    """File handling."""

    def test_path_layout(self, tmp_path):
        assert report_path(tmp_path, "scan-1") == tmp_path / "scan-1.json"

    def test_reads_queries(self, tmp_path):
        _write(tmp_path, "r", make_report([make_query(files=[make_file(), make_file("BucketB")])]))
        report = read_report(tmp_path, "r")
        assert len(report.queries) == 1
        assert report.queries[0].severity == Severity.HIGH
        assert [f.resource_name for f in report.queries[0].files] == ["BucketA", "BucketB"]

    def test_utf8_content(self, tmp_path):
        query = make_query(description="Ünïcödé description")
        _write(tmp_path, "r", make_report([query]))
        assert read_report(tmp_path, "r").queries[0].description == "Ünïcödé description"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReportReadError) as exc:
            read_report(tmp_path, "never-written")
        assert exc.value.path.endswith("never-written.json")

    def test_invalid_json(self, tmp_path):
        _write(tmp_path, "r", "{not json")
        with pytest.raises(ReportParseError) as exc:
            read_report(tmp_path, "r")
        assert not isinstance(exc.value, ReportSchemaError)

    def test_errors_share_base(self, tmp_path):
        for err in (ReportReadError, ReportParseError, ReportSchemaError):
            assert issubclass(err, ReportError)


class TestSchema:
    """Shape and version checks."""

    def test_missing_queries_key(self):
        with pytest.raises(ReportSchemaError):
            parse_report({"kics_version": "v1.7.13"})

    def test_non_object(self):
        with pytest.raises(ReportSchemaError, match="list"):
            parse_report([])

    def test_unknown_severity(self):
        with pytest.raises(ReportSchemaError):
            parse_report(make_report([make_query(severity="SEVERE")]))

    def test_trace_severity_accepted(self):
        report = parse_report(make_report([make_query(severity="TRACE")]))
        assert report.queries[0].severity == Severity.TRACE

    def test_extra_fields_ignored(self):
        query = make_query(cwe="311", experimental=False)
        report = parse_report(make_report([query]))
        assert report.queries[0].query_name == query["query_name"]

    def test_supported_versions(self):
        assert parse_report(make_report(version="v1.7.13")).major_version == 1
        assert parse_report(make_report(version="v2.1.0")).major_version == 2

    def test_unsupported_version(self):
        with pytest.raises(ReportSchemaError, match="v9.0.0"):
            parse_report(make_report(version="v9.0.0"))

    def test_unparseable_version_is_tolerated(self):
        report = parse_report(make_report(version="development"))
        assert report.major_version is None
        assert report.queries == []
