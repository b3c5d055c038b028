"""Tests for mapping KICS queries to violations."""

import os

from conftest import make_file, make_query
from kics_validator.mapper import map_findings, normalize_template_path, to_violation
from kics_validator.schema import RawFinding


def _finding(**kwargs):
    return RawFinding.model_validate(make_query(**kwargs))


class TestToViolation:
    """Field mapping."""

    def test_fields(self):
        raw = make_query()
        v = to_violation(RawFinding.model_validate(raw))
        assert v.fix == raw["query_url"]
        assert v.rule_name == raw["query_name"]
        assert v.description == raw["description"]
        assert v.severity == "HIGH"

    def test_one_resource_per_file_match(self):
        files = [make_file(f"Bucket{i}", f"/t/{i}.json", f"Resources.Bucket{i}") for i in range(3)]
        v = to_violation(_finding(files=files))
        assert [r.resource_logical_id for r in v.violating_resources] == ["Bucket0", "Bucket1", "Bucket2"]
        assert [r.locations for r in v.violating_resources] == [
            ["Resources.Bucket0"], ["Resources.Bucket1"], ["Resources.Bucket2"],
        ]

    def test_query_without_files(self):
        assert to_violation(_finding(files=[])).violating_resources == []

    def test_to_dict_uses_host_keys(self):
        d = to_violation(_finding()).to_dict()
        assert set(d) == {"fix", "ruleName", "description", "severity", "violatingResources"}
        assert d["violatingResources"][0] == {
            "resourceLogicalId": "BucketA",
            "templatePath": os.path.normpath("/a/template.json"),
            "locations": ["Resources.BucketA"],
        }


class TestMapFindings:
    """Cardinality and ordering."""

    def test_one_to_one_in_order(self):
        findings = [_finding(query_name=f"rule-{i}") for i in range(4)]
        violations = map_findings(findings)
        assert [v.rule_name for v in violations] == ["rule-0", "rule-1", "rule-2", "rule-3"]

    def test_same_file_in_two_queries_is_not_merged(self):
        findings = [_finding(query_name="a"), _finding(query_name="b")]
        violations = map_findings(findings)
        assert len(violations) == 2
        assert all(len(v.violating_resources) == 1 for v in violations)

    def test_empty(self):
        assert map_findings([]) == []


class TestNormalizeTemplatePath:

    def test_absolute(self):
        assert normalize_template_path("/a/template.json") == os.path.normpath("/a/template.json")

    def test_bare_name(self):
        assert normalize_template_path("template.json") == "template.json"

    def test_redundant_separators(self):
        assert normalize_template_path("/a//b/./template.json") == os.path.normpath("/a/b/template.json")
