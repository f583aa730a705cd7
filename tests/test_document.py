"""Tests for loading policies from JSON/YAML documents."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from cspolicy import Policy, PolicyDocumentError, StructuralInputError, load_document


@pytest.fixture
def json_policy_file(tmp_path: Path) -> Path:
    path = tmp_path / "policy.json"
    path.write_text(json.dumps({
        "default-src": "'self'",
        "img_src": ["'self'", "data:"],
        "upgrade-insecure-requests": True,
    }))
    return path


class TestLoadDocument:
    def test_raw_json_string(self):
        assert load_document('{"default-src": "\'self\'"}') == {"default-src": "'self'"}

    def test_raw_json_with_leading_whitespace(self):
        assert load_document('  \n {"img-src": ["*"]}') == {"img-src": ["*"]}

    def test_json_file_path_string(self, json_policy_file):
        assert load_document(str(json_policy_file))["img_src"] == ["'self'", "data:"]

    def test_json_file_pathlike(self, json_policy_file):
        assert "default-src" in load_document(json_policy_file)

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "policy.yaml"
        path.write_text("default-src: \"'self'\"\nsandbox: true\n")
        assert load_document(path) == {"default-src": "'self'", "sandbox": True}

    def test_missing_file_propagates(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_document(str(tmp_path / "missing.json"))

    def test_invalid_json_propagates(self):
        with pytest.raises(json.JSONDecodeError):
            load_document("{not json")

    def test_invalid_yaml_propagates(self, tmp_path):
        path = tmp_path / "policy.yml"
        path.write_text("default-src: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_document(path)

    def test_non_object_rejected(self, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text('["default-src"]')
        with pytest.raises(PolicyDocumentError):
            load_document(path)

    def test_empty_yaml_rejected(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(PolicyDocumentError):
            load_document(path)


class TestPolicyFromDocument:
    def test_file(self, json_policy_file):
        policy = Policy.from_document(json_policy_file)
        assert policy.header_value() == "default-src 'self'; img-src 'self' data:; upgrade-insecure-requests"

    def test_raw_string_report_only_key(self):
        policy = Policy.from_document('{"report-only": true, "default-src": "\'self\'"}')
        assert policy.report_only is True
        assert "report-only" not in policy

    def test_with_defaults(self):
        policy = Policy.from_document('{"script-src": "\'self\'"}', default=True)
        assert policy["script-src"] == "'self'"
        assert policy["object-src"] == "'none'"

    def test_report_only_argument_wins(self):
        policy = Policy.from_document('{"report_only": true}', report_only=False)
        assert policy.report_only is False

    def test_bad_value_raises(self):
        with pytest.raises(StructuralInputError):
            Policy.from_document('{"default-src": 1}')

    def test_null_value_raises(self):
        with pytest.raises(StructuralInputError):
            Policy.from_document('{"default-src": null}')
