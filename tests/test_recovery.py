# tests/test_recovery.py
"""Tests for JSON recovery from model output."""

import json

import pytest

from app_builder.core.errors import RecoveryFailure, SchemaViolation
from app_builder.core.llm_client import ParsedOutput, RawOutput
from app_builder.core.recovery import parse_json_output, recover_app_spec, recover_candidate
from app_builder.models import AppSpec


class TestParseJsonOutput:

    def test_strict_json(self):
        assert parse_json_output('{"a": 1}') == {"a": 1}

    def test_brace_fallback_from_prose(self):
        text = 'here is your app: {"app_name":"X","entities":[],"roles":[]}'
        assert parse_json_output(text) == {"app_name": "X", "entities": [], "roles": []}

    def test_brace_fallback_from_code_fence(self):
        text = '```json\n{"app_name": "Y", "entities": [], "roles": []}\n```'
        assert parse_json_output(text)["app_name"] == "Y"

    def test_greedy_match_spans_two_objects(self):
        # first '{' to last '}' captures both objects plus the prose between them
        text = 'first {"a": 1} and then {"b": 2}'
        assert parse_json_output(text) is None

    @pytest.mark.parametrize("text", [
        '{"app_name": NaN}',
        '{"a": Infinity}',
        'prose {"a": -Infinity} prose',
    ])
    def test_non_standard_constants_rejected(self, text):
        assert parse_json_output(text) is None

    def test_no_braces(self):
        assert parse_json_output("I could not find an app in that description.") is None

    def test_unbalanced_braces(self):
        assert parse_json_output('oops {"app_name": "X", ') is None

    @pytest.mark.parametrize("text", [None, "", 42])
    def test_missing_or_non_string(self, text):
        assert parse_json_output(text) is None


class TestRecoverCandidate:

    def test_parsed_output_is_used_directly(self, valid_app):
        assert recover_candidate(ParsedOutput(valid_app)) is valid_app

    def test_parsed_pydantic_model_is_dumped(self, valid_app):
        spec = AppSpec.model_validate(valid_app)
        assert recover_candidate(ParsedOutput(spec)) == valid_app

    def test_raw_output_strict(self, valid_app):
        assert recover_candidate(RawOutput(json.dumps(valid_app))) == valid_app

    def test_raw_without_json_is_recovery_failure(self):
        with pytest.raises(RecoveryFailure) as exc_info:
            recover_candidate(RawOutput("no json here at all"))
        assert exc_info.value.raw_text == "no json here at all"

    @pytest.mark.parametrize("text", ["null", "0", "false", "\"\""])
    def test_falsy_json_is_recovery_failure(self, text):
        with pytest.raises(RecoveryFailure) as exc_info:
            recover_candidate(RawOutput(text))
        assert exc_info.value.raw_text == text

    def test_empty_list_is_a_candidate(self):
        assert recover_candidate(RawOutput("[]")) == []

    def test_raw_none_is_recovery_failure(self):
        with pytest.raises(RecoveryFailure):
            recover_candidate(RawOutput(None))

    def test_unknown_output_type(self):
        with pytest.raises(TypeError):
            recover_candidate({"app_name": "X"})


class TestRecoverAppSpec:

    def test_embedded_object_with_empty_arrays_validates(self):
        text = 'here is your app: {"app_name":"X","entities":[],"roles":[]}'
        spec = recover_app_spec(RawOutput(text))
        assert spec.app_name == "X"
        assert spec.is_empty() is True

    def test_empty_object_is_schema_violation(self):
        with pytest.raises(SchemaViolation) as exc_info:
            recover_app_spec(RawOutput("{}"))
        assert {v["loc"] for v in exc_info.value.violations} == {"app_name", "entities", "roles"}

    def test_parsed_output_wins_over_text(self, valid_app):
        spec = recover_app_spec(ParsedOutput(valid_app))
        assert spec.app_name == "Course Manager"
