"""
Tests for the policy loader and validator.

Tests cover:
- Empty policy files and empty rule lists
- Version checks
- Per-rule validation and its error taxonomy
- Trigger grouping and rule ordering
"""

import pytest

from log_redactor.core.loader import load_policy, load_policy_file
from log_redactor.core.exceptions import (
    ConfigurationError,
    EmptyReplacementError,
    EmptySearchError,
    InvalidPatternError,
    InvalidReplacementError,
    MalformedPolicyError,
    MissingVersionError,
    PolicyLoadError,
    PolicySourceError,
    UnsupportedVersionError,
)

from conftest import PASSWORD_RULE, SSN_RULE


class TestEmptyPolicies:
    """An empty source is a valid policy with zero rules."""

    def test_empty_file_has_no_rules(self, write_policy):
        store = load_policy_file(write_policy(""))

        assert store.is_empty
        assert store.rule_count == 0

    def test_empty_bytes_have_no_rules(self):
        assert load_policy(b"").rule_count == 0

    def test_whitespace_only_file_is_malformed(self, write_policy):
        """Only a zero-length file skips the parser."""
        with pytest.raises(MalformedPolicyError):
            load_policy_file(write_policy("   \n"))

    def test_empty_rule_list(self, write_policy):
        store = load_policy_file(write_policy({"version": 1, "rules": []}))
        assert store.is_empty

    def test_missing_rule_list(self, write_policy):
        store = load_policy_file(write_policy({"version": 1}))
        assert store.rule_count == 0


class TestSourceAndParsing:
    """Unreadable or unparseable sources."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(PolicySourceError) as exc_info:
            load_policy_file(tmp_path / "nope.json")

        assert exc_info.value.source.endswith("nope.json")

    def test_invalid_json(self, write_policy):
        with pytest.raises(MalformedPolicyError):
            load_policy_file(write_policy("{ not json"))

    def test_wrong_shape(self, write_policy):
        with pytest.raises(MalformedPolicyError):
            load_policy_file(write_policy([{"version": 1}]))

    def test_unknown_rule_field(self, write_policy):
        policy = {"version": 1, "rules": [dict(SSN_RULE, severity="high")]}
        with pytest.raises(MalformedPolicyError):
            load_policy_file(write_policy(policy))

    def test_errors_share_a_base_class(self, write_policy):
        with pytest.raises(PolicyLoadError):
            load_policy_file(write_policy("{"))

        assert issubclass(PolicyLoadError, ConfigurationError)


class TestVersion:
    """The version field must be present and equal to 1."""

    def test_missing_version(self, write_policy):
        with pytest.raises(MissingVersionError):
            load_policy_file(write_policy({"rules": [SSN_RULE]}))

    def test_null_version(self, write_policy):
        with pytest.raises(MissingVersionError):
            load_policy_file(write_policy({"version": None, "rules": []}))

    def test_unsupported_version(self, write_policy):
        with pytest.raises(UnsupportedVersionError) as exc_info:
            load_policy_file(write_policy({"version": 2, "rules": [SSN_RULE]}))

        assert exc_info.value.version == 2
        assert "2" in str(exc_info.value)


class TestRuleValidation:
    """Each rule is validated in file order; the first problem wins."""

    def test_empty_search(self, policy_with):
        with pytest.raises(EmptySearchError):
            load_policy_file(policy_with(dict(SSN_RULE, search="")))

    def test_missing_search(self, policy_with):
        rule = {"trigger": "x", "replace": "y"}
        with pytest.raises(EmptySearchError):
            load_policy_file(policy_with(rule))

    def test_invalid_pattern(self, policy_with):
        with pytest.raises(InvalidPatternError):
            load_policy_file(policy_with(dict(SSN_RULE, search="(unclosed")))

    def test_empty_replacement(self, policy_with):
        with pytest.raises(EmptyReplacementError):
            load_policy_file(policy_with(dict(SSN_RULE, replace="")))

    def test_missing_replacement(self, policy_with):
        rule = {"trigger": "x", "search": "y"}
        with pytest.raises(EmptyReplacementError):
            load_policy_file(policy_with(rule))

    def test_replacement_with_unknown_group(self, policy_with):
        rule = {"search": r"user=(\w+)", "replace": r"user=\2"}
        with pytest.raises(InvalidReplacementError):
            load_policy_file(policy_with(rule))

    def test_replacement_with_unknown_group_name(self, policy_with):
        rule = {"search": r"user=(?P<name>\w+)", "replace": r"user=\g<other>"}
        with pytest.raises(InvalidReplacementError):
            load_policy_file(policy_with(rule))

    def test_first_violation_reports_its_index(self, policy_with):
        bad = dict(SSN_RULE, replace="")
        worse = dict(SSN_RULE, search="")

        with pytest.raises(EmptyReplacementError) as exc_info:
            load_policy_file(policy_with(SSN_RULE, bad, worse))

        assert exc_info.value.rule_index == 1
        assert "rule #1" in str(exc_info.value)


class TestRuleStore:
    """Grouping by trigger keeps a deterministic order."""

    def test_missing_trigger_defaults_to_empty(self, policy_with):
        store = load_policy_file(policy_with(PASSWORD_RULE))

        assert store.triggers == [""]
        assert store.groups[0].rules[0].replacement == "password=***"

    def test_groups_follow_first_appearance(self, policy_with):
        rules = [
            {"trigger": "b", "search": "b1", "replace": "x"},
            {"trigger": "a", "search": "a1", "replace": "x"},
            {"trigger": "b", "search": "b2", "replace": "x"},
            {"search": "any", "replace": "x"},
        ]
        store = load_policy_file(policy_with(*rules))

        assert store.triggers == ["b", "a", ""]
        assert [r.pattern.pattern for r in store.groups[0].rules] == ["b1", "b2"]
        assert store.rule_count == 4
        assert len(store) == 3

    def test_description_is_kept(self, policy_with):
        store = load_policy_file(policy_with(SSN_RULE))
        assert store.groups[0].rules[0].description == "US social security numbers"

    def test_load_from_text(self):
        store = load_policy('{"version": 1, "rules": [{"search": "a", "replace": "b"}]}')
        assert store.rule_count == 1
