"""
Pytest configuration and shared fixtures for log redactor tests.

Policies are written to tmp_path so every test loads from a real file.
"""

import json
import os
import sys

import pytest

# Add parent directory to path for package imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from log_redactor.service.pipeline import RedactionService  # noqa: E402


SSN_RULE = {
    "description": "US social security numbers",
    "trigger": "SSN",
    "search": r"\d{3}-\d{2}-\d{4}",
    "replace": "XXX-XX-XXXX",
}

PASSWORD_RULE = {
    "description": "Passwords in key=value form",
    "search": r"password=\S+",
    "replace": "password=***",
}


@pytest.fixture
def write_policy(tmp_path):
    """Return a helper that writes a policy file and returns its path.

    Dicts and lists are dumped as JSON; strings are written verbatim.
    """

    def _write(content, name="policy.json"):
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def policy_with(write_policy):
    """Return a helper that writes a version 1 policy with the given rules."""

    def _policy(*rules):
        return write_policy({"version": 1, "rules": list(rules)})

    return _policy


@pytest.fixture(autouse=True)
def reset_service():
    """Make sure no test sees another test's shared engine."""
    RedactionService.reset()
    yield
    RedactionService.reset()
