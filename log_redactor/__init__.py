# log_redactor/__init__.py

"""Rule-driven redaction of sensitive substrings in log messages.

Rules (trigger + regex + replacement) are loaded once from a JSON policy
file and applied to every message on the thread that emits it.

Example:
    from log_redactor import RedactionEngine

    engine = RedactionEngine.from_file("redaction-policy.json")
    engine.redact("SSN: 123-45-6789")
    # "SSN: XXX-XX-XXXX"
"""

from log_redactor.engine.redactor import RedactionEngine
from log_redactor.core.loader import load_policy, load_policy_file

__all__ = ["RedactionEngine", "load_policy", "load_policy_file"]
