# log_redactor/core/definitions.py

"""Constants for the redaction policy file format."""

# The only policy format version understood by the loader.
SUPPORTED_POLICY_VERSION = 1

# An empty trigger disables the substring pre-filter for a rule.
DEFAULT_TRIGGER = ""
