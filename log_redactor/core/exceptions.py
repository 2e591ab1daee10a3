# log_redactor/core/exceptions.py

"""Custom exception hierarchy for the log redactor.

Every policy problem is detected while loading; once a RuleStore exists,
redaction itself never raises.
"""

from typing import Any, Optional


class RedactionError(Exception):
    """Base exception for all application-specific errors."""

    pass


class ConfigurationError(RedactionError):
    """Raised when configuration loading or validation fails."""

    pass


class InitializationError(RedactionError):
    """Raised when the redaction service fails to initialize."""

    pass


class PolicyLoadError(ConfigurationError):
    """Base class for every failure while loading a redaction policy.

    Attributes:
        source: Path of the policy file, if the policy came from a file
        rule_index: Zero-based index of the offending rule, if any
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        rule_index: Optional[int] = None,
    ) -> None:
        self.source = source
        self.rule_index = rule_index

        location = []
        if source is not None:
            location.append(f"file {source}")
        if rule_index is not None:
            location.append(f"rule #{rule_index}")

        if location:
            message = f"{message} ({', '.join(location)})"
        super().__init__(message)


class PolicySourceError(PolicyLoadError):
    """Raised when the policy file does not exist or cannot be read."""

    pass


class MalformedPolicyError(PolicyLoadError):
    """Raised when the policy cannot be parsed into the expected shape."""

    pass


class MissingVersionError(PolicyLoadError):
    """Raised when the policy has no version field."""

    pass


class UnsupportedVersionError(PolicyLoadError):
    """Raised when the policy version is not the supported one."""

    def __init__(self, version: Any, source: Optional[str] = None) -> None:
        self.version = version
        super().__init__(f"Unknown policy version {version!r}", source=source)


class EmptySearchError(PolicyLoadError):
    """Raised when a rule has an empty search pattern."""

    pass


class InvalidPatternError(PolicyLoadError):
    """Raised when a rule's search pattern is not a valid regular expression."""

    pass


class EmptyReplacementError(PolicyLoadError):
    """Raised when a rule has an empty replacement template."""

    pass


class InvalidReplacementError(PolicyLoadError):
    """Raised when a replacement template cannot be expanded for its pattern."""

    pass
