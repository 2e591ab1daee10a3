# log_redactor/core/loader.py

"""Policy loader: parses a JSON policy and validates it into a RuleStore."""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from log_redactor.core.definitions import DEFAULT_TRIGGER, SUPPORTED_POLICY_VERSION
from log_redactor.core.domain import CompiledRule, Policy, RuleDefinition, RuleStore
from log_redactor.core.exceptions import (
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

logger = logging.getLogger(__name__)


def load_policy_file(path: Union[str, Path]) -> RuleStore:
    """Loads and validates a policy file.

    A file that exists and has zero length is a valid policy with no rules;
    it is never handed to the parser.

    Args:
        path: Location of the JSON policy file

    Returns:
        Fully built RuleStore

    Raises:
        PolicySourceError: If the file is missing or unreadable.
        PolicyLoadError: Any other subclass, for the first invalid entry.
    """
    policy_path = Path(path)
    source = str(policy_path)

    try:
        if policy_path.is_file() and policy_path.stat().st_size == 0:
            logger.info("Empty policy file, no rules loaded", extra={"source": source})
            return RuleStore()

        data = policy_path.read_bytes()

    except OSError as e:
        logger.error(f"Cannot read policy file: {e}", extra={"source": source})
        raise PolicySourceError(f"Cannot read policy: {e}", source=source) from e

    return load_policy(data, source=source)


def load_policy(data: Union[str, bytes], source: Optional[str] = None) -> RuleStore:
    """Parses policy JSON and compiles its rules.

    Args:
        data: Raw policy document
        source: Where the data came from, used in error messages

    Returns:
        Fully built RuleStore

    Raises:
        PolicyLoadError: For the first violation found, in rule order.
    """
    if len(data) == 0:
        logger.info("Empty policy, no rules loaded", extra={"source": source})
        return RuleStore()

    try:
        policy = Policy.model_validate_json(data)
    except ValidationError as e:
        logger.error(f"Policy parsing error: {e}", extra={"source": source})
        raise MalformedPolicyError(f"Malformed policy: {e}", source=source) from e

    if policy.version is None:
        logger.error("Policy has no version", extra={"source": source})
        raise MissingVersionError("No version specified", source=source)

    if policy.version != SUPPORTED_POLICY_VERSION:
        logger.error(
            f"Unsupported policy version: {policy.version}", extra={"source": source}
        )
        raise UnsupportedVersionError(policy.version, source=source)

    compiled: List[CompiledRule] = []
    for index, rule in enumerate(policy.rules):
        try:
            compiled.append(_compile_rule(rule, index, source))
        except PolicyLoadError as e:
            logger.error(f"Invalid redaction rule: {e}", extra={"source": source})
            raise

    store = RuleStore.from_rules(compiled)

    logger.info(
        "Redaction policy loaded",
        extra={
            "source": source,
            "rule_count": store.rule_count,
            "trigger_count": len(store),
        },
    )
    return store


def _compile_rule(
    rule: RuleDefinition, index: int, source: Optional[str]
) -> CompiledRule:
    """Validates one rule definition and compiles it.

    Raises:
        EmptySearchError: If search is missing or empty.
        InvalidPatternError: If search is not a valid regular expression.
        EmptyReplacementError: If replace is missing or empty.
        InvalidReplacementError: If replace references unknown groups.
    """
    if not rule.search:
        raise EmptySearchError(
            "The search regular expression cannot be empty",
            source=source,
            rule_index=index,
        )

    try:
        pattern = re.compile(rule.search)
    except re.error as e:
        raise InvalidPatternError(
            f"Invalid search pattern {rule.search!r}: {e}",
            source=source,
            rule_index=index,
        ) from e

    if not rule.replace:
        raise EmptyReplacementError(
            "The replacement text cannot be empty", source=source, rule_index=index
        )

    # The template is parsed up front by sub(), even when nothing matches
    try:
        pattern.sub(rule.replace, "")
    except (re.error, IndexError) as e:
        raise InvalidReplacementError(
            f"Invalid replacement {rule.replace!r}: {e}",
            source=source,
            rule_index=index,
        ) from e

    trigger = rule.trigger if rule.trigger is not None else DEFAULT_TRIGGER

    logger.debug(
        "Compiled redaction rule",
        extra={"rule_index": index, "trigger": trigger, "rule": rule.description},
    )
    return CompiledRule(
        description=rule.description,
        trigger=trigger,
        pattern=pattern,
        replacement=rule.replace,
    )
