# log_redactor/engine/redactor.py

"""RedactionEngine - applies a RuleStore to individual log messages.

Thread-safe: the RuleStore is immutable and shared, while every execution
context scans with its own MatcherCache, so no locks are taken on the hot
path.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from log_redactor.core.domain import RuleStore
from log_redactor.core.loader import load_policy, load_policy_file
from log_redactor.engine.matchers import MatcherCache

logger = logging.getLogger(__name__)


class RedactionEngine:
    """Redacts log messages using trigger-filtered regex rules.

    Example:
        engine = RedactionEngine.from_file("policy.json")
        engine.redact("SSN: 123-45-6789")
        # "SSN: XXX-XX-XXXX"

    For each trigger group, in policy order, the trigger substring is looked
    up in the current message. Only when it is present (an empty trigger is
    always present) are the group's rules run, each against the message as
    rewritten by the rules before it.
    """

    def __init__(self, store: RuleStore):
        self._store = store

        logger.info(
            "Redaction engine ready",
            extra={"rule_count": store.rule_count, "trigger_count": len(store)},
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "RedactionEngine":
        """Builds an engine from a policy file. Raises PolicyLoadError."""
        return cls(load_policy_file(path))

    @classmethod
    def from_text(
        cls, data: Union[str, bytes], source: Optional[str] = None
    ) -> "RedactionEngine":
        """Builds an engine from policy JSON. Raises PolicyLoadError."""
        return cls(load_policy(data, source=source))

    @classmethod
    def empty(cls) -> "RedactionEngine":
        """Returns an engine with no rules; redact() is the identity."""
        return cls(RuleStore())

    @property
    def store(self) -> RuleStore:
        return self._store

    @property
    def rule_count(self) -> int:
        return self._store.rule_count

    @property
    def triggers(self) -> List[str]:
        return self._store.triggers

    def new_cache(self) -> MatcherCache:
        """Creates a private cache for a caller that manages its own context."""
        return MatcherCache(self._store)

    def context_cache(self) -> MatcherCache:
        """Returns the cache memoized for the calling execution context."""
        return MatcherCache.for_context(self, self._store)

    def redact(self, message: str, cache: Optional[MatcherCache] = None) -> str:
        """Redacts sensitive data from a single message.

        Args:
            message: The log message to examine.
            cache: Matcher cache owned by the caller. Defaults to the one
                   memoized for the current execution context.

        Returns:
            The (potentially) redacted message.
        """
        if self._store.is_empty:
            return message

        if cache is None:
            cache = self.context_cache()

        for trigger, handles in cache.groups:
            if trigger not in message:
                continue

            for handle in handles:
                if handle.reset(message).find():
                    message = handle.replace_all()

        return message
