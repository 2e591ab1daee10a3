# log_redactor/engine/matchers.py

"""Per-execution-context matcher cache for compiled redaction rules."""

import logging
import threading
import weakref
from contextvars import ContextVar
from typing import Any, List, Match, Optional, Tuple

from log_redactor.core.domain import CompiledRule, RuleStore

logger = logging.getLogger(__name__)

_matcher_caches_var: ContextVar[Optional["_ContextCaches"]] = ContextVar(
    "matcher_caches", default=None
)


class _ContextCaches:
    """Caches of one execution context, keyed weakly by their engine."""

    def __init__(self) -> None:
        self.owner = threading.get_ident()
        self.caches: "weakref.WeakKeyDictionary[Any, MatcherCache]" = (
            weakref.WeakKeyDictionary()
        )


class MatcherHandle:
    """Mutable scan state for one compiled rule.

    Owned by exactly one execution context. The compiled pattern and the
    replacement template are shared read-only with every other handle for
    the same rule.
    """

    __slots__ = ("rule", "_input", "_match", "match_count")

    def __init__(self, rule: CompiledRule) -> None:
        self.rule = rule
        self._input = ""
        self._match: Optional[Match[str]] = None
        self.match_count = 0

    def reset(self, message: str) -> "MatcherHandle":
        """Points the handle at a new input and clears the last match."""
        self._input = message
        self._match = None
        return self

    def find(self) -> bool:
        """Searches the current input for the first match of the rule."""
        self._match = self.rule.pattern.search(self._input)
        return self._match is not None

    def replace_all(self) -> str:
        """Replaces every non-overlapping match in the current input.

        Returns:
            The rewritten input. The handle is reset to it.
        """
        result = self.rule.pattern.sub(self.rule.replacement, self._input)
        self.match_count += 1
        return self.reset(result)._input

    def __repr__(self):
        return (
            f"<MatcherHandle "
            f"pattern={self.rule.pattern.pattern!r} "
            f"matches={self.match_count}>"
        )


class MatcherCache:
    """Private mirror of a RuleStore holding one MatcherHandle per rule.

    Never shared between execution contexts. Use for_context() to get the
    cache memoized for the caller, or construct one and pass it explicitly.
    """

    def __init__(self, store: RuleStore) -> None:
        self.groups: Tuple[Tuple[str, Tuple[MatcherHandle, ...]], ...] = tuple(
            (group.trigger, tuple(MatcherHandle(rule) for rule in group.rules))
            for group in store
        )
        self.owner = threading.get_ident()

        logger.debug(
            "MatcherCache created for current context",
            extra={"trigger_count": len(self.groups), "thread_id": self.owner},
        )

    @classmethod
    def for_context(cls, engine: Any, store: RuleStore) -> "MatcherCache":
        """Returns the cache for the current execution context.

        A context copied into another thread (e.g. asyncio.to_thread) sees
        its parent's caches; those belong to the parent thread, so a fresh
        set is started instead. Caches are dropped with their engine.

        Args:
            engine: Object the cache belongs to, held weakly
            store: Shared store the cache is built from
        """
        registry = _matcher_caches_var.get()

        # Thread idents are reused only after a thread exits, and a copied
        # context is never in use after its thread is gone.
        if registry is None or registry.owner != threading.get_ident():
            registry = _ContextCaches()
            _matcher_caches_var.set(registry)

        instance = registry.caches.get(engine)
        if instance is None:
            instance = cls(store)
            registry.caches[engine] = instance

        return instance

    def handles(self) -> List[MatcherHandle]:
        """Returns every handle, in application order."""
        return [handle for _, group in self.groups for handle in group]

    def get_summary(self) -> dict:
        """Returns cache state summary for logging and debugging."""
        handles = self.handles()
        return {
            "trigger_count": len(self.groups),
            "rule_count": len(handles),
            "applied_count": sum(h.match_count for h in handles),
            "thread_id": self.owner,
        }

    def __repr__(self):
        return (
            f"<MatcherCache "
            f"triggers={len(self.groups)} "
            f"thread_id={self.owner} "
            f"context_id={id(self)}>"
        )
