# log_redactor/core/domain.py

"""Domain models for redaction policies and compiled rules."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Pattern, Tuple

from pydantic import BaseModel, ConfigDict, Field


class RuleDefinition(BaseModel):
    """A single rule exactly as written in the policy file.

    Only lives between parsing and validation; never handed out past the
    loader.

    Attributes:
        description: Free text, informational only
        trigger: Substring that must be present before the regex is tried
        search: Regular expression to search for
        replace: Replacement template, may reference capture groups
    """

    model_config = ConfigDict(extra="forbid")

    description: str = ""
    trigger: Optional[str] = None
    search: Optional[str] = None
    replace: Optional[str] = None


class Policy(BaseModel):
    """Versioned, ordered collection of rule definitions."""

    model_config = ConfigDict(extra="forbid")

    version: Optional[int] = None
    rules: List[RuleDefinition] = Field(default_factory=list)


@dataclass(frozen=True)
class CompiledRule:
    """A validated rule with its search pattern compiled.

    Attributes:
        description: Informational description from the policy
        trigger: Pre-filter substring ("" means always check)
        pattern: Compiled search pattern
        replacement: Replacement template for pattern.sub()
    """

    description: str
    trigger: str
    pattern: Pattern[str]
    replacement: str


@dataclass(frozen=True)
class TriggerGroup:
    """All compiled rules sharing one trigger, in policy file order."""

    trigger: str
    rules: Tuple[CompiledRule, ...]


@dataclass(frozen=True)
class RuleStore:
    """Immutable, trigger-grouped collection of compiled rules.

    Groups are ordered by the first appearance of their trigger in the
    policy, so application order is reproducible across runs.
    """

    groups: Tuple[TriggerGroup, ...] = field(default_factory=tuple)

    @classmethod
    def from_rules(cls, rules: List[CompiledRule]) -> "RuleStore":
        """Groups rules by trigger, keeping file order inside each group."""
        grouped: Dict[str, List[CompiledRule]] = {}
        for rule in rules:
            grouped.setdefault(rule.trigger, []).append(rule)

        return cls(
            groups=tuple(
                TriggerGroup(trigger=trigger, rules=tuple(group))
                for trigger, group in grouped.items()
            )
        )

    @property
    def rule_count(self) -> int:
        return sum(len(group.rules) for group in self.groups)

    @property
    def triggers(self) -> List[str]:
        return [group.trigger for group in self.groups]

    @property
    def is_empty(self) -> bool:
        return not self.groups

    def __iter__(self) -> Iterator[TriggerGroup]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)
