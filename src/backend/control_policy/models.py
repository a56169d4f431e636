from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


@dataclass
class RuleDraft:
    """A rule while the document is still being walked.

    Mutex targets are recorded by name in the walker's exclusion map and
    only become links once the whole document has been seen.
    """

    name: str
    cost: Optional[int] = None
    category: Optional[str] = None
    source_handle: Any = None
    source_path: Optional[str] = None


class Rule(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    index: int
    name: str
    cost: Optional[int] = None
    category: Optional[str] = None
    source_handle: Any = None
    source_path: Optional[str] = None
    # Registry indices of rules declared mutually exclusive with this one.
    disjunct_ids: Tuple[int, ...] = ()

    @property
    def has_source(self) -> bool:
        return self.source_handle is not None


class GlobalParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_iterations: Optional[int] = None
    attention_scope_flag: bool = False
    log_level: Optional[str] = None


class ControlPolicy(BaseModel):
    """A compiled, reference-checked control policy.

    Rules live in a single tuple; disjunction links and mutex sets refer to
    rules by their index in that tuple, so two rules listing each other is a
    plain cycle of integers.
    """

    model_config = ConfigDict(frozen=True)

    source_path: Optional[str] = None
    rule_list: Tuple[Rule, ...] = ()
    mutex_groups: Tuple[Tuple[int, ...], ...] = ()
    params: GlobalParameters = Field(default_factory=GlobalParameters)

    def rules(self) -> Tuple[Rule, ...]:
        return self.rule_list

    def max_iterations(self) -> Optional[int]:
        return self.params.max_iterations

    def attention_scope_flag(self) -> bool:
        return self.params.attention_scope_flag

    def log_level(self) -> Optional[str]:
        return self.params.log_level

    def mutex_sets(self) -> Tuple[Tuple[Rule, ...], ...]:
        return tuple(tuple(self.rule_list[i] for i in group) for group in self.mutex_groups)

    def get_rule(self, name: str) -> Optional[Rule]:
        for rule in self.rule_list:
            if rule.name == name:
                return rule
        return None

    def disjunct_rules(self, rule: Rule) -> Tuple[Rule, ...]:
        return tuple(self.rule_list[i] for i in rule.disjunct_ids)
