from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from .errors import DuplicateRuleNameError, InvalidValueError
from .models import RuleDraft

logger = logging.getLogger("control_policy.registry")


class RuleRegistry:
    """Rules in declaration order plus a name index.

    A rule is registered as soon as its name is seen, before the rest of its
    object has been interpreted. Names are unique.
    """

    def __init__(self):
        self._rules: List[RuleDraft] = []
        self._index: Dict[str, int] = {}

    def declare(self, name: str) -> RuleDraft:
        if not name:
            raise InvalidValueError("name", "a non-empty string", name)
        if name in self._index:
            raise DuplicateRuleNameError(name)
        draft = RuleDraft(name=name)
        self._index[name] = len(self._rules)
        self._rules.append(draft)
        logger.debug("Rule declared: %s (#%d)", name, self._index[name])
        return draft

    def get(self, name: str) -> Optional[RuleDraft]:
        idx = self._index.get(name)
        return self._rules[idx] if idx is not None else None

    def index_of(self, name: str) -> Optional[int]:
        return self._index.get(name)

    def names(self) -> Iterable[str]:
        return [r.name for r in self._rules]

    def __iter__(self) -> Iterator[RuleDraft]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
