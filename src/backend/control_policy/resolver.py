from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, MutableMapping, Tuple

from .errors import DanglingReferenceError
from .models import Rule
from .registry import RuleRegistry

logger = logging.getLogger("control_policy.resolver")


@dataclass(frozen=True)
class ResolvedRules:
    rules: Tuple[Rule, ...]
    mutex_groups: Tuple[Tuple[int, ...], ...]


def resolve_exclusions(
    exclusions: MutableMapping[str, List[str]],
    registry: RuleRegistry,
) -> ResolvedRules:
    """
    Turn mutex name lists into index links and freeze the registry.

    Links are stored only on the declaring rule; a reverse link exists only if
    the document declared it from the other side too. The first unknown name
    aborts resolution and nothing is returned. On success the exclusion map is
    emptied.
    """
    links: Dict[int, List[int]] = {}
    for rule_name, names in exclusions.items():
        declaring = registry.index_of(rule_name)
        if declaring is None:
            raise DanglingReferenceError(rule_name, rule_name)
        targets = links.setdefault(declaring, [])
        for name in names:
            idx = registry.index_of(name)
            if idx is None:
                raise DanglingReferenceError(rule_name, name)
            if idx not in targets:
                targets.append(idx)

    rules = tuple(
        Rule(
            index=i,
            name=draft.name,
            cost=draft.cost,
            category=draft.category,
            source_handle=draft.source_handle,
            source_path=draft.source_path,
            disjunct_ids=tuple(links.get(i, ())),
        )
        for i, draft in enumerate(registry)
    )

    groups: List[Tuple[int, ...]] = []
    seen = set()
    for declaring, targets in links.items():
        group = (declaring, *targets)
        members = frozenset(group)
        if members in seen:
            continue
        seen.add(members)
        groups.append(group)

    exclusions.clear()
    logger.debug("Resolved %d exclusion declarations into %d mutex sets", len(links), len(groups))
    return ResolvedRules(rules=rules, mutex_groups=tuple(groups))
