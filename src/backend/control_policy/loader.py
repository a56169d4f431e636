from __future__ import annotations

import logging
import os
from typing import Any, Iterable, Optional, Sequence, Tuple

from .config import LoaderConfig, get_loader_config
from .connectors.scripting import PythonScriptEvaluator, ScriptEvaluator
from .document import read_document
from .models import ControlPolicy, Rule
from .paths import resolve_path
from .registry import RuleRegistry
from .resolver import resolve_exclusions
from .walker import TreeWalker

logger = logging.getLogger("control_policy.loader")


def compile_policy(
    values: Iterable[Any],
    *,
    evaluator: ScriptEvaluator,
    module_paths: Sequence[str] = (),
    source_path: Optional[str] = None,
) -> ControlPolicy:
    """Walk already parsed top-level values, then resolve mutex references."""
    registry = RuleRegistry()
    walker = TreeWalker(registry, evaluator, module_paths=module_paths)
    current = None
    for value in values:
        current = walker.interpret(value, current)
    resolved = resolve_exclusions(walker.exclusions, registry)
    return ControlPolicy(
        source_path=source_path,
        rule_list=resolved.rules,
        mutex_groups=resolved.mutex_groups,
        params=walker.params,
    )


def locate_policy_file(path: str, module_paths: Sequence[str] = ()) -> str:
    if os.path.isabs(path):
        return resolve_path(path)
    return resolve_path(path, [os.getcwd(), *module_paths])


class ControlPolicyLoader:
    """
    Loads a control policy file and exposes the compiled result.

    Loading is all-or-nothing: if anything fails the error propagates and the
    previously loaded policy (if any) stays in place.
    """

    def __init__(
        self,
        evaluator: Optional[ScriptEvaluator] = None,
        config: Optional[LoaderConfig] = None,
    ):
        self.config = config or get_loader_config()
        self.evaluator = evaluator if evaluator is not None else PythonScriptEvaluator()
        self._policy = ControlPolicy()

    def load(self, path: Optional[str] = None) -> ControlPolicy:
        conf_path = locate_policy_file(path or self.config.policy_path, self.config.module_paths)
        logger.info("Loading control policy from %s", conf_path)
        values = read_document(conf_path)
        policy = compile_policy(
            values,
            evaluator=self.evaluator,
            module_paths=self.config.module_paths,
            source_path=conf_path,
        )
        self._policy = policy
        logger.info(
            "Loaded %d rules and %d mutex sets from %s",
            len(policy.rules()),
            len(policy.mutex_groups),
            conf_path,
        )
        return policy

    @property
    def policy(self) -> ControlPolicy:
        return self._policy

    def max_iterations(self) -> Optional[int]:
        return self._policy.max_iterations()

    def rules(self) -> Tuple[Rule, ...]:
        return self._policy.rules()

    def attention_scope_flag(self) -> bool:
        return self._policy.attention_scope_flag()

    def log_level(self) -> Optional[str]:
        return self._policy.log_level()

    def mutex_sets(self) -> Tuple[Tuple[Rule, ...], ...]:
        return self._policy.mutex_sets()

    def get_rule(self, name: str) -> Optional[Rule]:
        return self._policy.get_rule(name)

    def disjunct_rules(self, rule: Rule) -> Tuple[Rule, ...]:
        return self._policy.disjunct_rules(rule)


def load_control_policy(
    path: Optional[str] = None,
    *,
    evaluator: Optional[ScriptEvaluator] = None,
    config: Optional[LoaderConfig] = None,
) -> ControlPolicy:
    return ControlPolicyLoader(evaluator=evaluator, config=config).load(path)
