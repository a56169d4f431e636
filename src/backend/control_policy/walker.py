"""Single-pass interpretation of a control policy value tree.

The walk is order-sensitive: rule-scoped keys (``file``, ``priority``,
``category``, ``mutex``) apply to the rule whose ``name`` was seen most
recently, in document order. A rule's ``name`` must therefore come before its
``file`` key, since loading the source immediately evaluates the definition
named after the rule. The current rule is passed into and returned from every
step instead of being kept on the walker, and it carries over from one object
to the next exactly as it would in a stream of parse events.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Sequence

from .connectors.scripting import ScriptEvaluator
from .document import ObjectNode
from .errors import InvalidValueError, MissingRuleContextError, RuleSourceError, SelfExclusionError
from .models import GlobalParameters, RuleDraft
from .paths import resolve_path
from .registry import RuleRegistry
from .schema import DocumentKey, recognized_key

logger = logging.getLogger("control_policy.walker")

Handler = Callable[[Any, Optional[RuleDraft], int], Optional[RuleDraft]]


class TreeWalker:
    def __init__(
        self,
        registry: RuleRegistry,
        evaluator: ScriptEvaluator,
        *,
        module_paths: Sequence[str] = (),
    ):
        self.registry = registry
        self.evaluator = evaluator
        self.module_paths = tuple(module_paths)
        self.params = GlobalParameters()
        # Exclusion declarations: declaring rule name -> referenced names, unresolved.
        self.exclusions: Dict[str, List[str]] = {}
        self._handlers: Dict[DocumentKey, Handler] = {
            DocumentKey.RULES: self._read_rules,
            DocumentKey.RULE_NAME: self._read_rule_name,
            DocumentKey.FILE_PATH: self._read_file,
            DocumentKey.PRIORITY: self._read_priority,
            DocumentKey.CATEGORY: self._read_category,
            DocumentKey.ATTENTION_ALLOC: self._read_attention_alloc,
            DocumentKey.LOG_LEVEL: self._read_log_level,
            DocumentKey.MUTEX_RULES: self._read_mutex,
            DocumentKey.MAX_ITER: self._read_max_iter,
        }
        # Unrecognized keys are not errors: their values are traversed for nested recognized structure.
        self._unknown_key_handler: Handler = self._read_unknown_key

    def interpret(self, value: Any, current: Optional[RuleDraft] = None, level: int = -1) -> Optional[RuleDraft]:
        """Walk one value and return the rule that is current afterwards."""
        if isinstance(value, (ObjectNode, Mapping)):
            return self._read_object(value, current, level + 1)
        if isinstance(value, list):
            return self._read_array(value, current, level + 1)
        # Strings, numbers, booleans and nulls were already consumed by the key that owns them.
        return current

    def _read_array(self, values: list, current: Optional[RuleDraft], level: int) -> Optional[RuleDraft]:
        for item in values:
            current = self.interpret(item, current, level)
        return current

    def _read_object(self, node: Any, current: Optional[RuleDraft], level: int) -> Optional[RuleDraft]:
        for key, value in node.items():
            doc_key = recognized_key(key) if isinstance(key, str) else None
            handler = self._handlers[doc_key] if doc_key is not None else self._unknown_key_handler
            logger.debug("%s[%d] %s", "  " * max(level, 0), level, key)
            current = handler(value, current, level)
        return current

    def _read_unknown_key(self, value: Any, current: Optional[RuleDraft], level: int) -> Optional[RuleDraft]:
        return self.interpret(value, current, level)

    def _read_rules(self, value: Any, current: Optional[RuleDraft], level: int) -> Optional[RuleDraft]:
        return self.interpret(value, current, level)

    def _read_rule_name(self, value: Any, current: Optional[RuleDraft], level: int) -> Optional[RuleDraft]:
        name = _expect_str(DocumentKey.RULE_NAME, value)
        return self.registry.declare(name)

    def _read_file(self, value: Any, current: Optional[RuleDraft], level: int) -> Optional[RuleDraft]:
        rule = _require_rule(DocumentKey.FILE_PATH, current, level)
        filename = _expect_str(DocumentKey.FILE_PATH, value)
        path = resolve_path(filename, self.module_paths)
        self.evaluator.load_source(path)
        handle = self.evaluator.evaluate(rule.name)
        if handle is None:
            raise RuleSourceError(rule.name, path)
        rule.source_handle = handle
        rule.source_path = path
        logger.debug("Rule %s bound to source %s", rule.name, path)
        return rule

    def _read_priority(self, value: Any, current: Optional[RuleDraft], level: int) -> Optional[RuleDraft]:
        rule = _require_rule(DocumentKey.PRIORITY, current, level)
        rule.cost = _expect_int(DocumentKey.PRIORITY, value)
        return rule

    def _read_category(self, value: Any, current: Optional[RuleDraft], level: int) -> Optional[RuleDraft]:
        rule = _require_rule(DocumentKey.CATEGORY, current, level)
        rule.category = _expect_str(DocumentKey.CATEGORY, value)
        return rule

    def _read_attention_alloc(self, value: Any, current: Optional[RuleDraft], level: int) -> Optional[RuleDraft]:
        if not isinstance(value, bool):
            raise InvalidValueError(DocumentKey.ATTENTION_ALLOC.value, "a boolean", value)
        self.params = self.params.model_copy(update={"attention_scope_flag": value})
        return current

    def _read_log_level(self, value: Any, current: Optional[RuleDraft], level: int) -> Optional[RuleDraft]:
        self.params = self.params.model_copy(update={"log_level": _expect_str(DocumentKey.LOG_LEVEL, value)})
        return current

    def _read_max_iter(self, value: Any, current: Optional[RuleDraft], level: int) -> Optional[RuleDraft]:
        self.params = self.params.model_copy(update={"max_iterations": _expect_int(DocumentKey.MAX_ITER, value)})
        return current

    def _read_mutex(self, value: Any, current: Optional[RuleDraft], level: int) -> Optional[RuleDraft]:
        if value is None:
            return current
        # ObjectNode is a list of pairs, so JSON objects must be turned away explicitly.
        if isinstance(value, (ObjectNode, Mapping)) or not isinstance(value, list):
            raise InvalidValueError(DocumentKey.MUTEX_RULES.value, "an array of rule names", value)
        names = [_expect_str(DocumentKey.MUTEX_RULES, item) for item in value]
        if not names:
            return current
        rule = _require_rule(DocumentKey.MUTEX_RULES, current, level)
        if rule.name in names:
            raise SelfExclusionError(rule.name)
        self.exclusions.setdefault(rule.name, []).extend(names)
        return rule


def _require_rule(key: DocumentKey, current: Optional[RuleDraft], level: int) -> RuleDraft:
    if current is None:
        raise MissingRuleContextError(key.value, level)
    return current


def _expect_str(key: DocumentKey, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidValueError(key.value, "a string", value)
    return value


def _expect_int(key: DocumentKey, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidValueError(key.value, "an integer", value)
    return value
