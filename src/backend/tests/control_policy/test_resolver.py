import pytest

from control_policy.errors import DanglingReferenceError
from control_policy.registry import RuleRegistry
from control_policy.resolver import resolve_exclusions


def _registry(*names):
    registry = RuleRegistry()
    for name in names:
        registry.declare(name)
    return registry


def test_links_resolve_to_registry_indices():
    registry = _registry("A", "B", "C")
    exclusions = {"A": ["B", "C"]}
    resolved = resolve_exclusions(exclusions, registry)
    a, b, c = resolved.rules
    assert a.disjunct_ids == (1, 2)
    assert b.disjunct_ids == ()
    assert c.disjunct_ids == ()
    assert resolved.mutex_groups == ((0, 1, 2),)
    assert exclusions == {}


def test_links_are_one_directional():
    resolved = resolve_exclusions({"B": ["A"]}, _registry("A", "B"))
    assert resolved.rules[0].disjunct_ids == ()
    assert resolved.rules[1].disjunct_ids == (0,)


def test_mutual_declarations_form_one_mutex_set():
    resolved = resolve_exclusions({"A": ["B"], "B": ["A"]}, _registry("A", "B"))
    assert resolved.rules[0].disjunct_ids == (1,)
    assert resolved.rules[1].disjunct_ids == (0,)
    assert resolved.mutex_groups == ((0, 1),)


def test_repeated_names_are_linked_once():
    resolved = resolve_exclusions({"A": ["B", "B"]}, _registry("A", "B"))
    assert resolved.rules[0].disjunct_ids == (1,)


def test_dangling_reference_aborts_and_keeps_declarations():
    exclusions = {"A": ["B"], "B": ["Z"]}
    with pytest.raises(DanglingReferenceError) as exc:
        resolve_exclusions(exclusions, _registry("A", "B"))
    assert exc.value.rule_name == "B"
    assert exc.value.missing_name == "Z"
    assert exclusions == {"A": ["B"], "B": ["Z"]}


def test_draft_attributes_are_frozen_into_rules():
    registry = _registry("A")
    draft = registry.get("A")
    draft.cost = 4
    draft.category = "fc"
    draft.source_handle = object()
    resolved = resolve_exclusions({}, registry)
    rule = resolved.rules[0]
    assert (rule.index, rule.name, rule.cost, rule.category) == (0, "A", 4, "fc")
    assert rule.source_handle is draft.source_handle
    assert resolved.mutex_groups == ()
