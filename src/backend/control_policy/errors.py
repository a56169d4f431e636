"""Errors raised while loading and compiling a control policy.

Every failure aborts the whole load; there is no partially loaded policy.
"""

from __future__ import annotations

from typing import Sequence


class ControlPolicyError(Exception):
    """Base error for control policy loading."""
    pass


class ConfigReadError(ControlPolicyError):
    """The policy document exists but could not be read."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not read control policy file {path}: {cause}")


class DocumentParseError(ControlPolicyError):
    def __init__(self, path: str, message: str, *, line: int | None = None, column: int | None = None):
        self.path = path
        self.line = line
        self.column = column
        where = f"{path}:{line}:{column}" if line is not None else path
        super().__init__(f"Malformed control policy document {where}: {message}")


class PathNotFoundError(ControlPolicyError):
    """A file could not be located in any of the module search paths."""

    def __init__(self, target: str, search_paths: Sequence[str]):
        self.target = target
        self.search_paths = tuple(search_paths)
        super().__init__(f"{target} could not be found (searched: {', '.join(self.search_paths) or '<none>'})")


class MissingRuleContextError(ControlPolicyError):
    """A rule-scoped key appeared before any rule name was declared."""

    def __init__(self, key: str, level: int):
        self.key = key
        self.level = level
        super().__init__(f"'{key}' at depth {level} requires a preceding rule 'name'")


class InvalidValueError(ControlPolicyError, ValueError):
    def __init__(self, key: str, expected: str, value: object):
        self.key = key
        self.expected = expected
        self.value = value
        super().__init__(f"'{key}' expects {expected}, got {type(value).__name__}: {value!r}")


class DuplicateRuleNameError(ControlPolicyError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"A rule by name {name} is already declared")


class SelfExclusionError(ControlPolicyError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Rule {name} cannot be mutually exclusive with itself")


class DanglingReferenceError(ControlPolicyError):
    """A mutex declaration names a rule that does not exist."""

    def __init__(self, rule_name: str, missing_name: str):
        self.rule_name = rule_name
        self.missing_name = missing_name
        super().__init__(f"A rule by name {missing_name} doesn't exist (referenced by {rule_name})")


class RuleSourceError(ControlPolicyError):
    def __init__(self, rule_name: str, source_path: str):
        self.rule_name = rule_name
        self.source_path = source_path
        super().__init__(f"Evaluating {rule_name} after loading {source_path} produced no handle")


class ScriptEvaluationError(ControlPolicyError, RuntimeError):
    """A rule source could not be executed, or a definition was not found."""

    def __init__(self, message: str, *, path: str | None = None, name: str | None = None):
        super().__init__(message)
        self.path = path
        self.name = name
