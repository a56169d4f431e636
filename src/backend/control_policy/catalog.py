from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

from .config import LoaderConfig, get_loader_config
from .connectors.scripting import PlaceholderEvaluator, PythonScriptEvaluator
from .document import read_document
from .errors import ControlPolicyError
from .loader import ControlPolicyLoader, compile_policy, locate_policy_file
from .log import LOGGER_NAME, apply_log_level
from .models import ControlPolicy


class RuleCatalogEntry(BaseModel):
    name: str
    cost: Optional[int] = None
    category: Optional[str] = None
    source_path: Optional[str] = None
    has_source: bool = False
    disjunct_rules: List[str] = Field(default_factory=list)


class PolicyCatalog(BaseModel):
    source_path: Optional[str] = None
    max_iterations: Optional[int] = None
    attention_scope_flag: bool = False
    log_level: Optional[str] = None
    rules: List[RuleCatalogEntry] = Field(default_factory=list)
    mutex_sets: List[List[str]] = Field(default_factory=list)


def build_catalog(policy: ControlPolicy) -> PolicyCatalog:
    entries = [
        RuleCatalogEntry(
            name=rule.name,
            cost=rule.cost,
            category=rule.category,
            source_path=rule.source_path,
            has_source=rule.has_source,
            disjunct_rules=[r.name for r in policy.disjunct_rules(rule)],
        )
        for rule in policy.rules()
    ]
    return PolicyCatalog(
        source_path=policy.source_path,
        max_iterations=policy.max_iterations(),
        attention_scope_flag=policy.attention_scope_flag(),
        log_level=policy.log_level(),
        rules=entries,
        mutex_sets=[[r.name for r in group] for group in policy.mutex_sets()],
    )


def _declared_log_level(path: str, config: LoaderConfig) -> Optional[str]:
    values = read_document(locate_policy_file(path, config.module_paths))
    preview = compile_policy(values, evaluator=PlaceholderEvaluator(), module_paths=config.module_paths)
    return preview.log_level()


def _dump_json(catalog: Dict[str, Any]) -> str:
    return json.dumps(catalog, indent=2)


def _dump_yaml(catalog: Dict[str, Any]) -> str:
    return yaml.safe_dump(catalog, sort_keys=False)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compile a control policy file and print its rules.")
    parser.add_argument("path", nargs="?", default=None, help="Policy file (default: $CONTROL_POLICY_PATH).")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    parser.add_argument(
        "--module-path",
        action="append",
        default=None,
        help="Directory to search for policy and rule source files (repeatable).",
    )
    parser.add_argument(
        "--no-sources",
        action="store_true",
        help="Do not execute rule source files; only check that they can be found.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    config = get_loader_config(module_paths=args.module_path)
    evaluator = PlaceholderEvaluator() if args.no_sources else PythonScriptEvaluator()
    try:
        # The level must be known before loading so that the load itself logs at it.
        apply_log_level(_declared_log_level(args.path or config.policy_path, config), LOGGER_NAME)
        policy = ControlPolicyLoader(evaluator=evaluator, config=config).load(args.path)
    except ControlPolicyError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    catalog = build_catalog(policy).model_dump()
    if args.format == "json":
        print(_dump_json(catalog))
    else:
        print(_dump_yaml(catalog))
    return 0


if __name__ == "__main__":
    sys.exit(main())
