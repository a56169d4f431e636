"""Control policy loader.

Compiles a control policy document (rules, their costs and categories,
mutually exclusive rule sets and a few global parameters) into an immutable
``ControlPolicy``. Executing rules is someone else's job.
"""

from .errors import (
    ConfigReadError,
    ControlPolicyError,
    DanglingReferenceError,
    DocumentParseError,
    DuplicateRuleNameError,
    InvalidValueError,
    MissingRuleContextError,
    PathNotFoundError,
    RuleSourceError,
    ScriptEvaluationError,
    SelfExclusionError,
)
from .loader import ControlPolicyLoader, compile_policy, load_control_policy
from .models import ControlPolicy, GlobalParameters, Rule, RuleDraft
from .paths import resolve_path
from .resolver import resolve_exclusions
from .schema import DocumentKey
from .walker import TreeWalker
