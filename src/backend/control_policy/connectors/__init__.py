"""Script evaluator connectors (rule source loading lives here; the walker only sees the protocol)."""

from .scripting import PlaceholderEvaluator, PythonScriptEvaluator, ScriptEvaluationError, ScriptEvaluator

__all__ = ["ScriptEvaluator", "PythonScriptEvaluator", "PlaceholderEvaluator", "ScriptEvaluationError"]
