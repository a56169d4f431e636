from __future__ import annotations

import logging
import runpy
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from ..errors import ScriptEvaluationError

logger = logging.getLogger("control_policy.connectors.scripting")


class ScriptEvaluator(Protocol):
    def load_source(self, path: str) -> None:
        """Execute a rule source file, registering the definitions it contains."""
        ...

    def evaluate(self, name: str) -> Any:
        """Return the handle of a previously loaded definition."""
        ...


class PythonScriptEvaluator:
    """Loads Python rule sources into one shared namespace.

    The namespace plays the role of the knowledge base: every loaded file adds
    its public globals, and later files may shadow earlier definitions.
    """

    def __init__(self, namespace: Optional[Dict[str, Any]] = None) -> None:
        self.namespace: Dict[str, Any] = namespace if namespace is not None else {}
        self.loaded_paths: List[str] = []

    def load_source(self, path: str) -> None:
        logger.debug("Loading rule source %s", path)
        try:
            module_globals = runpy.run_path(path, init_globals=dict(self.namespace))
        except Exception as exc:
            raise ScriptEvaluationError(f"Failed to load rule source {path}: {exc}", path=path) from exc
        for key, value in module_globals.items():
            if key.startswith("__"):
                continue
            self.namespace[key] = value
        self.loaded_paths.append(path)

    def evaluate(self, name: str) -> Any:
        if name not in self.namespace:
            raise ScriptEvaluationError(f"No definition named {name} in loaded rule sources", name=name)
        return self.namespace[name]


@dataclass(frozen=True)
class PlaceholderHandle:
    name: str
    path: str


class PlaceholderEvaluator:
    """Records source paths without executing them; used to inspect a policy offline."""

    def __init__(self) -> None:
        self.loaded_paths: List[str] = []

    def load_source(self, path: str) -> None:
        self.loaded_paths.append(path)

    def evaluate(self, name: str) -> PlaceholderHandle:
        return PlaceholderHandle(name=name, path=self.loaded_paths[-1] if self.loaded_paths else "")
