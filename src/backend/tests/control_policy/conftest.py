import json
import os
import sys
from typing import Any

# Ensure `src/backend` is on sys.path so `import control_policy` works.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest

from control_policy.config import LoaderConfig
from control_policy.loader import ControlPolicyLoader


class RecordingEvaluator:
    """Evaluator double: remembers calls and hands back one handle per name."""

    def __init__(self, handles: dict[str, Any] | None = None):
        self.handles = handles
        self.calls: list[tuple[str, str]] = []

    def load_source(self, path: str) -> None:
        self.calls.append(("load_source", path))

    def evaluate(self, name: str) -> Any:
        self.calls.append(("evaluate", name))
        if self.handles is None:
            return f"handle:{name}"
        return self.handles.get(name)


@pytest.fixture
def evaluator() -> RecordingEvaluator:
    return RecordingEvaluator()


@pytest.fixture
def module_dir(tmp_path):
    path = tmp_path / "modules"
    path.mkdir()
    return path


@pytest.fixture
def make_source(module_dir):
    def _make(filename: str, body: str = "") -> str:
        path = module_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body)
        return str(path)

    return _make


@pytest.fixture
def make_policy_file(tmp_path):
    def _make(document: Any = None, *, text: str | None = None, filename: str = "policy.json") -> str:
        path = tmp_path / filename
        path.write_text(text if text is not None else json.dumps(document))
        return str(path)

    return _make


@pytest.fixture
def make_loader(evaluator, module_dir):
    def _make(*, evaluator_override=None, module_paths=None) -> ControlPolicyLoader:
        config = LoaderConfig(
            policy_path="policy.json",
            module_paths=tuple(module_paths) if module_paths is not None else (str(module_dir),),
        )
        return ControlPolicyLoader(evaluator=evaluator_override or evaluator, config=config)

    return _make


@pytest.fixture
def make_evaluator():
    def _make(handles: dict[str, Any] | None = None) -> RecordingEvaluator:
        return RecordingEvaluator(handles)

    return _make
