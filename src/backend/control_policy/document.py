"""Reading control policy documents into a generic value tree.

A document holds one or more top-level values. JSON documents may simply
concatenate values; YAML documents use ``---`` separators. Objects parsed from
JSON keep every key/value pair in document order, duplicate keys included,
because later occurrences of a global parameter must override earlier ones.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator, List, Literal, Tuple

import yaml

from .errors import ConfigReadError, DocumentParseError

DocumentFormat = Literal["json", "yaml"]

YAML_SUFFIXES = (".yaml", ".yml")


class ObjectNode(list):
    """Ordered ``(key, value)`` pairs of a document object."""

    def items(self) -> Iterator[Tuple[str, Any]]:
        return iter(self)

    def keys(self) -> List[str]:
        return [k for k, _ in self]

    def get(self, key: str, default: Any = None) -> Any:
        for k, v in reversed(self):
            if k == key:
                return v
        return default


def format_for_path(path: str | Path) -> DocumentFormat:
    return "yaml" if Path(path).suffix.lower() in YAML_SUFFIXES else "json"


def parse_document(text: str, fmt: DocumentFormat = "json", *, path: str = "<string>") -> List[Any]:
    if fmt == "yaml":
        return _parse_yaml(text, path)
    return _parse_json_stream(text, path)


def read_document(path: str | Path, fmt: DocumentFormat | None = None) -> List[Any]:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(str(path), exc) from exc
    return parse_document(text, fmt or format_for_path(path), path=str(path))


def _parse_json_stream(text: str, path: str) -> List[Any]:
    decoder = json.JSONDecoder(object_pairs_hook=ObjectNode)
    values: List[Any] = []
    idx = 0
    end = len(text)
    while True:
        while idx < end and text[idx].isspace():
            idx += 1
        if idx >= end:
            break
        try:
            value, idx = decoder.raw_decode(text, idx)
        except json.JSONDecodeError as exc:
            raise DocumentParseError(path, exc.msg, line=exc.lineno, column=exc.colno) from exc
        values.append(value)
    return values


def _parse_yaml(text: str, path: str) -> List[Any]:
    try:
        docs = list(yaml.safe_load_all(text))
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        if mark is not None:
            raise DocumentParseError(path, str(getattr(exc, "problem", exc)), line=mark.line + 1, column=mark.column + 1) from exc
        raise DocumentParseError(path, str(exc)) from exc
    return [doc for doc in docs if doc is not None]
