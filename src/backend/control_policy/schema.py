from __future__ import annotations

from enum import Enum


class DocumentKey(str, Enum):
    """Field names recognized in a control policy document (case-sensitive)."""

    RULES = "rules"
    RULE_NAME = "name"
    FILE_PATH = "file"
    PRIORITY = "priority"
    CATEGORY = "category"
    ATTENTION_ALLOC = "attention-allocation"
    LOG_LEVEL = "log-level"
    MUTEX_RULES = "mutex"
    MAX_ITER = "max-iteration"


def recognized_key(key: str) -> DocumentKey | None:
    try:
        return DocumentKey(key)
    except ValueError:
        return None
