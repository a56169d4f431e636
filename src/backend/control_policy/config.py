from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Sequence

from dotenv import load_dotenv


load_dotenv()


POLICY_PATH_DEFAULT = "control_policy.json"
MODULE_PATHS_DEFAULT = (
    ".",
    "/usr/local/share/control-policy",
    "/usr/share/control-policy",
)


@dataclass(frozen=True)
class LoaderConfig:
    policy_path: str
    module_paths: tuple[str, ...]


def get_loader_config(
    *,
    policy_path: Optional[str] = None,
    module_paths: Optional[Sequence[str]] = None,
) -> LoaderConfig:
    """
    Build loader configuration; explicit arguments win over the environment.

    Reads:
      CONTROL_POLICY_PATH, CONTROL_POLICY_MODULE_PATHS (os.pathsep separated)
    """
    if policy_path is None:
        policy_path = os.getenv("CONTROL_POLICY_PATH", "").strip() or POLICY_PATH_DEFAULT
    if module_paths is None:
        module_paths = _module_paths_from_env()
    return LoaderConfig(
        policy_path=str(policy_path),
        module_paths=tuple(str(p) for p in module_paths),
    )


def default_module_paths() -> tuple[str, ...]:
    return _module_paths_from_env()


def _module_paths_from_env() -> tuple[str, ...]:
    raw = os.getenv("CONTROL_POLICY_MODULE_PATHS", "").strip()
    if not raw:
        return MODULE_PATHS_DEFAULT
    return tuple(p.strip() for p in raw.split(os.pathsep) if p.strip())
