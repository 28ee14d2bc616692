"""Action inputs and runner environment configuration."""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from setup_utpm.constants import DEFAULT_VERSION, GITHUB_API_BASE


def input_env_name(name: str) -> str:
    """Environment variable the runner uses for an action input."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str, env: Optional[Mapping[str, str]] = None) -> str:
    """Read an action input, trimmed; empty string when unset."""
    env = os.environ if env is None else env
    return env.get(input_env_name(name), "").strip()


def _optional_path(value: Optional[str]) -> Optional[Path]:
    return Path(value) if value else None


@dataclass(frozen=True)
class ActionInputs:
    """User-supplied action inputs"""
    version: str = DEFAULT_VERSION
    token: Optional[str] = None
    targets: Optional[tuple[str, ...]] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ActionInputs":
        targets = tuple(t for t in re.split(r"[\s,]+", get_input("targets", env)) if t)
        return cls(
            version=get_input("version", env) or DEFAULT_VERSION,
            token=get_input("token", env) or None,
            targets=targets or None,
        )


@dataclass(frozen=True)
class RunnerEnvironment:
    """Paths and settings provided by the Actions runner"""
    tool_cache: Optional[Path] = None
    temp: Optional[Path] = None
    output_file: Optional[Path] = None
    path_file: Optional[Path] = None
    api_url: str = GITHUB_API_BASE

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "RunnerEnvironment":
        env = os.environ if env is None else env
        return cls(
            tool_cache=_optional_path(env.get("RUNNER_TOOL_CACHE")),
            temp=_optional_path(env.get("RUNNER_TEMP")),
            output_file=_optional_path(env.get("GITHUB_OUTPUT")),
            path_file=_optional_path(env.get("GITHUB_PATH")),
            api_url=(env.get("SETUP_UTPM_API_URL") or GITHUB_API_BASE).rstrip("/"),
        )
