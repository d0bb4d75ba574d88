from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Mapping

from .actions import get_input
from .github_client import DEFAULT_API_URL

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class ConfigurationError(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class ActionConfig:
    github_token: str
    run_id: int
    run_attempt: int
    repository_owner: str
    repository: str
    runner_name: str
    api_url: str = DEFAULT_API_URL
    max_pages: int = 1


def _int_or_zero(value: str | None) -> int:
    # Unparseable run coordinates degrade to 0 rather than failing the step.
    if value is None or not _INT_RE.fullmatch(value):
        return 0
    parsed = int(value)
    if not _INT64_MIN <= parsed <= _INT64_MAX:
        return 0
    return parsed


def _parse_max_pages(raw: str) -> int:
    if not raw:
        return 1
    pages = int(raw) if _INT_RE.fullmatch(raw) else 0
    if pages < 1:
        raise ConfigurationError(
            f"Invalid input: max-pages={raw!r} (expected a positive integer)"
        )
    return pages


def load_action_config(env: Mapping[str, str] | None = None) -> ActionConfig:
    if env is None:
        env = os.environ

    token = get_input("github-token", env)
    if not token:
        raise ConfigurationError("No GitHub token provided")

    return ActionConfig(
        github_token=token,
        run_id=_int_or_zero(env.get("GITHUB_RUN_ID")),
        run_attempt=_int_or_zero(env.get("GITHUB_RUN_ATTEMPT")),
        repository_owner=env.get("GITHUB_REPOSITORY_OWNER", ""),
        repository=env.get("GITHUB_REPOSITORY", ""),
        runner_name=env.get("RUNNER_NAME", ""),
        api_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
        max_pages=_parse_max_pages(get_input("max-pages", env)),
    )
