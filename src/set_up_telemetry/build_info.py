"""
Build identity shown in the start-up banner.

The version comes from the installed distribution. Date and commit are stamped
into the action's environment at release time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import metadata
from typing import Mapping

__version__ = "0.1.0"

DIST_NAME = "set-up-telemetry"


@dataclass(frozen=True, slots=True)
class BuildInfo:
    version: str
    date: str
    commit: str


def _env(env: Mapping[str, str], name: str) -> str:
    value = (env.get(name) or "").strip()
    return value if value else "unknown"


def get_build_info(env: Mapping[str, str] | None = None) -> BuildInfo:
    if env is None:
        env = os.environ
    try:
        version = metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        version = __version__
    return BuildInfo(
        version=version,
        date=_env(env, "BUILD_DATE"),
        commit=_env(env, "COMMIT_ID"),
    )
