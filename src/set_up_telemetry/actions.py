"""
GitHub Actions runner protocol: inputs, outputs and workflow commands.

Inputs arrive as `INPUT_<NAME>` environment variables. Outputs are appended to
the file named by `GITHUB_OUTPUT`; older runners without it read the
`::set-output` command from stdout instead. Log lines become annotations when
written as `::error::` / `::warning::` / `::debug::` commands.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from typing import Mapping, TextIO


def get_input(name: str, env: Mapping[str, str] | None = None) -> str:
    if env is None:
        env = os.environ
    key = "INPUT_" + name.upper().replace(" ", "_")
    return env.get(key, "").strip()


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_command(
    command: str, message: str, properties: Mapping[str, str] | None = None
) -> str:
    props = ""
    if properties:
        props = " " + ",".join(
            f"{k}={escape_property(str(v))}" for k, v in properties.items() if v
        )
    return f"::{command}{props.rstrip()}::{escape_data(message)}"


class WorkflowCommands:
    def __init__(
        self,
        *,
        env: Mapping[str, str] | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._env = os.environ if env is None else env
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def issue(
        self, command: str, message: str, properties: Mapping[str, str] | None = None
    ) -> None:
        self.stream.write(format_command(command, message, properties) + "\n")

    def set_output(self, name: str, value: str) -> None:
        output_path = self._env.get("GITHUB_OUTPUT")
        if not output_path:
            self.issue("set-output", value, {"name": name})
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with open(output_path, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


class WorkflowCommandFormatter(logging.Formatter):
    """Render log records the way the runner expects them on stdout."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            return format_command("error", message)
        if record.levelno >= logging.WARNING:
            return format_command("warning", message)
        if record.levelno <= logging.DEBUG:
            return format_command("debug", message)
        return message


def _default_level(env: Mapping[str, str]) -> str:
    if env.get("RUNNER_DEBUG") == "1":
        return "DEBUG"
    return env.get("LOG_LEVEL", "INFO").upper()


def init_logging(
    *,
    stream: TextIO | None = None,
    level: str | int | None = None,
    env: Mapping[str, str] | None = None,
) -> None:
    """
    Route stdlib logging to stdout as workflow commands.

    Safe to call multiple times (last call wins).
    """
    if env is None:
        env = os.environ
    lvl = level or _default_level(env)
    # Unknown level names fall back to INFO instead of failing the step.
    if isinstance(lvl, str) and not isinstance(logging.getLevelName(lvl), int):
        lvl = "INFO"
    root = logging.getLogger()
    root.setLevel(lvl)

    root.handlers = []
    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setLevel(lvl)
    handler.setFormatter(WorkflowCommandFormatter("%(message)s"))
    root.addHandler(handler)
