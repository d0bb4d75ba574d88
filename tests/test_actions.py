from __future__ import annotations

import io
import logging

import pytest

from set_up_telemetry.actions import (
    WorkflowCommandFormatter,
    WorkflowCommands,
    format_command,
    get_input,
    init_logging,
)


def _read_outputs(text: str) -> dict[str, str]:
    outputs: dict[str, str] = {}
    lines = iter(text.splitlines())
    for line in lines:
        name, delimiter = line.split("<<", 1)
        value_lines = []
        for value_line in lines:
            if value_line == delimiter:
                break
            value_lines.append(value_line)
        outputs[name] = "\n".join(value_lines)
    return outputs


def test_get_input_maps_name_and_trims() -> None:
    env = {"INPUT_GITHUB-TOKEN": "  ghs_NOT_A_REAL_TOKEN \n", "INPUT_SOME_VALUE": "x"}
    assert get_input("github-token", env) == "ghs_NOT_A_REAL_TOKEN"
    assert get_input("some value", env) == "x"
    assert get_input("missing", env) == ""


def test_set_output_appends_delimited_entries(tmp_path) -> None:  # noqa: ANN001
    output_file = tmp_path / "github_output"
    output_file.write_text("previous<<EOF\nkeep\nEOF\n", encoding="utf-8")
    commands = WorkflowCommands(env={"GITHUB_OUTPUT": str(output_file)}, stream=io.StringIO())

    commands.set_output("trace-id", "abc")
    commands.set_output("job-name", "build\nlinux")

    outputs = _read_outputs(output_file.read_text(encoding="utf-8"))
    assert outputs == {"previous": "keep", "trace-id": "abc", "job-name": "build\nlinux"}
    assert "ghadelimiter_" in output_file.read_text(encoding="utf-8")


def test_set_output_falls_back_to_command_without_output_file() -> None:
    stream = io.StringIO()
    commands = WorkflowCommands(env={}, stream=stream)

    commands.set_output("job-id", "42")

    assert stream.getvalue() == "::set-output name=job-id::42\n"


@pytest.mark.parametrize(
    ("command", "message", "properties", "expected"),
    [
        ("error", "boom", None, "::error::boom"),
        ("error", "50% done\r\nnext", None, "::error::50%25 done%0D%0Anext"),
        ("warning", "w", {"title": "a:b,c"}, "::warning title=a%3Ab%2Cc::w"),
        ("notice", "n", {"file": "x.py", "line": "3"}, "::notice file=x.py,line=3::n"),
    ],
)
def test_format_command_escapes(command, message, properties, expected) -> None:  # noqa: ANN001
    assert format_command(command, message, properties) == expected


def _record(level: int, msg: str) -> logging.LogRecord:
    return logging.LogRecord("set-up-telemetry", level, __file__, 1, msg, None, None)


def test_formatter_maps_levels_to_commands() -> None:
    formatter = WorkflowCommandFormatter("%(message)s")

    assert formatter.format(_record(logging.INFO, "Trace ID: abc")) == "Trace ID: abc"
    assert formatter.format(_record(logging.DEBUG, "fetched")) == "::debug::fetched"
    assert formatter.format(_record(logging.WARNING, "careful")) == "::warning::careful"
    assert formatter.format(_record(logging.ERROR, "Error getting job info: x")) == "::error::Error getting job info: x"
    assert formatter.format(_record(logging.CRITICAL, "down")) == "::error::down"


def test_init_logging_honours_runner_debug() -> None:
    stream = io.StringIO()
    init_logging(stream=stream, env={"RUNNER_DEBUG": "1"})

    logging.getLogger("set_up_telemetry.test").debug("hello")

    assert stream.getvalue() == "::debug::hello\n"


def test_init_logging_defaults_to_info() -> None:
    stream = io.StringIO()
    init_logging(stream=stream, env={})

    log = logging.getLogger("set_up_telemetry.test")
    log.debug("hidden")
    log.info("shown")

    assert stream.getvalue() == "shown\n"


def test_init_logging_falls_back_to_info_on_unknown_level() -> None:
    stream = io.StringIO()
    init_logging(stream=stream, env={"LOG_LEVEL": "verbose"})

    log = logging.getLogger("set_up_telemetry.test")
    log.debug("hidden")
    log.info("shown")

    assert stream.getvalue() == "shown\n"
