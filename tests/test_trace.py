from __future__ import annotations

import re

import pytest

from set_up_telemetry.trace import generate_trace_id


def test_known_vector_is_stable() -> None:
    # lowercase hex of sha256("123451t"), first 32 chars
    assert generate_trace_id(12345, 1) == "5c89a9ce56397ace4b0fd1e7c1e458a5"


@pytest.mark.parametrize(
    ("run_id", "run_attempt", "expected"),
    [
        (12345, 2, "42b7eb1519a872b5e2bffbfd35836b46"),
        (0, 0, "f3c168b1bb542077f5158b46ede4a163"),
        (-1, 1, "acc7a02ed538b1600d03ba318271504f"),
    ],
)
def test_zero_and_negative_inputs_are_accepted(run_id: int, run_attempt: int, expected: str) -> None:
    assert generate_trace_id(run_id, run_attempt) == expected


def test_is_deterministic_and_lowercase_hex() -> None:
    first = generate_trace_id(9_223_372_036_854_775_807, 3)
    second = generate_trace_id(9_223_372_036_854_775_807, 3)
    assert first == second
    assert re.fullmatch(r"[0-9a-f]{32}", first)


def test_distinct_runs_and_attempts_get_distinct_ids() -> None:
    pairs = [(run_id, attempt) for run_id in (1, 2, 10, 11, 123, 4567890) for attempt in (1, 2, 3)]
    ids = {generate_trace_id(run_id, attempt) for run_id, attempt in pairs}
    assert len(ids) == len(pairs)
