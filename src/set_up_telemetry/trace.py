from __future__ import annotations

import hashlib

TRACE_ID_HEX_LENGTH = 32


def generate_trace_id(run_id: int, run_attempt: int) -> str:
    """
    Derive the trace ID shared by every job of a workflow run attempt.

    SHA-256 over "<run_id><run_attempt>t", truncated to 128 bits of lowercase hex.
    Any integer pair is accepted; the result depends on nothing else.
    """
    seed = f"{run_id}{run_attempt}t"
    return hashlib.sha256(seed.encode("utf-8")).hexdigest()[:TRACE_ID_HEX_LENGTH]
