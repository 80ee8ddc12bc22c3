"""Deterministic CLI output for deploy results."""

from __future__ import annotations

import json
from typing import Callable, Iterable

SCHEMA_VERSION = "v1"

OutputSink = Callable[[str], None]


def render_json(command: str, payload: dict) -> str:
    envelope = {
        "schema_version": SCHEMA_VERSION,
        "command": command,
        "data": payload,
    }
    return json.dumps(envelope, sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def emit_output(
    *,
    command: str,
    payload: dict,
    json_output: bool,
    output_sink: OutputSink = print,
    human_lines: Iterable[str] = (),
) -> None:
    """Emit either the JSON envelope or the human-readable lines."""
    if json_output:
        output_sink(render_json(command, payload))
        return
    for line in human_lines:
        output_sink(line)


def error_payload(exc: BaseException, **context: str) -> dict:
    payload = {
        "status": "ERROR",
        "error_type": exc.__class__.__name__,
        "error_message": str(exc),
    }
    payload.update(context)
    return payload
