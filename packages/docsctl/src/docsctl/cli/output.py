"""CLI payload output helpers."""

from __future__ import annotations

from ..core.serialize import dumps_json


def resolve_output_format(*, cli_json: bool, cli_format: str | None) -> str:
    if cli_json:
        return "json"
    return cli_format or "text"


def render_error(*, as_json: bool, message: str, code: int, kind: str) -> str:
    if as_json:
        return dumps_json(
            {
                "schema_name": "docsctl.error.v1",
                "schema_version": 1,
                "tool": "docsctl",
                "status": "error",
                "errors": [{"code": code, "kind": kind, "message": message}],
            }
        )
    return message
