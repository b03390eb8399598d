"""Structured run events on stderr; stdout is reserved for command reports."""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import RunContext

_QUIET_LEVELS = frozenset({"debug", "info"})


def _enabled(ctx: RunContext, level: str) -> bool:
    if ctx.quiet:
        return level not in _QUIET_LEVELS
    return level != "debug" or ctx.verbose


def _text_value(value: object) -> str:
    text = str(value)
    return json.dumps(text) if not text or any(ch.isspace() for ch in text) else text


def log_event(ctx: RunContext, level: str, component: str, action: str, **fields: object) -> None:
    if not _enabled(ctx, level):
        return
    head = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "run_id": ctx.run_id,
        "component": component,
        "action": action,
    }
    if ctx.log_json:
        line = json.dumps({**fields, **head}, sort_keys=True, default=str)
    else:
        pairs = list(head.items()) + sorted(fields.items())
        line = " ".join(f"{key}={_text_value(value)}" for key, value in pairs)
    sys.stderr.write(line + "\n")
