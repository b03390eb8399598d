from __future__ import annotations

import json
from typing import Any

import jsonschema

from ..contracts import schemas_root
from ..errors import ScriptError
from ..exit_codes import ERR_VALIDATION


def load_schema(schema_name: str) -> dict[str, Any]:
    path = schemas_root() / f"{schema_name}.schema.json"
    if not path.is_file():
        raise ScriptError(f"unknown schema: {schema_name}", ERR_VALIDATION)
    return json.loads(path.read_text(encoding="utf-8"))


def schema_errors(schema_name: str, payload: Any) -> list[str]:
    """Return every violation as `<pointer>: <message>`, sorted by location."""
    validator = jsonschema.Draft202012Validator(load_schema(schema_name))
    rows: list[str] = []
    for err in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path]):
        pointer = "/".join(str(p) for p in err.absolute_path) or "<root>"
        rows.append(f"{pointer}: {err.message}")
    return rows
