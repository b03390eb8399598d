"""Feature manifest written by the UI screenshot run."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.effects import FileSystem
from ..core.schema import schema_errors
from ..errors import MalformedInputError, MissingInputError


@dataclass(frozen=True)
class Feature:
    category: str
    title: str
    description: str
    image_path: str
    order: int | float = 0
    id: str | None = None

    @classmethod
    def from_json(cls, row: dict[str, Any]) -> "Feature":
        return cls(
            category=row["category"],
            title=row["title"],
            description=row["description"],
            image_path=row["imagePath"],
            order=row.get("order", 0),
            id=row.get("id"),
        )


@dataclass(frozen=True)
class Manifest:
    features: tuple[Feature, ...]
    source: Path | None = None

    @property
    def categories(self) -> list[str]:
        return list(dict.fromkeys(f.category for f in self.features))


def parse_manifest(payload: Any, source: Path | None = None) -> Manifest:
    errors = schema_errors("docs-manifest", payload)
    if errors:
        where = str(source) if source else "<manifest>"
        raise MalformedInputError(f"{where}: manifest does not match schema: " + "; ".join(errors))
    return Manifest(features=tuple(Feature.from_json(row) for row in payload["features"]), source=source)


def load_manifest(fs: FileSystem, path: Path) -> Manifest:
    if not fs.is_file(path):
        raise MissingInputError(f"manifest not found: {path}")
    try:
        payload = json.loads(fs.read_text(path))
    except UnicodeDecodeError as exc:
        raise MalformedInputError(f"{path}: not valid UTF-8 at byte {exc.start}") from exc
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"{path}: invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}") from exc
    return parse_manifest(payload, path)
