"""Frontend dependency pin reconciliation for `package.json`.

Only names in the pin table or the allow-list are ever rewritten. The
namespace is not forced wholesale to the framework version because the
registry does not publish every package for every framework release.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..core.effects import FileSystem
from ..errors import MalformedInputError, MissingInputError
from ..exit_codes import ERR_USAGE

PLATFORM_KEY = "vaadin"


@dataclass(frozen=True)
class ReconcilePolicy:
    namespace: str = "@vaadin/"
    pins: dict[str, str] = field(default_factory=dict)
    allow: frozenset[str] = frozenset()

    def in_namespace(self, name: str) -> bool:
        return name.startswith(self.namespace)


@dataclass(frozen=True)
class VersionChange:
    section: str
    name: str
    before: Any
    after: Any

    def render(self) -> str:
        if self.after is None:
            return f"{self.section}: removed {self.name} ({self.before})"
        if self.before is None:
            return f"{self.section}: added {self.name}@{self.after}"
        return f"{self.section}: {self.name} {self.before} -> {self.after}"


def _dependency_maps(manifest: dict[str, Any]) -> list[tuple[str, dict[str, Any]]]:
    maps: list[tuple[str, dict[str, Any]]] = []
    if isinstance(manifest.get("dependencies"), dict):
        maps.append(("dependencies", manifest["dependencies"]))
    platform = manifest.get(PLATFORM_KEY)
    if isinstance(platform, dict) and isinstance(platform.get("dependencies"), dict):
        maps.append((f"{PLATFORM_KEY}.dependencies", platform["dependencies"]))
    return maps


def _seed_sources(manifest: dict[str, Any]) -> list[dict[str, Any]]:
    sources = [manifest.get("dependencies"), manifest.get("devDependencies")]
    platform = manifest.get(PLATFORM_KEY)
    if isinstance(platform, dict):
        sources.extend([platform.get("dependencies"), platform.get("devDependencies")])
    return [s for s in sources if isinstance(s, dict)]


def _set(section: str, mapping: dict[str, Any], name: str, version: str, changes: list[VersionChange]) -> None:
    before = mapping.get(name)
    if before != version:
        mapping[name] = version
        changes.append(VersionChange(section, name, before, version))


def reconcile(manifest: dict[str, Any], target_version: str, policy: ReconcilePolicy) -> list[VersionChange]:
    """Rewrite pinned and allow-listed versions in place; return what changed."""
    changes: list[VersionChange] = []

    for section, deps in _dependency_maps(manifest):
        for name in list(deps):
            if name in policy.pins:
                _set(section, deps, name, policy.pins[name], changes)
            elif name in policy.allow:
                _set(section, deps, name, target_version, changes)

    overrides = manifest.get("overrides")
    if isinstance(overrides, dict):
        for name in list(overrides):
            if name in policy.pins:
                _set("overrides", overrides, name, policy.pins[name], changes)
            elif policy.in_namespace(name):
                changes.append(VersionChange("overrides", name, overrides.pop(name), None))

    has_namespace_override = isinstance(overrides, dict) and any(policy.in_namespace(n) for n in overrides)
    if not has_namespace_override:
        found = sorted({name for source in _seed_sources(manifest) for name in source if name in policy.pins})
        if found:
            if not isinstance(overrides, dict):
                overrides = {}
                manifest["overrides"] = overrides
            for name in found:
                _set("overrides", overrides, name, policy.pins[name], changes)

    return changes


def reconcile_file(
    fs: FileSystem,
    path: Path,
    target_version: str,
    policy: ReconcilePolicy,
    check: bool = False,
) -> list[VersionChange]:
    if not fs.is_file(path):
        raise MissingInputError(f"package manifest not found: {path}", ERR_USAGE)
    try:
        manifest = json.loads(fs.read_text(path))
    except UnicodeDecodeError as exc:
        raise MalformedInputError(f"{path}: not valid UTF-8 at byte {exc.start}") from exc
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"{path}: invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}") from exc
    if not isinstance(manifest, dict):
        raise MalformedInputError(f"{path}: package manifest root must be an object")
    changes = reconcile(manifest, target_version, policy)
    if not check:
        fs.write_text(path, json.dumps(manifest, indent=2, ensure_ascii=False) + "\n")
    return changes
