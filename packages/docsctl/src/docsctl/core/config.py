from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..errors import ConfigError
from .schema import schema_errors

DEFAULT_CONFIG_REL = "configs/docsctl.yaml"


@dataclass(frozen=True)
class DocsConfig:
    manifest: str = "docs/manifest.json"
    screenshots_dir: str = "docs/screenshots"
    site_root: str = "docs-site"
    pages_dir: str = "docs-site/docs/features"
    public_screenshots_dir: str = "docs-site/static/screenshots"
    build_command: tuple[str, ...] = ("npm", "run", "build")
    build_dir: str = "docs-site/build"
    marker_file: str = ".nojekyll"
    publish_targets: tuple[str, ...] = ("src/main/resources/META-INF/resources/docs",)


@dataclass(frozen=True)
class DepsConfig:
    package_json: str = "package.json"
    namespace: str = "@vaadin/"
    pins: dict[str, str] = field(default_factory=dict)
    allow: tuple[str, ...] = ()


@dataclass(frozen=True)
class DocsctlConfig:
    docs: DocsConfig = field(default_factory=DocsConfig)
    deps: DepsConfig = field(default_factory=DepsConfig)
    source: Path | None = None


def _load_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML: {exc}") from exc


def parse_config(raw: Any, source: Path | None = None) -> DocsctlConfig:
    if raw is None:
        raw = {}
    where = str(source) if source else "<config>"
    errors = schema_errors("docsctl-config", raw)
    if errors:
        raise ConfigError(f"{where}: invalid config: " + "; ".join(errors))
    docs_raw: dict[str, Any] = dict(raw.get("docs") or {})
    deps_raw: dict[str, Any] = dict(raw.get("deps") or {})
    for key in ("build_command", "publish_targets"):
        if key in docs_raw:
            docs_raw[key] = tuple(docs_raw[key])
    if "allow" in deps_raw:
        deps_raw["allow"] = tuple(deps_raw["allow"])
    if "pins" in deps_raw:
        deps_raw["pins"] = {str(k): str(v) for k, v in deps_raw["pins"].items()}
    return DocsctlConfig(docs=DocsConfig(**docs_raw), deps=DepsConfig(**deps_raw), source=source)


def load_config(repo_root: Path, configured: str | None = None) -> DocsctlConfig:
    """Load config from an explicit path, or the default path when it exists.

    An explicitly configured path that does not exist is an error; a missing
    default file means built-in defaults.
    """
    if configured:
        path = Path(configured)
        path = path if path.is_absolute() else repo_root / path
        if not path.is_file():
            raise ConfigError(f"config file not found: {path}")
        return parse_config(_load_yaml(path), path)
    default = repo_root / DEFAULT_CONFIG_REL
    if default.is_file():
        return parse_config(_load_yaml(default), default)
    return DocsctlConfig()
