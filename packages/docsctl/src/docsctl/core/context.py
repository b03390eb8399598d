from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from .config import DocsctlConfig, load_config
from .effects import FileSystem, LocalFileSystem, ProcessRunner, SubprocessRunner

OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RunContext:
    run_id: str
    repo_root: Path
    config: DocsctlConfig
    output_format: OutputFormat = "text"
    verbose: bool = False
    quiet: bool = False
    log_json: bool = False
    fs: FileSystem = field(default_factory=LocalFileSystem)
    runner: ProcessRunner = field(default_factory=SubprocessRunner)

    def path(self, rel: str) -> Path:
        raw = Path(rel)
        return raw if raw.is_absolute() else self.repo_root / raw

    @classmethod
    def from_args(
        cls,
        run_id: str | None,
        repo_root: str | None,
        config_path: str | None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
    ) -> "RunContext":
        root = Path(repo_root).resolve() if repo_root else Path.cwd().resolve()
        default_run = f"docs-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}"
        resolved_run_id = run_id or os.environ.get("RUN_ID", default_run)
        config = load_config(root, config_path or os.environ.get("DOCSCTL_CONFIG"))
        return cls(
            run_id=resolved_run_id,
            repo_root=root,
            config=config,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
        )
