from __future__ import annotations

import json
import os
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

ROOT = Path(__file__).resolve().parents[3]
SRC = ROOT / "packages/docsctl/src"


def run_docsctl(*args: str, cwd: Path) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC)
    env["RUN_ID"] = "pytest-run"
    env.pop("DOCSCTL_CONFIG", None)
    return subprocess.run(
        [sys.executable, "-m", "docsctl.cli", "--cwd", str(cwd), *args],
        cwd=cwd,
        env=env,
        text=True,
        capture_output=True,
        check=False,
    )


def feature(category: str, title: str, image: str, order: int | None = None, description: str = "") -> dict[str, object]:
    row: dict[str, object] = {
        "category": category,
        "title": title,
        "description": description or f"{title} description.",
        "imagePath": image,
    }
    if order is not None:
        row["order"] = order
    return row


def write_manifest(root: Path, features: list[dict[str, object]], rel: str = "docs/manifest.json") -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"features": features}, indent=2) + "\n", encoding="utf-8")
    return path


@dataclass
class RecordingRunner:
    """Process runner double: records calls instead of spawning anything."""

    code: int = 0
    error: OSError | None = None
    on_run: Callable[[list[str], Path], None] | None = None
    calls: list[tuple[list[str], Path]] = field(default_factory=list)

    def run_inherit(self, cmd: list[str], cwd: Path) -> int:
        self.calls.append((list(cmd), cwd))
        if self.error is not None:
            raise self.error
        if self.on_run is not None:
            self.on_run(cmd, cwd)
        return self.code


def fake_build(build_dir: Path) -> Callable[[list[str], Path], None]:
    def _emit(_cmd: list[str], _cwd: Path) -> None:
        (build_dir / "assets").mkdir(parents=True, exist_ok=True)
        (build_dir / "index.html").write_text("<html>guide</html>\n", encoding="utf-8")
        (build_dir / "assets/app.js").write_text("console.log('guide')\n", encoding="utf-8")

    return _emit
