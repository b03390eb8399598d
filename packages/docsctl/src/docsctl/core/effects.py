"""File-system and process capabilities handed to every pipeline stage.

Stages never touch `pathlib`/`shutil`/`subprocess` directly; they receive a
`FileSystem` and a `ProcessRunner` so tests can swap either one out.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import Iterator, Protocol


class FileSystem(Protocol):
    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, content: str) -> None: ...

    def mkdir(self, path: Path) -> None: ...

    def copy_file(self, src: Path, dst: Path) -> None: ...

    def list_dir(self, path: Path) -> list[Path]: ...

    def walk(self, root: Path) -> Iterator[tuple[Path, list[str], list[str]]]: ...


class ProcessRunner(Protocol):
    def run_inherit(self, cmd: list[str], cwd: Path) -> int: ...


class LocalFileSystem:
    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)

    def mkdir(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def copy_file(self, src: Path, dst: Path) -> None:
        shutil.copyfile(src, dst)

    def list_dir(self, path: Path) -> list[Path]:
        return sorted(path.iterdir(), key=lambda p: p.name)

    def walk(self, root: Path) -> Iterator[tuple[Path, list[str], list[str]]]:
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            yield Path(dirpath), dirnames, sorted(filenames)


class SubprocessRunner:
    def run_inherit(self, cmd: list[str], cwd: Path) -> int:
        # stdio is inherited so build diagnostics reach the operator directly.
        proc = subprocess.run(cmd, cwd=cwd, check=False)
        return proc.returncode


__all__ = ["FileSystem", "LocalFileSystem", "ProcessRunner", "SubprocessRunner"]
