from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.effects import FileSystem


@dataclass(frozen=True)
class SyncResult:
    source: Path
    dest: Path
    copied: tuple[str, ...] = ()
    skipped: bool = False


def sync_assets(fs: FileSystem, source: Path, dest: Path) -> SyncResult:
    """Copy the top-level files of `source` into `dest`.

    One-way and additive: files only present in `dest` are kept, and
    subdirectories of `source` are not descended into. A missing source is
    reported as skipped.
    """
    if not fs.is_dir(source):
        return SyncResult(source=source, dest=dest, skipped=True)
    fs.mkdir(dest)
    copied: list[str] = []
    for entry in fs.list_dir(source):
        if not fs.is_file(entry):
            continue
        fs.copy_file(entry, dest / entry.name)
        copied.append(entry.name)
    return SyncResult(source=source, dest=dest, copied=tuple(sorted(copied)))
