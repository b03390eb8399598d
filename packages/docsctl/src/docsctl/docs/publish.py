from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.effects import FileSystem
from ..errors import MissingBuildOutputError


@dataclass(frozen=True)
class PublishResult:
    build_dir: Path
    marker: Path
    targets: tuple[Path, ...]
    files_copied: int


def copy_tree(fs: FileSystem, src: Path, dst: Path) -> int:
    """Recursively copy `src` into `dst`, overwriting files and never deleting."""
    count = 0
    fs.mkdir(dst)
    for dirpath, _dirnames, filenames in fs.walk(src):
        out_dir = dst / dirpath.relative_to(src)
        fs.mkdir(out_dir)
        for name in filenames:
            fs.copy_file(dirpath / name, out_dir / name)
            count += 1
    return count


def publish_site(fs: FileSystem, build_dir: Path, targets: list[Path], marker: str = ".nojekyll") -> PublishResult:
    if not fs.is_dir(build_dir):
        raise MissingBuildOutputError(f"build output directory not found: {build_dir}; the site build produced nothing")
    marker_path = build_dir / marker
    fs.write_text(marker_path, "")
    copied = 0
    for target in targets:
        copied += copy_tree(fs, build_dir, target)
    return PublishResult(build_dir=build_dir, marker=marker_path, targets=tuple(targets), files_copied=copied)
