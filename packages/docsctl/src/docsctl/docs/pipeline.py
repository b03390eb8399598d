"""Stage wiring for the user guide: render -> sync assets -> build -> publish.

Each stage reads its paths from `ctx.config.docs` and its side effects from
`ctx.fs` / `ctx.runner`. Stages raise `ScriptError` subclasses; the first
failure stops the run and nothing after it is attempted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..core.context import RunContext
from ..core.logging import log_event
from .assets import SyncResult, sync_assets
from .build import build_site
from .grouping import group_by_category
from .manifest import load_manifest
from .publish import PublishResult, publish_site
from .render import find_slug_collisions, image_basename, render_pages, slugify, write_pages


@dataclass
class PipelineReport:
    stages: list[str] = field(default_factory=list)
    pages: list[str] = field(default_factory=list)
    features: int = 0
    assets: SyncResult | None = None
    publish: PublishResult | None = None

    def as_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "stages": list(self.stages),
            "pages": list(self.pages),
            "features": self.features,
        }
        if self.assets is not None:
            payload["assets"] = {"skipped": self.assets.skipped, "copied": list(self.assets.copied)}
        if self.publish is not None:
            payload["publish"] = {
                "marker": str(self.publish.marker),
                "targets": [str(t) for t in self.publish.targets],
                "files_copied": self.publish.files_copied,
            }
        return payload


def generate_pages(ctx: RunContext, report: PipelineReport) -> list[Path]:
    cfg = ctx.config.docs
    manifest = load_manifest(ctx.fs, ctx.path(cfg.manifest))
    log_event(ctx, "info", "manifest", "loaded", path=manifest.source, features=len(manifest.features))
    pages = render_pages(group_by_category(manifest.features))
    written = write_pages(ctx.fs, pages, ctx.path(cfg.pages_dir))
    for path in written:
        log_event(ctx, "debug", "render", "page-written", path=path)
    report.stages.append("generate")
    report.pages = [p.name for p in written]
    report.features = len(manifest.features)
    return written


def sync_screenshots(ctx: RunContext, report: PipelineReport) -> SyncResult:
    cfg = ctx.config.docs
    result = sync_assets(ctx.fs, ctx.path(cfg.screenshots_dir), ctx.path(cfg.public_screenshots_dir))
    if result.skipped:
        log_event(ctx, "info", "assets", "skipped", reason="source missing", source=result.source)
    else:
        log_event(ctx, "info", "assets", "synced", dest=result.dest, count=len(result.copied))
    report.stages.append("sync-assets")
    report.assets = result
    return result


def run_build(ctx: RunContext, report: PipelineReport) -> None:
    cfg = ctx.config.docs
    cwd = ctx.path(cfg.site_root)
    log_event(ctx, "info", "build", "start", command=" ".join(cfg.build_command), cwd=cwd)
    build_site(ctx.runner, list(cfg.build_command), cwd)
    log_event(ctx, "info", "build", "done")
    report.stages.append("build")


def run_publish(ctx: RunContext, report: PipelineReport) -> PublishResult:
    cfg = ctx.config.docs
    targets = [ctx.path(t) for t in cfg.publish_targets]
    result = publish_site(ctx.fs, ctx.path(cfg.build_dir), targets, cfg.marker_file)
    log_event(ctx, "info", "publish", "marker-written", path=result.marker)
    log_event(ctx, "info", "publish", "copied", targets=len(result.targets), files=result.files_copied)
    report.stages.append("publish")
    report.publish = result
    return result


def run_pipeline(ctx: RunContext, skip_build: bool = False) -> PipelineReport:
    report = PipelineReport()
    generate_pages(ctx, report)
    sync_screenshots(ctx, report)
    if not skip_build:
        run_build(ctx, report)
    run_publish(ctx, report)
    return report


def check_manifest(ctx: RunContext) -> list[str]:
    """Validate the manifest without writing anything; return problems found."""
    cfg = ctx.config.docs
    manifest = load_manifest(ctx.fs, ctx.path(cfg.manifest))
    problems: list[str] = []
    for slug, names in sorted(find_slug_collisions(manifest.categories).items()):
        problems.append(f"slug collision: {slug}.md <- {', '.join(repr(n) for n in names)}")
    screenshots = ctx.path(cfg.screenshots_dir)
    if ctx.fs.is_dir(screenshots):
        available = {p.name for p in ctx.fs.list_dir(screenshots) if ctx.fs.is_file(p)}
        for idx, feature in enumerate(manifest.features):
            name = image_basename(feature.image_path)
            if name not in available:
                problems.append(
                    f"features/{idx}: screenshot `{name}` for `{feature.title}` ({slugify(feature.category)}) missing from {screenshots}"
                )
    return problems
