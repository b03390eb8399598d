from __future__ import annotations

import argparse

from ..core.context import RunContext
from ..core.serialize import dumps_json
from ..exit_codes import ERR_USAGE, ERR_VALIDATION
from .pipeline import (
    PipelineReport,
    check_manifest,
    generate_pages,
    run_build,
    run_pipeline,
    run_publish,
    sync_screenshots,
)


def _base_payload(ctx: RunContext, cmd: str, status: str) -> dict[str, object]:
    return {
        "schema_version": 1,
        "tool": "docsctl",
        "command": f"docs {cmd}",
        "status": status,
        "run_id": ctx.run_id,
    }


def _emit_report(ctx: RunContext, ns: argparse.Namespace, report: PipelineReport) -> None:
    payload = {**_base_payload(ctx, ns.docs_cmd, "ok"), **report.as_payload()}
    if ns.report == "json" or ctx.output_format == "json":
        print(dumps_json(payload))
        return
    for page in report.pages:
        print(f"page: {page}")
    if report.assets is not None:
        if report.assets.skipped:
            print(f"screenshots: skipped ({report.assets.source} not found)")
        else:
            print(f"screenshots: {len(report.assets.copied)} copied to {report.assets.dest}")
    if report.publish is not None:
        for target in report.publish.targets:
            print(f"published: {target}")
    print(f"docs {ns.docs_cmd}: ok ({', '.join(report.stages)})")


def run_docs_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    report = PipelineReport()
    if ns.docs_cmd == "generate":
        generate_pages(ctx, report)
    elif ns.docs_cmd == "sync-assets":
        sync_screenshots(ctx, report)
    elif ns.docs_cmd == "build":
        run_build(ctx, report)
    elif ns.docs_cmd == "publish":
        run_publish(ctx, report)
    elif ns.docs_cmd == "pipeline":
        report = run_pipeline(ctx, skip_build=ns.skip_build)
    elif ns.docs_cmd == "check":
        problems = check_manifest(ctx)
        if ns.report == "json" or ctx.output_format == "json":
            payload = {**_base_payload(ctx, "check", "pass" if not problems else "fail"), "errors": problems}
            print(dumps_json(payload))
        elif problems:
            print("docs manifest check failed:")
            for row in problems:
                print(f"- {row}")
        else:
            print("docs manifest check passed")
        return 0 if not problems else ERR_VALIDATION
    else:
        return ERR_USAGE
    _emit_report(ctx, ns, report)
    return 0


def configure_docs_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    p = sub.add_parser("docs", help="user guide generation, build and publish commands")
    docs_sub = p.add_subparsers(dest="docs_cmd", required=True)

    for name, help_text in (
        ("generate", "render one markdown page per manifest category"),
        ("sync-assets", "copy screenshots into the site's public folder"),
        ("build", "run the static-site build command"),
        ("publish", "copy the built site into the application resources"),
        ("pipeline", "generate, sync screenshots, build and publish"),
        ("check", "validate the manifest, page slugs and screenshot references"),
    ):
        cmd = docs_sub.add_parser(name, help=help_text)
        cmd.add_argument("--report", choices=["text", "json"], default="text")
        if name == "pipeline":
            cmd.add_argument("--skip-build", action="store_true", help="publish the existing build output as-is")
