from __future__ import annotations

import argparse

from ..core.context import RunContext
from ..core.logging import log_event
from ..core.serialize import dumps_json
from ..errors import UsageError
from ..exit_codes import ERR_DRIFT, ERR_USAGE
from .reconcile import ReconcilePolicy, reconcile_file


def policy_from_context(ctx: RunContext) -> ReconcilePolicy:
    cfg = ctx.config.deps
    return ReconcilePolicy(namespace=cfg.namespace, pins=dict(cfg.pins), allow=frozenset(cfg.allow))


def run_deps_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    if ns.deps_cmd != "reconcile":
        return ERR_USAGE
    if not ns.version:
        raise UsageError("usage: docsctl deps reconcile <version>: missing target version")
    path = ctx.path(ns.package_json or ctx.config.deps.package_json)
    changes = reconcile_file(ctx.fs, path, ns.version, policy_from_context(ctx), check=ns.check)
    drift = ns.check and bool(changes)
    if ns.report == "json" or ctx.output_format == "json":
        payload = {
            "schema_version": 1,
            "tool": "docsctl",
            "command": "deps reconcile",
            "status": "drift" if drift else "ok",
            "run_id": ctx.run_id,
            "package_json": str(path),
            "target_version": ns.version,
            "written": not ns.check,
            "changes": [
                {"section": c.section, "name": c.name, "before": c.before, "after": c.after} for c in changes
            ],
        }
        print(dumps_json(payload))
    else:
        for change in changes:
            print(change.render())
        if ns.check:
            print(f"{path.name}: {len(changes)} pending change(s)" if changes else f"{path.name}: up to date")
        else:
            print(f"Updated {path.name} for version {ns.version}")
    if not ns.check:
        log_event(ctx, "info", "deps", "reconciled", path=path, version=ns.version, changes=len(changes))
    return ERR_DRIFT if drift else 0


def configure_deps_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    p = sub.add_parser("deps", help="frontend dependency pin commands")
    deps_sub = p.add_subparsers(dest="deps_cmd", required=True)
    rec = deps_sub.add_parser("reconcile", help="apply pinned and allow-listed versions to package.json")
    rec.add_argument("version", nargs="?", help="target framework version, e.g. 24.8.0")
    rec.add_argument("--package-json", help="package manifest path (default from config)")
    rec.add_argument("--check", action="store_true", help="report pending changes without writing")
    rec.add_argument("--report", choices=["text", "json"], default="text")
