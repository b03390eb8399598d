from __future__ import annotations

import argparse
import dataclasses
import sys

from .. import __version__
from ..core.context import RunContext
from ..core.logging import log_event
from ..core.serialize import dumps_json
from ..deps.command import configure_deps_parser, run_deps_command
from ..docs.command import configure_docs_parser, run_docs_command
from ..errors import ScriptError
from ..exit_codes import ERR_INTERNAL, ERR_USAGE
from .output import render_error, resolve_output_format


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="docsctl")
    p.add_argument("--version", action="version", version=f"docsctl {__version__}")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--run-id", help="run identifier for log lines")
    p.add_argument("--cwd", help="project root (default: current directory)")
    p.add_argument("--config", help="config file path (default: configs/docsctl.yaml)")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable debug log events")
    vg.add_argument("--quiet", action="store_true", help="only log warnings and errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version", help="print the tool version")
    config_p = sub.add_parser("config", help="configuration commands")
    config_sub = config_p.add_subparsers(dest="config_cmd", required=True)
    config_sub.add_parser("dump", help="print the resolved configuration as JSON")

    configure_docs_parser(sub)
    configure_deps_parser(sub)
    return p


def _config_payload(ctx: RunContext) -> dict[str, object]:
    return {
        "schema_version": 1,
        "tool": "docsctl",
        "status": "ok",
        "run_id": ctx.run_id,
        "source": str(ctx.config.source) if ctx.config.source else None,
        "docs": dataclasses.asdict(ctx.config.docs),
        "deps": dataclasses.asdict(ctx.config.deps),
    }


def main(argv: list[str] | None = None) -> int:
    raw_argv = argv if argv is not None else sys.argv[1:]
    ns = build_parser().parse_args(argv)
    fmt = resolve_output_format(cli_json=("--json" in raw_argv), cli_format=ns.format)
    try:
        if ns.format and ns.json and ns.format != "json":
            raise ScriptError("conflicting output flags: use either --format json or --json", ERR_USAGE, kind="usage")
        ctx = RunContext.from_args(
            ns.run_id,
            ns.cwd,
            ns.config,
            output_format=fmt,
            verbose=ns.verbose,
            quiet=ns.quiet,
            log_json=ns.log_json,
        )
        log_event(ctx, "debug", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format, root=ctx.repo_root)
        if ns.cmd == "version":
            print(dumps_json({"tool": "docsctl", "version": __version__}) if fmt == "json" else f"docsctl {__version__}")
            return 0
        if ns.cmd == "config":
            print(dumps_json(_config_payload(ctx), pretty=fmt != "json"))
            return 0
        if ns.cmd == "docs":
            return run_docs_command(ctx, ns)
        if ns.cmd == "deps":
            return run_deps_command(ctx, ns)
        return ERR_USAGE
    except ScriptError as exc:
        print(render_error(as_json=(fmt == "json"), message=str(exc), code=exc.code, kind=exc.kind), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(
            render_error(as_json=(fmt == "json"), message=f"internal error: {exc}", code=ERR_INTERNAL, kind="internal"),
            file=sys.stderr,
        )
        return ERR_INTERNAL


def main_entry() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    raise SystemExit(main())
