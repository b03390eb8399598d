from __future__ import annotations

import shlex
from pathlib import Path

from ..core.effects import ProcessRunner
from ..errors import ExternalProcessError


def build_site(runner: ProcessRunner, command: list[str], cwd: Path) -> None:
    """Run the static-site build and block until it exits."""
    rendered = shlex.join(command)
    try:
        code = runner.run_inherit(command, cwd)
    except OSError as exc:
        raise ExternalProcessError(f"failed to start site build `{rendered}` in {cwd}: {exc}") from exc
    if code != 0:
        raise ExternalProcessError(f"site build `{rendered}` failed with exit code {code}")
