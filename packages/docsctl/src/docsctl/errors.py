from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import (
    ERR_BUILD,
    ERR_BUILD_OUTPUT,
    ERR_CONFIG,
    ERR_MALFORMED_INPUT,
    ERR_MISSING_INPUT,
    ERR_USAGE,
    ERR_VALIDATION,
)


@dataclass
class ScriptError(Exception):
    message: str
    code: int
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


@dataclass
class UsageError(ScriptError):
    code: int = ERR_USAGE
    kind: str = "usage"


@dataclass
class ConfigError(ScriptError):
    code: int = ERR_CONFIG
    kind: str = "config"


@dataclass
class MissingInputError(ScriptError):
    code: int = ERR_MISSING_INPUT
    kind: str = "missing_input"


@dataclass
class MalformedInputError(ScriptError):
    code: int = ERR_MALFORMED_INPUT
    kind: str = "malformed_input"


@dataclass
class SlugCollisionError(ScriptError):
    code: int = ERR_VALIDATION
    kind: str = "slug_collision"


@dataclass
class ExternalProcessError(ScriptError):
    code: int = ERR_BUILD
    kind: str = "external_process"


@dataclass
class MissingBuildOutputError(ScriptError):
    code: int = ERR_BUILD_OUTPUT
    kind: str = "missing_build_output"
