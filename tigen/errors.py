# SPDX-License-Identifier: BUSL-1.1
"""Error types raised across the tigen pipeline.

Every error carries the pipeline ``stage`` it was raised in so the CLI can
name the failing step without inspecting the exception type.
"""


class TigenError(Exception):
    """Base class for all tigen errors."""
    stage = "run"


# ── Parsing ──────────────────────────────────────────────────────────────

class ParseError(TigenError):
    stage = "parse"


class MalformedImageName(ParseError):
    """The image identifier is not a usable name[:tag]."""
    def __init__(self, raw: str, reason: str = "expected name[:tag]"):
        self.raw = raw
        super().__init__(f"malformed image name {raw!r} ({reason})")


class UnsupportedDistribution(ParseError):
    """The distribution name is not in the registry."""
    stage = "resolve"

    def __init__(self, name: str, supported=()):
        self.name = name
        msg = f"no support for distribution '{name}'"
        if supported:
            msg += f" (supported: {', '.join(supported)})"
        super().__init__(msg)


# ── Synthesis ────────────────────────────────────────────────────────────

class SynthesisError(TigenError):
    stage = "synthesize"


class TemplateError(SynthesisError):
    """The template is missing or lacks a substitution target."""


class RenderError(SynthesisError):
    """The template engine failed while compiling or rendering."""


# ── Boundary ─────────────────────────────────────────────────────────────

class IOFailure(TigenError):
    stage = "write"

    def __init__(self, path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"cannot write {path}: {cause.strerror or cause}")


class BackendFailure(TigenError):
    stage = "build"

    def __init__(self, command: list, returncode=None, reason: str = "", stage: str = ""):
        self.command = list(command)
        self.returncode = returncode
        if stage:
            self.stage = stage
        program = self.command[0] if self.command else "backend"
        if reason:
            msg = f"{program}: {reason}"
        else:
            msg = f"{program} exited with status {returncode}"
        super().__init__(msg)


class ConfigError(TigenError):
    stage = "config"
