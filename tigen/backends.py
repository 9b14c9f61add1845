# SPDX-License-Identifier: BUSL-1.1
"""External backends: image builders and the toolbox session manager."""

import subprocess
from collections import namedtuple
from pathlib import Path

from tigen.errors import BackendFailure, ConfigError

BuildOutput = namedtuple("BuildOutput", ["returncode", "stdout", "stderr"])


# ── Image builders ───────────────────────────────────────────────────────

class ImageBuilder:
    """Builds an image from a Dockerfile on disk."""

    name = ""

    def __init__(self, bin: str = ""):
        self.bin = bin or self.name

    def build_command(self, dockerfile: Path, tag: str) -> list:
        raise NotImplementedError

    def build_image(self, dockerfile: Path, tag: str) -> BuildOutput:
        """Run the build and return its exit status and raw captured output."""
        cmd = self.build_command(dockerfile, tag)
        try:
            result = subprocess.run(cmd, capture_output=True)
        except OSError as e:
            raise BackendFailure(cmd, reason=e.strerror or str(e)) from e
        return BuildOutput(result.returncode, result.stdout, result.stderr)


class Docker(ImageBuilder):
    name = "docker"

    def build_command(self, dockerfile: Path, tag: str) -> list:
        return [self.bin, "build", "-f", str(dockerfile), "-t", tag, "."]


class Podman(ImageBuilder):
    name = "podman"

    def build_command(self, dockerfile: Path, tag: str) -> list:
        return [self.bin, "build", "--tag", tag, "--file", str(dockerfile), "."]


BUILDERS = {
    "docker": Docker,
    "podman": Podman,
}


def get_builder(name: str, bin: str = "") -> ImageBuilder:
    """Return the builder registered under ``name``."""
    cls = BUILDERS.get((name or "").strip().lower())
    if cls is None:
        raise ConfigError(
            f"unknown builder '{name}' (choose from: {', '.join(sorted(BUILDERS))})"
        )
    return cls(bin)


# ── Sessions ─────────────────────────────────────────────────────────────

class Toolbox:
    """Interactive toolbox containers bound to a built image.

    Both operations inherit the terminal and block until toolbox exits.
    """

    def __init__(self, bin: str = "toolbox"):
        self.bin = bin or "toolbox"

    def _run(self, cmd: list):
        try:
            result = subprocess.run(cmd)
        except OSError as e:
            raise BackendFailure(cmd, reason=e.strerror or str(e), stage="session") from e
        if result.returncode != 0:
            raise BackendFailure(cmd, result.returncode, stage="session")

    def create(self, tag: str):
        self._run([self.bin, "create", "-i", tag])

    def enter(self):
        self._run([self.bin, "enter"])
