# SPDX-License-Identifier: BUSL-1.1
"""Parsing of ``name[:tag]`` image identifiers."""

import re
from dataclasses import dataclass
from pathlib import Path

from tigen.errors import MalformedImageName

DEFAULT_TAG = "latest"

# Leading name token, then an optional ":tag" of the same character class.
# Anything after that is left for later stages to reject.
_IMAGE_RE = re.compile(r"(?P<name>[A-Za-z0-9._-]+)(?::(?P<tag>[A-Za-z0-9._-]+))?")


@dataclass(frozen=True)
class ImageName:
    name: str
    tag: str = DEFAULT_TAG

    @classmethod
    def parse(cls, raw: str) -> "ImageName":
        """Parse ``raw`` into an ImageName, defaulting the tag to ``latest``.

        Raises MalformedImageName when ``raw`` is empty or does not begin
        with a name token.
        """
        match = _IMAGE_RE.match(raw or "")
        if match is None:
            raise MalformedImageName(raw or "")
        return cls(name=match.group("name"), tag=match.group("tag") or DEFAULT_TAG)

    def to_display_string(self) -> str:
        return f"{self.name}:{self.tag}"

    def __str__(self) -> str:
        return self.to_display_string()

    def dir(self, images_root) -> Path:
        """Return the directory holding this image's recipe.

        A name or tag made only of dots would escape images_root/<name>/<tag>.
        """
        for part in (self.name, self.tag):
            if not part.strip("."):
                raise MalformedImageName(
                    self.to_display_string(), f"'{part}' is not a usable path component"
                )
        return Path(images_root) / self.name / self.tag
