# SPDX-License-Identifier: BUSL-1.1
"""Build orchestration: persist the recipe, build it, optionally enter it."""

import os
import tempfile
from pathlib import Path

from tigen.backends import BuildOutput, ImageBuilder, Toolbox
from tigen.distro import resolve
from tigen.errors import BackendFailure, IOFailure
from tigen.image_name import ImageName
from tigen.recipe import RecipeDocument, TemplateRepository, synthesize
from tigen.utils import forward


def recipe_path(document: RecipeDocument, images_root) -> Path:
    return document.image.dir(images_root) / document.filename


def _umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_recipe(document: RecipeDocument, images_root) -> Path:
    """Write the recipe to images/<name>/<tag>/<filename>, replacing any old one.

    The file only ever holds a complete document: it is written to a
    temporary sibling and renamed into place.
    """
    path = recipe_path(document, images_root)
    tmp_path = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=str(path.parent),
            prefix=".tmp-",
            delete=False,
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(document.text)
            tmp.flush()
            os.fsync(tmp.fileno())
        # NamedTemporaryFile creates 0600; match a plain open() instead.
        tmp_path.chmod(0o666 & ~_umask())
        tmp_path.replace(path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise IOFailure(path, e) from e
    return path


def build_image(builder: ImageBuilder, document: RecipeDocument, dockerfile: Path) -> BuildOutput:
    """Build ``dockerfile`` as ``name:tag``, forwarding the builder's output."""
    tag = document.image.to_display_string()
    output = builder.build_image(dockerfile, tag)
    forward(output.stdout, output.stderr)
    if output.returncode != 0:
        raise BackendFailure(builder.build_command(dockerfile, tag), output.returncode)
    return output


def enter_session(session: Toolbox, image: ImageName):
    session.create(image.to_display_string())
    session.enter()


def generate(raw_image: str, templates: TemplateRepository) -> RecipeDocument:
    """Parse, resolve and render; no side effects."""
    image = ImageName.parse(raw_image)
    distro = resolve(image.name)
    return synthesize(distro, image, templates)


def run(
    raw_image: str,
    templates: TemplateRepository,
    builder: ImageBuilder,
    images_root="images",
    session: Toolbox = None,
    enter: bool = False,
) -> Path:
    """Run the whole pipeline and return the persisted recipe path.

    The first failure aborts every later step.
    """
    document = generate(raw_image, templates)
    image = document.image

    dockerfile = write_recipe(document, images_root)
    print(f"-> Wrote {dockerfile}")

    print(f"-> Building '{image}' with {builder.bin}...")
    build_image(builder, document, dockerfile)
    print(f"-> Built '{image}'")

    if enter:
        print(f"-> Entering toolbox for '{image}'...")
        enter_session(session or Toolbox(), image)

    return dockerfile
