# SPDX-License-Identifier: BUSL-1.1
"""Recipe synthesis: bring-up command line and Dockerfile rendering."""

from dataclasses import dataclass
from pathlib import Path

import jinja2
from jinja2 import meta

from tigen.distro import Distro
from tigen.errors import RenderError, TemplateError
from tigen.image_name import ImageName
from tigen.package_manager import PackageManager

DOCKERFILE = "Dockerfile"
TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

# Installed into every image.
BASELINE_PACKAGES = ("sudo",)

DOCKERFILE_VARIABLES = ("name", "version", "run_layer")


def run_layer(package_manager: PackageManager, packages=BASELINE_PACKAGES) -> str:
    """Chain update, upgrade and install into one shell command line."""
    update = " ".join(package_manager.update())
    upgrade = " ".join(package_manager.upgrade())
    install = " ".join(package_manager.install(packages))
    return f"{update} && {upgrade} && {install}"


class TemplateRepository:
    """Named text templates backed by a jinja2 loader.

    Built once per run and passed to ``synthesize``; tests use
    ``from_mapping`` to supply templates without touching the filesystem.
    """

    def __init__(self, loader: jinja2.BaseLoader):
        self._env = jinja2.Environment(
            loader=loader,
            undefined=jinja2.StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )

    @classmethod
    def from_directory(cls, path) -> "TemplateRepository":
        path = Path(path)
        if not path.is_dir():
            raise TemplateError(f"template directory not found: {path}")
        return cls(jinja2.FileSystemLoader(str(path)))

    @classmethod
    def from_mapping(cls, templates: dict) -> "TemplateRepository":
        return cls(jinja2.DictLoader(dict(templates)))

    @classmethod
    def default(cls) -> "TemplateRepository":
        return cls.from_directory(TEMPLATE_DIR)

    def _source(self, template_name: str) -> str:
        try:
            source, _, _ = self._env.loader.get_source(self._env, template_name)
        except jinja2.TemplateNotFound:
            raise TemplateError(f"template '{template_name}' not found") from None
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateError(f"cannot load template '{template_name}': {e}") from e
        return source

    def render(self, template_name: str, values: dict, required=()) -> str:
        """Render ``template_name`` with the mapping ``values``.

        Every variable in ``required`` must be referenced by the template.
        """
        source = self._source(template_name)
        try:
            referenced = meta.find_undeclared_variables(self._env.parse(source))
            template = self._env.from_string(source)
        except jinja2.TemplateSyntaxError as e:
            raise RenderError(
                f"template '{template_name}' line {e.lineno}: {e.message}"
            ) from e

        missing = [var for var in required if var not in referenced]
        if missing:
            raise TemplateError(
                f"template '{template_name}' does not use: {', '.join(missing)}"
            )

        try:
            return template.render(values)
        except jinja2.UndefinedError as e:
            raise TemplateError(f"template '{template_name}': {e.message}") from e
        except (jinja2.TemplateError, TypeError, ValueError) as e:
            raise RenderError(f"template '{template_name}': {e}") from e


@dataclass(frozen=True)
class RecipeDocument:
    image: ImageName
    text: str
    filename: str = DOCKERFILE


def synthesize(distro: Distro, image: ImageName, templates: TemplateRepository) -> RecipeDocument:
    """Render the Dockerfile for ``image`` on ``distro``."""
    values = {
        "name": distro.value,
        "version": image.tag,
        "run_layer": run_layer(distro.package_manager),
    }
    text = templates.render(DOCKERFILE, values, required=DOCKERFILE_VARIABLES)
    return RecipeDocument(image=image, text=text)
