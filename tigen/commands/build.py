# SPDX-License-Identifier: BUSL-1.1
"""tigen: render, persist and build a distro image, optionally entering it."""

from tigen.backends import Toolbox, get_builder
from tigen.config import ConfigStore
from tigen.orchestrator import generate, run
from tigen.recipe import TemplateRepository


def _templates(settings) -> TemplateRepository:
    if settings.template_dir:
        return TemplateRepository.from_directory(settings.template_dir)
    return TemplateRepository.default()


def cmd_build(args):
    store = ConfigStore()
    settings = store.settings(
        builder=args.builder,
        template_dir=args.template_dir,
        images_dir=args.images_dir,
    )
    templates = _templates(settings)

    if args.dry_run:
        document = generate(args.image, templates)
        print(document.text, end="")
        return

    builder = get_builder(settings.builder, settings.builder_bin)
    session = Toolbox(settings.toolbox_bin) if args.enter else None

    run(
        args.image,
        templates=templates,
        builder=builder,
        images_root=settings.images_dir,
        session=session,
        enter=args.enter,
    )
