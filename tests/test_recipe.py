# SPDX-License-Identifier: BUSL-1.1
"""Tests for bring-up command synthesis and Dockerfile rendering."""

import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from tigen.distro import Distro, resolve
from tigen.errors import RenderError, SynthesisError, TemplateError
from tigen.image_name import ImageName
from tigen.package_manager import Apt, Dnf, Pacman, Zypper
from tigen.recipe import (
    BASELINE_PACKAGES,
    DOCKERFILE,
    RecipeDocument,
    TemplateRepository,
    run_layer,
    synthesize,
)

SIMPLE_TEMPLATE = "FROM {{ name }}:{{ version }}\nRUN {{ run_layer }}\n"


class TestRunLayer(unittest.TestCase):
    def test_ubuntu_bring_up(self):
        self.assertEqual(
            run_layer(resolve("ubuntu").package_manager),
            "apt update -y && apt upgrade -y && apt install -y sudo",
        )

    def test_all_dialects(self):
        expected = {
            Pacman: "pacman -Syy --noconfirm && pacman -Su --noconfirm && pacman -S --noconfirm sudo",
            Zypper: (
                "zypper refresh --non-interactive && zypper update --non-interactive"
                " && zypper install --non-interactive sudo"
            ),
            Dnf: "dnf check-update -y && dnf upgrade -y && dnf install -y sudo",
        }
        for cls, line in expected.items():
            with self.subTest(dialect=cls.__name__):
                self.assertEqual(run_layer(cls()), line)

    def test_baseline_is_sudo(self):
        self.assertEqual(BASELINE_PACKAGES, ("sudo",))

    def test_custom_packages(self):
        self.assertTrue(run_layer(Apt(), ("git", "vim")).endswith("apt install -y git vim"))


class TestSynthesize(unittest.TestCase):
    def setUp(self):
        self.templates = TemplateRepository.from_mapping({DOCKERFILE: SIMPLE_TEMPLATE})

    def test_renders_values(self):
        image = ImageName.parse("ubuntu:22.04")
        document = synthesize(Distro.UBUNTU, image, self.templates)
        self.assertIsInstance(document, RecipeDocument)
        self.assertEqual(document.image, image)
        self.assertEqual(document.filename, "Dockerfile")
        self.assertEqual(
            document.text,
            "FROM ubuntu:22.04\n"
            "RUN apt update -y && apt upgrade -y && apt install -y sudo\n",
        )

    def test_uses_canonical_distribution_name(self):
        image = ImageName.parse("ArchLinux")
        document = synthesize(resolve(image.name), image, self.templates)
        self.assertTrue(document.text.startswith("FROM archlinux:latest\n"))

    def test_deterministic(self):
        image = ImageName.parse("fedora:40")
        first = synthesize(Distro.FEDORA, image, self.templates)
        second = synthesize(Distro.FEDORA, image, self.templates)
        self.assertEqual(first.text.encode(), second.text.encode())
        self.assertEqual(first, second)

    def test_shipped_template_renders_every_distro(self):
        templates = TemplateRepository.default()
        for distro in Distro:
            with self.subTest(distro=distro):
                image = ImageName(distro.value, "lunar-20230301")
                text = synthesize(distro, image, templates).text
                self.assertIn(f"FROM {distro.value}:lunar-20230301", text)
                self.assertIn(f"RUN {run_layer(distro.package_manager)}", text)


class TestTemplateErrors(unittest.TestCase):
    image = ImageName("debian", "bookworm")

    def test_missing_template(self):
        templates = TemplateRepository.from_mapping({})
        with self.assertRaises(TemplateError):
            synthesize(Distro.DEBIAN, self.image, templates)

    def test_missing_substitution_target(self):
        templates = TemplateRepository.from_mapping({DOCKERFILE: "FROM {{ name }}:{{ version }}\n"})
        with self.assertRaises(TemplateError) as ctx:
            synthesize(Distro.DEBIAN, self.image, templates)
        self.assertIn("run_layer", str(ctx.exception))

    def test_unknown_variable(self):
        templates = TemplateRepository.from_mapping(
            {DOCKERFILE: SIMPLE_TEMPLATE + "ENV X={{ nope }}\n"}
        )
        with self.assertRaises(TemplateError):
            synthesize(Distro.DEBIAN, self.image, templates)

    def test_syntax_error(self):
        templates = TemplateRepository.from_mapping(
            {DOCKERFILE: SIMPLE_TEMPLATE + "{% if name %}\n"}
        )
        with self.assertRaises(RenderError):
            synthesize(Distro.DEBIAN, self.image, templates)

    def test_errors_are_synthesis_errors(self):
        self.assertTrue(issubclass(TemplateError, SynthesisError))
        self.assertTrue(issubclass(RenderError, SynthesisError))
        self.assertEqual(RenderError("x").stage, "synthesize")


    def test_undecodable_template(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / DOCKERFILE).write_bytes(b"FROM {{ name }}:{{ version }}\n# caf\xe9\nRUN {{ run_layer }}\n")
            templates = TemplateRepository.from_directory(tmpdir)
            with self.assertRaises(TemplateError):
                synthesize(Distro.DEBIAN, self.image, templates)

    def test_unreadable_template(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / DOCKERFILE).write_text(SIMPLE_TEMPLATE)
            templates = TemplateRepository.from_directory(tmpdir)
            with mock.patch("builtins.open", side_effect=PermissionError(13, "Permission denied")):
                with self.assertRaises(TemplateError) as ctx:
                    synthesize(Distro.DEBIAN, self.image, templates)
        self.assertIn("Permission denied", str(ctx.exception))

    def test_render_accepts_a_name_value(self):
        templates = TemplateRepository.from_mapping({"t": "{{ name }}/{{ template_name }}"})
        text = templates.render("t", {"name": "ubuntu", "template_name": "x"}, required=("name",))
        self.assertEqual(text, "ubuntu/x")
    def test_missing_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(TemplateError):
                TemplateRepository.from_directory(Path(tmpdir) / "absent")

    def test_from_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / DOCKERFILE).write_text(SIMPLE_TEMPLATE)
            templates = TemplateRepository.from_directory(tmpdir)
            text = synthesize(Distro.DEBIAN, self.image, templates).text
        self.assertEqual(
            text,
            "FROM debian:bookworm\n"
            "RUN apt update -y && apt upgrade -y && apt install -y sudo\n",
        )


if __name__ == "__main__":
    unittest.main(verbosity=2)
