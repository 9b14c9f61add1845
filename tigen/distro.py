# SPDX-License-Identifier: BUSL-1.1
"""Supported distributions and their package-manager dialects."""

from enum import Enum

from tigen.errors import UnsupportedDistribution
from tigen.package_manager import Apt, Dnf, Pacman, PackageManager, Zypper


class Distro(Enum):
    UBUNTU = "ubuntu"
    DEBIAN = "debian"
    ARCHLINUX = "archlinux"
    OPENSUSE = "opensuse"
    FEDORA = "fedora"

    @property
    def package_manager(self) -> PackageManager:
        return _DIALECTS[self]()


_DIALECTS = {
    Distro.UBUNTU: Apt,
    Distro.DEBIAN: Apt,
    Distro.ARCHLINUX: Pacman,
    Distro.OPENSUSE: Zypper,
    Distro.FEDORA: Dnf,
}

SUPPORTED_DISTROS = [d.value for d in Distro]


def resolve(name: str) -> Distro:
    """Return the Distro for ``name`` (case-insensitive)."""
    try:
        return Distro((name or "").lower())
    except ValueError:
        raise UnsupportedDistribution(name, SUPPORTED_DISTROS) from None
