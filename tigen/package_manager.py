# SPDX-License-Identifier: BUSL-1.1
"""Package-manager command dialects.

Each dialect returns argv-style token lists (program first, then flags,
then operands). Nothing here quotes or joins tokens.
"""


class PackageManager:
    """Command fragments for one package-manager family."""

    bin = ""
    update_args = ()
    upgrade_args = ()
    install_args = ()

    def update(self) -> list:
        return [self.bin, *self.update_args]

    def upgrade(self) -> list:
        return [self.bin, *self.upgrade_args]

    def install(self, packages) -> list:
        """Return the install command for ``packages``, kept in the given order."""
        packages = list(packages)
        if not packages:
            raise ValueError("install requires at least one package")
        return [self.bin, *self.install_args, *packages]

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Apt(PackageManager):
    bin = "apt"
    update_args = ("update", "-y")
    upgrade_args = ("upgrade", "-y")
    install_args = ("install", "-y")


class Pacman(PackageManager):
    bin = "pacman"
    update_args = ("-Syy", "--noconfirm")
    upgrade_args = ("-Su", "--noconfirm")
    install_args = ("-S", "--noconfirm")


class Zypper(PackageManager):
    bin = "zypper"
    update_args = ("refresh", "--non-interactive")
    upgrade_args = ("update", "--non-interactive")
    install_args = ("install", "--non-interactive")


class Dnf(PackageManager):
    bin = "dnf"
    update_args = ("check-update", "-y")
    upgrade_args = ("upgrade", "-y")
    install_args = ("install", "-y")
