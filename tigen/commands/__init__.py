# SPDX-License-Identifier: BUSL-1.1
"""Command implementations for the tigen CLI."""

from tigen.commands.build import cmd_build

__all__ = ["cmd_build"]
