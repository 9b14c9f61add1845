# SPDX-License-Identifier: BUSL-1.1
"""tigen - distro-specific development images from a single identifier."""

__version__ = "0.1.0"
