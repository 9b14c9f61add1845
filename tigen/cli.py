# SPDX-License-Identifier: BUSL-1.1
"""CLI argument parsing and pipeline dispatch."""

import argparse
import sys

from tigen import __version__
from tigen.distro import SUPPORTED_DISTROS


def build_parser() -> argparse.ArgumentParser:
    epilog = (
        "Examples:\n"
        "    tigen -i archlinux\n"
        "    tigen -i ubuntu:22.04 --enter\n"
        "    tigen -i fedora:40 --builder podman\n"
        "\n"
        f"Supported distributions: {', '.join(SUPPORTED_DISTROS)}\n"
    )
    parser = argparse.ArgumentParser(
        prog="tigen",
        description="Generate and build a distro-specific development image",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    parser.add_argument("-i", "--image", required=True,
                        help="Linux distribution as name[:tag] (tag defaults to latest)")
    parser.add_argument("-e", "--enter", action="store_true",
                        help="Create and enter a toolbox bound to the built image")
    parser.add_argument("-b", "--builder", choices=["docker", "podman"],
                        help="Image build backend (default: from config, else docker)")
    parser.add_argument("--template-dir", help="Directory containing the Dockerfile template")
    parser.add_argument("--images-dir", help="Root directory for generated recipes (default: images)")
    parser.add_argument("--dry-run", action="store_true",
                        help="Print the rendered Dockerfile without writing or building")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # Lazy import to keep --help fast
    from tigen.commands import cmd_build
    from tigen.errors import TigenError
    from tigen.utils import die

    try:
        cmd_build(args)
    except TigenError as e:
        die(str(e), stage=e.stage)
    except KeyboardInterrupt:
        print(file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
