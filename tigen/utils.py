# SPDX-License-Identifier: BUSL-1.1
"""Shared console helpers for tigen."""

import sys


def die(msg: str, stage: str = "", code: int = 1):
    """Print error message to stderr and exit."""
    prefix = f"Error [{stage}]" if stage else "Error"
    print(f"{prefix}: {msg}", file=sys.stderr)
    sys.exit(code)


def _write_raw(stream, data: bytes):
    buffer = getattr(stream, "buffer", None)
    stream.flush()
    if buffer is not None:
        buffer.write(data)
        buffer.flush()
    else:
        stream.write(data.decode(getattr(stream, "encoding", None) or "utf-8", errors="replace"))
        stream.flush()


def forward(stdout: bytes, stderr: bytes):
    """Write captured process output to our own streams verbatim."""
    if stdout:
        _write_raw(sys.stdout, stdout)
    if stderr:
        _write_raw(sys.stderr, stderr)
