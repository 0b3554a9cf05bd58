"""Command-line arguments for the relay."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

_U16_MAX = 0xFFFF
_U64_MAX = 0xFFFF_FFFF_FFFF_FFFF


@dataclass(frozen=True)
class Args:
    """Settings the relay runs with."""

    error_folder: str
    bind_port: int
    remote_port: int
    certfile: str
    keyfile: str
    terminate_after_inactivity_ms: Optional[int] = None


def _bounded_int(upper: int):
    def convert(text: str) -> int:
        try:
            value = int(text, 10)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid digit found in string: {text!r}")
        if not 0 <= value <= upper:
            raise argparse.ArgumentTypeError(f"{value} is not in 0..={upper}")
        return value

    return convert


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tlsrelay",
        description="TLS-terminating TCP reverse proxy.",
    )
    parser.add_argument("--error-folder", required=True, help="Folder to write errors to")
    parser.add_argument("--bind-port", required=True, type=_bounded_int(_U16_MAX), help="Port to bind to")
    parser.add_argument("--remote-port", required=True, type=_bounded_int(_U16_MAX), help="Server port")
    parser.add_argument("--certfile", required=True, help="Certificate file (example cert.pem)")
    parser.add_argument("--keyfile", required=True, help="Key file (example privkey.pem)")
    parser.add_argument(
        "--terminate-after-inactivity-ms",
        type=_bounded_int(_U64_MAX),
        default=None,
        help="Read/write timeout",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> Args:
    """Parse the command line; exits with a usage message on bad input."""
    ns = _build_parser().parse_args(argv)
    return Args(
        error_folder=ns.error_folder,
        bind_port=ns.bind_port,
        remote_port=ns.remote_port,
        certfile=ns.certfile,
        keyfile=ns.keyfile,
        terminate_after_inactivity_ms=ns.terminate_after_inactivity_ms,
    )