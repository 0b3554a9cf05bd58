"""Accept TLS clients and hand each one to a relay thread."""

from __future__ import annotations

import socket
import sys
import threading
from typing import Optional, Sequence

from .cmdline import Args, parse_args
from .errlog import log_error
from .ip_translator import IpTranslator
from .relay import handle_client
from .tls_config import TlsConfigError, load_tls_config


def serve(args: Args) -> None:
    """Load TLS settings, bind the listener and serve clients forever."""
    try:
        tls_context = load_tls_config(args.certfile, args.keyfile)
    except TlsConfigError as exc:
        log_error(args.error_folder, f"could not load tls config -> {exc}")
        sys.exit(1)

    translator = IpTranslator()

    addr = f"0.0.0.0:{args.bind_port}"
    print(f"trying to bind to address {addr} -> working...")
    try:
        listener = socket.create_server(("0.0.0.0", args.bind_port))
    except OSError as exc:
        log_error(args.error_folder, f"could not bind to address `{addr}` -> {exc}")
        sys.exit(1)
    print(f"trying to bind to address {addr} -> done!")

    with listener:
        while True:
            try:
                conn, _ = listener.accept()
            except OSError as exc:
                print(f"connection failed -> {exc}")
                continue

            try:
                ip_original = conn.getpeername()[0]
            except OSError as exc:
                print(f"could not get client address -> {exc}")
                conn.close()
                continue

            ip_translated = translator.translate(ip_original)
            print(f"new connection from {ip_original}; using translated ip {ip_translated}")

            threading.Thread(
                target=handle_client,
                args=(
                    conn,
                    ip_translated,
                    args.remote_port,
                    tls_context,
                    args.terminate_after_inactivity_ms,
                ),
                daemon=True,
            ).start()


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for the command line."""
    args = parse_args(argv)
    print(args)
    serve(args)


if __name__ == "__main__":
    main()