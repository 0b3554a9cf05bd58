"""Relay one TLS client connection to a plain TCP backend on localhost."""

from __future__ import annotations

import socket
import ssl
import sys
import time
from dataclasses import dataclass
from ipaddress import IPv4Address
from typing import Optional, Protocol, Union

BUFSIZE = 1024 * 8
NO_WORK_DONE_SLEEP = 0.010
REMOTE_HOST = "127.0.0.1"

_WOULD_BLOCK = (
    BlockingIOError,
    InterruptedError,
    ssl.SSLWantReadError,
    ssl.SSLWantWriteError,
)


class Stream(Protocol):
    """The part of a socket the relay uses."""

    def recv(self, bufsize: int) -> bytes: ...

    def send(self, data: bytes) -> int: ...


def _err(msg: str) -> None:
    print(msg, file=sys.stderr)


@dataclass
class Direction:
    """Data in flight from one stream to another, with the state of both ends."""

    pending: bytes = b""
    read_closed: bool = False
    write_closed: bool = False

    def fill(self, stream: Stream) -> bool:
        """Read from ``stream`` if nothing is pending. Returns True if data arrived."""
        if self.read_closed or self.pending:
            return False
        try:
            data = stream.recv(BUFSIZE)
        except _WOULD_BLOCK:
            return False
        except OSError as exc:
            self.read_closed = True
            _err(f"stream read error -> {exc}")
            return False
        if not data:
            self.read_closed = True
            return False
        self.pending = bytes(data)
        return True

    def drain(self, stream: Stream) -> bool:
        """Write pending data to ``stream``. Returns True if any bytes were sent."""
        if self.write_closed or not self.pending:
            return False
        try:
            sent = stream.send(self.pending)
        except _WOULD_BLOCK:
            return False
        except OSError as exc:
            _err(f"stream write error -> {exc}")
            self.write_closed = True
            return False
        if sent == 0:
            self.write_closed = True
            return False
        self.pending = self.pending[sent:]
        return True

    def discard(self) -> None:
        """Drop any pending data."""
        self.pending = b""

    @property
    def stuck(self) -> bool:
        """True while data is pending that can still be written."""
        return bool(self.pending) and not self.write_closed


def _connect_remote(ip_translated: IPv4Address, remote_port: int) -> Optional[socket.socket]:
    try:
        remote = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    except OSError as exc:
        _err(f"could not create socket -> {exc}")
        return None
    try:
        remote.bind((str(ip_translated), 0))
    except OSError as exc:
        _err(f"could not bind socket -> {exc}")
        remote.close()
        return None
    # connect while still blocking; the relay loop switches to non-blocking afterwards
    try:
        remote.connect((REMOTE_HOST, remote_port))
    except OSError as exc:
        _err(f"could not connect to remote host {REMOTE_HOST}:{remote_port} -> {exc}")
        remote.close()
        return None
    return remote


def _pump(
    client: Stream,
    remote: Stream,
    to_remote: Direction,
    to_client: Direction,
    inactivity: Optional[float],
) -> None:
    last_activity = time.monotonic()
    while True:
        if to_remote.pending and to_remote.write_closed:
            to_remote.discard()
        if to_client.pending and to_client.write_closed:
            to_client.discard()

        results = [
            to_remote.drain(remote),
            to_client.drain(client),
            to_remote.fill(client),
            to_client.fill(remote),
        ]

        if any(results):
            last_activity = time.monotonic()
            continue
        # Without a configured limit the relay ends at the first idle round.
        if inactivity is None or time.monotonic() - last_activity >= inactivity:
            break
        time.sleep(NO_WORK_DONE_SLEEP)


def _flush(client: Stream, remote: Stream, to_remote: Direction, to_client: Direction) -> None:
    while to_client.stuck or to_remote.stuck:
        progressed = [to_client.drain(client), to_remote.drain(remote)]
        if not any(progressed):
            time.sleep(NO_WORK_DONE_SLEEP)


def _shutdown(sock: socket.socket, name: str) -> None:
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError as exc:
        _err(f"{name} shutdown error -> {exc}")
    finally:
        sock.close()


def handle_client(
    client_sock: socket.socket,
    ip_translated: Union[str, IPv4Address],
    remote_port: int,
    tls_context: ssl.SSLContext,
    terminate_after_inactivity_ms: Optional[int] = None,
) -> None:
    """Terminate TLS on ``client_sock`` and relay plain bytes to the local backend."""
    inactivity = None if terminate_after_inactivity_ms is None else terminate_after_inactivity_ms / 1000

    try:
        tls_sock = tls_context.wrap_socket(client_sock, server_side=True)
    except OSError as exc:
        _err(f"tls handshake failed -> {exc}")
        client_sock.close()
        return

    remote = _connect_remote(IPv4Address(str(ip_translated)), remote_port)
    if remote is None:
        tls_sock.close()
        return

    try:
        tls_sock.setblocking(False)
    except OSError as exc:
        _err(f"could not make client nonblocking -> {exc}")
        tls_sock.close()
        remote.close()
        return
    try:
        remote.setblocking(False)
    except OSError as exc:
        _err(f"could not make remote nonblocking -> {exc}")
        tls_sock.close()
        remote.close()
        return

    to_remote = Direction()
    to_client = Direction()

    _pump(tls_sock, remote, to_remote, to_client, inactivity)
    _flush(tls_sock, remote, to_remote, to_client)

    raw_client: socket.socket = tls_sock
    try:
        raw_client = tls_sock.unwrap()
    except (ssl.SSLWantReadError, ssl.SSLWantWriteError):
        # close_notify has been queued; the peer's reply is not awaited
        pass
    except OSError as exc:
        _err(f"failed to send_close_notify client -> {exc}")

    _shutdown(remote, "remote")
    _shutdown(raw_client, "client")
    if raw_client is not tls_sock:
        tls_sock.close()

    print("connection closed")