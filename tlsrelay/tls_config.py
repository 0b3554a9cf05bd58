"""Build a server TLS context from PEM certificate and key files."""

from __future__ import annotations

import base64
import binascii
import re
import ssl
from pathlib import Path
from typing import Iterator, Tuple


class TlsConfigError(Exception):
    """The TLS configuration could not be loaded."""


_PEM_RE = re.compile(
    r"-----BEGIN ([A-Z0-9 ]+)-----\s*(.*?)\s*-----END \1-----",
    re.DOTALL,
)
_KEY_LABELS = frozenset({"PRIVATE KEY", "RSA PRIVATE KEY", "EC PRIVATE KEY"})


def _pem_items(text: str) -> Iterator[Tuple[str, bytes]]:
    for match in _PEM_RE.finditer(text):
        body = "".join(match.group(2).split())
        try:
            der = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError):
            continue
        yield match.group(1), der


def _read_text(path: str) -> str:
    try:
        return Path(path).read_text(encoding="ascii", errors="replace")
    except OSError as exc:
        raise TlsConfigError(str(exc)) from exc


def load_tls_config(cert_path: str, key_path: str) -> ssl.SSLContext:
    """Load certificates and a private key into a server-side SSL context."""
    certs = [der for label, der in _pem_items(_read_text(cert_path)) if label == "CERTIFICATE"]
    if not certs:
        raise TlsConfigError("No valid certificates found")

    if not any(label in _KEY_LABELS for label, _ in _pem_items(_read_text(key_path))):
        raise TlsConfigError("No valid private keys found")

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    context.verify_mode = ssl.CERT_NONE
    try:
        context.load_cert_chain(certfile=cert_path, keyfile=key_path)
    except (ssl.SSLError, OSError, ValueError) as exc:
        raise TlsConfigError(f"TLS config error: {exc}") from exc
    return context