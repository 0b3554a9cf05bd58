import base64

import pytest

from tlsrelay.tls_config import TlsConfigError, load_tls_config


def _pem(label, payload):
    body = base64.b64encode(payload).decode("ascii")
    return f"-----BEGIN {label}-----\n{body}\n-----END {label}-----\n"


def test_missing_cert_file(tmp_path):
    key = tmp_path / "key.pem"
    key.write_text(_pem("PRIVATE KEY", b"placeholder"))
    with pytest.raises(TlsConfigError):
        load_tls_config(str(tmp_path / "nope.pem"), str(key))


def test_no_certificates_found(tmp_path):
    cert = tmp_path / "cert.pem"
    cert.write_text("not a pem file\n")
    key = tmp_path / "key.pem"
    key.write_text(_pem("PRIVATE KEY", b"placeholder"))
    with pytest.raises(TlsConfigError, match="No valid certificates found"):
        load_tls_config(str(cert), str(key))


def test_cert_with_bad_base64_is_ignored(tmp_path):
    cert = tmp_path / "cert.pem"
    cert.write_text("-----BEGIN CERTIFICATE-----\n@@@@\n-----END CERTIFICATE-----\n")
    key = tmp_path / "key.pem"
    key.write_text(_pem("PRIVATE KEY", b"placeholder"))
    with pytest.raises(TlsConfigError, match="No valid certificates found"):
        load_tls_config(str(cert), str(key))


def test_no_private_key_found(tmp_path):
    cert = tmp_path / "cert.pem"
    cert.write_text(_pem("CERTIFICATE", b"placeholder"))
    key = tmp_path / "key.pem"
    key.write_text(_pem("ENCRYPTED PRIVATE KEY", b"placeholder"))
    with pytest.raises(TlsConfigError, match="No valid private keys found"):
        load_tls_config(str(cert), str(key))


def test_missing_key_file(tmp_path):
    cert = tmp_path / "cert.pem"
    cert.write_text(_pem("CERTIFICATE", b"placeholder"))
    with pytest.raises(TlsConfigError):
        load_tls_config(str(cert), str(tmp_path / "missing.pem"))


@pytest.mark.parametrize("label", ["PRIVATE KEY", "RSA PRIVATE KEY", "EC PRIVATE KEY"])
def test_garbage_material_reports_config_error(tmp_path, label):
    cert = tmp_path / "cert.pem"
    cert.write_text(_pem("CERTIFICATE", b"placeholder"))
    key = tmp_path / "key.pem"
    key.write_text(_pem(label, b"placeholder"))
    with pytest.raises(TlsConfigError, match="TLS config error"):
        load_tls_config(str(cert), str(key))