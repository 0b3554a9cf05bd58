"""TLS-terminating TCP reverse proxy with per-client loopback source addresses."""

__version__ = "0.1.0"