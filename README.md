# tlsrelay

`tlsrelay` is a small TLS-terminating TCP reverse proxy. It accepts TLS
connections on a public port and decrypts them. It then forwards the plain
bytes to a service on `127.0.0.1`.

Each distinct client IP address gets its own loopback source address,
starting at `127.0.0.2` and counting up to `127.255.255.254`, after which it
starts again at `127.0.0.2`. The backend can therefore tell clients apart by
peer address, even though every connection reaches it over loopback.

## Installation

```
pip install .
```

Only the Python standard library is needed. To run the tests, install the
test extra:

```
pip install ".[test]"
```

## Usage

```
tlsrelay --error-folder ./errors \
         --bind-port 8443 \
         --remote-port 8080 \
         --certfile cert.pem \
         --keyfile privkey.pem \
         --terminate-after-inactivity-ms 30000
```

Options:

| Option | Meaning |
| --- | --- |
| `--error-folder` | Folder where fatal start-up errors are written, one timestamped file per error |
| `--bind-port` | Port to listen on, on all IPv4 interfaces (0 to 65535) |
| `--remote-port` | Port of the backend on `127.0.0.1` (0 to 65535) |
| `--certfile` | PEM certificate chain |
| `--keyfile` | PEM private key (`PRIVATE KEY`, `RSA PRIVATE KEY` or `EC PRIVATE KEY`) |
| `--terminate-after-inactivity-ms` | Close a connection after this many milliseconds with no traffic in either direction |

All options except `--terminate-after-inactivity-ms` are required.

If `--terminate-after-inactivity-ms` is left out, a connection is closed at
the first moment when neither side has data ready to move. In practice this
means almost every connection ends almost at once, so the option should be
set for any real use.

On start the proxy prints its settings, and then prints each new connection
with its translated address. Clients are served with TLS 1.2 or newer and are
not asked for a certificate. If the TLS configuration cannot be loaded, or the
port cannot be bound, the error is written to standard error and to a new file
in the error folder. The process then exits with status 1. Errors on single
connections are only printed to standard error.

When a connection ends, data still waiting is written out. A TLS
close_notify is then sent to the client, and both sockets are shut down.

### Loopback source addresses

Binding to addresses such as `127.0.0.5` works out of the box on Linux,
because the whole `127.0.0.0/8` range is routed to the loopback interface.
Other systems may need the addresses configured first.

## Library use

The parts can also be used from Python:

```python
from tlsrelay.cmdline import parse_args
from tlsrelay.app import serve

args = parse_args([
    "--error-folder", "errors",
    "--bind-port", "8443",
    "--remote-port", "8080",
    "--certfile", "cert.pem",
    "--keyfile", "privkey.pem",
    "--terminate-after-inactivity-ms", "30000",
])
serve(args)
```

The package also provides these building blocks:

- `tlsrelay.cmdline.Args` and `tlsrelay.cmdline.parse_args`: the settings and
  their command-line parser.
- `tlsrelay.ip_translator.IpTranslator`: `translate(ip)` returns the same
  loopback `IPv4Address` for the same client address every time.
- `tlsrelay.tls_config.load_tls_config(cert_path, key_path)`: returns a
  server `ssl.SSLContext`, or raises `TlsConfigError`.
- `tlsrelay.relay.handle_client(client_sock, ip_translated, remote_port,
  tls_context, terminate_after_inactivity_ms)`: relays one accepted socket
  until it ends. `tlsrelay.relay.Direction` holds the data in flight for one
  direction.
- `tlsrelay.errlog.log_error(error_folder, msg)`: prints the message and
  writes it to a timestamped file. It returns that file's path, or `None` if
  the file could not be written.

## What it does not do

- The backend connection is always plain TCP to `127.0.0.1`. There is no TLS
  to the backend and no other backend host.
- The listener uses IPv4 only.
- Client connections are polled every 10 ms rather than waited on with an
  event loop. Each connection runs in its own thread.
- There is no configuration file, reload or graceful stop. The server runs
  until the process is ended.