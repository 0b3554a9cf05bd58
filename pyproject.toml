[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tlsrelay"
version = "0.1.0"
description = "TLS-terminating TCP reverse proxy that gives each client its own loopback source address"
requires-python = ">=3.10"
dependencies = []
keywords = ["tls", "reverse-proxy", "tcp", "relay", "loopback"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Proxy Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tlsrelay = "tlsrelay.app:main"

[tool.hatch.build.targets.wheel]
packages = ["tlsrelay"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
