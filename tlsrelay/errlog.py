"""Error reporting to stderr and to timestamped files."""

from __future__ import annotations

import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

_NS_PER_SEC = 1_000_000_000


def _timestamp_name() -> str:
    now_ns = time.time_ns()
    seconds, nanos = divmod(now_ns, _NS_PER_SEC)
    stamp = datetime.fromtimestamp(seconds).strftime("%Y-%m-%d_%H-%M-%S")
    return f"{stamp}-{nanos:09d}"


def log_error(error_folder: str, msg: str) -> Optional[Path]:
    """Report an error on stderr and append it to a new file in ``error_folder``.

    Returns the path written to, or None if the file could not be written.
    """
    print(f"ERROR: {msg}", file=sys.stderr)

    folder = Path(error_folder)
    try:
        folder.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        print(f"ERROR: could not create error folder: {exc}", file=sys.stderr)
        return None

    path = folder / _timestamp_name()
    try:
        handle = path.open("a", encoding="utf-8")
    except OSError as exc:
        print(f"ERROR: could not create error file: {exc}", file=sys.stderr)
        return None

    with handle:
        try:
            handle.write(f"{msg}\n")
        except OSError as exc:
            print(f"ERROR: could not write to error file: {exc}", file=sys.stderr)
            return None
    return path