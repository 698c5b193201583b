"""
Generator — turns a destination directory and ScaffoldOptions into an app.

Prints one ``create : <path>`` line per created entry, followed by the
next-step instructions, on *out*. Advisory notices go to *err* so that the
stdout listing stays machine-parseable.
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

from .naming import create_app_name
from .scaffold import Entry, ScaffoldEngine, ScaffoldOptions

logger = logging.getLogger(__name__)

_CYAN = "\x1b[36m"
_RESET = "\x1b[0m"


def warning(message: str, err: Optional[TextIO] = None) -> None:
    """Write a (possibly multi-line) advisory block to stderr."""
    err = err or sys.stderr
    err.write("\n")
    for line in message.split("\n"):
        err.write(f"  warning: {line}\n")
    err.write("\n")


def is_empty_directory(path: str | Path) -> bool:
    """
    True when *path* has no entries. A missing path counts as empty; so does
    one that cannot be a directory, leaving the error to the first write.
    """
    try:
        with os.scandir(path) as it:
            return next(it, None) is None
    except (FileNotFoundError, NotADirectoryError):
        return True


def launched_from_cmd() -> bool:
    """True when running under the Windows cmd shell (no ``_`` variable set)."""
    return sys.platform == "win32" and os.environ.get("_") is None


def create_application(
    destination: str,
    options: ScaffoldOptions,
    out: Optional[TextIO] = None,
) -> list[str]:
    """
    Generate the app into *destination* and print the created paths.

    Returns the displayed paths (relative to the invocation directory).
    Raises OSError when the filesystem refuses a write.
    """
    out = out or sys.stdout
    color = hasattr(out, "isatty") and out.isatty()
    name = create_app_name(destination)
    created: list[str] = []

    def report(display: str) -> None:
        label = f"{_CYAN}create{_RESET}" if color else "create"
        out.write(f"   {label} : {display}\n")
        created.append(display)

    def on_create(entry: Entry) -> None:
        report(_display_path(destination, entry.path))

    logger.info("Generating %r into %s (%s)", name, destination, options)
    out.write("\n")
    if destination != ".":
        Path(destination).mkdir(mode=0o755, parents=True, exist_ok=True)
        report(destination.rstrip("/\\") + "/")

    ScaffoldEngine().scaffold(name, options, Path(destination), on_create=on_create)
    print_next_steps(destination, name, out)
    return created


def print_next_steps(destination: str, name: str, out: Optional[TextIO] = None) -> None:
    out = out or sys.stdout
    from_cmd = launched_from_cmd()
    prompt = ">" if from_cmd else "$"

    if destination != ".":
        out.write("\n")
        out.write("   change directory:\n")
        out.write(f"     {prompt} cd {destination}\n")

    out.write("\n")
    out.write("   install dependencies:\n")
    out.write(f"     {prompt} npm install\n")
    out.write("\n")
    out.write("   run the app:\n")
    if from_cmd:
        out.write(f"     {prompt} SET DEBUG={name}:* & npm start\n")
    else:
        out.write(f"     {prompt} DEBUG={name}:* npm start\n")
    out.write("\n")


def _display_path(destination: str, rel_path: str) -> str:
    if destination == ".":
        return rel_path
    return destination.rstrip("/\\") + "/" + rel_path
