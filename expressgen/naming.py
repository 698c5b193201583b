"""Application (npm package) naming rules."""
from __future__ import annotations

import os
import re

DEFAULT_APP_NAME = "hello-world"

# npm's pattern for names accepted for new packages (optionally scoped).
PACKAGE_NAME_PATTERN = r"^(?:@[a-z0-9-*~][a-z0-9-*._~]*/)?[a-z0-9-~][a-z0-9-._~]*$"
MAX_PACKAGE_NAME_LENGTH = 214

_PACKAGE_NAME_RE = re.compile(PACKAGE_NAME_PATTERN)
_BLACKLIST = frozenset({"node_modules", "favicon.ico"})
_NODE_BUILTINS = frozenset({
    "assert", "async_hooks", "buffer", "child_process", "cluster", "console",
    "constants", "crypto", "dgram", "dns", "domain", "events", "fs", "http",
    "http2", "https", "inspector", "module", "net", "os", "path", "perf_hooks",
    "process", "punycode", "querystring", "readline", "repl", "stream",
    "string_decoder", "sys", "timers", "tls", "trace_events", "tty", "url",
    "util", "v8", "vm", "worker_threads", "zlib",
})


def is_valid_package_name(name: str) -> bool:
    """True when *name* may be published as a new npm package."""
    if not name or len(name) > MAX_PACKAGE_NAME_LENGTH:
        return False
    if name.startswith((".", "_")) or name.strip() != name:
        return False
    if name.lower() in _BLACKLIST or name in _NODE_BUILTINS:
        return False
    return bool(_PACKAGE_NAME_RE.match(name))


def create_app_name(path_name: str) -> str:
    """
    Derive the package name from the basename of *path_name*.

    Runs of characters outside ``[A-Za-z0-9.-]`` collapse to ``-``, leading
    ``-_.`` and trailing ``-`` are stripped and the result is lower-cased.
    Falls back to ``hello-world`` when the result is not a valid name.

        >>> create_app_name("foo bar (BAZ!)")
        'foo-bar-baz'
        >>> create_app_name("_")
        'hello-world'
    """
    base = os.path.basename(os.path.abspath(path_name))
    name = re.sub(r"[^A-Za-z0-9.-]+", "-", base)
    name = re.sub(r"^[-_.]+|-+$", "", name).lower()
    if not is_valid_package_name(name):
        return DEFAULT_APP_NAME
    return name
