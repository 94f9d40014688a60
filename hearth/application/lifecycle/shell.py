"""Shell quoting helpers for commands sent to the remote host."""

import shlex


def quote(value: str) -> str:
    return shlex.quote(value)


def quote_path(path: str) -> str:
    """Quote a remote path while leaving a leading ~/ for the remote shell to expand."""
    if path == "~":
        return path
    if path.startswith("~/"):
        return "~/" + shlex.quote(path[2:])
    return shlex.quote(path)


def unselfmatching(pattern: str) -> str:
    """
    Rewrite a `pgrep -f` pattern so it cannot match the remote shell that
    runs it: "java" becomes "[j]ava", which matches the same processes but
    not its own literal text.
    """
    if not pattern or pattern.startswith("["):
        return pattern
    first = pattern[0]
    if not (first.isalnum() or first in "_/-"):
        return pattern
    return f"[{first}]{pattern[1:]}"
