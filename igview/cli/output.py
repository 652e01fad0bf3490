"""Terminal rendering for ``igview`` commands.

ANSI colors are dropped when stdout is not a TTY or ``NO_COLOR`` is set,
so captured output (tests, pipes) is plain text.
"""

from __future__ import annotations

import os
import sys

from igview.locator import Locator


def _supports_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    return getattr(sys.stdout, "isatty", lambda: False)()


_COLOR = _supports_color()


def _ansi(code: str, text: str) -> str:
    return f"\033[{code}m{text}\033[0m" if _COLOR else text


def bold(text: str) -> str:
    return _ansi("1", text)


def dim(text: str) -> str:
    return _ansi("2", text)


def green(text: str) -> str:
    return _ansi("32", text)


def red(text: str) -> str:
    return _ansi("31", text)


def header(title: str) -> None:
    print(f"\n{bold(title)}")


def success(msg: str) -> None:
    print(f"  {green('✓')} {msg}")


def error(msg: str) -> None:
    print(f"  {red('✗')} {msg}")


def info(msg: str) -> None:
    print(f"  {msg}")


def kv(key: str, value: object, indent: int = 2) -> None:
    """Print one stat or profile field as ``key:  value``."""
    print(f"{' ' * indent}{dim(str(key) + ':')}  {value}")


def block(lines: list[str], indent: int = 4) -> None:
    """Print sample rows (URIs, usernames) dimmed."""
    for line in lines:
        print(f"{' ' * indent}{dim(line)}")


# ── Command-specific rows ───────────────────────────────────────────


def resolved(uri: str, locator: Locator) -> None:
    """One ``resolve`` hit: the URI, the bundle file behind it and its type."""
    success(f"{uri}  →  {locator.path} ({locator.content_type or 'unknown type'})")


def unresolved(uri: str) -> None:
    error(f"{uri}  {dim('unresolved')}")


def parser_log(entries: list[str], indent: int = 4) -> None:
    """Print diagnostics entries, failures in red and hits in green."""
    for entry in entries:
        if "❌" in entry:
            line = red(entry)
        elif "✅" in entry:
            line = green(entry)
        else:
            line = dim(entry)
        print(f"{' ' * indent}{line}")
