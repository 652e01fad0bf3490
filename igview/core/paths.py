"""Path helpers shared by the file index, the profile-photo heuristic and
the resource locator.

All three must agree on how a relative path is normalized and which suffixes
of it count as lookup keys, so the logic lives here only once.
"""

from __future__ import annotations

from collections.abc import Iterator
from urllib.parse import unquote


def normalize_path(path: str) -> str:
    """Convert backslash separators to ``/``."""
    return path.replace("\\", "/")


def basename(path: str) -> str:
    """Return the last path segment of *path* (either separator)."""
    return normalize_path(path).rsplit("/", 1)[-1]


def extension(path: str) -> str:
    """Return the lowercase extension of *path* without the dot, or ``""``."""
    name = basename(path)
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


def ends_at_boundary(path: str, target: str) -> bool:
    """True if *path* ends with *target* and the match starts a segment.

    ``"a/xyz/foo.jpg"`` ends with ``"xyz/foo.jpg"`` at a boundary;
    ``"abcxyz/foo.jpg"`` does not.
    """
    if not target or not path.endswith(target):
        return False
    start = len(path) - len(target)
    return start == 0 or path[start - 1] == "/"


def suffix_keys(path: str) -> Iterator[str]:
    """Yield every path suffix of *path*, longest first, case-folded.

    ``"Root/Media/IMG.JPG"`` yields ``root/media/img.jpg``, ``media/img.jpg``
    and ``img.jpg``.
    """
    parts = [p for p in normalize_path(path).split("/") if p]
    for i in range(len(parts)):
        yield "/".join(parts[i:]).lower()


def clean_uri(uri: str) -> str:
    """Canonicalize a URI found inside export JSON for locator lookup."""
    cleaned = uri[1:] if uri.startswith("/") else uri
    cleaned = normalize_path(cleaned)
    try:
        cleaned = unquote(cleaned, errors="strict")
    except UnicodeDecodeError:
        pass
    return cleaned.lower()
