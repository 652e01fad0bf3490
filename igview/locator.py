"""URI → bytes resolution for media referenced inside export JSON.

The export never maps the ``uri`` strings in its JSON to files, so the
index registers every file under each of its path suffixes (full relative
path down to the bare filename), case-folded. A JSON URI is then cleaned
the same way and looked up as a full path, then as a bare filename.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import BinaryIO

from igview.core.diagnostics import Diagnostics
from igview.core.paths import basename, clean_uri, extension, suffix_keys
from igview.core.types import ExportFile

logger = logging.getLogger(__name__)

# Players refuse untyped blobs; these are the formats Instagram exports.
VIDEO_CONTENT_TYPES = {
    "mp4": "video/mp4",
    "mov": "video/quicktime",
}


@dataclass(frozen=True)
class Locator:
    """Byte-accessible handle for one bundle file."""

    path: str
    content_type: str
    source: ExportFile

    @property
    def size(self) -> int:
        return self.source.size

    def read(self) -> bytes:
        return self.source.data

    def open(self) -> BinaryIO:
        """Open a binary stream over the file; the caller closes it."""
        return io.BytesIO(self.source.data)


def make_locator(f: ExportFile) -> Locator:
    content_type = f.content_type
    if not content_type:
        content_type = VIDEO_CONTENT_TYPES.get(extension(f.name), "")
    return Locator(path=f.relative_path, content_type=content_type, source=f)


class LocatorIndex(Mapping[str, Locator]):
    """Read-only mapping from case-folded lookup key to :class:`Locator`."""

    def __init__(self, entries: dict[str, Locator]) -> None:
        self._entries = entries

    def __getitem__(self, key: str) -> Locator:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def resolve(self, uri: str | None) -> Locator | None:
        """Resolve a raw JSON URI; ``None`` means unresolved.

        The cleaned path is tried first, then its bare filename.
        """
        if not uri:
            return None
        cleaned = clean_uri(uri)
        hit = self._entries.get(cleaned)
        if hit is None:
            hit = self._entries.get(basename(cleaned))
        return hit


def build_locator_index(
    files: Iterable[ExportFile],
    diagnostics: Diagnostics | None = None,
) -> LocatorIndex:
    """Register every file under its filename and all its path suffixes.

    When two files share a key the first one in input order keeps it.
    """
    entries: dict[str, Locator] = {}
    count = 0
    for f in files:
        locator = make_locator(f)
        if locator.content_type != f.content_type:
            logger.debug("Synthesized %s for %s", locator.content_type, locator.path)
        entries.setdefault(f.name.lower(), locator)
        for key in suffix_keys(f.relative_path):
            entries.setdefault(key, locator)
        count += 1
    if diagnostics is not None:
        diagnostics.log(f"Locator index: {len(entries)} keys for {count} files")
    return LocatorIndex(entries)
