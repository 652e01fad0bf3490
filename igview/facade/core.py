from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from igview.bundle.index import FileIndex
from igview.core.diagnostics import Diagnostics
from igview.core.types import ExportFile
from igview.facade.types import ParseResult
from igview.locator import build_locator_index
from igview.providers.instagram import (
    InstagramConnectionsExtractor,
    InstagramMediaExtractor,
    InstagramProfileExtractor,
    InstagramStoriesExtractor,
    NormalizedExport,
)

logger = logging.getLogger(__name__)


async def parse_export(
    files: Iterable[ExportFile],
    diagnostics: Diagnostics | None = None,
) -> ParseResult:
    """Reconstruct the normalized model and locator index for one bundle.

    The four extractors share one read-only :class:`FileIndex` and run
    concurrently; none of them can fail the parse. A passed-in
    *diagnostics* is cleared first.

    Usage::

        files = load_bundle("instagram-alice-2025-01-01.zip")
        result = await parse_export(files)
        result.raise_if_insufficient()
        locator = result.locators.resolve(result.export.media[0].uri)
    """
    files = list(files)
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    diagnostics.clear()
    diagnostics.log(f"Starting parse with {len(files)} files")

    index = FileIndex(files, diagnostics)
    profile, media, stories, (followers, following) = await asyncio.gather(
        InstagramProfileExtractor().run(index, diagnostics),
        InstagramMediaExtractor().run(index, diagnostics),
        InstagramStoriesExtractor().run(index, diagnostics),
        InstagramConnectionsExtractor().run(index, diagnostics),
    )
    export = NormalizedExport(
        profile=profile,
        media=media,
        stories=stories,
        followers=followers,
        following=following,
    )
    locators = build_locator_index(files, diagnostics)

    logger.info(
        "Parsed export for %s: %d media, %d stories, %d followers, %d following",
        profile.username,
        len(media),
        len(stories),
        len(followers),
        len(following),
    )
    return ParseResult(
        export=export,
        locators=locators,
        diagnostics=diagnostics.entries,
        file_paths=[f.relative_path for f in files],
    )


def parse_export_sync(
    files: Iterable[ExportFile],
    diagnostics: Diagnostics | None = None,
) -> ParseResult:
    """Blocking wrapper around :func:`parse_export`."""
    return asyncio.run(parse_export(files, diagnostics))
