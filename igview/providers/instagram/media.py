from __future__ import annotations

import logging
from typing import Any

from igview.bundle.index import FileIndex
from igview.core.diagnostics import Diagnostics
from igview.core.exceptions import SchemaMismatch
from igview.core.extractor import Extractor
from igview.providers.instagram.schemas import (
    MediaItem,
    StoryItem,
    fix_instagram_encoding,
)
from igview.providers.instagram.strategies import ENTRY_ERRORS, payload_list

logger = logging.getLogger(__name__)

CONTENT_DOCUMENT = "content.json"
POSTS_DOCUMENT = "posts_1.json"
ARCHIVE_DOCUMENT = "archived_posts.json"
STORIES_DOCUMENT = "stories.json"

POST_KEYS = ("media",)
ARCHIVE_KEYS = ("ig_archived_posts", "ig_archived_post_media", "media", "archived_posts")
STORY_KEYS = ("ig_stories",)


def _title(raw: Any) -> str | None:
    return fix_instagram_encoding(raw) if isinstance(raw, str) and raw else None


def _uri(raw: dict) -> str:
    uri = raw.get("uri")
    if not isinstance(uri, str) or not uri:
        raise SchemaMismatch("media entry has no uri")
    return uri


def _slide(child: Any, post: dict, archived: bool) -> MediaItem:
    """One carousel slide; missing timestamp/title fall back to the post's."""
    if not isinstance(child, dict):
        raise SchemaMismatch(f"carousel slide is {type(child).__name__}, not an object")
    return MediaItem(
        uri=_uri(child),
        creation_timestamp=child.get("creation_timestamp") or post.get("creation_timestamp"),
        title=_title(child.get("title") or post.get("title")),
        is_archived=archived,
    )


def flatten_post(
    post: Any, diagnostics: Diagnostics | None = None, source: str = "post"
) -> MediaItem:
    """Normalize a raw post into a :class:`MediaItem`.

    A carousel container (``media`` holding two or more usable slides)
    becomes one item whose ``uri`` and ``creation_timestamp`` come from the
    first slide, with every slide kept under ``carousel_media``. A container
    left with a single slide collapses to that slide, and one with none
    falls back to the post's own fields. Unusable slides are skipped and
    reported to *diagnostics* when given.
    """
    if not isinstance(post, dict):
        raise SchemaMismatch(f"post is {type(post).__name__}, not an object")
    archived = post.get("is_archived") is True
    nested = post.get("media")

    slides: list[MediaItem] = []
    if isinstance(nested, list):
        for j, child in enumerate(nested):
            try:
                slides.append(_slide(child, post, archived))
            except ENTRY_ERRORS as exc:
                reason = f"{source}.media[{j}] skipped: {exc}"
                if diagnostics is None:
                    logger.warning(reason)
                else:
                    diagnostics.failed(reason)

    if len(slides) == 1:
        return slides[0]
    if slides:
        first = slides[0]
        return MediaItem(
            uri=first.uri,
            creation_timestamp=first.creation_timestamp,
            title=_title(post.get("title")) or first.title,
            is_archived=archived,
            carousel_media=slides,
        )

    return MediaItem(
        uri=_uri(post),
        creation_timestamp=post.get("creation_timestamp"),
        title=_title(post.get("title")),
        is_archived=archived,
    )


def flatten_posts(posts: list[Any], diagnostics: Diagnostics, source: str) -> list[MediaItem]:
    """Flatten every raw post, skipping (and logging) malformed ones."""
    items: list[MediaItem] = []
    for i, post in enumerate(posts):
        try:
            items.append(flatten_post(post, diagnostics, f"{source}[{i}]"))
        except ENTRY_ERRORS as exc:
            diagnostics.failed(f"{source}[{i}] skipped: {exc}")
    return items


class InstagramMediaExtractor(Extractor[list[MediaItem]]):
    """Authored posts followed by archived posts.

    ``content.json`` is tried first; ``posts_1.json`` only when it yields
    nothing. Archived posts are always appended afterwards, stamped
    ``is_archived`` and never deduplicated against the main list.
    """

    provider = "instagram"
    part = "media"

    def empty(self) -> list[MediaItem]:
        return []

    async def extract(self, index: FileIndex, diagnostics: Diagnostics) -> list[MediaItem]:
        media = await self.guarded(
            "posts", self._read_main(index, diagnostics), diagnostics, []
        )
        archived = await self.guarded(
            "archived posts", self._read_archived(index, diagnostics), diagnostics, []
        )
        return media + archived

    async def _read_main(self, index: FileIndex, diagnostics: Diagnostics) -> list[MediaItem]:
        media = await self._read_posts(index, diagnostics, CONTENT_DOCUMENT)
        if not media:
            media = await self._read_posts(index, diagnostics, POSTS_DOCUMENT)
        return media

    async def _read_posts(
        self, index: FileIndex, diagnostics: Diagnostics, document: str
    ) -> list[MediaItem]:
        data = await index.read_json_or_none(document)
        if data is None:
            return []
        diagnostics.log(f"Parsing {document}")
        try:
            raw = payload_list(data, POST_KEYS)
        except SchemaMismatch as exc:
            diagnostics.failed(f"{document}: {exc}")
            return []
        items = flatten_posts(raw, diagnostics, document)
        diagnostics.log(f"{document}: {len(items)} media items")
        return items

    async def _read_archived(self, index: FileIndex, diagnostics: Diagnostics) -> list[MediaItem]:
        diagnostics.log("Looking for archived posts...")
        data = await index.read_json_or_none(ARCHIVE_DOCUMENT)
        if data is None:
            return []
        if isinstance(data, dict):
            diagnostics.log(f"Archived data found. Keys: {', '.join(data)}")
        try:
            raw = payload_list(data, ARCHIVE_KEYS)
        except SchemaMismatch as exc:
            diagnostics.failed(f"{ARCHIVE_DOCUMENT}: {exc}")
            return []
        if not raw:
            diagnostics.log("Archived array was empty.")
            return []

        diagnostics.log(f"Found {len(raw)} archived posts.")
        marked = [{**p, "is_archived": True} if isinstance(p, dict) else p for p in raw]
        return flatten_posts(marked, diagnostics, ARCHIVE_DOCUMENT)


class InstagramStoriesExtractor(Extractor[list[StoryItem]]):
    """Stories from ``stories.json`` (a bare array or ``ig_stories``)."""

    provider = "instagram"
    part = "stories"

    def empty(self) -> list[StoryItem]:
        return []

    async def extract(self, index: FileIndex, diagnostics: Diagnostics) -> list[StoryItem]:
        data = await index.read_json_or_none(STORIES_DOCUMENT)
        if data is None:
            return []
        try:
            raw = payload_list(data, STORY_KEYS)
        except SchemaMismatch as exc:
            diagnostics.failed(f"{STORIES_DOCUMENT}: {exc}")
            return []

        stories: list[StoryItem] = []
        for i, entry in enumerate(raw):
            try:
                if not isinstance(entry, dict):
                    raise SchemaMismatch(f"story is {type(entry).__name__}, not an object")
                stories.append(
                    StoryItem(
                        uri=_uri(entry),
                        creation_timestamp=entry.get("creation_timestamp"),
                        title=_title(entry.get("title")),
                    )
                )
            except ENTRY_ERRORS as exc:
                diagnostics.failed(f"{STORIES_DOCUMENT}[{i}] skipped: {exc}")
        diagnostics.log(f"{STORIES_DOCUMENT}: {len(stories)} stories")
        return stories
