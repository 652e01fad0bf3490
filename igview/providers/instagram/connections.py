from __future__ import annotations

from typing import Any

from igview.bundle.index import FileIndex
from igview.core.diagnostics import Diagnostics
from igview.core.exceptions import SchemaMismatch
from igview.core.extractor import Extractor
from igview.providers.instagram.schemas import Connection
from igview.providers.instagram.strategies import ENTRY_ERRORS, as_list, dig, payload_list

FOLLOWERS_DOCUMENTS = ("followers_1.json", "followers.json")
FOLLOWING_DOCUMENT = "following.json"
FOLLOWING_KEY = "relationships_following"


def parse_connection_item(raw_item: Any) -> Connection:
    """Flatten one ``{"string_list_data": [{href, value, timestamp}]}`` wrapper."""
    sld = dig(raw_item, "string_list_data", 0, default={})
    return Connection(
        href=dig(sld, "href", default=""),
        value=dig(sld, "value", default=""),
        timestamp=dig(sld, "timestamp", default=0),
    )


def _parse_items(items: list[Any], diagnostics: Diagnostics, source: str) -> list[Connection]:
    connections: list[Connection] = []
    for i, item in enumerate(items):
        try:
            connections.append(parse_connection_item(item))
        except ENTRY_ERRORS as exc:
            diagnostics.failed(f"{source}[{i}] skipped: {exc}")
    return connections


class InstagramConnectionsExtractor(Extractor[tuple[list[Connection], list[Connection]]]):
    """Followers and following, as ``(followers, following)``.

    Followers come from ``followers_1.json`` (preferred) or
    ``followers.json``, a top-level array of connection wrappers. Following
    comes from ``following.json``, keyed under ``relationships_following``.
    A missing document yields an empty list for that side only.
    """

    provider = "instagram"
    part = "connections"

    def empty(self) -> tuple[list[Connection], list[Connection]]:
        return [], []

    async def extract(
        self, index: FileIndex, diagnostics: Diagnostics
    ) -> tuple[list[Connection], list[Connection]]:
        followers = await self.guarded(
            "followers", self.extract_followers(index, diagnostics), diagnostics, []
        )
        following = await self.guarded(
            "following", self.extract_following(index, diagnostics), diagnostics, []
        )
        return followers, following

    async def extract_followers(
        self, index: FileIndex, diagnostics: Diagnostics
    ) -> list[Connection]:
        data = await index.read_first(FOLLOWERS_DOCUMENTS)
        if data is None:
            return []
        followers = _parse_items(as_list(data), diagnostics, "followers")
        diagnostics.log(f"followers: {len(followers)} entries")
        return followers

    async def extract_following(
        self, index: FileIndex, diagnostics: Diagnostics
    ) -> list[Connection]:
        data = await index.read_json_or_none(FOLLOWING_DOCUMENT)
        if data is None:
            return []
        try:
            if not isinstance(data, dict):
                raise SchemaMismatch(f"{FOLLOWING_DOCUMENT} is not an object")
            items = payload_list(data, (FOLLOWING_KEY,))
        except SchemaMismatch as exc:
            diagnostics.failed(f"{FOLLOWING_DOCUMENT}: {exc}")
            return []
        following = _parse_items(items, diagnostics, "following")
        diagnostics.log(f"following: {len(following)} entries")
        return following
