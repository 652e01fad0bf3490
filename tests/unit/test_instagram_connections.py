"""Unit tests for followers / following extraction."""

from igview.providers.instagram.connections import (
    InstagramConnectionsExtractor,
    parse_connection_item,
)
from igview.providers.instagram.schemas import Connection
from tests.conftest import make_index


async def _connections(files):
    index, diagnostics = make_index(files)
    return await InstagramConnectionsExtractor().run(index, diagnostics)


class TestParseConnectionItem:
    def test_first_string_list_entry(self):
        conn = parse_connection_item(
            {
                "string_list_data": [
                    {"href": "https://x", "value": "alice", "timestamp": 100},
                    {"href": "https://ignored", "value": "ignored", "timestamp": 1},
                ]
            }
        )
        assert conn == Connection(href="https://x", value="alice", timestamp=100)

    def test_missing_fields_default(self):
        assert parse_connection_item({}) == Connection(href="", value="", timestamp=0)
        assert parse_connection_item({"string_list_data": []}) == Connection()
        assert parse_connection_item("junk") == Connection()


class TestFollowers:
    async def test_followers_only(self):
        followers, following = await _connections(
            {
                "followers_1.json": [
                    {"string_list_data": [{"href": "https://x", "value": "alice", "timestamp": 100}]}
                ]
            }
        )
        assert [f.model_dump() for f in followers] == [
            {"href": "https://x", "value": "alice", "timestamp": 100}
        ]
        assert following == []

    async def test_numbered_variant_preferred(self):
        followers, _ = await _connections(
            {
                "followers.json": [{"string_list_data": [{"value": "old"}]}],
                "followers_1.json": [{"string_list_data": [{"value": "new"}]}],
            }
        )
        assert [f.value for f in followers] == ["new"]

    async def test_unnumbered_fallback(self):
        followers, _ = await _connections(
            {"followers.json": [{"string_list_data": [{"value": "old"}]}]}
        )
        assert [f.value for f in followers] == ["old"]


class TestFollowing:
    async def test_relationships_following(self):
        followers, following = await _connections(
            {
                "following.json": {
                    "relationships_following": [
                        {"string_list_data": [{"href": "https://y", "value": "bob", "timestamp": 7}]}
                    ]
                }
            }
        )
        assert followers == []
        assert following == [Connection(href="https://y", value="bob", timestamp=7)]

    async def test_missing_key(self):
        _, following = await _connections({"following.json": {"other": []}})
        assert following == []

    async def test_array_document_is_mismatch(self):
        _, following = await _connections({"following.json": []})
        assert following == []


class TestSideIsolation:
    async def test_infinite_timestamp_follower(self):
        followers, following = await _connections(
            {
                "followers_1.json": (
                    '[{"string_list_data": [{"value": "alice", "timestamp": 1e999}]}]'
                ),
                "following.json": {
                    "relationships_following": [{"string_list_data": [{"value": "carol"}]}]
                },
            }
        )
        assert [(f.value, f.timestamp) for f in followers] == [("alice", 0)]
        assert [f.value for f in following] == ["carol"]

    async def test_followers_failure_keeps_following(self, monkeypatch):
        async def broken(self, index, diagnostics):
            raise RuntimeError("followers exploded")

        monkeypatch.setattr(InstagramConnectionsExtractor, "extract_followers", broken)
        index, diagnostics = make_index(
            {"following.json": {"relationships_following": [{"string_list_data": [{"value": "carol"}]}]}}
        )
        followers, following = await InstagramConnectionsExtractor().run(index, diagnostics)
        assert followers == []
        assert [f.value for f in following] == ["carol"]
        assert any("followers extraction failed" in e for e in diagnostics.entries)
