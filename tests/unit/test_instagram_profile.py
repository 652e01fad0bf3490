"""Unit tests for the profile extractor cascades."""

from igview.providers.instagram.profile import InstagramProfileExtractor
from tests.conftest import make_index


async def _extract(files):
    index, diagnostics = make_index(files)
    return await InstagramProfileExtractor().run(index, diagnostics), diagnostics


class TestProfileDocument:
    async def test_string_map_data(self):
        profile, _ = await _extract(
            {
                "root/personal_information.json": {
                    "profile_user": [
                        {
                            "string_map_data": {
                                "Username": {"value": "alice"},
                                "Name": {"value": "Alice CafÃ©"},
                                "Bio": {"value": "hello"},
                            }
                        }
                    ]
                }
            }
        )
        assert profile.username == "alice"
        assert profile.full_name == "Alice Café"
        assert profile.biography == "hello"

    async def test_lowercase_string_map_keys(self):
        profile, _ = await _extract(
            {
                "personal_information.json": {
                    "profile_user": [
                        {
                            "string_map_data": {
                                "username": {"value": "bob"},
                                "full_name": {"value": "Bob"},
                                "biography": {"value": "bio"},
                            }
                        }
                    ]
                }
            }
        )
        assert (profile.username, profile.full_name, profile.biography) == ("bob", "Bob", "bio")

    async def test_flat_top_level_keys(self):
        profile, _ = await _extract(
            {"profile.json": {"user_name": "carol", "name": "Carol", "bio": "b"}}
        )
        assert profile.username == "carol"
        assert profile.full_name == "Carol"
        assert profile.biography == "b"

    async def test_fields_resolve_independently(self):
        profile, _ = await _extract(
            {
                "personal_information.json": {
                    "profile_user": [{"string_map_data": {"Name": {"value": "Dana"}}}],
                    "username": "dana",
                }
            }
        )
        assert profile.username == "dana"
        assert profile.full_name == "Dana"
        assert profile.biography is None

    async def test_heuristic_document_name(self):
        profile, diagnostics = await _extract(
            {"root/x/my_personal_information_v2.json": {"username": "erin"}}
        )
        assert profile.username == "erin"
        assert any("via heuristic" in e for e in diagnostics.entries)

    async def test_secondary_document_for_username(self):
        profile, _ = await _extract(
            {
                "personal_information.json": {"biography": "only bio"},
                "professional_information.json": {"username": "frank"},
            }
        )
        assert profile.username == "frank"
        assert profile.biography == "only bio"

    async def test_username_from_export_folder(self):
        profile, diagnostics = await _extract(
            {"instagram-grace_h-2025-12-25-XyZ/media/stories.json": []}
        )
        assert profile.username == "grace_h"
        assert any("folder name" in e for e in diagnostics.entries)

    async def test_total_failure_is_unknown(self):
        profile, _ = await _extract({"random/file.txt": "nothing"})
        assert profile.username == "Unknown"
        assert profile.full_name is None
        assert profile.biography is None
        assert profile.profile_pic_url is None

    async def test_unparseable_document_is_not_fatal(self):
        profile, diagnostics = await _extract({"personal_information.json": "{oops"})
        assert profile.username == "Unknown"
        assert any("Error parsing" in e for e in diagnostics.entries)


class TestProfilePicture:
    async def test_media_map_data(self):
        profile, _ = await _extract(
            {
                "personal_information.json": {
                    "profile_user": [
                        {"media_map_data": {"Profile photo": {"uri": "media/profile/p.jpg"}}}
                    ]
                }
            }
        )
        assert profile.profile_pic_url == "media/profile/p.jpg"

    async def test_photos_document_array_alias(self):
        profile, _ = await _extract(
            {
                "root/media/profile_photos.json": {
                    "ig_profile_picture": [{"uri": "media/profile/1/pic.jpg"}]
                }
            }
        )
        assert profile.profile_pic_url == "media/profile/1/pic.jpg"

    async def test_photos_document_single_object(self):
        profile, _ = await _extract(
            {"profile_photos.json": {"ig_profile_photos": {"media": {"uri": "p/single.png"}}}}
        )
        assert profile.profile_pic_url == "p/single.png"

    async def test_photos_document_bare_array_of_strings(self):
        profile, _ = await _extract({"profile_photos.json": ["p/str.jpg"]})
        assert profile.profile_pic_url == "p/str.jpg"

    async def test_filesystem_heuristic_skips_stickers(self):
        profile, diagnostics = await _extract(
            {
                "root/media/profile/sticker_avatar.png": b"x",
                "root/media/profile/202401/real.jpg": b"x",
            }
        )
        assert profile.profile_pic_url == "root/media/profile/202401/real.jpg"
        assert any("Heuristic profile pic" in e for e in diagnostics.entries)

    async def test_filesystem_heuristic_requires_image(self):
        profile, _ = await _extract({"root/media/profile/notes.txt": b"x"})
        assert profile.profile_pic_url is None

    async def test_json_uri_is_replaced_by_heuristic(self):
        profile, _ = await _extract(
            {
                "profile_photos.json": {"media": [{"uri": "media/profile_photos.json"}]},
                "root/avatar.webp": b"x",
            }
        )
        assert profile.profile_pic_url == "root/avatar.webp"

    async def test_picture_uri_is_not_text_normalized(self):
        profile, _ = await _extract({"profile_photos.json": {"media": [{"uri": "p/CafÃ©.jpg"}]}})
        assert profile.profile_pic_url == "p/CafÃ©.jpg"
