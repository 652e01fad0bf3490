from __future__ import annotations

import re
from typing import Any

from igview.bundle.index import FileIndex
from igview.core.diagnostics import Diagnostics
from igview.core.exceptions import ParseFailure
from igview.core.extractor import Extractor
from igview.core.types import ExportFile
from igview.providers.instagram.schemas import (
    UNKNOWN_USERNAME,
    Profile,
    fix_instagram_encoding,
)
from igview.providers.instagram.strategies import (
    Strategy,
    dig,
    first_match,
    first_str,
)

# Ordered by how often each name shows up across export versions.
PROFILE_DOCUMENTS = (
    "personal_information.json",
    "profile.json",
    "personal_info.json",
    "account_information.json",
    "account_info.json",
    "profile_information.json",
    "professional_information.json",
)

SECONDARY_DOCUMENTS = (
    "account_information.json",
    "account_info.json",
    "professional_information.json",
)

PROFILE_PHOTO_DOCUMENTS = ("profile_photos.json", "media/profile_photos.json")

PROFILE_PHOTO_KEYS = ("media", "ig_profile_photos", "ig_profile_picture", "profile_photos")

MEDIA_MAP_KEYS = ("Profile Photo", "Profile photo", "Profile Picture", "profile_photo")

# e.g. "instagram-alice_smith-2025-12-25-AbCdEf/..."
EXPORT_FOLDER_RE = re.compile(r"instagram-([^-/]+)-\d{4}-\d{2}-\d{2}", re.IGNORECASE)

IMAGE_NAME_RE = re.compile(r"\.(jpg|jpeg|png|webp)$", re.IGNORECASE)

_STRING_MAP = ("profile_user", 0, "string_map_data")


def _has_string_map(doc: Any) -> bool:
    return isinstance(dig(doc, *_STRING_MAP), dict)


USERNAME_STRATEGIES: list[Strategy[str]] = [
    Strategy(
        "profile_user string_map_data",
        lambda d: first_str(
            d, (*_STRING_MAP, "Username", "value"), (*_STRING_MAP, "username", "value")
        ),
        _has_string_map,
    ),
    Strategy(
        "top-level keys",
        lambda d: first_str(d, ("username",), ("user_name",), ("profile_user", 0, "username")),
    ),
]

FULL_NAME_STRATEGIES: list[Strategy[str]] = [
    Strategy(
        "profile_user string_map_data",
        lambda d: first_str(
            d, (*_STRING_MAP, "Name", "value"), (*_STRING_MAP, "full_name", "value")
        ),
        _has_string_map,
    ),
    Strategy(
        "top-level keys",
        lambda d: first_str(d, ("full_name",), ("name",), ("profile_user", 0, "full_name")),
    ),
]

BIOGRAPHY_STRATEGIES: list[Strategy[str]] = [
    Strategy(
        "profile_user string_map_data",
        lambda d: first_str(
            d, (*_STRING_MAP, "Bio", "value"), (*_STRING_MAP, "biography", "value")
        ),
        _has_string_map,
    ),
    Strategy("top-level keys", lambda d: first_str(d, ("biography",), ("bio",))),
]

MEDIA_MAP_STRATEGY: Strategy[str] = Strategy(
    "profile_user media_map_data",
    lambda d: first_str(
        d, *[("profile_user", 0, "media_map_data", key, "uri") for key in MEDIA_MAP_KEYS]
    ),
    lambda d: isinstance(dig(d, "profile_user", 0, "media_map_data"), dict),
)


def _photo_uri(entry: Any) -> str:
    if isinstance(entry, str):
        return entry
    return first_str(entry, ("uri",), ("media", "uri"), ("media", 0, "uri"))


def _decode_photos_document(doc: Any) -> str:
    """``profile_photos.json``: one photo object or a list of them."""
    if isinstance(doc, list):
        photos: Any = doc
    else:
        photos = next((doc[k] for k in PROFILE_PHOTO_KEYS if dig(doc, k)), None)
    if isinstance(photos, list):
        return _photo_uri(photos[0]) if photos else ""
    if photos is None:
        return ""
    return _photo_uri(photos)


PHOTOS_DOCUMENT_STRATEGY: Strategy[str] = Strategy(
    "profile_photos document",
    _decode_photos_document,
    lambda d: isinstance(d, (list, dict)),
)


def _looks_like_profile_photo(f: ExportFile) -> bool:
    path = f.relative_path.lower()
    name = f.name.lower()
    marked = (
        "media/profile/" in path
        or "profile_photo" in path
        or "profile_pic" in name
        or "avatar" in name
    )
    return marked and IMAGE_NAME_RE.search(f.name) is not None


def _is_overlay(f: ExportFile) -> bool:
    name = f.name.lower()
    return "sticker" in name or "interactive" in name


class InstagramProfileExtractor(Extractor[Profile]):
    """Resolve username, full name, biography and profile picture.

    Each field runs its own cascade and is accepted at the first non-empty
    value. Missing or unreadable documents only narrow the result; total
    failure yields a :class:`Profile` with the ``"Unknown"`` username.
    """

    provider = "instagram"
    part = "profile"

    def empty(self) -> Profile:
        return Profile()

    async def extract(self, index: FileIndex, diagnostics: Diagnostics) -> Profile:
        doc = await self._resolve_document(index, diagnostics)

        username = first_match(USERNAME_STRATEGIES, doc, diagnostics, "username")
        if not username:
            username = await self._username_from_secondary(index, diagnostics)
        if not username:
            username = self._username_from_folder(index, diagnostics)

        full_name = first_match(FULL_NAME_STRATEGIES, doc, diagnostics, "full_name")
        biography = first_match(BIOGRAPHY_STRATEGIES, doc, diagnostics, "biography")
        pic = await self._resolve_picture(doc, index, diagnostics)

        diagnostics.log(
            f"Profile Resolved -> User: {username or UNKNOWN_USERNAME}, Pic: {pic or 'None'}"
        )
        return Profile(
            username=fix_instagram_encoding(username) if username else UNKNOWN_USERNAME,
            full_name=fix_instagram_encoding(full_name) if full_name else None,
            biography=fix_instagram_encoding(biography) if biography else None,
            profile_pic_url=pic or None,
        )

    async def _resolve_document(self, index: FileIndex, diagnostics: Diagnostics) -> Any:
        doc = await index.read_first(PROFILE_DOCUMENTS)
        if doc is not None:
            return doc

        candidate = index.find(
            lambda f: ("personal_information" in f.name or "profile_information" in f.name)
            and f.name.endswith(".json")
        )
        if candidate is None:
            diagnostics.failed("No profile document found")
            return {}
        diagnostics.log(f"Found profile info via heuristic: {candidate.relative_path}")
        try:
            return await index.load_json(candidate)
        except ParseFailure:
            return {}

    async def _username_from_secondary(
        self, index: FileIndex, diagnostics: Diagnostics
    ) -> str | None:
        for name in SECONDARY_DOCUMENTS:
            data = await index.read_json_or_none(name)
            if data is None:
                continue
            username = first_match(
                USERNAME_STRATEGIES[1:], data, diagnostics, f"username ({name})"
            )
            if username:
                return username
        return None

    def _username_from_folder(self, index: FileIndex, diagnostics: Diagnostics) -> str | None:
        first = index.first
        if first is None:
            return None
        match = EXPORT_FOLDER_RE.search(first.relative_path)
        if match is None:
            diagnostics.log("username: export folder name does not carry a handle")
            return None
        diagnostics.found(f"Extracted username from folder name: {match.group(1)}")
        return match.group(1)

    async def _resolve_picture(
        self, doc: Any, index: FileIndex, diagnostics: Diagnostics
    ) -> str | None:
        pic = first_match([MEDIA_MAP_STRATEGY], doc, diagnostics, "profile_pic")

        if not pic:
            photos_doc = await index.read_first(PROFILE_PHOTO_DOCUMENTS)
            if photos_doc is not None:
                keys = list(photos_doc) if isinstance(photos_doc, dict) else "array"
                diagnostics.log(f"profile_photos.json structure: {str(keys)[:200]}")
                pic = first_match(
                    [PHOTOS_DOCUMENT_STRATEGY], photos_doc, diagnostics, "profile_pic"
                )

        if not pic or pic.lower().endswith(".json"):
            candidates = index.filter(_looks_like_profile_photo)
            if candidates:
                best = next((f for f in candidates if not _is_overlay(f)), candidates[0])
                pic = best.relative_path
                diagnostics.found(f"Heuristic profile pic: {pic}")
        return pic

