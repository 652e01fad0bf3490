from __future__ import annotations

import io
import json
import zipfile
from pathlib import Path
from typing import Any

import pytest

from igview.bundle.index import FileIndex
from igview.core.diagnostics import Diagnostics
from igview.core.types import ExportFile

ROOT = "instagram-alice_smith-2025-12-25-AbCd"


def make_files(files: dict[str, Any]) -> list[ExportFile]:
    """Build an in-memory bundle from ``{path: content}``.

    ``dict``/``list`` values are JSON-encoded; ``str`` values are UTF-8
    encoded; ``bytes`` are used as-is.
    """
    bundle: list[ExportFile] = []
    for path, content in files.items():
        if isinstance(content, (dict, list)):
            data = json.dumps(content).encode("utf-8")
        elif isinstance(content, str):
            data = content.encode("utf-8")
        else:
            data = content
        bundle.append(ExportFile(path=path, data=data))
    return bundle


def make_index(files: dict[str, Any]) -> tuple[FileIndex, Diagnostics]:
    diagnostics = Diagnostics()
    return FileIndex(make_files(files), diagnostics), diagnostics


def build_zip(files: dict[str, bytes | str]) -> bytes:
    """Create an in-memory zip archive from a dict of {path: content}."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, data in files.items():
            if isinstance(data, str):
                data = data.encode("utf-8")
            zf.writestr(name, data)
    return buf.getvalue()


# Synthetic export in the current (v1) folder layout.
ALICE_EXPORT: dict[str, Any] = {
    f"{ROOT}/personal_information/personal_information/personal_information.json": {
        "profile_user": [
            {
                "media_map_data": {
                    "Profile Photo": {
                        "uri": "media/profile/202512/avatar_1.jpg",
                        "creation_timestamp": 1700000000,
                    }
                },
                "string_map_data": {
                    "Username": {"value": "alice_smith"},
                    "Name": {"value": "Alice CafÃ©"},
                    "Bio": {"value": "Coffee ð\u009f\u0099\u008f"},
                },
            }
        ]
    },
    f"{ROOT}/your_instagram_activity/media/posts_1.json": [
        {
            "media": [
                {"uri": "media/posts/202501/slide_1.jpg", "creation_timestamp": 1735700000},
                {"uri": "media/posts/202501/slide_2.mp4"},
                {"uri": "media/posts/202501/slide_3.jpg", "title": "last one"},
            ],
            "title": "Trip",
            "creation_timestamp": 1735699999,
        },
        {
            "media": [{"uri": "media/posts/202502/solo.jpg", "creation_timestamp": 1738000000}],
            "title": "Solo",
        },
    ],
    f"{ROOT}/your_instagram_activity/media/archived_posts.json": {
        "ig_archived_post_media": [
            {
                "media": [
                    {"uri": "media/archived_posts/202401/old.jpg", "creation_timestamp": 1704000000}
                ],
                "title": "Hidden",
            }
        ]
    },
    f"{ROOT}/your_instagram_activity/media/stories.json": {
        "ig_stories": [
            {"uri": "media/stories/202503/story.mp4", "creation_timestamp": 1740000000, "title": ""},
            {"uri": "media/stories/202503/story.jpg", "creation_timestamp": 1740000100},
        ]
    },
    f"{ROOT}/connections/followers_and_following/followers_1.json": [
        {
            "title": "",
            "media_list_data": [],
            "string_list_data": [
                {"href": "https://www.instagram.com/bob", "value": "bob", "timestamp": 1690000000}
            ],
        }
    ],
    f"{ROOT}/connections/followers_and_following/following.json": {
        "relationships_following": [
            {
                "title": "",
                "string_list_data": [
                    {"href": "https://www.instagram.com/carol", "value": "carol", "timestamp": 1691000000}
                ],
            }
        ]
    },
    f"{ROOT}/media/profile/202512/avatar_1.jpg": b"\xff\xd8jpeg",
    f"{ROOT}/media/posts/202501/slide_1.jpg": b"\xff\xd8one",
    f"{ROOT}/media/posts/202501/slide_2.mp4": b"\x00\x00mp4",
    f"{ROOT}/media/posts/202501/slide_3.jpg": b"\xff\xd8three",
    f"{ROOT}/media/posts/202502/solo.jpg": b"\xff\xd8solo",
    f"{ROOT}/media/archived_posts/202401/old.jpg": b"\xff\xd8old",
    f"{ROOT}/media/stories/202503/story.mp4": b"\x00\x00story",
}


@pytest.fixture()
def alice_files() -> list[ExportFile]:
    return make_files(ALICE_EXPORT)


@pytest.fixture()
def alice_dir(tmp_path: Path) -> Path:
    """Write alice's synthetic export to disk as an extracted folder."""
    for path, content in ALICE_EXPORT.items():
        dest = tmp_path / path
        dest.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            dest.write_bytes(content)
        else:
            dest.write_text(json.dumps(content), encoding="utf-8")
    return tmp_path / ROOT


@pytest.fixture()
def alice_zip(tmp_path: Path) -> Path:
    """Zip alice's synthetic export (members relative to the export root)."""
    members = {
        path.removeprefix(f"{ROOT}/"): content if isinstance(content, bytes) else json.dumps(content)
        for path, content in ALICE_EXPORT.items()
    }
    dest = tmp_path / f"{ROOT}.zip"
    dest.write_bytes(build_zip(members))
    return dest
