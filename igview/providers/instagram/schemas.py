from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from igview.core.exceptions import EncodingRepairFailure

logger = logging.getLogger(__name__)

UNKNOWN_USERNAME = "Unknown"

VIDEO_EXTENSIONS = (".mp4", ".mov")

# ---------------------------------------------------------------------------
# Mojibake fix — Instagram encodes UTF-8 bytes as \u00xx Latin-1 codepoints
# ---------------------------------------------------------------------------


def _reencode(text: str) -> str:
    try:
        return text.encode("latin-1").decode("utf-8")
    except (UnicodeDecodeError, UnicodeEncodeError) as exc:
        raise EncodingRepairFailure(str(exc)) from exc


def fix_instagram_encoding(text: str) -> str:
    """Fix Instagram's broken UTF-8-as-Latin-1 encoding in JSON exports.

    Instagram's data export encodes UTF-8 bytes as ``\\u00xx`` JSON escapes,
    e.g. the emoji 🙏 (UTF-8: f0 9f 99 8f) becomes ``\\u00f0\\u009f\\u0099\\u008f``.
    Python's JSON parser reads these as Latin-1 codepoints, producing mojibake.

    This re-interprets each character as a Latin-1 byte, then decodes as UTF-8.
    Falls back to the original string if it's already valid UTF-8 or not decodable.
    """
    if not text:
        return text
    try:
        return _reencode(text)
    except EncodingRepairFailure as exc:
        logger.debug("%s; keeping %r", exc.message, text[:40])
        return text


def is_video_uri(uri: str | None) -> bool:
    """True iff *uri* ends in ``.mp4`` or ``.mov`` (any case)."""
    return bool(uri) and uri.lower().endswith(VIDEO_EXTENSIONS)


def _timestamp(value: Any) -> int:
    """Coerce a raw timestamp to non-negative unix seconds, default 0.

    Non-finite floats (``1e999`` parses as ``inf``) also map to 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    try:
        ts = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(ts, 0)


# ---------------------------------------------------------------------------
# Normalized model: the version-independent output of extraction
# ---------------------------------------------------------------------------


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Profile(_FrozenModel):
    username: str = UNKNOWN_USERNAME
    biography: str | None = None
    full_name: str | None = None
    profile_pic_url: str | None = None

    @property
    def is_unknown(self) -> bool:
        return self.username == UNKNOWN_USERNAME


class StoryItem(_FrozenModel):
    """A single story frame."""

    uri: str
    creation_timestamp: int = 0
    title: str | None = None

    @field_validator("creation_timestamp", mode="before")
    @classmethod
    def _clamp_timestamp(cls, value: Any) -> int:
        return _timestamp(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_video(self) -> bool:
        return is_video_uri(self.uri)


class MediaItem(StoryItem):
    """An authored post, or one slide of a carousel post.

    A carousel's ``uri`` is its first slide's ``uri``; slides never carry
    their own ``carousel_media``.
    """

    is_archived: bool = False
    carousel_media: list[MediaItem] | None = None

    @field_validator("carousel_media")
    @classmethod
    def _one_level_deep(cls, value: list[MediaItem] | None) -> list[MediaItem] | None:
        if value is None:
            return None
        if not value:
            raise ValueError("carousel_media must not be empty")
        if any(child.carousel_media for child in value):
            raise ValueError("carousel slides cannot be carousels themselves")
        return value

    @property
    def is_carousel(self) -> bool:
        return bool(self.carousel_media)


class Connection(_FrozenModel):
    """A follower or followed account (``string_list_data[0]``)."""

    href: str = ""
    value: str = ""
    timestamp: int = 0

    @field_validator("timestamp", mode="before")
    @classmethod
    def _clamp_timestamp(cls, value: Any) -> int:
        return _timestamp(value)

    @field_validator("href", "value", mode="before")
    @classmethod
    def _default_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""


class NormalizedExport(_FrozenModel):
    """Everything reconstructed from one export bundle."""

    profile: Profile = Field(default_factory=Profile)
    media: list[MediaItem] = Field(default_factory=list)
    stories: list[StoryItem] = Field(default_factory=list)
    followers: list[Connection] = Field(default_factory=list)
    following: list[Connection] = Field(default_factory=list)

    @property
    def posts(self) -> list[MediaItem]:
        return [m for m in self.media if not m.is_archived]

    @property
    def archived(self) -> list[MediaItem]:
        return [m for m in self.media if m.is_archived]
