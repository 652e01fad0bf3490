from igview.providers.instagram.connections import InstagramConnectionsExtractor
from igview.providers.instagram.media import (
    InstagramMediaExtractor,
    InstagramStoriesExtractor,
)
from igview.providers.instagram.profile import InstagramProfileExtractor
from igview.providers.instagram.schemas import (
    UNKNOWN_USERNAME,
    Connection,
    MediaItem,
    NormalizedExport,
    Profile,
    StoryItem,
    fix_instagram_encoding,
)

__all__ = [
    "Connection",
    "InstagramConnectionsExtractor",
    "InstagramMediaExtractor",
    "InstagramProfileExtractor",
    "InstagramStoriesExtractor",
    "MediaItem",
    "NormalizedExport",
    "Profile",
    "StoryItem",
    "UNKNOWN_USERNAME",
    "fix_instagram_encoding",
]
