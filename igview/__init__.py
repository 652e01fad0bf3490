from igview.bundle import FileIndex, load_bundle, load_directory, load_zip
from igview.core import Diagnostics, ExportFile, InsufficientDataError
from igview.facade import ParseResult, parse_export, parse_export_sync
from igview.locator import Locator, LocatorIndex, build_locator_index
from igview.providers.instagram import (
    Connection,
    MediaItem,
    NormalizedExport,
    Profile,
    StoryItem,
    fix_instagram_encoding,
)

__all__ = [
    "Connection",
    "Diagnostics",
    "ExportFile",
    "FileIndex",
    "InsufficientDataError",
    "Locator",
    "LocatorIndex",
    "MediaItem",
    "NormalizedExport",
    "ParseResult",
    "Profile",
    "StoryItem",
    "build_locator_index",
    "fix_instagram_encoding",
    "load_bundle",
    "load_directory",
    "load_zip",
    "parse_export",
    "parse_export_sync",
]
