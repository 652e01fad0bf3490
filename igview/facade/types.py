"""Public return types for the igview API."""

from __future__ import annotations

from dataclasses import dataclass, field

from igview.core.exceptions import InsufficientDataError
from igview.locator import LocatorIndex
from igview.providers.instagram.schemas import NormalizedExport


@dataclass
class ExportStats:
    """Counts shown next to the profile header and in the debug report."""

    posts: int = 0
    archived: int = 0
    stories: int = 0
    followers: int = 0
    following: int = 0
    locator_keys: int = 0
    files: int = 0


@dataclass
class DebugReport:
    """Samples that explain why a URI did or did not resolve."""

    stats: ExportStats
    username: str
    media_sample: list[dict] = field(default_factory=list)
    archived_sample: list[dict] = field(default_factory=list)
    locator_keys_sample: list[str] = field(default_factory=list)
    file_paths_sample: list[str] = field(default_factory=list)
    unresolved_uris: list[str] = field(default_factory=list)
    logs: list[str] = field(default_factory=list)


@dataclass
class ParseResult:
    """Result from :func:`igview.parse_export`."""

    export: NormalizedExport
    locators: LocatorIndex
    diagnostics: tuple[str, ...] = ()
    file_paths: list[str] = field(default_factory=list)

    @property
    def insufficient_data(self) -> bool:
        """True when neither a username nor any media was recovered."""
        return self.export.profile.is_unknown and not self.export.media

    def raise_if_insufficient(self) -> ParseResult:
        if self.insufficient_data:
            raise InsufficientDataError()
        return self

    def stats(self) -> ExportStats:
        export = self.export
        return ExportStats(
            posts=len(export.posts),
            archived=len(export.archived),
            stories=len(export.stories),
            followers=len(export.followers),
            following=len(export.following),
            locator_keys=len(self.locators),
            files=len(self.file_paths),
        )

    def unresolved_uris(self) -> list[str]:
        """Model URIs (posts, slides, stories, profile picture) with no file."""
        uris: list[str] = []
        for item in self.export.media:
            uris.append(item.uri)
            uris.extend(child.uri for child in item.carousel_media or [])
        uris.extend(story.uri for story in self.export.stories)
        if self.export.profile.profile_pic_url:
            uris.append(self.export.profile.profile_pic_url)
        seen: set[str] = set()
        missing: list[str] = []
        for uri in uris:
            if uri in seen:
                continue
            seen.add(uri)
            if self.locators.resolve(uri) is None:
                missing.append(uri)
        return missing

    def debug_report(self, sample_size: int = 3) -> DebugReport:
        export = self.export
        return DebugReport(
            stats=self.stats(),
            username=export.profile.username,
            media_sample=[
                {"uri": m.uri, "archived": m.is_archived} for m in export.media[:sample_size]
            ],
            archived_sample=[
                m.model_dump(exclude_none=True) for m in export.archived[:sample_size]
            ],
            locator_keys_sample=list(self.locators)[:10],
            file_paths_sample=self.file_paths[:10],
            unresolved_uris=self.unresolved_uris()[:10],
            logs=list(self.diagnostics),
        )
