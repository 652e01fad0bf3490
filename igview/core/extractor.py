from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable
from typing import ClassVar, Generic, TypeVar

from igview.bundle.index import FileIndex
from igview.core.diagnostics import Diagnostics

logger = logging.getLogger(__name__)

Result = TypeVar("Result")
T = TypeVar("T")


class Extractor(ABC, Generic[Result]):
    """Base class for the per-concept schema extractors.

    An Extractor encapsulates the fallback cascade that produces one part
    of the normalized model (profile, media, stories, connections).
    Subclasses implement :meth:`extract` and :meth:`empty`; callers use
    :meth:`run`, which never raises.
    """

    provider: ClassVar[str]
    """Provider identifier (e.g. ``"instagram"``)."""

    part: ClassVar[str]
    """Which part of the normalized model this extractor produces."""

    @abstractmethod
    async def extract(self, index: FileIndex, diagnostics: Diagnostics) -> Result:
        """Resolve documents through *index* and decode them."""
        ...

    @abstractmethod
    def empty(self) -> Result:
        """Value used when extraction fails outright."""
        ...

    async def run(self, index: FileIndex, diagnostics: Diagnostics) -> Result:
        """Run :meth:`extract`, degrading any unexpected failure to :meth:`empty`.

        Not intended to be overridden.
        """
        try:
            return await self.extract(index, diagnostics)
        except Exception as exc:
            logger.error("%s/%s extraction failed: %s", self.provider, self.part, exc)
            diagnostics.failed(f"{self.part} extraction failed: {exc}")
            return self.empty()

    async def guarded(
        self, label: str, read: Awaitable[T], diagnostics: Diagnostics, default: T
    ) -> T:
        """Await one independent read, degrading its failure to *default*.

        Keeps one side of a multi-document part alive when the other breaks.
        """
        try:
            return await read
        except Exception as exc:
            logger.error("%s/%s %s failed: %s", self.provider, self.part, label, exc)
            diagnostics.failed(f"{label} extraction failed: {exc}")
            return default
