"""Per-invocation parser log.

Every resolution step (which candidate file was tried, which strategy
produced a field) is appended here so a caller can reconstruct how the
normalized model was built. Entries are also mirrored to the
``igview.diagnostics`` logger.
"""

from __future__ import annotations

import logging
from datetime import datetime

logger = logging.getLogger("igview.diagnostics")


class Diagnostics:
    """Append-only, ordered log of resolution attempts."""

    def __init__(self) -> None:
        self._entries: list[str] = []

    def log(self, msg: str, *, level: int = logging.INFO) -> None:
        stamp = datetime.now().strftime("%H:%M:%S")
        self._entries.append(f"[{stamp}] {msg}")
        logger.log(level, msg)

    def found(self, msg: str) -> None:
        self.log(f"✅ {msg}")

    def failed(self, msg: str) -> None:
        self.log(f"❌ {msg}", level=logging.WARNING)

    def clear(self) -> None:
        self._entries.clear()

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)
