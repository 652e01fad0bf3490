from __future__ import annotations

from dataclasses import dataclass

from igview.core.paths import basename, normalize_path


@dataclass(frozen=True)
class ExportFile:
    """One ``(relative path, bytes)`` entry of an export bundle.

    ``content_type`` is whatever the source declared (a browser upload, a
    ``mimetypes`` guess) and may be empty.
    """

    path: str
    data: bytes
    content_type: str = ""

    @property
    def relative_path(self) -> str:
        """``path`` with ``/`` as the only separator."""
        return normalize_path(self.path)

    @property
    def name(self) -> str:
        return basename(self.path)

    @property
    def size(self) -> int:
        return len(self.data)
