from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from igview.core.diagnostics import Diagnostics
from igview.core.exceptions import FileNotFound, ParseFailure
from igview.core.paths import ends_at_boundary
from igview.core.types import ExportFile

logger = logging.getLogger(__name__)


class FileIndex:
    """Read-only lookup structure over one export bundle.

    Built once per parse. Lookups never mutate the index; every JSON read
    is recorded in the shared :class:`Diagnostics`.

    Matching rule for :meth:`locate`: an exact bare-filename hit wins;
    otherwise the first file (in input order) whose normalized relative
    path ends with *target* where the match begins a path segment. A
    target that carries directories (``media/profile_photos.json``) must
    match those directories too.
    """

    def __init__(self, files: Iterable[ExportFile], diagnostics: Diagnostics) -> None:
        self._files: list[ExportFile] = list(files)
        self._diagnostics = diagnostics
        self._by_name: dict[str, ExportFile] = {}
        for f in self._files:
            self._by_name.setdefault(f.name, f)

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[ExportFile]:
        return iter(self._files)

    @property
    def first(self) -> ExportFile | None:
        return self._files[0] if self._files else None

    def locate(self, target: str) -> ExportFile | None:
        """Return the file for *target*, or ``None``."""
        hit = self._by_name.get(target)
        if hit is not None:
            return hit
        for f in self._files:
            if ends_at_boundary(f.relative_path, target):
                return f
        return None

    def find(self, predicate: Callable[[ExportFile], bool]) -> ExportFile | None:
        """Return the first file satisfying *predicate*, in input order."""
        return next((f for f in self._files if predicate(f)), None)

    def filter(self, predicate: Callable[[ExportFile], bool]) -> list[ExportFile]:
        return [f for f in self._files if predicate(f)]

    async def read_json(self, target: str) -> Any:
        """Locate *target* and parse it as JSON.

        Raises :class:`FileNotFound` or :class:`ParseFailure`; both are
        logged before raising.
        """
        self._diagnostics.log(f"Read attempt: {target}")
        f = self.locate(target)
        if f is None:
            self._diagnostics.failed(f"File not found: {target}")
            raise FileNotFound(target)
        self._diagnostics.found(f"Found file: {f.relative_path}")
        return await self.load_json(f)

    async def load_json(self, f: ExportFile) -> Any:
        """Parse an already-located file as JSON."""
        try:
            return json.loads(f.data.decode("utf-8-sig"))
        except (UnicodeDecodeError, ValueError) as exc:
            self._diagnostics.failed(f"Error parsing {f.relative_path}: {exc}")
            raise ParseFailure(f.relative_path, str(exc)) from exc

    async def read_json_or_none(self, target: str) -> Any:
        """Like :meth:`read_json`, but treats absence and bad JSON as ``None``."""
        try:
            return await self.read_json(target)
        except (FileNotFound, ParseFailure):
            return None

    async def read_first(self, targets: Iterable[str]) -> Any:
        """Return the parsed value of the first of *targets* that reads."""
        for target in targets:
            data = await self.read_json_or_none(target)
            if data is not None:
                return data
        return None
