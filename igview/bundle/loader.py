"""Build an export bundle (a list of :class:`ExportFile`) from disk.

A browser upload hands the parser a flat file list with relative paths; on
the command line the same list is produced from an extracted export folder
or from the zip archive Instagram delivers.
"""

from __future__ import annotations

import logging
import mimetypes
import zipfile
from pathlib import Path, PurePosixPath

from igview.core.types import ExportFile

logger = logging.getLogger(__name__)


def _guess_type(name: str) -> str:
    mime_type, _ = mimetypes.guess_type(name)
    return mime_type or ""


def load_directory(path: str | Path) -> list[ExportFile]:
    """Read every file under *path*.

    Relative paths keep the export's root folder name
    (``instagram-alice-2025-01-01/...``), which the profile extractor can
    fall back on for the username.
    """
    root = Path(path)
    if not root.is_dir():
        raise NotADirectoryError(str(root))
    files: list[ExportFile] = []
    for p in sorted(root.rglob("*")):
        if not p.is_file():
            continue
        rel = p.relative_to(root.parent).as_posix()
        files.append(ExportFile(path=rel, data=p.read_bytes(), content_type=_guess_type(p.name)))
    logger.info("Loaded %d files from %s", len(files), root)
    return files


def load_zip(path: str | Path) -> list[ExportFile]:
    """Read every member of a zip archive, skipping directory entries.

    Member paths are prefixed with the archive stem, mirroring
    :func:`load_directory` keeping the export folder name.
    """
    stem = Path(path).stem
    files: list[ExportFile] = []
    with zipfile.ZipFile(path, "r") as zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            name = f"{stem}/{PurePosixPath(info.filename).as_posix()}"
            files.append(
                ExportFile(path=name, data=zf.read(info.filename), content_type=_guess_type(name))
            )
    logger.info("Loaded %d files from %s", len(files), path)
    return files


def load_bundle(path: str | Path) -> list[ExportFile]:
    """Load a bundle from either an export folder or a ``.zip`` archive."""
    p = Path(path)
    if p.is_dir():
        return load_directory(p)
    if zipfile.is_zipfile(p):
        return load_zip(p)
    raise ValueError(f"Not an export folder or zip archive: {p}")
