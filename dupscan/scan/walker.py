from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterator

from dupscan.scan.types import FileEntry

logger = logging.getLogger(__name__)


class RootNotFoundError(RuntimeError):
    pass


def _entry_for(path: Path) -> FileEntry | None:
    try:
        st = path.stat()
    except OSError as exc:
        logger.debug("Skipping %s: %s", path, exc)
        return None
    if not stat.S_ISREG(st.st_mode):
        logger.debug("Skipping non-regular file %s", path)
        return None
    return FileEntry(name=path.name, path=path, size=int(st.st_size))


def _log_walk_error(exc: OSError) -> None:
    logger.debug("Cannot list %s: %s", exc.filename, exc.strerror)


def _iter_tree(root: Path) -> Iterator[FileEntry]:
    # os.walk reports symlinked directories in dirnames and does not descend into them
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        base = Path(dirpath)
        for filename in filenames:
            entry = _entry_for(base / filename)
            if entry is not None:
                yield entry


def _iter_single(root: Path) -> Iterator[FileEntry]:
    entry = _entry_for(root)
    if entry is not None:
        yield entry


def walk_files(root: str | Path) -> Iterator[FileEntry]:
    """Return a lazy iterator over every regular file under ``root``.

    The existence check happens here rather than on first iteration, so a
    missing root fails before any other work is done. Entries whose metadata
    cannot be read are skipped.
    """
    root_path = Path(root)
    try:
        exists = root_path.exists()
        is_dir = exists and root_path.is_dir()
    except OSError as exc:
        raise RootNotFoundError(f'"{root_path}" cannot be accessed: {exc.strerror or exc}') from exc
    if not exists:
        raise RootNotFoundError(f'"{root_path}" directory does not exist')
    if is_dir:
        return _iter_tree(root_path)
    return _iter_single(root_path)
