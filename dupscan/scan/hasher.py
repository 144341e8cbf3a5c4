from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Iterable

from dupscan.scan.types import FileEntry, HashGroup

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_BYTES = 1024 * 1024


class HashReadError(RuntimeError):
    pass


def sha1_file(path: Path, chunk_bytes: int = DEFAULT_CHUNK_BYTES) -> str:
    hasher = hashlib.sha1()
    try:
        with open(path, "rb") as handle:
            while chunk := handle.read(chunk_bytes):
                hasher.update(chunk)
    except OSError as exc:
        raise HashReadError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    return hasher.hexdigest()


def hash_entries(
    entries: Iterable[FileEntry],
    *,
    chunk_bytes: int = DEFAULT_CHUNK_BYTES,
) -> dict[str, list[FileEntry]]:
    """Map SHA-1 hex digest to the entries with that content.

    The first unreadable file aborts with ``HashReadError``; no partial table
    is returned.
    """
    table: dict[str, list[FileEntry]] = {}
    for entry in entries:
        digest = sha1_file(entry.path, chunk_bytes)
        logger.debug("sha1 %s %s", digest, entry.path)
        table.setdefault(digest, []).append(entry)
    return table


def duplicate_hash_groups(table: dict[str, list[FileEntry]]) -> list[HashGroup]:
    result = [
        HashGroup(
            digest=digest,
            size_bytes=members[0].size,
            paths=sorted((entry.path for entry in members), key=str),
        )
        for digest, members in table.items()
        if len(members) > 1
    ]
    result.sort(key=lambda group: group.digest)
    return result
