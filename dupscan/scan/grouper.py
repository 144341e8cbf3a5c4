from __future__ import annotations

from typing import Iterable

from dupscan.scan.types import FileEntry, GroupKey, GroupKeyMode, NameGroup, Partition


def group_key_for(entry: FileEntry, mode: GroupKeyMode) -> GroupKey:
    if mode == GroupKeyMode.NAME:
        return GroupKey(name=entry.name, size=None)
    return GroupKey(name=entry.name, size=entry.size)


def partition_entries(
    entries: Iterable[FileEntry],
    *,
    key_mode: GroupKeyMode = GroupKeyMode.NAME_SIZE,
    min_size: int = 0,
) -> Partition:
    """Split entries into empty files and key groups of non-empty files.

    Empty files are collected regardless of ``min_size``. Non-empty files
    smaller than ``min_size`` are counted in ``filtered_count`` and dropped.
    """
    empty_files: list[FileEntry] = []
    groups: dict[GroupKey, list[FileEntry]] = {}
    filtered_count = 0

    for entry in entries:
        if entry.size == 0:
            empty_files.append(entry)
            continue
        if entry.size < min_size:
            filtered_count += 1
            continue
        groups.setdefault(group_key_for(entry, key_mode), []).append(entry)

    return Partition(empty_files=empty_files, groups=groups, filtered_count=filtered_count)


def candidate_groups(groups: dict[GroupKey, list[FileEntry]]) -> list[NameGroup]:
    """Key groups with at least two members, sorted by name then size."""
    result = [
        NameGroup(key=key, paths=sorted((entry.path for entry in members), key=str))
        for key, members in groups.items()
        if len(members) > 1
    ]
    result.sort(key=lambda group: (group.key.name, -1 if group.key.size is None else group.key.size))
    return result


def select_hash_candidates(
    groups: dict[GroupKey, list[FileEntry]],
    *,
    only_colliding: bool,
) -> list[FileEntry]:
    if only_colliding:
        return [entry for members in groups.values() if len(members) > 1 for entry in members]
    return [entry for members in groups.values() for entry in members]
