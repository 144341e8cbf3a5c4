from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class GroupKeyMode(str, Enum):
    NAME = "name"
    NAME_SIZE = "name-size"


@dataclass(frozen=True, slots=True)
class FileEntry:
    name: str
    path: Path
    size: int


@dataclass(frozen=True, slots=True)
class GroupKey:
    name: str
    size: int | None


@dataclass(slots=True)
class Partition:
    empty_files: list[FileEntry]
    groups: dict[GroupKey, list[FileEntry]]
    filtered_count: int

    @property
    def total_count(self) -> int:
        grouped = sum(len(members) for members in self.groups.values())
        return len(self.empty_files) + self.filtered_count + grouped


@dataclass(slots=True)
class NameGroup:
    key: GroupKey
    paths: list[Path]


@dataclass(slots=True)
class HashGroup:
    digest: str
    size_bytes: int
    paths: list[Path]

    @property
    def duplicate_waste_bytes(self) -> int:
        return self.size_bytes * (len(self.paths) - 1)


@dataclass(slots=True)
class ScanReport:
    name_groups: list[NameGroup]
    hash_groups: list[HashGroup] | None
    empty_files: list[Path]
    files_seen: int
    files_hashed: int

    @property
    def name_only(self) -> bool:
        return self.hash_groups is None

    @property
    def issue_count(self) -> int:
        if self.hash_groups is None:
            return len(self.name_groups)
        return len(self.hash_groups)
