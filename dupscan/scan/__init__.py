from dupscan.scan.grouper import candidate_groups, group_key_for, partition_entries, select_hash_candidates
from dupscan.scan.hasher import HashReadError, duplicate_hash_groups, hash_entries, sha1_file
from dupscan.scan.types import FileEntry, GroupKey, GroupKeyMode, HashGroup, NameGroup, Partition, ScanReport
from dupscan.scan.walker import RootNotFoundError, walk_files

__all__ = [
    "FileEntry",
    "GroupKey",
    "GroupKeyMode",
    "HashGroup",
    "HashReadError",
    "NameGroup",
    "Partition",
    "RootNotFoundError",
    "ScanReport",
    "candidate_groups",
    "duplicate_hash_groups",
    "group_key_for",
    "hash_entries",
    "partition_entries",
    "select_hash_candidates",
    "sha1_file",
    "walk_files",
]
