from __future__ import annotations

import logging

from dupscan.core.config import ScanSettings
from dupscan.scan import hasher
from dupscan.scan.grouper import candidate_groups, partition_entries, select_hash_candidates
from dupscan.scan.types import ScanReport
from dupscan.scan.walker import walk_files

logger = logging.getLogger(__name__)


class ScanService:
    def __init__(self, settings: ScanSettings):
        self._settings = settings

    def run(self) -> ScanReport:
        settings = self._settings
        partition = partition_entries(
            walk_files(settings.root),
            key_mode=settings.group_key,
            min_size=settings.min_size,
        )
        name_groups = candidate_groups(partition.groups)
        empty_paths = sorted((entry.path for entry in partition.empty_files), key=str)
        files_seen = partition.total_count

        logger.info(
            "Scanned %s: files=%d empty=%d below_min_size=%d key_groups=%d colliding=%d",
            settings.root,
            files_seen,
            len(partition.empty_files),
            partition.filtered_count,
            len(partition.groups),
            len(name_groups),
        )

        if settings.name_only:
            return ScanReport(
                name_groups=name_groups,
                hash_groups=None,
                empty_files=empty_paths,
                files_seen=files_seen,
                files_hashed=0,
            )

        candidates = select_hash_candidates(partition.groups, only_colliding=settings.hash_only_dup_names)
        table = hasher.hash_entries(candidates, chunk_bytes=settings.hash_read_chunk_bytes)
        hash_groups = hasher.duplicate_hash_groups(table)

        logger.info(
            "Hashed %d files: duplicate_groups=%d waste_bytes=%d",
            len(candidates),
            len(hash_groups),
            sum(group.duplicate_waste_bytes for group in hash_groups),
        )

        return ScanReport(
            name_groups=name_groups,
            hash_groups=hash_groups,
            empty_files=empty_paths,
            files_seen=files_seen,
            files_hashed=len(candidates),
        )
