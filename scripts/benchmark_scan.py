from __future__ import annotations

import argparse
import os
import shutil
import time
from pathlib import Path

from dupscan.core.config import ScanSettings
from dupscan.scan.service import ScanService


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark a full duplicate scan over a generated fixture tree")
    parser.add_argument("--fixture-root", required=True, help="Directory the fixture tree is written into")
    parser.add_argument("--groups", type=int, default=2000, help="Number of duplicate groups")
    parser.add_argument("--files-per-group", type=int, default=2, help="Files per duplicate group")
    parser.add_argument("--unique-files", type=int, default=2000, help="Files with unique content")
    parser.add_argument("--file-size", type=int, default=4096, help="Bytes per generated file")
    parser.add_argument("--name-only", action="store_true", help="Benchmark the name-only path")
    parser.add_argument("--hash-only-dup-names", action="store_true", help="Hash only colliding names")
    parser.add_argument("--keep", action="store_true", help="Keep the fixture tree after the run")
    return parser.parse_args()


def seed_fixture(root: Path, *, groups: int, files_per_group: int, unique_files: int, file_size: int) -> int:
    root.mkdir(parents=True, exist_ok=True)
    written = 0
    for group_idx in range(groups):
        payload = group_idx.to_bytes(4, "little", signed=False) * max(1, file_size // 4)
        for file_idx in range(files_per_group):
            target = root / f"g{group_idx % 64}" / f"copy{file_idx}" / f"dup-{group_idx}.bin"
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(payload)
            written += 1

    for idx in range(unique_files):
        target = root / "unique" / f"u{idx % 64}" / f"unique-{idx}.bin"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(os.urandom(file_size))
        written += 1
    return written


def benchmark(settings: ScanSettings) -> tuple[int, int, float]:
    start = time.perf_counter()
    report = ScanService(settings).run()
    elapsed = time.perf_counter() - start
    return report.issue_count, report.files_hashed, elapsed


def main() -> None:
    args = parse_args()
    fixture_root = Path(args.fixture_root)
    written = seed_fixture(
        fixture_root,
        groups=args.groups,
        files_per_group=args.files_per_group,
        unique_files=args.unique_files,
        file_size=args.file_size,
    )
    settings = ScanSettings(
        root=fixture_root,
        name_only=args.name_only,
        hash_only_dup_names=args.hash_only_dup_names,
    )
    try:
        issues, hashed, elapsed = benchmark(settings)
    finally:
        if not args.keep:
            shutil.rmtree(fixture_root, ignore_errors=True)
    print(f"files={written} hashed={hashed} groups={issues} elapsed_seconds={elapsed:.3f}")


if __name__ == "__main__":
    main()
