from __future__ import annotations

import csv
import io
from pathlib import Path

from dupscan.report.types import OutputFormat
from dupscan.scan.types import GroupKey, ScanReport

INDENT = "    "


def _name_group_header(key: GroupKey) -> str:
    if key.size is None:
        return f"{key.name}:"
    return f"{key.name} ({key.size} B):"


def _append_paths(lines: list[str], paths: list[Path]) -> None:
    lines.extend(f"{INDENT}{path}" for path in paths)


def render_console(report: ScanReport, *, list_empty: bool = True) -> str:
    lines = [f"{report.issue_count} issues found:"]

    if report.hash_groups is None:
        for group in report.name_groups:
            lines.append(_name_group_header(group.key))
            _append_paths(lines, group.paths)
            lines.append("")
    else:
        for group in report.hash_groups:
            lines.append(f"{group.digest}:")
            _append_paths(lines, group.paths)
            lines.append("")

    if list_empty:
        lines.append(f"{len(report.empty_files)} empty files:")
        _append_paths(lines, report.empty_files)

    return "\n".join(lines) + "\n"


def render_csv(report: ScanReport) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    if report.hash_groups is None:
        for group in report.name_groups:
            size_field = "" if group.key.size is None else str(group.key.size)
            writer.writerow([group.key.name, size_field, *(str(path) for path in group.paths)])
    else:
        for group in report.hash_groups:
            writer.writerow([group.digest, *(str(path) for path in group.paths)])
    return buffer.getvalue()


def render_report(report: ScanReport, *, output_format: OutputFormat, list_empty: bool = True) -> str:
    """Render the whole report up front; callers write it in a single call."""
    if output_format == OutputFormat.CSV:
        return render_csv(report)
    return render_console(report, list_empty=list_empty)

