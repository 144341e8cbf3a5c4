from __future__ import annotations

import csv
import hashlib
import io
import logging
import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

import dupscan.scan.hasher as hasher_module
from dupscan import __version__
from dupscan.cli import EXIT_OK, EXIT_READ_ERROR, EXIT_USAGE, main, parse_bool
from dupscan.scan.hasher import HashReadError


@pytest.fixture(autouse=True)
def reset_dupscan_logger() -> Iterator[None]:
    yield
    package_logger = logging.getLogger("dupscan")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


def make_tree(root: Path, files: dict[str, bytes]) -> Path:
    for relative_path, payload in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)
    return root


def test_cli_console_hash_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = make_tree(
        tmp_path / "tree",
        {
            "a/x.txt": b"duplicate",
            "b/x.txt": b"duplicate",
            "c/y.txt": b"unrelated",
            "d/empty.txt": b"",
        },
    )

    exit_code = main([str(root)])
    captured = capsys.readouterr()

    digest = hashlib.sha1(b"duplicate").hexdigest()
    assert exit_code == EXIT_OK
    assert captured.out == (
        "1 issues found:\n"
        f"{digest}:\n"
        f"    {root / 'a' / 'x.txt'}\n"
        f"    {root / 'b' / 'x.txt'}\n"
        "\n"
        "1 empty files:\n"
        f"    {root / 'd' / 'empty.txt'}\n"
    )
    assert "y.txt" not in captured.out


def test_cli_csv_name_only_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = make_tree(
        tmp_path / "tree",
        {
            "a/x.txt": b"0123456789",
            "b/x.txt": b"9876543210",
            "c/x.txt": b"0" * 20,
        },
    )

    exit_code = main([str(root), "--format", "csv", "--name-only"])
    captured = capsys.readouterr()

    rows = list(csv.reader(io.StringIO(captured.out)))
    assert exit_code == EXIT_OK
    assert rows == [["x.txt", "10", str(root / "a" / "x.txt"), str(root / "b" / "x.txt")]]


def test_cli_name_key_groups_across_sizes(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = make_tree(tmp_path / "tree", {"a/x.txt": b"0" * 10, "b/x.txt": b"0" * 20})

    main([str(root), "-n"])
    by_name_size = capsys.readouterr().out
    main([str(root), "-n", "--key", "name"])
    by_name = capsys.readouterr().out

    assert by_name_size.startswith("0 issues found:\n")
    assert by_name.startswith("1 issues found:\nx.txt:\n")


def test_cli_list_empty_accepts_explicit_boolean(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = make_tree(tmp_path / "tree", {"blank.txt": b""})

    main([str(root), "--list-empty=false"])
    hidden = capsys.readouterr().out
    main([str(root), "--list-empty"])
    shown = capsys.readouterr().out

    assert hidden == "0 issues found:\n"
    assert "1 empty files:" in shown


def test_cli_defaults_to_current_directory(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    make_tree(tmp_path, {"a/dup.bin": b"xyz", "b/dup.bin": b"xyz"})
    monkeypatch.chdir(tmp_path)

    exit_code = main([])
    output = capsys.readouterr().out

    assert exit_code == EXIT_OK
    assert output.startswith("1 issues found:\n")
    assert "a/dup.bin" in output


def test_cli_min_size_filters_small_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = make_tree(tmp_path / "tree", {"a/s.txt": b"ab", "b/s.txt": b"ab"})

    main([str(root), "--min-size", "3"])

    assert capsys.readouterr().out.startswith("0 issues found:\n")


def test_cli_missing_root_exits_without_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main([str(tmp_path / "missing")])
    captured = capsys.readouterr()

    assert exit_code == EXIT_USAGE
    assert captured.out == ""
    assert "does not exist" in captured.err


def test_cli_read_failure_exits_without_partial_report(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    root = make_tree(tmp_path / "tree", {"a/x.txt": b"data", "b/x.txt": b"data"})

    def failing_sha1(path: Path, chunk_bytes: int = 0) -> str:
        raise HashReadError(f"Cannot read {path}: Permission denied")

    monkeypatch.setattr(hasher_module, "sha1_file", failing_sha1)

    exit_code = main([str(root)])
    captured = capsys.readouterr()

    assert exit_code == EXIT_READ_ERROR
    assert captured.out == ""
    assert "Permission denied" in captured.err


@pytest.mark.parametrize(
    "argv",
    [
        ["--min-size", "-5"],
        ["--chunk-size", "0"],
        ["--name-only", "--hash-only-dup-names"],
        ["--format", "xml"],
        ["--list-empty=maybe"],
    ],
)
def test_cli_rejects_invalid_arguments(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)

    assert excinfo.value.code == EXIT_USAGE
    assert capsys.readouterr().out == ""


def test_cli_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("YES", True), ("1", True), ("off", False), ("False", False), ("0", False)],
)
def test_parse_bool(raw: str, expected: bool) -> None:
    assert parse_bool(raw) is expected


def test_cli_no_list_empty_before_root(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = make_tree(tmp_path / "tree", {"blank.txt": b""})

    exit_code = main(["--no-list-empty", str(root)])

    assert exit_code == EXIT_OK
    assert capsys.readouterr().out == "0 issues found:\n"


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="needs a filesystem that accepts arbitrary name bytes")
def test_cli_reports_filenames_that_are_not_valid_utf8(
    tmp_path: Path,
    capsysbinary: pytest.CaptureFixture[bytes],
) -> None:
    root = tmp_path / "tree"
    for directory in ("a", "b"):
        target_dir = os.fsencode(root / directory)
        os.makedirs(target_dir, exist_ok=True)
        with open(os.path.join(target_dir, b"caf\xe9.txt"), "wb") as handle:
            handle.write(b"same bytes")

    exit_code = main([str(root)])
    captured = capsysbinary.readouterr()

    assert exit_code == EXIT_OK
    assert captured.out.startswith(b"1 issues found:\n")
    assert captured.out.count(b"caf\xe9.txt") == 2
    assert b"empty files" in captured.out
