"""Redirect gold file copies and ``-dump`` targets in ``scripts/nc.tcl``.

``SYSRTEMP`` is read from the Makefile and ``results/<SYSRTEMP>`` is searched
recursively for file names.  A ``file copy -force`` command whose source is a
gold file present in those results is wrapped in ``catch`` and made to copy
into ``../``.  A ``-dump`` argument inside the braces of any command is
pointed at ``../<name>``.  Finally the Makefile's ``SYSRTEMP`` is reset to
``.``.
"""

from __future__ import annotations

import argparse
import os
import re
import sys
from collections.abc import Collection

from goldsync import results as _results

GOLD_PATH = "golds"
MAKEFILE_PATH = "Makefile"
NC_PATH = "scripts/nc.tcl"
RESULTS_ROOT = "results"

_SYSRTEMP_VALUE = re.compile(r"^\s*SYSRTEMP\s*=\s*(.*)$")
_COPY_COMMAND = re.compile(r"file copy -force\s+(\S+)\s+(\S+)")
_BRACED_COMMAND = re.compile(r"^(\S[^{]*\{)([^}]*)\}")
_DUMP_ARG = re.compile(r"-dump\s+(\.\.[^}\s]+)")


def _read_lines(path: str | os.PathLike[str]) -> list[str]:
    with open(path, encoding="utf-8") as handle:
        text = handle.read()
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _write_lines(path: str | os.PathLike[str], lines: list[str]) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        handle.write("".join(f"{line}\n" for line in lines))


def _basename(path: str) -> str:
    cut = max(path.rfind("/"), path.rfind("\\"))
    return path[cut + 1 :]


def scan_filenames(base_path: str | os.PathLike[str]) -> set[str]:
    """Return the names of all regular files anywhere below ``base_path``."""
    return set(_results.scan_results(base_path))


def gold_files(gold_path: str | os.PathLike[str]) -> set[str]:
    """Return the names of the regular files directly inside ``gold_path``."""
    return _results.gold_files(gold_path)


def read_sysrtemp(makefile_path: str | os.PathLike[str]) -> str:
    """Return the value of the first ``SYSRTEMP =`` line, or ``""`` if none.

    Raises OSError if the Makefile cannot be read.
    """
    for line in _read_lines(makefile_path):
        match = _SYSRTEMP_VALUE.search(line)
        if match:
            return match.group(1)
    return ""


def update_makefile(makefile_path: str | os.PathLike[str]) -> None:
    """Rewrite every ``SYSRTEMP`` assignment in the Makefile as ``SYSRTEMP = .``."""
    _results.update_makefile(makefile_path)


def rewrite_nc_line(
    line: str, gold_files: Collection[str], result_files: Collection[str]
) -> str:
    """Return ``line`` with gold copies and ``-dump`` targets redirected to ``../``."""
    copy = _COPY_COMMAND.search(line)
    if copy:
        src = copy.group(1)
        name = _basename(src)
        if name in gold_files and name in result_files:
            return f"catch {{ file copy -force {src} ../ }}"

    braced = _BRACED_COMMAND.search(line)
    if braced:
        before_brace, inside = braced.group(1), braced.group(2)
        dump = _DUMP_ARG.search(inside)
        if dump:
            replacement = f"-dump ../{_basename(dump.group(1))}"
            new_inside = _DUMP_ARG.sub(lambda _m: replacement, inside)
            return f"{before_brace}{new_inside}}}"

    return line


def process_nc_tcl(
    nc_path: str | os.PathLike[str],
    gold_files: Collection[str],
    result_files: Collection[str],
) -> list[str]:
    """Rewrite ``nc.tcl`` line by line and return the lines written.

    Raises OSError if the script cannot be read.
    """
    lines = [
        rewrite_nc_line(line, gold_files, result_files)
        for line in _read_lines(nc_path)
    ]
    _write_lines(nc_path, lines)
    return lines


def main(argv: list[str] | None = None) -> int:
    """Update nc.tcl and the Makefile in the current directory."""
    parser = argparse.ArgumentParser(
        prog="goldsync-dumps",
        description="Redirect gold copies and dump paths in scripts/nc.tcl and reset SYSRTEMP.",
    )
    parser.parse_args(argv)

    golds = gold_files(GOLD_PATH)
    print(f"Gold files found: {len(golds)}")

    try:
        sysrtemp = read_sysrtemp(MAKEFILE_PATH)
    except OSError:
        print(f"Error: Cannot open Makefile at {MAKEFILE_PATH}", file=sys.stderr)
        sysrtemp = ""
    if not sysrtemp:
        print("Error: Could not find SYSRTEMP in Makefile.", file=sys.stderr)
        return 1

    result_files = scan_filenames(f"{RESULTS_ROOT}/{sysrtemp}")
    print(f"Result files found: {len(result_files)}")

    try:
        process_nc_tcl(NC_PATH, golds, result_files)
    except OSError:
        print(f"Error: Cannot open nc.tcl at {NC_PATH}", file=sys.stderr)

    try:
        update_makefile(MAKEFILE_PATH)
    except OSError:
        print("Error: Cannot open Makefile for update.", file=sys.stderr)

    print("✅ Done. nc.tcl and Makefile updated.")
    return 0


if __name__ == "__main__":
    sys.exit(main())