"""Point a build at its gold files by patching the Makefile and ``scripts/nc.tcl``.

The ``SYSRTEMP`` directory named in the Makefile is searched for files that
also exist in ``golds/``.  Matching ``file copy`` commands in ``nc.tcl`` are
redirected to ``../``, missing ones are appended, and ``SYSRTEMP`` is reset
to ``.``.
"""

from __future__ import annotations

import argparse
import os
import re
import sys
from collections.abc import Collection, Iterator, Mapping

GOLDS_PATH = "golds"
MAKEFILE_PATH = "Makefile"
NC_TCL_PATH = "scripts/nc.tcl"

_SYSRTEMP_VALUE = re.compile(r"SYSRTEMP\s*=\s*(.+)")
_COPY_LINE = re.compile(r"file copy -force\s+\.\./.+?/([^/\s]+)\s+\.\./.+")


def _read_lines(path: str | os.PathLike[str]) -> list[str]:
    """Return the lines of a text file, or no lines if it does not exist."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except FileNotFoundError:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _write_lines(path: str | os.PathLike[str], lines: list[str]) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        handle.write("".join(f"{line}\n" for line in lines))


def _walk_files(root: str | os.PathLike[str]) -> Iterator[os.DirEntry[str]]:
    """Yield every regular file below ``root`` without following directory links."""
    with os.scandir(root) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                yield from _walk_files(entry.path)
            elif entry.is_file():
                yield entry


def gold_filenames(golds_path: str | os.PathLike[str]) -> set[str]:
    """Return the names of the regular files directly inside ``golds_path``."""
    with os.scandir(golds_path) as entries:
        return {entry.name for entry in entries if entry.is_file()}


def result_file_map(
    results_path: str | os.PathLike[str], gold_files: Collection[str]
) -> dict[str, str]:
    """Map each gold filename found below ``results_path`` to its path.

    When a name occurs more than once, the last one visited wins.
    """
    return {
        entry.name: entry.path
        for entry in _walk_files(results_path)
        if entry.name in gold_files
    }


def read_sysrtemp(makefile_path: str | os.PathLike[str]) -> str | None:
    """Return the value of the first ``SYSRTEMP = ...`` line, or None."""
    for line in _read_lines(makefile_path):
        match = _SYSRTEMP_VALUE.fullmatch(line)
        if match:
            return match.group(1)
    return None


def patch_makefile(makefile_path: str | os.PathLike[str]) -> bool:
    """Rewrite every ``SYSRTEMP`` assignment as ``SYSRTEMP = .``.

    Returns True if any assignment was found (and the file rewritten).
    """
    lines = _read_lines(makefile_path)
    patched = [
        "SYSRTEMP = ." if _SYSRTEMP_VALUE.fullmatch(line) else line for line in lines
    ]
    modified = any(_SYSRTEMP_VALUE.fullmatch(line) for line in lines)
    if modified:
        _write_lines(makefile_path, patched)
    return modified


def patch_nc_tcl(
    nc_tcl_path: str | os.PathLike[str], file_map: Mapping[str, str]
) -> bool:
    """Redirect gold ``file copy`` commands to ``../`` and append missing ones.

    Returns True if the file content changed (and was rewritten).
    """
    handled: set[str] = set()
    modified = False
    output: list[str] = []

    for line in _read_lines(nc_tcl_path):
        match = _COPY_LINE.search(line)
        if match and match.group(1) in file_map:
            handled.add(match.group(1))
            new_line = line[: line.rfind(" ")] + " ../"
            modified = modified or new_line != line
            output.append(new_line)
        else:
            output.append(line)

    for filename, full_path in file_map.items():
        if filename not in handled:
            output.append(f"file copy -force ../{full_path} ../")
            modified = True

    if modified:
        _write_lines(nc_tcl_path, output)
    return modified


def main(argv: list[str] | None = None) -> int:
    """Patch the Makefile and nc.tcl in the current directory."""
    parser = argparse.ArgumentParser(
        prog="goldsync-direct",
        description="Redirect gold file copies in scripts/nc.tcl and reset SYSRTEMP.",
    )
    parser.parse_args(argv)

    try:
        golds = gold_filenames(GOLDS_PATH)
        sysrtemp = read_sysrtemp(MAKEFILE_PATH)
        if not sysrtemp:
            print("❌ Error: Could not find SYSRTEMP in Makefile.", file=sys.stderr)
            return 1
        file_map = result_file_map(sysrtemp, golds)
        nc_changed = patch_nc_tcl(NC_TCL_PATH, file_map)
        makefile_changed = patch_makefile(MAKEFILE_PATH)
    except OSError as exc:
        print(f"❌ Error: {exc}", file=sys.stderr)
        return 1

    if not nc_changed and not makefile_changed:
        print("✅ All files already up to date. No changes made.")
    else:
        print("✅ Refactoring complete. Files updated:")
        if nc_changed:
            print(f" - {NC_TCL_PATH}")
        if makefile_changed:
            print(f" - {MAKEFILE_PATH}")
    return 0


if __name__ == "__main__":
    sys.exit(main())