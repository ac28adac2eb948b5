"""Append missing gold ``file copy`` commands to ``scripts/nc.tcl`` from ``results/``.

Every regular file below ``results/`` is recorded under its name (first one
found wins) as a path relative to the script directory.  Gold files that are
present in the results but not yet copied by ``nc.tcl`` get a guarded copy
command appended, and the Makefile's ``SYSRTEMP`` is reset to ``.``.
"""

from __future__ import annotations

import argparse
import logging
import os
import re
import stat
import sys
from collections.abc import Collection, Iterator, Mapping

GOLD_PATH = "golds"
RESULTS_PATH = "results"
NC_PATH = "scripts/nc.tcl"
MAKEFILE_PATH = "Makefile"

logger = logging.getLogger(__name__)

_SYSRTEMP_ASSIGNMENT = re.compile(r"^\s*SYSRTEMP\s*=")
_COPY_COMMAND = re.compile(r"file copy -force\s+(\S+)\s+(\S+)")
_RESULTS_PREFIX = "results/"


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


def _listdir(path: str, what: str) -> list[str]:
    try:
        return sorted(os.listdir(path))
    except OSError:
        logger.warning("Cannot open %s: %s", what, path)
        return []


def _stat_mode(path: str) -> int | None:
    try:
        return os.stat(path).st_mode
    except OSError:
        return None


def _iter_regular_files(base: str) -> Iterator[tuple[str, str]]:
    """Yield (name, full path) for every regular file below ``base``."""
    for name in _listdir(base, "directory"):
        full_path = f"{base}/{name}"
        mode = _stat_mode(full_path)
        if mode is None:
            continue
        if stat.S_ISDIR(mode):
            yield from _iter_regular_files(full_path)
        elif stat.S_ISREG(mode):
            yield name, full_path


def _script_relative(full_path: str) -> str:
    rel = full_path.replace("\\", "/")
    if rel.startswith(_RESULTS_PREFIX):
        rel = rel[len(_RESULTS_PREFIX) :]
    return "../" + rel


def scan_results(base_path: str | os.PathLike[str]) -> dict[str, str]:
    """Map each filename below ``base_path`` to its path as seen from ``scripts/``.

    The first file found with a given name wins; unreadable directories are
    reported and skipped.
    """
    found: dict[str, str] = {}
    for name, full_path in _iter_regular_files(os.fspath(base_path)):
        if name not in found:
            found[name] = _script_relative(full_path)
    return found


def gold_files(gold_path: str | os.PathLike[str]) -> set[str]:
    """Return the names of the regular files directly inside ``gold_path``."""
    base = os.fspath(gold_path)
    return {
        name
        for name in _listdir(base, "golds folder")
        if (mode := _stat_mode(f"{base}/{name}")) is not None and stat.S_ISREG(mode)
    }


def update_makefile(makefile_path: str | os.PathLike[str]) -> None:
    """Rewrite every ``SYSRTEMP`` assignment in the Makefile as ``SYSRTEMP = .``."""
    lines = []
    for line in _read_lines(makefile_path):
        if _SYSRTEMP_ASSIGNMENT.search(line):
            logger.debug("Updating SYSRTEMP line: %s -> SYSRTEMP = .", line)
            lines.append("SYSRTEMP = .")
        else:
            lines.append(line)
    _write_lines(makefile_path, lines)


def process_nc_tcl(
    nc_path: str | os.PathLike[str],
    gold_files: Collection[str],
    result_paths: Mapping[str, str],
) -> list[str]:
    """Append copy commands for gold files not yet copied by ``nc.tcl``.

    Returns the lines that were appended.
    """
    lines = _read_lines(nc_path)
    already_copied = {
        _basename(match.group(1))
        for match in map(_COPY_COMMAND.search, lines)
        if match
    }

    logger.debug("Gold files count: %d", len(gold_files))
    logger.debug("Files found in results: %d", len(result_paths))
    logger.debug("Golds that will be checked:")
    for gold in sorted(gold_files):
        if gold in result_paths:
            state = "already copied" if gold in already_copied else "will append"
            logger.debug("  ✅ Found in results: %s -> %s (%s)", gold, result_paths[gold], state)
        else:
            logger.debug("  ❌ NOT found in results: %s", gold)

    appended = []
    for gold in sorted(gold_files):
        if gold in result_paths and gold not in already_copied:
            logger.debug("Appending: %s", result_paths[gold])
            appended.append(f"catch {{ file copy -force {result_paths[gold]} ../ }}")

    _write_lines(nc_path, lines + appended)
    logger.debug("nc.tcl write complete.")
    return appended


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def _console_handlers() -> list[logging.Handler]:
    formatter = logging.Formatter("[%(levelname)s] %(message)s")
    out = logging.StreamHandler(sys.stdout)
    out.addFilter(_BelowWarning())
    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.WARNING)
    for handler in (out, err):
        handler.setFormatter(formatter)
    return [out, err]


def main(argv: list[str] | None = None) -> int:
    """Update nc.tcl and the Makefile in the current directory."""
    parser = argparse.ArgumentParser(
        prog="goldsync-results",
        description="Append missing gold file copies to scripts/nc.tcl and reset SYSRTEMP.",
    )
    parser.parse_args(argv)

    handlers = _console_handlers()
    previous_level = logger.level
    logger.setLevel(logging.DEBUG)
    for handler in handlers:
        logger.addHandler(handler)
    try:
        logger.debug("Scanning golds folder...")
        golds = gold_files(GOLD_PATH)
        logger.debug("Scanning results folder recursively...")
        result_paths = scan_results(RESULTS_PATH)
        try:
            process_nc_tcl(NC_PATH, golds, result_paths)
        except OSError:
            logger.warning("Cannot open nc.tcl at %s", NC_PATH)
        try:
            update_makefile(MAKEFILE_PATH)
        except OSError:
            logger.warning("Cannot open Makefile for update.")
        print("✅ Done. Check output above.")
    finally:
        for handler in handlers:
            logger.removeHandler(handler)
        logger.setLevel(previous_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())