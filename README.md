# goldsync

Command-line helpers that change a simulation project so that it copies its
result files from a local tree and no longer from the location named by
`SYSRTEMP`.

Run each command from the project root. The root is expected to contain:

- `golds/`: the reference ("gold") files. Only regular files directly in
  this directory count.
- `Makefile`: with a `SYSRTEMP = <path>` line.
- `scripts/nc.tcl`: the Tcl script that holds the `file copy -force ...`
  commands.

Every command rewrites each `SYSRTEMP` assignment in the Makefile to
`SYSRTEMP = .` and edits `scripts/nc.tcl` in place.

## Installation

```
pip install .
```

## Commands

No command takes options other than `-h/--help`.

### `goldsync`

Reads the first `SYSRTEMP = <path>` line of the Makefile. If there is none,
it prints an error and exits with status 1. It also exits with status 1 if
`golds/` or the `SYSRTEMP` directory cannot be read. The `SYSRTEMP`
directory, taken relative to the current directory, is searched recursively
for files whose names match a gold file. If a name occurs more than once,
the last file visited is used. The command then:

- cuts each matching `file copy -force ../<dir>/<name> ../<dest>` line at
  its last space and ends it with `../`,
- appends `file copy -force ../<path> ../` for every matched file that had
  no copy command yet.

A file is written only when its content changes. The command lists the
files it updated, or says that everything was already up to date.

```
goldsync
```

### `goldsync-results`

Scans `results/` recursively. Each file name is mapped to the first path
found for it. That path is written relative to `scripts/`: `../` is put in
front of it and a leading `results/` is removed. The command logs a
`[DEBUG]` report of which gold files were found and then appends
`catch { file copy -force <path> ../ }` for every gold file that is in the
results and that `nc.tcl` does not copy yet. A gold file counts as copied
when a `file copy -force <src> <dest>` line already has a source with the
same base name. Folders that cannot be opened are reported as warnings and
skipped. The exit status is always 0.

```
goldsync-results
```

### `goldsync-dumps`

Reads `SYSRTEMP` from the Makefile and exits with status 1 if it is missing
or empty. It then scans `results/<SYSRTEMP>` recursively for file names and
rewrites `nc.tcl` line by line:

- a `file copy -force <src> <dest>` line whose source name is a gold file
  that was also found in the results becomes
  `catch { file copy -force <src> ../ }`,
- in any other line of the form `<command> { ... }`, a `-dump ..<path>`
  argument inside the braces becomes `-dump ../<name>`.

```
goldsync-dumps
```

## Using it from Python

Each step is also available as a function:

- `goldsync.direct`: `gold_filenames`, `result_file_map`, `read_sysrtemp`,
  `patch_makefile`, `patch_nc_tcl`, `main`
- `goldsync.results`: `scan_results`, `gold_files`, `update_makefile`,
  `process_nc_tcl` (returns the lines it appended), `main`
- `goldsync.dumps`: `scan_filenames`, `gold_files`, `read_sysrtemp`,
  `update_makefile`, `rewrite_nc_line`, `process_nc_tcl` (returns the lines
  it wrote), `main`

```python
from goldsync.direct import gold_filenames, result_file_map, patch_nc_tcl

golds = gold_filenames("golds")
file_map = result_file_map("some/results/dir", golds)
changed = patch_nc_tcl("scripts/nc.tcl", file_map)
```

## What it does not do

The commands only edit text files. They do not copy any files, and they do
not run `make` or the Tcl script. They keep no backup of the files they
rewrite, and their paths (`golds`, `results`, `Makefile`, `scripts/nc.tcl`)
cannot be changed.

## Running the tests

```
pip install .[test]
pytest
```