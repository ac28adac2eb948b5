import os

import pytest

from goldsync.direct import (
    gold_filenames,
    main,
    patch_makefile,
    patch_nc_tcl,
    read_sysrtemp,
    result_file_map,
)


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("data\n", encoding="utf-8")


def test_gold_filenames_lists_regular_files_only(tmp_path):
    golds = tmp_path / "golds"
    _touch(golds / "a.v")
    _touch(golds / "b.v")
    _touch(golds / "nested" / "c.v")
    assert gold_filenames(golds) == {"a.v", "b.v"}


def test_gold_filenames_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        gold_filenames(tmp_path / "nope")


def test_result_file_map_finds_gold_files_recursively(tmp_path):
    results = tmp_path / "results"
    _touch(results / "x" / "a.v")
    _touch(results / "y" / "z" / "c.v")
    _touch(results / "other.txt")
    found = result_file_map(str(results), {"a.v", "b.v", "c.v"})
    assert set(found) == {"a.v", "c.v"}
    assert found["a.v"] == os.path.join(str(results), "x", "a.v")
    assert found["c.v"] == os.path.join(str(results), "y", "z", "c.v")


def test_result_file_map_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        result_file_map(tmp_path / "missing", {"a.v"})


def test_read_sysrtemp_returns_value(tmp_path):
    makefile = tmp_path / "Makefile"
    makefile.write_text("all:\n\techo hi\nSYSRTEMP = results/run1\n", encoding="utf-8")
    assert read_sysrtemp(makefile) == "results/run1"


def test_read_sysrtemp_requires_whole_line_match(tmp_path):
    makefile = tmp_path / "Makefile"
    makefile.write_text("  SYSRTEMP = results/run1\nOTHER = 1\n", encoding="utf-8")
    assert read_sysrtemp(makefile) is None


def test_read_sysrtemp_missing_file_gives_none(tmp_path):
    assert read_sysrtemp(tmp_path / "Makefile") is None


def test_patch_makefile_rewrites_assignment(tmp_path):
    makefile = tmp_path / "Makefile"
    makefile.write_text("A = 1\nSYSRTEMP = results/run1\nB = 2\n", encoding="utf-8")
    assert patch_makefile(makefile) is True
    assert makefile.read_text(encoding="utf-8").split("\n") == [
        "A = 1",
        "SYSRTEMP = .",
        "B = 2",
        "",
    ]


def test_patch_makefile_without_assignment_leaves_file(tmp_path):
    makefile = tmp_path / "Makefile"
    original = "A = 1\nB = 2"
    makefile.write_text(original, encoding="utf-8")
    assert patch_makefile(makefile) is False
    assert makefile.read_text(encoding="utf-8") == original


def test_patch_nc_tcl_redirects_and_appends(tmp_path):
    nc = tmp_path / "nc.tcl"
    nc.write_text(
        "set x 1\nfile copy -force ../results/run1/a.v ../dest/a.v\n"
        "file copy -force ../results/run1/q.v ../dest/q.v\n",
        encoding="utf-8",
    )
    file_map = {"a.v": "results/run1/x/a.v", "c.v": "results/run1/x/c.v"}
    assert patch_nc_tcl(nc, file_map) is True
    lines = nc.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "set x 1"
    assert lines[1] == "file copy -force ../results/run1/a.v ../"
    assert lines[2] == "file copy -force ../results/run1/q.v ../dest/q.v"
    assert lines[3] == "file copy -force ../" + file_map["c.v"] + " ../"
    assert len(lines) == 4


def test_patch_nc_tcl_with_empty_map_changes_nothing(tmp_path):
    nc = tmp_path / "nc.tcl"
    original = "file copy -force ../results/run1/a.v ../dest/a.v\n"
    nc.write_text(original, encoding="utf-8")
    assert patch_nc_tcl(nc, {}) is False
    assert nc.read_text(encoding="utf-8") == original


def test_main_patches_both_files(tmp_path, monkeypatch, capsys):
    _touch(tmp_path / "golds" / "a.v")
    _touch(tmp_path / "results" / "run1" / "sub" / "a.v")
    (tmp_path / "Makefile").write_text("SYSRTEMP = results/run1\n", encoding="utf-8")
    (tmp_path / "scripts").mkdir()
    (tmp_path / "scripts" / "nc.tcl").write_text("puts hello\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert main([]) == 0

    assert (tmp_path / "Makefile").read_text(encoding="utf-8") == "SYSRTEMP = .\n"
    expected_path = os.path.join("results/run1", "sub", "a.v")
    nc_lines = (tmp_path / "scripts" / "nc.tcl").read_text(encoding="utf-8").splitlines()
    assert nc_lines == ["puts hello", f"file copy -force ../{expected_path} ../"]
    out = capsys.readouterr().out
    assert "Refactoring complete" in out
    assert "scripts/nc.tcl" in out


def test_main_without_sysrtemp_fails(tmp_path, monkeypatch, capsys):
    (tmp_path / "golds").mkdir()
    (tmp_path / "Makefile").write_text("all:\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    assert "Could not find SYSRTEMP" in capsys.readouterr().err