import os
import sys

import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from vasc.cli import main


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_build_defaults(workdir, capsys):
    (workdir / "index.vasc").write_text("var x = 5;\n")
    assert main(["build"]) == 0
    assert (workdir / "tmp.vasm").read_text() == "memset 0 5 // VARIABLE : x //\n"
    assert "Wrote tmp.vasm" in capsys.readouterr().out


def test_build_named_output_without_comments(workdir):
    (workdir / "prog.vasc").write_text("var x = 5; var y = x;")
    assert main(["build", "prog.vasc", "-o", "prog.vasm", "--no-comments"]) == 0
    assert (workdir / "prog.vasm").read_text() == "memset 0 5\nmov rax 0\nmemset 1 rax\n"


def test_build_error_writes_nothing(workdir):
    (workdir / "index.vasc").write_text("var x 5;")
    with pytest.raises(SystemExit) as info:
        main(["build"])
    assert str(info.value.code).startswith("error: index.vasc:1:7: syntax error:")
    assert not (workdir / "tmp.vasm").exists()


def test_build_missing_source(workdir):
    with pytest.raises(SystemExit, match="no index.vasc found"):
        main(["build"])


def test_build_prints_warnings(workdir, capsys):
    (workdir / "index.vasc").write_text("# include std\nvar x = 1;\n")
    main(["build"])
    out = capsys.readouterr().out
    assert "Warning: index.vasc:1:1: preprocessor directive '#include std' is not evaluated" in out


def test_build_verbose(workdir, capsys):
    (workdir / "index.vasc").write_text("if (1 == 1) { }")
    main(["build", "-v"])
    out = capsys.readouterr().out
    assert "--- Tokens index.vasc ---" in out
    assert "   6 -> 7" in out
    assert "Slots: 2 allocated, 0 in use" in out


def test_run_source(workdir, capsys):
    (workdir / "prog.vasc").write_text("var x = 5; var y = x; if (1 == 2) { var z = 9; }")
    assert main(["run", "prog.vasc"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "x = 5  (slot 0)"
    assert out[1] == "y = 5  (slot 1)"
    assert out[2] == "z = <unassigned>  (slot 2)"


def test_run_vasm(workdir, capsys):
    (workdir / "prog.vasm").write_text("memset 2 4 // set //\nmov rax 2\nmemset 0 rax\n")
    assert main(["run", "prog.vasm", "-v"]) == 0
    out = capsys.readouterr().out
    assert "slot 0 = 4" in out
    assert "slot 2 = 4" in out
    assert "rax = 4" in out


def test_run_bad_vasm(workdir):
    (workdir / "prog.vasm").write_text("jump 3\n")
    with pytest.raises(SystemExit, match="unknown instruction"):
        main(["run", "prog.vasm"])


def test_unknown_operation():
    with pytest.raises(SystemExit) as info:
        main(["frobnicate"])
    assert info.value.code == 2


def test_run_nested_skipped_declaration(workdir, capsys):
    (workdir / "prog.vasc").write_text("if (1 == 1) { var a = 1; if (1 == 2) { var b = 2; } }")
    assert main(["run", "prog.vasc"]) == 0
    out = capsys.readouterr().out
    assert "a = 1  (slot 0)" in out
    assert "b = <unassigned>" in out


def test_build_undecodable_source(workdir):
    (workdir / "index.vasc").write_bytes(b"var x = 5; \xff\xfe")
    with pytest.raises(SystemExit, match="cannot read index.vasc"):
        main(["build"])
    assert not (workdir / "tmp.vasm").exists()


def test_build_directory_source(workdir):
    (workdir / "index.vasc").mkdir()
    with pytest.raises(SystemExit, match="cannot read index.vasc"):
        main(["build"])
