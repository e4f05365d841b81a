from __future__ import annotations

from pspgf import cli


def test_output_name() -> None:
    assert cli.get_output_name(None, "figs/plot.eps") == "figs/plot.pgf"
    assert cli.get_output_name("out.tex", "plot.eps") == "out.tex"


def test_converts_a_file(tmp_path) -> None:
    source = tmp_path / "square.eps"
    source.write_bytes(b"%!PS\n0 0 72 72 rectfill\n")
    assert cli.main([str(source)]) == 0
    text = (tmp_path / "square.pgf").read_text(encoding="utf-8")
    assert "\\pgfusepath{fill}" in text


def test_writes_to_standard_output(tmp_path, capsys) -> None:
    source = tmp_path / "line.ps"
    source.write_bytes(b"0 0 moveto 72 0 lineto stroke")
    assert cli.main(["-o", "-", str(source)]) == 0
    assert "\\begin{pgfpicture}" in capsys.readouterr().out


def test_missing_input_file(tmp_path, capsys) -> None:
    assert cli.main([str(tmp_path / "missing.eps")]) == 1
    assert "Cannot read" in capsys.readouterr().err


def test_postscript_error_is_reported(tmp_path, capsys) -> None:
    source = tmp_path / "bad.ps"
    source.write_bytes(b"1 0 div")
    output = tmp_path / "bad.pgf"
    assert cli.main(["-o", str(output), str(source)]) == 1
    assert "undefinedresult" in capsys.readouterr().err
    assert output.read_text(encoding="utf-8").rstrip().endswith("\\end{pgfpicture}")
