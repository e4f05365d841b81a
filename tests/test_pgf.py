from __future__ import annotations

import io
import re
import struct

import pytest

from pspgf import converter
from pspgf.core import error as ps_error
from pspgf.devices.pgf.pgf import PGFDevice, fmt, tex_escape


def convert(source: str, **kwargs) -> str:
    out = io.StringIO()
    converter.convert(source.encode("latin-1"), out, stdout=io.StringIO(), **kwargs)
    return out.getvalue()


def test_picture_header_and_footer() -> None:
    text = convert("")
    lines = text.splitlines()
    assert lines[0].startswith("% Created by pspgf")
    assert lines[1] == "\\begin{pgfpicture}"
    assert lines[-1] == "\\end{pgfpicture}"


def test_creator_comes_from_the_system_parameters() -> None:
    text = convert("", system_params={"Creator": "figures"})
    assert text.startswith("% Created by figures\n")


def test_stroke_writes_path_and_line_width_once() -> None:
    text = convert("0 0 moveto 72 0 lineto stroke 0 36 moveto 72 36 lineto stroke")
    assert "\\pgfpathmoveto{\\pgfpoint{0cm}{0cm}}" in text
    assert "\\pgfpathlineto{\\pgfpoint{2.54cm}{0cm}}" in text
    assert "\\pgfpathmoveto{\\pgfpoint{0cm}{1.27cm}}" in text
    assert text.count("\\pgfsetlinewidth{0.3528mm}") == 1
    assert text.count("\\pgfusepath{stroke}") == 2


def test_line_width_is_written_again_after_a_change() -> None:
    text = convert("0 0 moveto 72 0 lineto stroke 2 setlinewidth 0 0 moveto 72 0 lineto stroke")
    assert "\\pgfsetlinewidth{0.3528mm}" in text
    assert "\\pgfsetlinewidth{0.7056mm}" in text


def test_fill_and_eofill() -> None:
    text = convert("0 0 moveto 72 0 lineto 0 72 lineto closepath fill "
                   "0 0 moveto 72 0 lineto 0 72 lineto eofill")
    assert "\\pgfpathclose" in text
    assert "\\pgfusepath{fill}" in text
    assert "\\pgfseteorule\\pgfusepath{fill}\\pgfsetnonzerorule" in text


def test_trailing_moveto_is_not_written() -> None:
    text = convert("0 0 moveto 72 0 lineto 72 72 lineto closepath stroke")
    assert text.count("\\pgfpathmoveto") == 1


def test_dash_pattern() -> None:
    text = convert("[3 1] 0 setdash 0 0 moveto 72 0 lineto stroke")
    assert "\\pgfsetdash{{0.106cm}{0.035cm}}{0cm}" in text

    text = convert("[2] 0 setdash 0 0 moveto 72 0 lineto stroke")
    assert "\\pgfsetdash{{0.071cm}{0.071cm}}{0cm}" in text


def test_colors() -> None:
    text = convert("1 0 0 setrgbcolor 0.5 setgray 0 0 0 1 setcmykcolor")
    assert "\\definecolor{pspgf_color}{rgb}{1,0,0}" in text
    assert "\\definecolor{pspgf_color}{gray}{0.5}" in text
    assert "\\definecolor{pspgf_color}{cmyk}{0,0,0,1}" in text
    assert "\\pgfsetstrokecolor{pspgf_color}\\pgfsetfillcolor{pspgf_color}" in text


def test_line_cap_and_join() -> None:
    text = convert("1 setlinecap 2 setlinecap 2 setlinejoin 5 setmiterlimit")
    assert "\\pgfsetroundcap" in text
    assert "\\pgfsetrectcap" in text
    assert "\\pgfsetbeveljoin" in text
    assert "\\pgfsetmiterlimit{5}" in text


def test_gsave_becomes_a_scope() -> None:
    text = convert("gsave 1 0 0 setrgbcolor grestore")
    assert text.count("\\begin{pgfscope}") == text.count("\\end{pgfscope}") == 1


def test_open_scopes_are_closed_at_the_end() -> None:
    text = convert("gsave gsave 0 0 moveto 72 0 lineto stroke")
    assert text.count("\\begin{pgfscope}") == text.count("\\end{pgfscope}") == 2
    assert text.rstrip().endswith("\\end{pgfpicture}")


def test_clip() -> None:
    text = convert("0 0 72 72 rectclip")
    assert "\\pgfusepath{clip}" in text


def test_text_output() -> None:
    text = convert("/Helvetica findfont 72 scalefont setfont 72 72 moveto (a_b) show")
    assert "\\pgftext[base,left,x=2.54cm,y=2.54cm]" in text
    assert "\\fontsize{72.27}{86.72}" in text
    assert "\\selectfont{a\\_b}}" in text


def test_rotated_text() -> None:
    text = convert("/Helvetica findfont 10 scalefont setfont 90 rotate 0 0 moveto (x) show")
    assert "rotate=90" in text


def test_radial_shading() -> None:
    text = convert("""
        << /ShadingType 3 /ColorSpace /DeviceGray /Coords [0 0 0 0 0 72]
           /Function << /FunctionType 2 /Domain [0 1] /C0 [0] /C1 [1] /N 1 >>
        >> shfill
    """)
    assert "\\pgfdeclareradialshading{pspgf_shading}{\\pgfpoint{0cm}{0cm}}" in text
    assert "{rgb(0cm)=(0,0,0);rgb(2.54cm)=(1,1,1)}" in text
    assert "\\pgflowlevelobj{\\pgftransformshift{\\pgfpoint{0cm}{0cm}}}{\\pgfuseshading{pspgf_shading}}" in text
    assert text.count("\\begin{pgfscope}") == 1


def test_extended_shading_is_centered_on_the_outermost_circle() -> None:
    text = convert("""
        << /ShadingType 3 /ColorSpace /DeviceGray /Coords [0 0 0 100 0 10] /Extend [false true]
           /Function << /FunctionType 2 /Domain [0 1] /C0 [0] /C1 [1] /N 1 >>
        >> shfill
    """)
    inner = re.search(r"\\pgfdeclareradialshading\{pspgf_shading\}\{\\pgfpoint\{([-\d.]+)cm\}\{([-\d.]+)cm\}\}", text)
    shift = re.search(r"\\pgftransformshift\{\\pgfpoint\{([-\d.]+)cm\}\{([-\d.]+)cm\}\}", text)
    inner_x, inner_y = (float(v) for v in inner.groups())
    shift_x, shift_y = (float(v) for v in shift.groups())
    # the outer circle of the Coords sits at 100pt, 3.528cm
    assert shift_x > 3.528
    assert inner_x == pytest.approx(-shift_x, abs=0.002)
    assert inner_y == shift_y == 0
    assert text.count("rgb(") == 3


def test_bounding_box_comment() -> None:
    text = convert("%!PS-Adobe-3.0 EPSF-3.0\n%%BoundingBox: 0 0 72 36\n")
    assert "\\pgfpathrectangle{\\pgfpoint{0cm}{0cm}}{\\pgfpoint{2.54cm}{1.27cm}}" in text
    assert "\\pgfusepath{use as bounding box}" in text


def test_find_bounding_box() -> None:
    assert converter.find_bounding_box(b"%!\n%%BoundingBox: -1 2 30.5 40\n") == (-1.0, 2.0, 30.5, 40.0)
    assert converter.find_bounding_box(b"%!\n%%BoundingBox: (atend)\n") is None
    assert converter.find_bounding_box(b"") is None


def test_strip_dos_header() -> None:
    body = b"%!PS\n0 0 moveto\n"
    header = converter.DOS_EPS_MAGIC + struct.pack("<II", 30, len(body))
    data = header + b"\0" * (30 - len(header)) + body + b"TIFF preview"
    assert converter.strip_dos_header(data) == body
    assert converter.strip_dos_header(body) == body


def test_output_is_complete_after_an_error() -> None:
    out = io.StringIO()
    with pytest.raises(ps_error.PSError) as info:
        converter.convert(b"0 0 moveto 72 0 lineto stroke nosuchop", out, stdout=io.StringIO())
    assert info.value.code == ps_error.UNDEFINED
    assert "\\pgfusepath{stroke}" in out.getvalue()
    assert out.getvalue().rstrip().endswith("\\end{pgfpicture}")


def test_conversions_do_not_share_state() -> None:
    convert("/x 1 def 5 setlinewidth")
    with pytest.raises(ps_error.PSError) as info:
        convert("x")
    assert info.value.code == ps_error.UNDEFINED


def test_number_format() -> None:
    assert fmt(1.5, 3) == "1.5"
    assert fmt(2.0, 3) == "2"
    assert fmt(-0.0001, 3) == "0"
    assert fmt(0.12345, 3) == "0.123"


def test_tex_escape() -> None:
    assert tex_escape("50% & $x$ {a}") == "50\\% \\& \\$x\\$ \\{a\\}"
    assert tex_escape("a\\b") == "a\\textbackslash{}b"


def test_debugging_marks() -> None:
    out = io.StringIO()
    device = PGFDevice(out)
    device.draw_dot(10000.0, 0.0)
    device.draw_rect(0.0, 0.0, 10000.0, 20000.0)
    text = out.getvalue()
    assert "\\pgfpathcircle{\\pgfpoint{1cm}{0cm}}{0.5pt}" in text
    assert "\\pgfpathrectangle{\\pgfpoint{0cm}{0cm}}{\\pgfpoint{1cm}{2cm}}" in text
    assert device.scope_depth == 0


def test_convert_file(tmp_path) -> None:
    source = tmp_path / "in.eps"
    target = tmp_path / "out.pgf"
    source.write_bytes(b"0 0 72 72 rectstroke")
    converter.convert_file(str(source), str(target), stdout=io.StringIO())
    assert "\\pgfusepath{stroke}" in target.read_text(encoding="utf-8")
