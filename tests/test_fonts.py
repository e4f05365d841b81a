from __future__ import annotations

import pytest

from conftest import run, values
from pspgf.core import error as ps_error
from pspgf.core import types as ps
from pspgf.core.font_metrics import BuiltinFontMetrics


def test_show_places_text_at_the_current_point(ctxt, device) -> None:
    run(ctxt, "/Helvetica findfont 12 scalefont setfont 0 0 moveto (A) show currentpoint")
    (call,) = device.of("show")
    _, text, position, angle, fontsize, anchor = call
    assert text == "A"
    assert position == pytest.approx((0.0, 0.0))
    assert angle == pytest.approx(0.0)
    assert fontsize == pytest.approx(12.0)
    assert anchor == "Bl"
    # the current point moved by the width of "A" (667/1000 em)
    assert values(ctxt) == pytest.approx([12 * 0.667, 0.0])


def test_show_follows_the_ctm(ctxt, device) -> None:
    run(ctxt, "/Helvetica findfont 10 scalefont setfont 100 50 translate 90 rotate 2 2 scale 0 0 moveto (Hi) show")
    (call,) = device.of("show")
    _, text, position, angle, fontsize, _ = call
    assert text == "Hi"
    assert position == pytest.approx((100.0, 50.0))
    assert angle == pytest.approx(90.0)
    assert fontsize == pytest.approx(20.0)


def test_stringwidth(ctxt) -> None:
    run(ctxt, "/Helvetica findfont 10 scalefont setfont (AB) stringwidth")
    assert values(ctxt) == pytest.approx([13.34, 0.0])

    run(ctxt, "clear /Courier findfont 10 scalefont setfont (AB) stringwidth")
    assert values(ctxt) == pytest.approx([12.0, 0.0])


def test_currentfont_defaults_to_helvetica(ctxt) -> None:
    run(ctxt, "currentfont /FontName get")
    assert values(ctxt) == [b"Helvetica"]


def test_scalefont_and_makefont_leave_the_original_alone(ctxt) -> None:
    run(ctxt, """
        /Helvetica findfont dup 5 scalefont /FontMatrix get 0 get
        exch dup [2 0 0 4 0 0] makefont /FontMatrix get 3 get
        exch /FontMatrix get 0 get
    """)
    assert values(ctxt) == pytest.approx([0.005, 0.004, 0.001])


def test_findfont_returns_the_same_font(ctxt) -> None:
    run(ctxt, "/Times-Roman findfont /Times-Roman findfont eq")
    assert values(ctxt) == [True]


def test_definefont_registers_a_font(ctxt) -> None:
    run(ctxt, """
        /MyFont << /FontMatrix [0.001 0 0 0.001 0 0] >> definefont pop
        /MyFont findfont dup /FontName get exch /Encoding known
    """)
    assert values(ctxt) == [b"MyFont", True]
    assert ctxt.font_directory.get(ps.Name(b"MyFont")).TYPE == ps.T_FONT


def test_definefont_needs_a_font_matrix(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "/Bad << /FontType 1 >> definefont")
    assert info.value.code == ps_error.INVALIDFONT


def test_ashow_adds_spacing_per_character(ctxt, device) -> None:
    run(ctxt, "/Courier findfont 10 scalefont setfont 0 0 moveto 2 1 (abc) ashow currentpoint")
    assert len(device.of("show")) == 1
    assert device.of("show")[0][1] == "abc"
    assert values(ctxt) == pytest.approx([18.0 + 6.0, 3.0])


def test_show_without_a_current_point(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "(x) show")
    assert info.value.code == ps_error.NOCURRENTPOINT


def test_show_requires_a_string(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "0 0 moveto 42 show")
    assert info.value.code == ps_error.TYPECHECK


def test_setfont_requires_a_dictionary(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "(Helvetica) setfont")
    assert info.value.code == ps_error.TYPECHECK


def test_font_is_part_of_the_graphics_state(ctxt) -> None:
    run(ctxt, """
        /Helvetica findfont 10 scalefont setfont
        gsave /Helvetica findfont 30 scalefont setfont grestore
        currentfont /FontMatrix get 0 get
    """)
    assert values(ctxt) == pytest.approx([0.01])


def test_builtin_metrics() -> None:
    metrics = BuiltinFontMetrics({b"Custom": {"a": 400}})
    assert metrics.char_width(b"Helvetica-Bold", "A") == 667.0
    assert metrics.char_width(b"Courier-Oblique", "A") == 600.0
    assert metrics.char_width(b"Custom", "a") == 400.0
    assert metrics.char_width(b"Helvetica", ".notdef") == 0.0
    assert metrics.char_bbox(b"Courier", "x") == (0.0, -207.0, 600.0, 718.0)
    assert metrics.font_bbox(b"Courier")[2] == 715.0
