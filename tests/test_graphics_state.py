from __future__ import annotations

import pytest

from conftest import run, values
from pspgf.core import error as ps_error
from pspgf.core import types as ps


def test_gsave_grestore_restores_everything(ctxt, device) -> None:
    run(ctxt, "1 2 moveto 3 4 lineto 0.5 setgray 2 setlinewidth [3] 0 setdash 10 20 translate")
    before = ctxt.gstate.clone()

    run(ctxt, "gsave 5 setlinewidth 2 2 scale 1 0 0 setrgbcolor 7 7 lineto [] 0 setdash grestore")
    after = ctxt.gstate
    assert after.CTM.coefficients() == before.CTM.coefficients()
    assert after.path == before.path
    assert after.color.get_rgb() == before.color.get_rgb()
    assert after.line_width == before.line_width == 2.0
    assert after.dash_pattern == before.dash_pattern == [3.0]
    assert after.position == before.position
    assert device.names().count("start_scope") == device.names().count("end_scope") == 1


def test_unmatched_grestore_is_ignored(ctxt) -> None:
    run(ctxt, "3 setlinewidth grestore currentlinewidth")
    assert values(ctxt) == [3.0]


def test_gsave_depth_limit(ctxt) -> None:
    ctxt.g_stack.max_length = 4
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "gsave gsave gsave gsave gsave")
    assert info.value.code == ps_error.LIMITCHECK


def test_save_restore_brings_back_graphics_state_only(ctxt) -> None:
    run(ctxt, "/x 1 def 4 setlinewidth save gsave 9 setlinewidth /x 2 def gsave restore x currentlinewidth")
    assert values(ctxt) == [2, 4.0]
    assert len(ctxt.g_stack) == 0


def test_grestore_at_a_save_level_keeps_the_save(ctxt) -> None:
    run(ctxt, "2 setlinewidth save 6 setlinewidth grestore currentlinewidth exch restore currentlinewidth")
    assert values(ctxt) == [2.0, 2.0]


def test_restore_of_an_unknown_save_is_ignored(ctxt) -> None:
    run(ctxt, "save dup restore 5 setlinewidth restore currentlinewidth")
    assert values(ctxt) == [5.0]


def test_grestoreall_returns_to_the_outermost_state(ctxt) -> None:
    run(ctxt, "1 setlinewidth gsave 2 setlinewidth gsave 3 setlinewidth grestoreall currentlinewidth")
    assert values(ctxt) == [1.0]
    assert len(ctxt.g_stack) == 0


def test_line_parameters(ctxt, device) -> None:
    run(ctxt, """
        1 setlinecap 2 setlinejoin 4 setmiterlimit -3 setlinewidth 0.5 setflat
        [4 2] 1 setdash
        currentlinecap currentlinejoin currentmiterlimit currentlinewidth currentflat
        currentdash
    """)
    assert values(ctxt)[:5] == [1, 2, 4.0, 3.0, 0.5]
    dash, offset = ctxt.o_stack[5:]
    assert dash.to_floats() == [4.0, 2.0] and offset.val == 1.0
    assert ("setlinecap", 1) in device.calls
    assert ("setlinejoin", 2) in device.calls
    assert ("setmiterlimit", 4.0) in device.calls


@pytest.mark.parametrize("source, code", [
    ("3 setlinecap", ps_error.RANGECHECK),
    ("-1 setlinejoin", ps_error.RANGECHECK),
    ("0.5 setmiterlimit", ps_error.RANGECHECK),
    ("[0 0] 0 setdash", ps_error.RANGECHECK),
    ("[-1] 0 setdash", ps_error.RANGECHECK),
    ("(x) setlinewidth", ps_error.TYPECHECK),
])
def test_line_parameter_errors(ctxt, source, code) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, source)
    assert info.value.code == code


def test_initgraphics_resets_the_state(ctxt) -> None:
    run(ctxt, "5 5 scale 3 setlinewidth 1 setlinecap 0 0 moveto 0.5 setgray initgraphics")
    gstate = ctxt.gstate
    assert gstate.CTM.coefficients() == [1.0, 0.0, 0.0, 1.0, 0.0, 0.0]
    assert gstate.line_width == 1.0
    assert gstate.line_cap == ps.LINE_CAP_BUTT
    assert gstate.position is None and not gstate.path
    assert tuple(gstate.color.get_rgb()) == (0.0, 0.0, 0.0)


def test_matrix_operators(ctxt) -> None:
    run(ctxt, "10 20 translate 2 3 scale 1 1 transform")
    assert values(ctxt) == pytest.approx([12.0, 23.0])

    run(ctxt, "clear 12 23 itransform 4 6 dtransform 8 18 idtransform")
    assert values(ctxt) == pytest.approx([1.0, 1.0, 8.0, 18.0, 4.0, 6.0])

    run(ctxt, "clear matrix currentmatrix aload pop")
    assert values(ctxt) == pytest.approx([2.0, 0.0, 0.0, 3.0, 10.0, 20.0])


def test_rotate_and_explicit_matrix_forms(ctxt) -> None:
    run(ctxt, "90 matrix rotate aload pop 1 0 [0 1 -1 0 0 0] transform")
    assert values(ctxt) == pytest.approx([0.0, 1.0, -1.0, 0.0, 0.0, 0.0, 0.0, 1.0])
    # the CTM was left alone
    assert ctxt.gstate.CTM.coefficients() == [1.0, 0.0, 0.0, 1.0, 0.0, 0.0]


def test_concat_invert_and_setmatrix(ctxt) -> None:
    run(ctxt, """
        [2 0 0 2 5 5] concat
        [2 0 0 4 0 0] matrix invertmatrix aload pop
        [1 0 0 1 0 0] setmatrix
        [1 0 0 1 3 4] [2 0 0 2 0 0] matrix concatmatrix aload pop
    """)
    assert values(ctxt) == pytest.approx([0.5, 0, 0, 0.25, 0, 0, 2, 0, 0, 2, 6, 8])
    assert ctxt.gstate.CTM.coefficients() == [1.0, 0.0, 0.0, 1.0, 0.0, 0.0]


def test_singular_matrix_is_undefinedresult(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "[0 0 0 0 0 0] matrix invertmatrix")
    assert info.value.code == ps_error.UNDEFINEDRESULT


def test_current_point_follows_the_ctm(ctxt) -> None:
    run(ctxt, "10 10 moveto 2 2 scale currentpoint")
    assert values(ctxt) == pytest.approx([5.0, 5.0])


def test_relative_path_operators(ctxt) -> None:
    run(ctxt, "1 1 moveto 2 3 rlineto 1 1 rmoveto 1 0 1 1 0 1 rcurveto currentpoint")
    assert values(ctxt) == pytest.approx([4.0, 6.0])
    path = ctxt.gstate.path
    assert path[0] == ps.MoveTo(ps.Point(1.0, 1.0), (1.0, 1.0))
    assert path[1] == ps.LineTo(ps.Point(3.0, 4.0))
    assert isinstance(path[3], ps.CurveTo)


@pytest.mark.parametrize("source", ["0 0 lineto", "1 1 rmoveto", "currentpoint", "pathbbox"])
def test_no_current_point(ctxt, source) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, source)
    assert info.value.code == ps_error.NOCURRENTPOINT


def test_consecutive_movetos_collapse(ctxt) -> None:
    run(ctxt, "1 1 moveto 2 2 moveto 3 3 lineto")
    assert len(ctxt.gstate.path) == 2
    assert ctxt.gstate.path[0].p == ps.Point(2.0, 2.0)


def test_closepath_returns_to_the_subpath_start(ctxt) -> None:
    run(ctxt, "1 2 moveto 5 2 lineto 5 6 lineto closepath currentpoint closepath")
    assert values(ctxt) == pytest.approx([1.0, 2.0])
    kinds = [type(section) for section in ctxt.gstate.path]
    assert kinds == [ps.MoveTo, ps.LineTo, ps.LineTo, ps.ClosePath, ps.MoveTo]


def test_arc_and_pathbbox(ctxt) -> None:
    run(ctxt, "newpath 0 0 10 0 90 arc currentpoint pathbbox")
    assert values(ctxt) == pytest.approx([0.0, 10.0, 0.0, 0.0, 10.0, 10.0])
    assert isinstance(ctxt.gstate.path[0], ps.MoveTo)
    assert all(isinstance(s, ps.CurveTo) for s in ctxt.gstate.path[1:])


def test_full_circle_uses_four_segments(ctxt) -> None:
    run(ctxt, "0 0 1 0 360 arc")
    curves = [s for s in ctxt.gstate.path if isinstance(s, ps.CurveTo)]
    assert len(curves) == 4
    assert curves[-1].p3.x == pytest.approx(1.0)
    assert curves[-1].p3.y == pytest.approx(0.0, abs=1e-9)


def test_arc_joins_an_existing_path_with_a_line(ctxt) -> None:
    run(ctxt, "0 0 moveto 0 0 10 0 45 arc")
    kinds = [type(section) for section in ctxt.gstate.path]
    assert kinds[:3] == [ps.MoveTo, ps.LineTo, ps.CurveTo]


def test_negative_radius_is_rangecheck(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "0 0 -1 0 90 arc")
    assert info.value.code == ps_error.RANGECHECK


def test_arcn_runs_clockwise(ctxt) -> None:
    run(ctxt, "0 0 10 90 0 arcn currentpoint")
    assert values(ctxt) == pytest.approx([10.0, 0.0], abs=1e-9)
    first = ctxt.gstate.path[0]
    assert first.p.x == pytest.approx(0.0, abs=1e-9)
    assert first.p.y == pytest.approx(10.0)
