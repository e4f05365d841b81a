from __future__ import annotations

import pytest

from conftest import run, values
from pspgf.core import error as ps_error
from pspgf.core import types as ps


def drawing_calls(device) -> list:
    return [call for call in device.calls if call[0] not in ("init", "finish")]


def test_stroke_hands_the_path_to_the_device(ctxt, device) -> None:
    run(ctxt, "3 setlinewidth 10 20 moveto 30 40 lineto stroke")
    (call,) = device.of("stroke")
    _, path, width = call
    assert path == [ps.MoveTo(ps.Point(10.0, 20.0), (10, 20)), ps.LineTo(ps.Point(30.0, 40.0))]
    assert width == 3.0
    # painting consumes the current path
    assert not ctxt.gstate.path and ctxt.gstate.position is None


def test_fill_and_eofill(ctxt, device) -> None:
    run(ctxt, "0 0 moveto 1 0 lineto 1 1 lineto fill 0 0 moveto 2 0 lineto 0 2 lineto eofill")
    assert [call[0] for call in drawing_calls(device)] == ["fill", "eofill"]


def test_painting_an_empty_path_emits_nothing(ctxt, device) -> None:
    run(ctxt, "fill stroke 5 5 moveto stroke eofill")
    assert drawing_calls(device) == []


def test_rectfill_is_wrapped_in_a_scope(ctxt, device) -> None:
    run(ctxt, "1 1 1 setrgbcolor 0 0 1 1 rectfill")
    names = [call[0] for call in drawing_calls(device)]
    assert names == ["set_color", "start_scope", "fill", "end_scope"]
    assert device.of("set_color")[0] == ("set_color", "DeviceRGB", (1.0, 1.0, 1.0))

    path = device.of("fill")[0][1]
    kinds = [type(section) for section in path]
    assert kinds == [ps.MoveTo, ps.LineTo, ps.LineTo, ps.LineTo, ps.ClosePath, ps.MoveTo]
    assert [section.p for section in path[:4]] == [
        ps.Point(0.0, 0.0), ps.Point(1.0, 0.0), ps.Point(1.0, 1.0), ps.Point(0.0, 1.0),
    ]
    assert values(ctxt) == []


def test_rectfill_keeps_the_current_path(ctxt, device) -> None:
    run(ctxt, "5 5 moveto [0 0 1 1 2 2 1 1] rectfill currentpoint")
    assert values(ctxt) == [5.0, 5.0]
    path = device.of("fill")[0][1]
    assert sum(isinstance(section, ps.ClosePath) for section in path) == 2


def test_rectstroke_with_a_matrix(ctxt, device) -> None:
    run(ctxt, "2 setlinewidth 0 0 10 10 [2 0 0 2 0 0] rectstroke currentlinewidth")
    (call,) = device.of("stroke")
    path = call[1]
    # the matrix does not apply to the rectangle itself
    assert path[2].p == ps.Point(10.0, 10.0)
    assert values(ctxt) == [2.0]


@pytest.mark.parametrize("source, code", [
    ("0 0 1 rectfill", ps_error.STACKUNDERFLOW),
    ("[0 0 1] rectfill", ps_error.RANGECHECK),
    ("0 0 (w) 1 rectfill", ps_error.TYPECHECK),
    ("0 0 1 1 [1 0 0 1] rectstroke", ps_error.RANGECHECK),
])
def test_rectangle_operand_errors(ctxt, source, code) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, source)
    assert info.value.code == code


def test_showpage_only_discards_the_path(ctxt, device) -> None:
    run(ctxt, "0.5 setgray 0 0 moveto 1 1 lineto showpage currentgray")
    assert values(ctxt) == [0.5]
    assert not ctxt.gstate.path


def test_shfill_passes_the_dictionary(ctxt, device) -> None:
    run(ctxt, "<< /ShadingType 3 >> shfill")
    (call,) = device.of("shfill")
    assert call[1].get_bytes(b"ShadingType").val == 3


def test_shfill_requires_a_dictionary(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "[1] shfill")
    assert info.value.code == ps_error.TYPECHECK


def test_clip_emits_and_keeps_the_path(ctxt, device) -> None:
    run(ctxt, "0 0 moveto 10 0 lineto 10 10 lineto closepath clip currentpoint")
    (call,) = device.of("clip")
    assert len(call[1]) == 5
    # clip does not consume the current path
    assert len(ctxt.gstate.path) == 5
    assert values(ctxt) == [0.0, 0.0]


def test_eoclip(ctxt, device) -> None:
    run(ctxt, "0 0 moveto 10 0 lineto 0 10 lineto eoclip newpath")
    assert [call[0] for call in drawing_calls(device)] == ["eoclip"]
    assert len(ctxt.gstate.clip_path) == 3


def test_rectclip_clears_the_path(ctxt, device) -> None:
    run(ctxt, "3 3 moveto 0 0 5 5 rectclip")
    assert len(device.of("clip")) == 1
    assert not ctxt.gstate.path
    assert ctxt.gstate.clip_path


def test_clip_is_undone_by_grestore(ctxt) -> None:
    run(ctxt, "gsave 0 0 5 5 rectclip grestore")
    assert not ctxt.gstate.clip_path


def test_initclip_forgets_the_clip_path(ctxt) -> None:
    run(ctxt, "0 0 5 5 rectclip initclip")
    assert not ctxt.gstate.clip_path
