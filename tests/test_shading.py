from __future__ import annotations

import pytest

from conftest import run
from pspgf.core import error as ps_error
from pspgf.core import ps_function
from pspgf.core.shading import RadialShading

GRAY_RAMP = "<< /FunctionType 2 /Domain [0 1] /C0 [0] /C1 [1] /N 1 >>"


def shading(ctxt, extra: str = "", function: str = GRAY_RAMP) -> RadialShading:
    run(ctxt, f"<< /ShadingType 3 /ColorSpace /DeviceGray /Coords [0 0 0 0 0 10] "
              f"/Function {function} {extra} >>")
    return RadialShading(ctxt.o_stack.pop())


def function(ctxt, source: str):
    run(ctxt, source)
    return ctxt.o_stack.pop()


def test_linear_ramp_needs_two_stops(ctxt) -> None:
    radial = shading(ctxt)
    assert radial.fit_linear_segments_on_color(0.01) == [0.0, 1.0]
    assert radial.get_radius(0.5) == pytest.approx(5.0)
    assert radial.get_coord(1.0) == pytest.approx((0.0, 0.0))


def test_curved_ramp_needs_more_stops(ctxt) -> None:
    radial = shading(ctxt, function="<< /FunctionType 2 /Domain [0 1] /C0 [0] /C1 [1] /N 3 >>")
    stops = radial.fit_linear_segments_on_color(0.01)
    assert stops[0] == 0.0 and stops[-1] == 1.0
    assert len(stops) > 2
    assert stops == sorted(stops)


def test_extend_adds_an_outer_stop(ctxt) -> None:
    radial = shading(ctxt, "/Extend [false true]")
    stops = radial.breakpoints(0.01, extend_distance=20.0)
    assert len(stops) == 3
    s, radius, color = stops[-1]
    assert s == pytest.approx(2.0)
    assert radius == pytest.approx(20.0)
    assert color.get_gray() == pytest.approx(1.0)


def test_no_extend_stop_without_the_flag(ctxt) -> None:
    radial = shading(ctxt)
    assert len(radial.breakpoints(0.01, extend_distance=20.0)) == 2


def test_domain_maps_the_parameter(ctxt) -> None:
    radial = shading(ctxt, "/Domain [0.5 1]")
    assert radial.get_color(0.0).get_gray() == pytest.approx(0.5)


@pytest.mark.parametrize("source, code", [
    ("<< /ShadingType 2 /ColorSpace /DeviceGray /Coords [0 0 1 1] >>", ps_error.UNIMPLEMENTED),
    ("<< /ColorSpace /DeviceGray >>", ps_error.UNDEFINED),
    ("<< /ShadingType 3 /ColorSpace /DeviceGray >>", ps_error.UNDEFINED),
    ("<< /ShadingType 3 /ColorSpace /DeviceGray /Coords [0 0 1] >>", ps_error.RANGECHECK),
    ("<< /ShadingType 3 /ColorSpace /DeviceGray /Coords [0 0 -1 0 0 1] >>", ps_error.RANGECHECK),
    ("<< /ShadingType 3 /ColorSpace /Pattern /Coords [0 0 0 0 0 1] >>", ps_error.UNIMPLEMENTED),
    ("<< /ShadingType 3 /ColorSpace /DeviceRGB /Coords [0 0 0 0 0 1] >>", ps_error.UNDEFINED),
])
def test_invalid_shadings(ctxt, source, code) -> None:
    run(ctxt, source)
    with pytest.raises(ps_error.PSError) as info:
        RadialShading(ctxt.o_stack.pop())
    assert info.value.code == code


def test_sampled_function_interpolates(ctxt) -> None:
    func = function(ctxt, "<< /FunctionType 0 /Domain [0 1] /Range [0 1] /Size [2] "
                          "/BitsPerSample 8 /DataSource <00FF> >>")
    assert ps_function.evaluate_function(func, [0.5]) == pytest.approx([0.5])
    assert ps_function.evaluate_function(func, [2.0]) == pytest.approx([1.0])


def test_stitching_function_picks_the_subdomain(ctxt) -> None:
    func = function(ctxt, """
        << /FunctionType 3 /Domain [0 1] /Bounds [0.5] /Encode [0 1 0 1]
           /Functions [
               << /FunctionType 2 /Domain [0 1] /C0 [0] /C1 [1] /N 1 >>
               << /FunctionType 2 /Domain [0 1] /C0 [1] /C1 [0] /N 1 >>
           ]
        >>
    """)
    assert ps_function.evaluate_function(func, [0.25]) == pytest.approx([0.5])
    assert ps_function.evaluate_function(func, [0.6]) == pytest.approx([0.8])


def test_function_arrays_concatenate_outputs(ctxt) -> None:
    func = function(ctxt, f"[{GRAY_RAMP} << /FunctionType 2 /Domain [0 1] /C0 [1] /C1 [0] /N 1 >>]")
    assert ps_function.evaluate_function(func, [0.25]) == pytest.approx([0.25, 0.75])


def test_range_clips_outputs(ctxt) -> None:
    func = function(ctxt, "<< /FunctionType 2 /Domain [0 1] /Range [0 0.5] /C0 [0] /C1 [1] /N 1 >>")
    assert ps_function.evaluate_function(func, [0.9]) == pytest.approx([0.5])


@pytest.mark.parametrize("source, code", [
    ("<< /FunctionType 4 /Domain [0 1] /Range [0 1] >>", ps_error.UNIMPLEMENTED),
    ("<< /FunctionType 7 /Domain [0 1] >>", ps_error.RANGECHECK),
    ("<< /FunctionType 2 /N 1 >>", ps_error.UNDEFINED),
    ("<< /FunctionType 2 /Domain [0 1] /C0 [0 0] /C1 [1] /N 1 >>", ps_error.RANGECHECK),
])
def test_function_errors(ctxt, source, code) -> None:
    func = function(ctxt, source)
    with pytest.raises(ps_error.PSError) as info:
        ps_function.evaluate_function(func, [0.5])
    assert info.value.code == code
