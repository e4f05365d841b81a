from __future__ import annotations

import pytest

from conftest import run, values
from pspgf.core import color_space
from pspgf.core import error as ps_error


def test_default_color_is_black_gray(ctxt) -> None:
    run(ctxt, "currentgray currentrgbcolor currentcolorspace 0 get")
    assert values(ctxt) == [0.0, 0.0, 0.0, 0.0, b"DeviceGray"]


def test_device_color_operators(ctxt, device) -> None:
    run(ctxt, "0.25 setgray 1 0 0 setrgbcolor 0 0 0 1 setcmykcolor 0 1 1 sethsbcolor")
    families = [call[1] for call in device.of("set_color")]
    assert families == ["DeviceGray", "DeviceRGB", "DeviceCMYK", "DeviceRGB"]
    assert device.of("set_color")[-1][2] == pytest.approx((1.0, 0.0, 0.0))


def test_components_are_clamped(ctxt) -> None:
    run(ctxt, "2 -1 0.5 setrgbcolor currentrgbcolor")
    assert values(ctxt) == [1.0, 0.0, 0.5]


def test_conversions_between_spaces(ctxt) -> None:
    run(ctxt, "1 0 0 setrgbcolor currentgray currentcmykcolor")
    gray, c, m, y, k = values(ctxt)
    assert gray == pytest.approx(0.3)
    assert (c, m, y, k) == pytest.approx((0.0, 1.0, 1.0, 0.0))


def test_setcolorspace_and_setcolor(ctxt, device) -> None:
    run(ctxt, "/DeviceCMYK setcolorspace currentcolor 0.1 0.2 0.3 0.4 setcolor currentcolor")
    assert values(ctxt) == pytest.approx([0.0, 0.0, 0.0, 1.0, 0.1, 0.2, 0.3, 0.4])
    assert device.of("set_color")[-1][1] == "DeviceCMYK"


def test_indexed_color_space(ctxt, device) -> None:
    run(ctxt, """
        [/Indexed /DeviceRGB 1 <FF0000 0000FF>] setcolorspace
        currentcolor
        1 setcolor currentcolor
        currentcolorspace 0 get
    """)
    assert values(ctxt) == [0, 1, b"Indexed"]
    assert device.of("set_color")[0][2] == (1.0, 0.0, 0.0)
    assert device.of("set_color")[-1][2] == (0.0, 0.0, 1.0)


@pytest.mark.parametrize("source, code", [
    ("[/Indexed /DeviceRGB 1 <FF0000>] setcolorspace", ps_error.RANGECHECK),
    ("[/Indexed /DeviceGray 1 <00FF>] setcolorspace 2 setcolor", ps_error.RANGECHECK),
    ("[/Indexed /DeviceGray 1 <00FF>] setcolorspace 0.5 setcolor", ps_error.TYPECHECK),
    ("[/Indexed /DeviceGray 1 {pop 0}] setcolorspace", ps_error.UNIMPLEMENTED),
    ("/Pattern setcolorspace", ps_error.UNIMPLEMENTED),
    ("[/Separation /Spot /DeviceCMYK {}] setcolorspace", ps_error.UNIMPLEMENTED),
    ("42 setcolorspace", ps_error.TYPECHECK),
    ("(x) 0 0 setrgbcolor", ps_error.TYPECHECK),
    ("0 0 setrgbcolor", ps_error.STACKUNDERFLOW),
])
def test_color_errors(ctxt, source, code) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, source)
    assert info.value.code == code


def test_color_survives_gsave(ctxt) -> None:
    run(ctxt, "/DeviceRGB setcolorspace gsave 0.5 0.5 0.5 setcolor grestore currentcolor")
    assert values(ctxt) == [0.0, 0.0, 0.0]


def test_hsb_conversion() -> None:
    engine = color_space.ColorSpaceEngine
    assert engine.hsb_to_rgb(0.0, 0.0, 0.7) == pytest.approx((0.7, 0.7, 0.7))
    assert engine.hsb_to_rgb(1.0 / 3.0, 1.0, 1.0) == pytest.approx((0.0, 1.0, 0.0))
    assert engine.rgb_to_cmyk(0.2, 0.2, 0.2) == pytest.approx((0.0, 0.0, 0.0, 0.8))
