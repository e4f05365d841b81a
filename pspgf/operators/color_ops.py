# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from ..core import color_space
from ..core import error as ps_error
from ..core import types as ps


def _numeric_operands(ostack, count: int, op_name: str) -> list:
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < count:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)
    # 2. TYPECHECK - Check operand types
    for obj in ostack[-count:]:
        if obj.TYPE not in ps.NUMERIC_TYPES:
            raise ps_error.e(ps_error.TYPECHECK, op_name)
    return [obj.to_real() for obj in ostack[-count:]]


def _install_color(ctxt, color: color_space.Color, space: ps.PSObject = None) -> None:
    ctxt.gstate.color = color
    ctxt.gstate.color_space = space
    ctxt.device.set_color(color)


def _push_levels(ostack, levels, op_name: str) -> None:
    if ostack.max_length and len(ostack) + len(levels) > ostack.max_length:
        raise ps_error.e(ps_error.STACKOVERFLOW, op_name)
    for level in levels:
        ostack.append(ps.Real(level))


def _color_from_space(space: ps.PSObject, op_name: str) -> color_space.Color:
    """Initial color of a color space given as a name or an array."""
    if space.TYPE == ps.T_NAME:
        family = space
        params = []
    elif space.TYPE == ps.T_ARRAY:
        if not space.can_read():
            raise ps_error.e(ps_error.INVALIDACCESS, op_name)
        if space.length < 1:
            raise ps_error.e(ps_error.RANGECHECK, op_name)
        family = space.get(0)
        params = space.items()[1:]
        if family.TYPE != ps.T_NAME:
            raise ps_error.e(ps_error.TYPECHECK, op_name)
    else:
        raise ps_error.e(ps_error.TYPECHECK, op_name)

    device_space = color_space.DEVICE_SPACES.get(family.val)
    if device_space is not None:
        return device_space()
    if family.val == b"Indexed":
        return _indexed_color(params, op_name)
    raise ps_error.e(
        ps_error.UNIMPLEMENTED, op_name, f"color space {family.val.decode('latin-1')}"
    )


def _indexed_color(params, op_name: str) -> color_space.Indexed:
    # [/Indexed base hival lookup]
    if len(params) != 3:
        raise ps_error.e(ps_error.RANGECHECK, op_name)
    base_obj, hival, lookup = params
    base = _color_from_space(base_obj, op_name)
    if isinstance(base, color_space.Indexed):
        raise ps_error.e(ps_error.RANGECHECK, op_name)
    if hival.TYPE != ps.T_INT:
        raise ps_error.e(ps_error.TYPECHECK, op_name)
    if lookup.TYPE == ps.T_ARRAY and lookup.is_executable():
        raise ps_error.e(ps_error.UNIMPLEMENTED, op_name, "Indexed lookup procedure")
    if lookup.TYPE != ps.T_STRING:
        raise ps_error.e(ps_error.TYPECHECK, op_name)
    try:
        return color_space.Indexed(base, hival.val, lookup.byte_string())
    except ps_error.PSError as err:
        raise ps_error.e(err.code, op_name) from err


def currentcmykcolor(ctxt, ostack):
    """
    - **currentcmykcolor** cyan magenta yellow black


    returns the four components of the current color in the graphics state according
    to the cyan-magenta-yellow-black color space. If the current color space is not
    DeviceCMYK, the color is converted to it first.

    **Errors**:     **stackoverflow**
    **See Also**:   **setcmykcolor**, **currentgray**, **currentrgbcolor**
    """
    _push_levels(ostack, ctxt.gstate.color.get_cmyk(), currentcmykcolor.__name__)


def currentcolor(ctxt, ostack):
    """
    - **currentcolor** comp₁ comp₂ ... compₙ


    returns the components of the current color in the graphics state, in the current
    color space. For an Indexed color space the single component is the index.

    **Errors**:     **stackoverflow**
    **See Also**:   **setcolor**, **currentcolorspace**
    """
    color = ctxt.gstate.color
    if isinstance(color, color_space.Indexed):
        ostack.append(ps.Int(int(color.levels[0])))
        return
    _push_levels(ostack, color.levels, currentcolor.__name__)


def currentcolorspace(ctxt, ostack):
    """
    - **currentcolorspace** array


    returns an array containing the family name and parameters of the current color
    space in the graphics state. A device color space is returned as a one-element
    array such as [/DeviceRGB].

    **Errors**:     **stackoverflow**
    **See Also**:   **setcolorspace**, **currentcolor**
    """
    space = ctxt.gstate.color_space
    if space is None:
        space = ps.Array([ps.Name(ctxt.gstate.color.family)])
    ostack.append(space)


def currentgray(ctxt, ostack):
    """
    - **currentgray** num


    returns the gray value of the current color in the graphics state, converting the
    current color to DeviceGray if necessary.

    **Errors**:     **stackoverflow**
    **See Also**:   **setgray**, **currentrgbcolor**, **currentcmykcolor**
    """
    ostack.append(ps.Real(ctxt.gstate.color.get_gray()))


def currentrgbcolor(ctxt, ostack):
    """
    - **currentrgbcolor** red green blue


    returns the three components of the current color in the graphics state according
    to the red-green-blue color space, converting the current color if necessary.

    **Errors**:     **stackoverflow**
    **See Also**:   **setrgbcolor**, **currentgray**, **currentcmykcolor**
    """
    _push_levels(ostack, ctxt.gstate.color.get_rgb(), currentrgbcolor.__name__)


def setcmykcolor(ctxt, ostack):
    """
    cyan magenta yellow black **setcmykcolor** -


    sets the color space to DeviceCMYK and the current color to the component values
    specified by the operands. Each component must be a number between 0.0 and 1.0;
    values outside this range are clipped to the nearest valid value.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **setgray**, **setrgbcolor**, **setcolor**, **currentcmykcolor**
    """
    levels = _numeric_operands(ostack, 4, setcmykcolor.__name__)

    color = color_space.CMYK()
    color.set_color(levels)
    _install_color(ctxt, color)
    del ostack[-4:]


def setcolor(ctxt, ostack):
    """
    comp₁ ... compₙ **setcolor** -


    sets the current color in the graphics state to the color described by the operands,
    which are interpreted according to the current color space. For an Indexed color
    space the single operand is an integer index into the lookup table.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **setcolorspace**, **currentcolor**, **setgray**, **setrgbcolor**
    """
    color = ctxt.gstate.color
    n_inputs = color.n_inputs()
    levels = _numeric_operands(ostack, n_inputs, setcolor.__name__)
    # 3. TYPECHECK - An index must be an integer
    if isinstance(color, color_space.Indexed) and ostack[-1].TYPE != ps.T_INT:
        raise ps_error.e(ps_error.TYPECHECK, setcolor.__name__)

    try:
        color.set_color(levels)
    except ps_error.PSError as err:
        raise ps_error.e(err.code, setcolor.__name__) from err
    ctxt.device.set_color(color)
    del ostack[-n_inputs:]


def setcolorspace(ctxt, ostack):
    """
    array **setcolorspace** -
     name **setcolorspace** -


    sets the color space in the graphics state to the one given by the operand and
    initializes the current color to the initial color of that space (black for the
    device spaces, index 0 for Indexed). DeviceGray, DeviceRGB, DeviceCMYK and
    [/Indexed base hival lookup] with a string lookup table are supported; other
    families raise **unimplemented**.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**, **undefined**, **unimplemented**
    **See Also**:   **currentcolorspace**, **setcolor**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, setcolorspace.__name__)

    space = ostack[-1]
    color = _color_from_space(space, setcolorspace.__name__)
    _install_color(ctxt, color, space if space.TYPE == ps.T_ARRAY else None)
    ostack.pop()


def setgray(ctxt, ostack):
    """
    num **setgray** -


    sets the color space to DeviceGray and the current color to the gray level specified
    by the operand, which must be a number between 0.0 (black) and 1.0 (white).
    Values outside this range are clipped to the nearest valid value.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **currentgray**, **setrgbcolor**, **setcmykcolor**, **setcolor**
    """
    levels = _numeric_operands(ostack, 1, setgray.__name__)

    color = color_space.Gray()
    color.set_color(levels)
    _install_color(ctxt, color)
    ostack.pop()


def sethsbcolor(ctxt, ostack):
    """
    hue saturation brightness **sethsbcolor** -


    sets the color space to DeviceRGB and the current color to the color given by the
    hue, saturation and brightness operands, each clipped to the range 0.0 to 1.0.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **setrgbcolor**, **currentrgbcolor**
    """
    levels = _numeric_operands(ostack, 3, sethsbcolor.__name__)
    hue, saturation, brightness = [min(max(v, 0.0), 1.0) for v in levels]

    color = color_space.RGB()
    color.set_color(color_space.ColorSpaceEngine.hsb_to_rgb(hue, saturation, brightness))
    _install_color(ctxt, color)
    del ostack[-3:]


def setrgbcolor(ctxt, ostack):
    """
    red green blue **setrgbcolor** -


    sets the color space to DeviceRGB and the current color to the component values
    specified by red, green, and blue. Each component must be a number in the range 0.0
    to 1.0; values outside this range are clipped to the nearest valid value.

    **Examples**
        1 1 1 **setrgbcolor**       % white
        1 0 0 **setrgbcolor**       % red

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **currentrgbcolor**, **setgray**, **setcmykcolor**, **sethsbcolor**
    """
    levels = _numeric_operands(ostack, 3, setrgbcolor.__name__)

    color = color_space.RGB()
    color.set_color(levels)
    _install_color(ctxt, color)
    del ostack[-3:]
