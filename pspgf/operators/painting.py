# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from typing import List, Tuple

from . import graphics_state as ps_gstate
from . import path as ps_path
from ..core import error as ps_error
from ..core import types as ps

Rect = Tuple[float, float, float, float]


def rect_operands(ostack, op_name: str) -> Tuple[List[Rect], int]:
    """
    Read the rectangles of rectfill, rectstroke and rectclip. The operands are
    either x y width height or an array of numbers, four per rectangle.
    Returns the rectangles and the number of operands they occupy.
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)

    top = ostack[-1]
    if top.TYPE == ps.T_ARRAY:
        # 2. INVALIDACCESS - Check read access
        if not top.can_read():
            raise ps_error.e(ps_error.INVALIDACCESS, op_name)
        values = top.items()
        # 3. RANGECHECK - Four numbers per rectangle
        if len(values) % 4:
            raise ps_error.e(ps_error.RANGECHECK, op_name)
        if any(v.TYPE not in ps.NUMERIC_TYPES for v in values):
            raise ps_error.e(ps_error.TYPECHECK, op_name)
        numbers = [v.to_real() for v in values]
        rects = [tuple(numbers[i:i + 4]) for i in range(0, len(numbers), 4)]
        return rects, 1

    if len(ostack) < 4:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)
    # 2. TYPECHECK - Check operand types (x y width height)
    if any(v.TYPE not in ps.NUMERIC_TYPES for v in ostack[-4:]):
        raise ps_error.e(ps_error.TYPECHECK, op_name)
    return [tuple(v.to_real() for v in ostack[-4:])], 4


def append_rects(ctxt, rects: List[Rect]) -> None:
    """Start a new path made of the rectangles, as moveto, three rlineto, closepath."""
    gstate = ctxt.gstate
    gstate.newpath()
    for x, y, width, height in rects:
        gstate.moveto(x, y)
        gstate.lineto(x + width, y)
        gstate.lineto(x + width, y + height)
        gstate.lineto(x, y + height)
        ps_path.closepath(ctxt, ctxt.o_stack)


def _has_segments(path: ps.Path) -> bool:
    return any(not isinstance(section, ps.MoveTo) for section in path)


def eofill(ctxt, ostack):
    """
    - **eofill** -


    paints the area inside the current path with the current color, using the even-odd
    rule to determine what is inside. **eofill** performs an implicit **newpath** after it
    has finished filling the current path.

    **Errors**:     **limitcheck**
    **See Also**:   **fill**, **eoclip**
    """
    if _has_segments(ctxt.gstate.path):
        ctxt.device.eofill(ctxt.gstate)
    ctxt.gstate.newpath()


def fill(ctxt, ostack):
    """
    - **fill** -


    paints the area inside the current path with the current color. The nonzero winding
    number rule is used to determine what points lie inside the path. **fill** implicitly
    closes any open subpaths of the current path before painting, and performs an
    implicit **newpath** after it has finished filling the current path.

    **Errors**:     **limitcheck**
    **See Also**:   **eofill**, **rectfill**, **clip**
    """
    if _has_segments(ctxt.gstate.path):
        ctxt.device.fill(ctxt.gstate)
    ctxt.gstate.newpath()


def stroke(ctxt, ostack):
    """
    - **stroke** -


    paints a line centered on the current path, with sides parallel to the path segments.
    The line's graphical properties are defined by various parameters of the graphics
    state: the line width, cap, join, miter limit and dash pattern in effect when the
    path is stroked. **stroke** performs an implicit **newpath** after it has finished
    painting the current path.

    **Errors**:     **limitcheck**
    **See Also**:   **setlinewidth**, **setlinejoin**, **setmiterlimit**, **setlinecap**, **setdash**
    """
    if _has_segments(ctxt.gstate.path):
        ctxt.device.stroke(ctxt.gstate)
    ctxt.gstate.newpath()


def rectfill(ctxt, ostack):
    """
    x y width height **rectfill** -
            numarray **rectfill** -


    fills a path consisting of one or more rectangles defined by its operands. For each
    rectangle it behaves as if it executed

        **gsave**
        **newpath**
        x y **moveto**
        width 0 **rlineto**
        0 height **rlineto**
        width neg 0 **rlineto**
        **closepath**
        **fill**
        **grestore**

    **Errors**:     **limitcheck**, **stackunderflow**, **typecheck**
    **See Also**:   **fill**, **rectclip**, **rectstroke**
    """
    rects, n_operands = rect_operands(ostack, rectfill.__name__)

    ps_gstate.gsave(ctxt, ostack)
    append_rects(ctxt, rects)
    fill(ctxt, ostack)
    ps_gstate.grestore(ctxt, ostack)
    del ostack[-n_operands:]


def rectstroke(ctxt, ostack):
    """
    x y width height **rectstroke** -
    x y width height matrix **rectstroke** -
            numarray **rectstroke** -
            numarray matrix **rectstroke** -


    strokes a path consisting of one or more rectangles defined by its operands, as
    **rectfill** does for filling. If the matrix operand is present, **rectstroke**
    concatenates it to the CTM after defining the path but before stroking it. The
    matrix applies to the line width and the dash pattern, if any, but not to the path
    itself.

    **Errors**:     **limitcheck**, **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **stroke**, **rectclip**, **rectfill**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, rectstroke.__name__)

    matrix = None
    if (ostack[-1].TYPE == ps.T_ARRAY and len(ostack) >= 2
            and (ostack[-2].TYPE == ps.T_ARRAY or ostack[-2].TYPE in ps.NUMERIC_TYPES)):
        matrix_obj = ostack[-1]
        if matrix_obj.length != 6:
            raise ps_error.e(ps_error.RANGECHECK, rectstroke.__name__)
        if any(v.TYPE not in ps.NUMERIC_TYPES for v in matrix_obj.items()):
            raise ps_error.e(ps_error.TYPECHECK, rectstroke.__name__)
        matrix = matrix_obj.to_matrix()
        rects, n_operands = rect_operands(ostack[:-1], rectstroke.__name__)
        n_operands += 1
    else:
        rects, n_operands = rect_operands(ostack, rectstroke.__name__)

    ps_gstate.gsave(ctxt, ostack)
    append_rects(ctxt, rects)
    if matrix is not None:
        ctxt.gstate.CTM = matrix.multiply(ctxt.gstate.CTM)
    stroke(ctxt, ostack)
    ps_gstate.grestore(ctxt, ostack)
    del ostack[-n_operands:]


def shfill(ctxt, ostack):
    """
    shading **shfill** -


    paints the shape and color shading described by a shading dictionary, subject to
    the current clipping path. The current path in the graphics state is ignored. Only
    radial (type 3) shadings are supported; other shading types raise **unimplemented**.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**, **undefined**, **unimplemented**
    **See Also**:   **fill**, **clip**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, shfill.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_DICT:
        raise ps_error.e(ps_error.TYPECHECK, shfill.__name__)
    # 3. INVALIDACCESS - Check read access
    if not ostack[-1].can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, shfill.__name__)

    ctxt.device.shfill(ostack[-1], ctxt.gstate)
    ostack.pop()


def showpage(ctxt, ostack):
    """
    - **showpage** -


    transmits the current page to the output device. The converter writes one picture
    per document, so **showpage** only discards the current path.

    **Errors**:     (none)
    **See Also**:   **erasepage**
    """
    ctxt.gstate.newpath()
