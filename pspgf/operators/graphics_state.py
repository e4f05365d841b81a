# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging

from ..core import color_space
from ..core import error as ps_error
from ..core import types as ps

logger = logging.getLogger(__name__)


def _push_gstate(ctxt, save_id=None) -> None:
    if ctxt.g_stack.max_length and len(ctxt.g_stack) >= ctxt.g_stack.max_length:
        raise ps_error.e(ps_error.LIMITCHECK, "gsave")
    saved = ctxt.gstate.clone()
    saved.save_id = save_id
    ctxt.g_stack.append(saved)
    ctxt.device.start_scope()


def _pop_gstate(ctxt) -> None:
    ctxt.gstate = ctxt.g_stack.pop()
    ctxt.gstate.save_id = None
    ctxt.device.end_scope()


def _reenter_save_level(ctxt) -> None:
    # a state pushed by save stays on the stack; only its contents come back
    ctxt.device.end_scope()
    ctxt.gstate = ctxt.g_stack[-1].clone()
    ctxt.gstate.save_id = None
    ctxt.device.start_scope()


def currentflat(ctxt, ostack) -> None:
    """
    - **currentflat** num


    returns the current value of the flatness parameter in the graphics state.

    **Errors**:     **stackoverflow**
    **See Also**:   **setflat**
    """
    ostack.append(ps.Real(ctxt.gstate.flatness))


def currentlinecap(ctxt, ostack) -> None:
    """
    - **currentlinecap** int


    returns the current value of the line cap parameter in the graphics state.

    **Errors**:     **stackoverflow**
    **See Also**:   **setlinecap**, **stroke**, **currentlinejoin**
    """
    ostack.append(ps.Int(ctxt.gstate.line_cap))


def currentlinejoin(ctxt, ostack) -> None:
    """
    - **currentlinejoin** int


    returns the current value of the line join parameter in the graphics state.

    **Errors**:     **stackoverflow**
    **See Also**:   **setlinejoin**, **stroke**, **currentlinecap**
    """
    ostack.append(ps.Int(ctxt.gstate.line_join))


def currentlinewidth(ctxt, ostack) -> None:
    """
    - **currentlinewidth** num


    returns the current value of the line width parameter in the graphics state.

    **Errors**:     **stackoverflow**
    **See Also**:   **setlinewidth**, **stroke**
    """
    ostack.append(ps.Real(ctxt.gstate.line_width))


def currentmiterlimit(ctxt, ostack) -> None:
    """
    - **currentmiterlimit** num


    returns the current value of the miter limit parameter in the graphics state.

    **Errors**:     **stackoverflow**
    **See Also**:   **setmiterlimit**, **stroke**
    """
    ostack.append(ps.Real(ctxt.gstate.miter_limit))


def currentdash(ctxt, ostack) -> None:
    """
    - **currentdash** array offset


    returns the current dash array and offset in the graphics state.

    **Errors**:     **stackoverflow**
    **See Also**:   **setdash**, **stroke**
    """
    if ostack.max_length and len(ostack) + 2 > ostack.max_length:
        raise ps_error.e(ps_error.STACKOVERFLOW, currentdash.__name__)

    ostack.append(ps.Array([ps.Real(length) for length in ctxt.gstate.dash_pattern]))
    ostack.append(ps.Real(ctxt.gstate.dash_offset))


def gsave(ctxt, ostack) -> None:
    """
    - **gsave** -


    pushes a copy of the current graphics state on the graphics state stack. All
    elements of the graphics state are saved, including the CTM, current path,
    clipping path and color. The saved state is later restored by a matching **grestore**.
    In the output, everything drawn until that **grestore** is enclosed in its own scope.

    **Errors**:     **limitcheck**
    **See Also**:   **grestore**, **grestoreall**, **restore**, **save**
    """
    _push_gstate(ctxt)


def grestore(ctxt, ostack) -> None:
    """
    - **grestore** -


    resets the current graphics state from the one on the top of the graphics state
    stack and pops the graphics state stack, restoring the graphics state in effect at
    the time of the matching **gsave** operation.

    If the topmost graphics state on the stack was saved with **save** rather than **gsave**,
    **grestore** restores that saved graphics state but does not pop it off the stack. If
    there is no matching **gsave** or if the most recent unmatched **save** preceded the most
    recent unmatched **gsave**, **grestore** does nothing.

    **Errors**:     (none)
    **See Also**:   **gsave**, **grestoreall**, **restore**, **save**
    """
    if not ctxt.g_stack:
        logger.warning("grestore without a matching gsave ignored")
        return

    if ctxt.g_stack[-1].save_id is not None:
        _reenter_save_level(ctxt)
        return

    _pop_gstate(ctxt)


def grestoreall(ctxt, ostack) -> None:
    """
    - **grestoreall** -


    repeatedly performs **grestore** operations until it encounters a graphics state that
    was saved by a **save** operation (as opposed to **gsave**), leaving that state on the top
    of the graphics state stack and resetting the current graphics state from it. If no
    such state is encountered, it restores the graphics state in effect at the start of
    the job.

    **Errors**:     (none)
    **See Also**:   **grestore**, **gsave**, **restore**, **save**
    """
    while ctxt.g_stack and ctxt.g_stack[-1].save_id is None:
        _pop_gstate(ctxt)
    if ctxt.g_stack:
        _reenter_save_level(ctxt)


def save(ctxt, ostack) -> None:
    """
    - **save** save


    creates a snapshot of the current graphics state and pushes a save object
    representing the snapshot on the operand stack. The graphics state is saved as if
    by **gsave**. The contents of virtual memory are not snapshotted: a later **restore**
    brings back the graphics state only.

    **Errors**:     **limitcheck**, **stackoverflow**
    **See Also**:   **restore**, **gsave**, **grestoreall**
    """
    # 1. STACKOVERFLOW - Room for the save object
    if ostack.max_length and len(ostack) >= ostack.max_length:
        raise ps_error.e(ps_error.STACKOVERFLOW, save.__name__)

    ctxt.save_id += 1
    level = len(ctxt.g_stack)
    _push_gstate(ctxt, ctxt.save_id)
    ostack.append(ps.Save(level, ctxt.save_id))


def restore(ctxt, ostack) -> None:
    """
    save **restore** -


    resets the graphics state to the one in effect when the save object was created,
    as if by a series of **grestore** operations that also pops the state pushed by
    **save** itself. Changes made to virtual memory since the **save** are kept.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **save**, **grestore**, **grestoreall**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, restore.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_SAVE:
        raise ps_error.e(ps_error.TYPECHECK, restore.__name__)

    snapshot = ostack.pop()
    depth = None
    for i, state in enumerate(ctxt.g_stack):
        if state.save_id == snapshot.save_id:
            depth = i
            break
    if depth is None:
        logger.warning("restore of an unknown or already restored save ignored")
        return

    logger.info("restore: virtual memory is not reverted, only the graphics state")
    while len(ctxt.g_stack) > depth:
        _pop_gstate(ctxt)


def initgraphics(ctxt, ostack) -> None:
    """
    - **initgraphics** -


    resets several values in the graphics state to their default values:

        current transformation matrix (default for device)
        current position (undefined)
        current path (empty)
        current clipping path (cannot widen what has been emitted)
        current color space (DeviceGray)
        current color (black)
        current line width (1 user space unit)
        current line cap style (butt end caps)
        current line join style (miter joins)
        current miter limit (10)
        current dash pattern (solid, unbroken lines)

    **Errors**:     (none)
    **See Also**:   **grestore**, **grestoreall**, **initmatrix**, **initclip**
    """
    gstate = ctxt.gstate
    device = ctxt.device

    gstate.CTM = device.default_ctm()
    gstate.newpath()
    if gstate.clip_path:
        logger.info("initgraphics: an emitted clipping path cannot be widened")
        gstate.clip_path = ps.Path()
    gstate.line_width = 1.0
    gstate.dash_pattern = []
    gstate.dash_offset = 0.0
    if gstate.line_cap != ps.LINE_CAP_BUTT:
        gstate.line_cap = ps.LINE_CAP_BUTT
        device.setlinecap(gstate.line_cap)
    if gstate.line_join != ps.LINE_JOIN_MITER:
        gstate.line_join = ps.LINE_JOIN_MITER
        device.setlinejoin(gstate.line_join)
    if gstate.miter_limit != 10.0:
        gstate.miter_limit = 10.0
        device.setmiterlimit(gstate.miter_limit)
    gstate.color = color_space.Gray()
    device.set_color(gstate.color)


def setdash(ctxt, ostack) -> None:
    """
    array offset **setdash** -


    sets the dash pattern parameter in the graphics state, controlling the dash pattern
    used during subsequent invocations of **stroke** and related operators. If array is
    empty (that is, its length is 0), **stroke** produces a normal, unbroken line. If array
    is not empty, **stroke** produces dashed lines whose pattern is given by the elements
    of array, all of which must be nonnegative numbers and not all zero.

    **Examples**
        [] 0 **setdash**        % Solid, unbroken lines
        [3] 0 **setdash**       % 3 units on, 3 units off, ...
        [2 1] 0 **setdash**     % 2 on, 1 off, 2 on, 1 off, ...

    **Errors**:     **limitcheck**, **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **currentdash**, **stroke**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, setdash.__name__)
    # 2. TYPECHECK - Check operand types (array num)
    if ostack[-2].TYPE != ps.T_ARRAY or ostack[-1].TYPE not in ps.NUMERIC_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, setdash.__name__)
    # 3. INVALIDACCESS - Check read access
    if not ostack[-2].can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, setdash.__name__)

    pattern = []
    for item in ostack[-2].items():
        if item.TYPE not in ps.NUMERIC_TYPES:
            raise ps_error.e(ps_error.TYPECHECK, setdash.__name__)
        if item.val < 0:
            raise ps_error.e(ps_error.RANGECHECK, setdash.__name__)
        pattern.append(item.to_real())
    # 4. RANGECHECK - A non-empty pattern needs a non-zero entry
    if pattern and not any(pattern):
        raise ps_error.e(ps_error.RANGECHECK, setdash.__name__)

    ctxt.gstate.dash_pattern = pattern
    ctxt.gstate.dash_offset = ostack[-1].to_real()
    del ostack[-2:]


def setflat(ctxt, ostack) -> None:
    """
    num **setflat** -


    sets the flatness parameter in the graphics state to num. Values outside the range
    0.2 to 100 are clipped to that range. The output keeps curves as curves, so the
    value is only stored and reported back by **currentflat**.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **currentflat**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, setflat.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE not in ps.NUMERIC_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, setflat.__name__)

    ctxt.gstate.flatness = min(max(ostack[-1].to_real(), 0.2), 100.0)
    ostack.pop()


def setlinecap(ctxt, ostack) -> None:
    """
    int **setlinecap** -


    sets the line cap parameter in the graphics state to int, which must be 0, 1,
    or 2. This parameter controls the shape to be put at the ends of open subpaths
    painted by **stroke**: 0 butt caps, 1 round caps, 2 projecting square caps.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **currentlinecap**, **setlinejoin**, **stroke**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, setlinecap.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_INT:
        raise ps_error.e(ps_error.TYPECHECK, setlinecap.__name__)
    # 3. RANGECHECK - Valid cap styles
    cap = ostack[-1].val
    if cap not in (ps.LINE_CAP_BUTT, ps.LINE_CAP_ROUND, ps.LINE_CAP_SQUARE):
        raise ps_error.e(ps_error.RANGECHECK, setlinecap.__name__)

    ctxt.device.setlinecap(cap)
    ctxt.gstate.line_cap = cap
    ostack.pop()


def setlinejoin(ctxt, ostack) -> None:
    """
    int **setlinejoin** -


    sets the line join parameter in the graphics state to int, which must be 0, 1, or 2.
    This parameter controls the shape to be put at corners in paths painted by **stroke**:
    0 miter joins, 1 round joins, 2 bevel joins.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **currentlinejoin**, **setlinecap**, **setmiterlimit**, **stroke**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, setlinejoin.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_INT:
        raise ps_error.e(ps_error.TYPECHECK, setlinejoin.__name__)
    # 3. RANGECHECK - Valid join styles
    join = ostack[-1].val
    if join not in (ps.LINE_JOIN_MITER, ps.LINE_JOIN_ROUND, ps.LINE_JOIN_BEVEL):
        raise ps_error.e(ps_error.RANGECHECK, setlinejoin.__name__)

    ctxt.device.setlinejoin(join)
    ctxt.gstate.line_join = join
    ostack.pop()


def setlinewidth(ctxt, ostack) -> None:
    """
    num **setlinewidth** -


    sets the line width parameter in the graphics state to num. This parameter controls
    the thickness of lines to be drawn by subsequent invocations of **stroke** and related
    operators, such as **rectstroke**. The width is kept in user space; the device space
    width is worked out from the CTM in effect when the path is stroked.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **currentlinewidth**, **stroke**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, setlinewidth.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE not in ps.NUMERIC_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, setlinewidth.__name__)

    ctxt.gstate.line_width = abs(ostack[-1].to_real())
    ostack.pop()


def setmiterlimit(ctxt, ostack) -> None:
    """
    num **setmiterlimit** -


    sets the miter limit parameter in the graphics state to num, which must be a number
    greater than or equal to 1. The miter limit controls the treatment of corners by
    **stroke** when miter joins have been specified (see **setlinejoin**). When path
    segments connect at a sharp angle, a miter join results in a spike that extends well
    beyond the connection point. The miter limit imposes a maximum on the ratio of the
    miter length to the line width. When the limit is exceeded, the join is converted
    from a miter to a bevel.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **currentmiterlimit**, **setlinejoin**, **stroke**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, setmiterlimit.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE not in ps.NUMERIC_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, setmiterlimit.__name__)
    # 3. RANGECHECK - Limit must be at least 1
    limit = ostack[-1].to_real()
    if limit < 1.0:
        raise ps_error.e(ps_error.RANGECHECK, setmiterlimit.__name__)

    ctxt.device.setmiterlimit(limit)
    ctxt.gstate.miter_limit = limit
    ostack.pop()
