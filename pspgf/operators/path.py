# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import math
from typing import List, Tuple

from ..core import error as ps_error
from ..core import types as ps

# largest sweep covered by one Bezier segment
_MAX_SEGMENT = math.pi / 2
# smallest sweep still worth a segment
_EPSILON = 0.00001


def _numeric_operands(ostack, count: int, op_name: str) -> List[float]:
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < count:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)
    # 2. TYPECHECK - Check operand types
    for obj in ostack[-count:]:
        if obj.TYPE not in ps.NUMERIC_TYPES:
            raise ps_error.e(ps_error.TYPECHECK, op_name)
    return [obj.to_real() for obj in ostack[-count:]]


def _require_current_point(ctxt, op_name: str) -> Tuple[float, float]:
    if ctxt.gstate.position is None:
        raise ps_error.e(ps_error.NOCURRENTPOINT, op_name)
    return ctxt.gstate.position


def _arc_segment(start: float, size: float) -> Tuple[float, ...]:
    """
    Unit circle Bezier control points for the sweep `size` (radians, at most
    a quarter turn either way) beginning at angle `start`.
    """
    k = 4.0 / 3.0 * math.tan(size / 4.0)
    end = start + size
    cos_s, sin_s = math.cos(start), math.sin(start)
    cos_e, sin_e = math.cos(end), math.sin(end)
    return (
        cos_s - k * sin_s, sin_s + k * cos_s,
        cos_e + k * sin_e, sin_e - k * cos_e,
        cos_e, sin_e,
    )


def _append_arc(ctxt, x: float, y: float, r: float, start: float, stop: float) -> None:
    """Add a circular arc from angle `start` to `stop` (degrees) as curves."""
    gstate = ctxt.gstate
    start = math.radians(start)
    stop = math.radians(stop)

    first_x = x + r * math.cos(start)
    first_y = y + r * math.sin(start)
    if gstate.position is None:
        gstate.moveto(first_x, first_y)
    else:
        gstate.lineto(first_x, first_y)

    direction = 1.0 if stop >= start else -1.0
    while abs(stop - start) > _EPSILON:
        size = direction * min(abs(stop - start), _MAX_SEGMENT)
        x1, y1, x2, y2, x3, y3 = _arc_segment(start, size)
        gstate.curveto(
            x + r * x1, y + r * y1,
            x + r * x2, y + r * y2,
            x + r * x3, y + r * y3,
        )
        start += size


def arc(ctxt, ostack):
    """
    x y r angle₁ angle₂ **arc** -


    appends an **arc** of a circle to the current path, possibly preceded by a straight line
    segment. The **arc** is centered at coordinates (x, y) in user space, with radius r. The
    operands angle₁ and angle₂ define the endpoints of the **arc** by specifying the angles
    of the vectors joining them to the center of the **arc**. The angles are measured in degrees
    counterclockwise from the positive x axis of the current user coordinate system.

    If there is a current point, a straight line segment from the current point to the
    first endpoint of the **arc** is added to the current path preceding the **arc** itself. If the
    current path is empty, this initial line segment is omitted. In either case, the second
    endpoint of the **arc** becomes the new current point.

    If angle₂ is less than angle₁, it is increased by multiples of 360 until it becomes
    greater than or equal to angle₁. No other adjustments are made to the two angles.

    The **arc** is represented by one or more cubic Bézier curves (see **curveto**), each
    covering at most 90 degrees.

    **Example**
        **newpath**
            0 0 **moveto**
            0 0 100 0 45 **arc**
        **closepath**

    This example constructs a 45-degree "pie slice" with a 100-unit radius, centered at
    the coordinate origin.

    **Errors**:     **limitcheck**, **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **arcn**, **curveto**
    """
    x, y, r, start, stop = _numeric_operands(ostack, 5, arc.__name__)
    # 3. RANGECHECK - Radius must be nonnegative
    if r < 0:
        raise ps_error.e(ps_error.RANGECHECK, arc.__name__)

    while stop < start:
        stop += 360.0
    _append_arc(ctxt, x, y, r, start, stop)
    del ostack[-5:]


def arcn(ctxt, ostack):
    """
    x y r angle₁ angle₂ **arcn** -


    (**arc** negative) appends an arc of a circle to the current path, possibly preceded by a
    straight line segment. Its behavior is identical to that of **arc**, except that the angles
    defining the endpoints of the arc are measured clockwise from the positive x axis
    of the user coordinate system, rather than counterclockwise. If angle₂ is greater
    than angle₁, it is decreased by multiples of 360 until it becomes less than or equal
    to angle₁.

    **Example**
        **newpath**
            0 0 2 0 90 **arc**
            0 0 1 90 0 **arcn**
        **closepath**

    This example constructs a 90-degree segment of a 2-unit-wide ring.

    **Errors**:     **limitcheck**, **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **arc**, **curveto**
    """
    x, y, r, start, stop = _numeric_operands(ostack, 5, arcn.__name__)
    # 3. RANGECHECK - Radius must be nonnegative
    if r < 0:
        raise ps_error.e(ps_error.RANGECHECK, arcn.__name__)

    while stop > start:
        stop -= 360.0
    _append_arc(ctxt, x, y, r, start, stop)
    del ostack[-5:]


def closepath(ctxt, ostack):
    """
    - **closepath** -


    closes the current subpath by appending a straight line segment connecting the
    current point to the subpath's starting point, which is generally the point most recently
    specified by **moveto**.

    **closepath** terminates the current subpath; appending another segment to the current
    path will begin a new subpath, even if the new segment begins at the endpoint
    reached by the **closepath** operation. If the current subpath is already closed
    or the current path is empty, **closepath** does nothing.

    **Errors**:     **limitcheck**
    **See Also**:   **newpath**, **moveto**, **lineto**
    """
    gstate = ctxt.gstate
    start = gstate.path.subpath_start()
    user = gstate.closepath()
    if user is None:
        return

    # relative operators after closepath continue from the subpath start
    gstate.path.moveto(start.p, user)
    gstate.position = user
    if gstate.CTM.determinant() != 0:
        gstate.update_position()


def currentpoint(ctxt, ostack):
    """
    - **currentpoint** x y


    returns the x and y coordinates of the current point in the graphics state (the
    trailing endpoint of the current path). If the current point is undefined because
    the current path is empty, a **nocurrentpoint** error occurs.

    The current point is reported in the user coordinate system in effect at the time
    **currentpoint** is executed.

    **Errors**:     **nocurrentpoint**, **stackoverflow**
    **See Also**:   **moveto**, **lineto**, **curveto**, **arc**
    """
    x, y = _require_current_point(ctxt, currentpoint.__name__)
    if ostack.max_length and len(ostack) + 2 > ostack.max_length:
        raise ps_error.e(ps_error.STACKOVERFLOW, currentpoint.__name__)

    ostack.append(ps.Real(x))
    ostack.append(ps.Real(y))


def curveto(ctxt, ostack):
    """
    x₁ y₁ x₂ y₂ x₃ y₃ **curveto** -


    appends a section of a cubic Bézier curve to the current path between the current
    point (x₀, y₀) and the endpoint (x₃, y₃), using (x₁, y₁) and (x₂, y₂) as the Bézier
    control points. The endpoint (x₃, y₃) becomes the new current point. If the
    current point is undefined because the current path is empty, a **nocurrentpoint**
    error occurs.

    **Errors**:     **limitcheck**, **nocurrentpoint**, **stackunderflow**, **typecheck**
    **See Also**:   **lineto**, **moveto**, **arc**, **arcn**, **rcurveto**
    """
    coords = _numeric_operands(ostack, 6, curveto.__name__)
    _require_current_point(ctxt, curveto.__name__)

    ctxt.gstate.curveto(*coords)
    del ostack[-6:]


def lineto(ctxt, ostack):
    """
    x y **lineto** -


    appends a straight line segment to the current path, starting from the current
    point and extending to the coordinates (x, y) in user space. The endpoint (x, y)
    becomes the new current point.

    If the current point is undefined because the current path is empty, a
    **nocurrentpoint** error occurs.

    **Errors**:     **limitcheck**, **nocurrentpoint**, **stackunderflow**, **typecheck**
    **See Also**:   **rlineto**, **moveto**, **arc**, **curveto**, **closepath**
    """
    x, y = _numeric_operands(ostack, 2, lineto.__name__)
    _require_current_point(ctxt, lineto.__name__)

    ctxt.gstate.lineto(x, y)
    del ostack[-2:]


def moveto(ctxt, ostack):
    """
    x y **moveto** -


    starts a new subpath of the current path by setting the current point in the graphics
    state to the coordinates (x, y) in user space. No new line segments are added to the
    current path.

    If the previous path operation in the current path was also a **moveto** or **rmoveto**,
    that point is deleted from the current path and the new **moveto** point replaces it.

    **Errors**:     **limitcheck**, **stackunderflow**, **typecheck**
    **See Also**:   **rmoveto**, **lineto**, **curveto**, **arc**, **closepath**
    """
    x, y = _numeric_operands(ostack, 2, moveto.__name__)

    ctxt.gstate.moveto(x, y)
    del ostack[-2:]


def newpath(ctxt, ostack):
    """
    - **newpath** -


    initializes the current path in the graphics state to an empty path. The current
    point becomes undefined.

    **Errors**:     (none)
    **See Also**:   **closepath**, **stroke**, **fill**
    """
    ctxt.gstate.newpath()


def pathbbox(ctxt, ostack):
    """
    - **pathbbox** llx lly urx ury


    returns the bounding box of the current path in the current user coordinate
    system. The results are four real numbers describing a rectangle in user space,
    oriented with its sides parallel to the axes of user space and enclosing the
    entire current path. If the current path is empty, **pathbbox** executes the error
    **nocurrentpoint**.

    If the user coordinate system is rotated, the result is the user space box that
    encloses the path's device space bounding box.

    **Errors**:     **nocurrentpoint**, **stackoverflow**
    **See Also**:   **flattenpath**, **clippath**, **charpath**
    """
    points = ctxt.gstate.path.device_points()
    if not points:
        raise ps_error.e(ps_error.NOCURRENTPOINT, pathbbox.__name__)
    if ostack.max_length and len(ostack) + 4 > ostack.max_length:
        raise ps_error.e(ps_error.STACKOVERFLOW, pathbbox.__name__)

    ctm = ctxt.gstate.CTM
    if ctm.determinant() == 0:
        raise ps_error.e(ps_error.UNDEFINEDRESULT, pathbbox.__name__)
    inverse = ctm.inverted()

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    corners = [
        inverse.transform(x, y)
        for x in (min(xs), max(xs))
        for y in (min(ys), max(ys))
    ]
    ostack.append(ps.Real(min(c[0] for c in corners)))
    ostack.append(ps.Real(min(c[1] for c in corners)))
    ostack.append(ps.Real(max(c[0] for c in corners)))
    ostack.append(ps.Real(max(c[1] for c in corners)))


def rcurveto(ctxt, ostack):
    """
    dx₁ dy₁ dx₂ dy₂ dx₃ dy₃ **rcurveto** -


    (relative **curveto**) adds a Bézier cubic section to the current path in the same
    manner as **curveto**. However, the three number pairs are interpreted as
    displacements relative to the current point (x₀, y₀) rather than as absolute
    coordinates.

    **Errors**:     **limitcheck**, **nocurrentpoint**, **stackunderflow**, **typecheck**
    **See Also**:   **curveto**, **rlineto**, **rmoveto**
    """
    d = _numeric_operands(ostack, 6, rcurveto.__name__)
    x0, y0 = _require_current_point(ctxt, rcurveto.__name__)

    ctxt.gstate.curveto(
        x0 + d[0], y0 + d[1], x0 + d[2], y0 + d[3], x0 + d[4], y0 + d[5]
    )
    del ostack[-6:]


def rlineto(ctxt, ostack):
    """
    dx dy **rlineto** -


    (relative **lineto**) appends a straight line segment to the current path, starting
    from the current point and extending dx user space units horizontally and dy units
    vertically. That is, the operands dx and dy are interpreted as relative displacements
    from the current point rather than as absolute coordinates.

    If the current point is undefined because the current path is empty, a
    **nocurrentpoint** error occurs.

    **Errors**:     **limitcheck**, **nocurrentpoint**, **stackunderflow**, **typecheck**
    **See Also**:   **lineto**, **rmoveto**, **rcurveto**
    """
    dx, dy = _numeric_operands(ostack, 2, rlineto.__name__)
    x0, y0 = _require_current_point(ctxt, rlineto.__name__)

    ctxt.gstate.lineto(x0 + dx, y0 + dy)
    del ostack[-2:]


def rmoveto(ctxt, ostack):
    """
    dx dy **rmoveto** -


    (relative **moveto**) starts a new subpath of the current path by displacing the
    coordinates of the current point dx user space units horizontally and dy units
    vertically, without connecting it to the previous current point. In all other
    respects, the behavior of **rmoveto** is identical to that of **moveto**.

    If the current point is undefined because the current path is empty, a
    **nocurrentpoint** error occurs.

    **Errors**:     **limitcheck**, **nocurrentpoint**, **stackunderflow**, **typecheck**
    **See Also**:   **moveto**, **rlineto**, **rcurveto**
    """
    dx, dy = _numeric_operands(ostack, 2, rmoveto.__name__)
    x0, y0 = _require_current_point(ctxt, rmoveto.__name__)

    ctxt.gstate.moveto(x0 + dx, y0 + dy)
    del ostack[-2:]
