# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging

from . import painting as ps_painting
from ..core import types as ps

logger = logging.getLogger(__name__)


def clip(ctxt, ostack):
    """
    - **clip** -


    intersects the area inside the current clipping path with the area inside the current
    path to produce a new, smaller clipping path. The nonzero winding number rule is
    used to determine what points lie inside the current path.

    The new clipping path replaces the one in the graphics state; the output format
    nests the clip inside the enclosing scopes, so the emitted picture is still clipped
    by both. Unlike **fill** and **stroke**, **clip** does not implicitly perform a
    **newpath**.

    **Errors**:     **limitcheck**
    **See Also**:   **eoclip**, **rectclip**, **initclip**, **gsave**, **grestore**
    """
    ctxt.gstate.clip()
    ctxt.device.clip(ctxt.gstate.clip_path)


def eoclip(ctxt, ostack):
    """
    - **eoclip** -


    intersects the area inside the current clipping path with the area inside the current
    path to produce a new, smaller clipping path. The even-odd rule is used to determine
    what points lie inside the current path. In all other respects, the behavior of **eoclip**
    is identical to that of **clip**.

    **Errors**:     **limitcheck**
    **See Also**:   **clip**, **rectclip**, **initclip**
    """
    ctxt.gstate.clip()
    ctxt.device.eoclip(ctxt.gstate.clip_path)


def initclip(ctxt, ostack):
    """
    - **initclip** -


    replaces the current clipping path in the graphics state with the default clipping
    path for the current output device. A clip that has already been written to the
    output cannot be widened again; use **gsave** and **grestore** around **clip** instead.

    **Errors**:     (none)
    **See Also**:   **clip**, **eoclip**, **rectclip**, **initgraphics**
    """
    if ctxt.gstate.clip_path:
        logger.info("initclip: an emitted clipping path cannot be widened")
    ctxt.gstate.clip_path = ps.Path()


def rectclip(ctxt, ostack):
    """
    x y width height **rectclip** -
            numarray **rectclip** -


    intersects the area inside the current clipping path with a rectangular path defined
    by the operands to produce a new, smaller clipping path. Afterward, it clears the
    current path with **newpath**. This operator behaves as if it executed

        **newpath**
        x y **moveto**
        width 0 **rlineto**
        0 height **rlineto**
        width neg 0 **rlineto**
        **closepath**
        **clip**
        **newpath**

    **Errors**:     **limitcheck**, **stackunderflow**, **typecheck**
    **See Also**:   **clip**, **eoclip**, **rectfill**, **rectstroke**
    """
    rects, n_operands = ps_painting.rect_operands(ostack, rectclip.__name__)

    ps_painting.append_rects(ctxt, rects)
    clip(ctxt, ostack)
    ctxt.gstate.newpath()
    del ostack[-n_operands:]
