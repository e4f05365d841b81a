# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PostScript context initialization.

Creates the execution environment for one conversion: stacks, the
permanent dictionaries, the initial graphics state and the output
device it draws on.
"""

import sys
from typing import Any, Dict, Optional, TextIO

from . import types as ps
from .font_metrics import BuiltinFontMetrics, FontMetrics
from ..operators import dict as ps_dict

VERSION = "1.0.0"


def init_system_params() -> Dict[str, Any]:
    """
    Initialize system parameters for the interpreter.

    Returns:
        Dict[str, Any]: System parameters dictionary containing:
            - MaxOpStack: operand stack depth limit
            - MaxDictStack: dictionary stack depth limit
            - MaxExecDepth: nesting limit for procedures and files
            - MaxGStack: graphics state stack depth limit
            - ColorTolerance: smallest color step written by the PGF device
            - ExtendDistance: length (um) of extended radial shadings
            - StateTolerance: comparison tolerance for emitted line widths
            - ShadingSamples: samples per radial shading when fitting stops
            - Creator: text of the output header comment
    """
    return {
        "MaxOpStack": ps.O_STACK_MAX,
        "MaxDictStack": ps.D_STACK_MAX,
        "MaxExecDepth": ps.EXEC_DEPTH_MAX,
        "MaxGStack": ps.G_STACK_MAX,
        "ColorTolerance": 0.01,
        "ExtendDistance": 0.3e6,
        "StateTolerance": 1e-10,
        "ShadingSamples": 101,
        "Creator": f"pspgf {VERSION}",
    }


def _error_info() -> ps.Dict:
    error_info = ps.Dict(10, b"$error")
    error_info.put_bytes(b"newerror", ps.Bool(False))
    error_info.put_bytes(b"errorname", ps.Null())
    error_info.put_bytes(b"command", ps.Null())
    return error_info


def create_context(
    system_params: Dict[str, Any],
    device,
    stdout: Optional[TextIO] = None,
    font_metrics: Optional[FontMetrics] = None,
) -> ps.Context:
    """
    Create and initialize a complete execution context.

    Args:
        system_params: parameters from init_system_params()
        device: the OutputDevice every drawing call goes to
        stdout: text stream for print, =, == and pstack (sys.stdout if None)
        font_metrics: glyph width service (the built-in tables if None)

    Dictionary stack created (bottom to top):
        - systemdict: all operators, read-only once filled
        - globaldict
        - userdict
    """
    ctxt = ps.Context(system_params)
    ctxt.device = device
    ctxt.stdout = stdout if stdout is not None else sys.stdout
    ctxt.font_metrics = font_metrics if font_metrics is not None else BuiltinFontMetrics()

    # the initial graphics state starts in the device's default user space
    ctxt.gstate = ps.GraphicsState(device.default_ctm())

    ctxt.system_dict = ps_dict.create_system_dict()
    ctxt.global_dict = ps.Dict(100, b"globaldict")
    ctxt.user_dict = ps.Dict(200, b"userdict")
    ctxt.font_directory = ps.Dict(20, b"FontDirectory")
    ctxt.error_info = _error_info()

    system_dict = ctxt.system_dict
    system_dict.put_bytes(b"globaldict", ctxt.global_dict)
    system_dict.put_bytes(b"userdict", ctxt.user_dict)
    system_dict.put_bytes(b"FontDirectory", ctxt.font_directory)
    system_dict.put_bytes(b"$error", ctxt.error_info)
    system_dict.access = ps.ACCESS_READ_ONLY

    ctxt.d_stack.append(system_dict)
    ctxt.d_stack.append(ctxt.global_dict)
    ctxt.d_stack.append(ctxt.user_dict)

    return ctxt
