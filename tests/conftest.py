from __future__ import annotations

import copy
import io
from typing import Any, List, Tuple

import pytest

from pspgf.core import types as ps
from pspgf.core.context_init import create_context, init_system_params
from pspgf.core.tokenizer import ObjectSequence, parse
from pspgf.devices.null.null import NullDevice
from pspgf.operators.control import execjob


class RecordingDevice(NullDevice):
    """Identity-CTM device that records every drawing call it receives."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: List[Tuple[Any, ...]] = []

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def of(self, name: str) -> List[Tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == name]

    def init(self, gstate: ps.GraphicsState) -> None:
        self.calls.append(("init",))

    def finish(self) -> None:
        self.calls.append(("finish",))

    def fill(self, gstate: ps.GraphicsState) -> None:
        self.calls.append(("fill", copy.deepcopy(gstate.path)))

    def eofill(self, gstate: ps.GraphicsState) -> None:
        self.calls.append(("eofill", copy.deepcopy(gstate.path)))

    def stroke(self, gstate: ps.GraphicsState) -> None:
        self.calls.append(("stroke", copy.deepcopy(gstate.path), gstate.line_width))

    def clip(self, clip_path: ps.Path) -> None:
        self.calls.append(("clip", copy.deepcopy(clip_path)))

    def eoclip(self, clip_path: ps.Path) -> None:
        self.calls.append(("eoclip", copy.deepcopy(clip_path)))

    def shfill(self, shading: ps.Dict, gstate: ps.GraphicsState) -> None:
        self.calls.append(("shfill", shading))

    def setlinecap(self, cap: int) -> None:
        self.calls.append(("setlinecap", cap))

    def setlinejoin(self, join: int) -> None:
        self.calls.append(("setlinejoin", join))

    def setmiterlimit(self, limit: float) -> None:
        self.calls.append(("setmiterlimit", limit))

    def set_color(self, color) -> None:
        self.calls.append(("set_color", color.family, tuple(color.get_rgb())))

    def show(self, text, position, angle, fontsize, anchor="") -> None:
        self.calls.append(("show", text, position, angle, fontsize, anchor))

    def start_scope(self) -> None:
        self.scope_depth += 1
        self.calls.append(("start_scope",))

    def end_scope(self) -> None:
        self.scope_depth -= 1
        self.calls.append(("end_scope",))


def run(ctxt: ps.Context, source: str) -> ps.Stack:
    """Execute `source` as a complete job and return the operand stack."""
    src = ObjectSequence(source.encode("latin-1")).open()
    execjob(ctxt, parse(src), src)
    return ctxt.o_stack


def values(ctxt: ps.Context) -> list:
    """Python values of the operand stack, bottom first."""
    out = []
    for obj in ctxt.o_stack:
        if obj.TYPE == ps.T_STRING:
            out.append(obj.byte_string())
        else:
            out.append(obj.val)
    return out


@pytest.fixture
def device() -> RecordingDevice:
    return RecordingDevice()


@pytest.fixture
def ctxt(device: RecordingDevice) -> ps.Context:
    return create_context(init_system_params(), device, io.StringIO())
