# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Null Output Device

Accepts every drawing call and produces nothing. Used when a program only
has to be run for its side effects on the stacks, or to measure text.
"""

from typing import Tuple

from ...core import types as ps
from ...core.color_space import Color
from ..output_device import OutputDevice


class NullDevice(OutputDevice):

    def init(self, gstate: ps.GraphicsState) -> None:
        pass

    def finish(self) -> None:
        pass

    def fill(self, gstate: ps.GraphicsState) -> None:
        pass

    def eofill(self, gstate: ps.GraphicsState) -> None:
        pass

    def stroke(self, gstate: ps.GraphicsState) -> None:
        pass

    def clip(self, clip_path: ps.Path) -> None:
        pass

    def eoclip(self, clip_path: ps.Path) -> None:
        pass

    def shfill(self, shading: ps.Dict, gstate: ps.GraphicsState) -> None:
        pass

    def setlinecap(self, cap: int) -> None:
        pass

    def setlinejoin(self, join: int) -> None:
        pass

    def setmiterlimit(self, limit: float) -> None:
        pass

    def set_color(self, color: Color) -> None:
        pass

    def show(self, text: str, position: Tuple[float, float], angle: float,
             fontsize: float, anchor: str = "") -> None:
        pass

    def start_scope(self) -> None:
        pass

    def end_scope(self) -> None:
        pass

    def draw_dot(self, x: float, y: float) -> None:
        pass

    def draw_rect(self, llx: float, lly: float, urx: float, ury: float) -> None:
        pass
