# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Output device contract.

The interpreter never writes output itself; every drawing primitive goes
through one of these calls. Paths handed to a device are already in device
space. A device owns its own bookkeeping (open scope depth, last emitted
values) so two conversions never share state.
"""

from abc import ABC, abstractmethod
from typing import Tuple

from ..core import types as ps
from ..core.color_space import Color


class OutputDevice(ABC):

    def __init__(self) -> None:
        self.scope_depth = 0

    def default_ctm(self) -> ps.Matrix:
        """Transform from default user space (points) to device space."""
        return ps.Matrix()

    # lifecycle

    @abstractmethod
    def init(self, gstate: ps.GraphicsState) -> None:
        """Write the document header and reset per-state caches."""

    @abstractmethod
    def finish(self) -> None:
        """Close any scopes still open and write the document footer."""

    def set_bounding_box(self, llx: float, lly: float, urx: float, ury: float) -> None:
        """Declare the picture extent, given in default user space."""

    # path consumers

    @abstractmethod
    def fill(self, gstate: ps.GraphicsState) -> None:
        """Fill the current path with the non-zero winding rule."""

    @abstractmethod
    def eofill(self, gstate: ps.GraphicsState) -> None:
        """Fill the current path with the even-odd rule."""

    @abstractmethod
    def stroke(self, gstate: ps.GraphicsState) -> None:
        """Stroke the current path with the state's line attributes."""

    @abstractmethod
    def clip(self, clip_path: ps.Path) -> None:
        """Clip to the path with the non-zero winding rule."""

    @abstractmethod
    def eoclip(self, clip_path: ps.Path) -> None:
        """Clip to the path with the even-odd rule."""

    @abstractmethod
    def shfill(self, shading: ps.Dict, gstate: ps.GraphicsState) -> None:
        """Paint a shading dictionary over the current clip."""

    # line attributes

    @abstractmethod
    def setlinecap(self, cap: int) -> None:
        pass

    @abstractmethod
    def setlinejoin(self, join: int) -> None:
        pass

    @abstractmethod
    def setmiterlimit(self, limit: float) -> None:
        pass

    @abstractmethod
    def set_color(self, color: Color) -> None:
        pass

    @abstractmethod
    def show(self, text: str, position: Tuple[float, float], angle: float,
             fontsize: float, anchor: str = "") -> None:
        """
        Place `text` at the device `position`, rotated by `angle` degrees,
        at `fontsize` PostScript points. `anchor` holds up to two codes: a
        vertical one ("t" top, "B" baseline, "b" bottom) and a horizontal
        one ("l" left, "r" right); a missing code means centered.
        """

    # scopes

    @abstractmethod
    def start_scope(self) -> None:
        pass

    @abstractmethod
    def end_scope(self) -> None:
        pass

    # debugging aids

    @abstractmethod
    def draw_dot(self, x: float, y: float) -> None:
        pass

    @abstractmethod
    def draw_rect(self, llx: float, lly: float, urx: float, ury: float) -> None:
        pass
