# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf Types Graphics Classes Module

Path sections, paths and the graphics state. Path sections hold
device-space coordinates; a MoveTo also remembers the user-space point it
came from so that closepath can put the current point back there.
"""

import copy
import logging
from typing import List, Optional, Tuple, Union

from .. import color_space
from ..error import PSError, NOCURRENTPOINT
from .composite import Matrix
from .constants import LINE_CAP_BUTT, LINE_JOIN_MITER

logger = logging.getLogger(__name__)


class Point(object):
    __slots__ = ("x", "y")

    def __init__(self, x: Union[int, float], y: Union[int, float]) -> None:
        self.x = x
        self.y = y

    def __eq__(self, other) -> bool:
        return isinstance(other, Point) and self.x == other.x and self.y == other.y

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y})"


class MoveTo(object):
    def __init__(self, p: Point, user: Tuple[float, float]) -> None:
        self.p = p
        self.user = user

    def __eq__(self, other) -> bool:
        return isinstance(other, MoveTo) and self.p == other.p

    def __repr__(self) -> str:
        return f"MoveTo({self.p.x}, {self.p.y})"


class LineTo(object):
    def __init__(self, p: Point) -> None:
        self.p = p

    def __eq__(self, other) -> bool:
        return isinstance(other, LineTo) and self.p == other.p

    def __repr__(self) -> str:
        return f"LineTo({self.p.x}, {self.p.y})"


class CurveTo(object):
    def __init__(self, p1: Point, p2: Point, p3: Point) -> None:
        self.p1 = p1
        self.p2 = p2
        self.p3 = p3

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, CurveTo)
            and (self.p1, self.p2, self.p3) == (other.p1, other.p2, other.p3)
        )

    def __repr__(self) -> str:
        return f"CurveTo({self.p1!r}, {self.p2!r}, {self.p3!r})"


class ClosePath(object):
    """Closes the current subpath; `p` is the device point it returns to."""

    def __init__(self, p: Point) -> None:
        self.p = p

    def __eq__(self, other) -> bool:
        return isinstance(other, ClosePath)

    def __repr__(self) -> str:
        return "ClosePath()"


PathSection = Union[MoveTo, LineTo, CurveTo, ClosePath]


class Path(list):
    """Ordered path sections; every subpath starts with exactly one MoveTo."""

    def moveto(self, p: Point, user: Tuple[float, float]) -> None:
        # consecutive movetos collapse into the last one
        if self and isinstance(self[-1], MoveTo):
            self[-1] = MoveTo(p, user)
        else:
            self.append(MoveTo(p, user))

    def subpath_start(self) -> Optional[MoveTo]:
        for section in reversed(self):
            if isinstance(section, MoveTo):
                return section
        return None

    def last_point(self) -> Optional[Point]:
        if not self:
            return None
        section = self[-1]
        if isinstance(section, CurveTo):
            return section.p3
        return section.p

    def device_points(self) -> List[Point]:
        points = []
        for section in self:
            if isinstance(section, CurveTo):
                points.extend((section.p1, section.p2, section.p3))
            else:
                points.append(section.p)
        return points

    def __copy__(self) -> "Path":
        return Path(self)


class GraphicsState(object):
    """
    The per-scope drawing state. gsave pushes clone() of it and grestore
    pops the clone back, so every field here must be copied deeply enough
    that mutations after gsave never leak into the saved copy.
    """

    def __init__(self, default_ctm: Optional[Matrix] = None) -> None:
        self.CTM = default_ctm.to_matrix() if default_ctm is not None else Matrix()
        self.position: Optional[Tuple[float, float]] = None
        self.path = Path()
        self.clip_path = Path()
        self.color = color_space.Gray()
        # the array operand of the last setcolorspace, None for device spaces
        self.color_space = None
        self.line_width = 1.0
        self.line_cap = LINE_CAP_BUTT
        self.line_join = LINE_JOIN_MITER
        self.miter_limit = 10.0
        self.dash_pattern: List[float] = []
        self.dash_offset = 0.0
        self.flatness = 1.0
        self.font = None
        # backend bookkeeping (last emitted line width, dash, ...)
        self.device_data = {}
        # id of the save that pushed this state, if any
        self.save_id = None

    def clone(self) -> "GraphicsState":
        new_gs = copy.copy(self)
        new_gs.CTM = self.CTM.to_matrix()
        new_gs.path = copy.deepcopy(self.path)
        new_gs.clip_path = copy.deepcopy(self.clip_path)
        new_gs.color = copy.deepcopy(self.color)
        new_gs.dash_pattern = list(self.dash_pattern)
        new_gs.device_data = copy.deepcopy(self.device_data)
        return new_gs

    # current point

    def current_point(self) -> Tuple[float, float]:
        if self.position is None:
            raise PSError(NOCURRENTPOINT)
        return self.position

    def update_position(self) -> None:
        """Recompute the user-space current point after the CTM changed."""
        last = self.path.last_point()
        if last is None or self.position is None:
            return
        self.position = self.CTM.itransform(last.x, last.y)

    # path construction

    def _device(self, x: float, y: float) -> Point:
        dx, dy = self.CTM.transform(x, y)
        return Point(dx, dy)

    def newpath(self) -> None:
        self.path = Path()
        self.position = None

    def moveto(self, x: float, y: float) -> None:
        self.path.moveto(self._device(x, y), (x, y))
        self.position = (x, y)

    def lineto(self, x: float, y: float) -> None:
        self.current_point()
        self.path.append(LineTo(self._device(x, y)))
        self.position = (x, y)

    def curveto(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        self.current_point()
        self.path.append(CurveTo(self._device(x1, y1), self._device(x2, y2), self._device(x3, y3)))
        self.position = (x3, y3)

    def closepath(self) -> Optional[Tuple[float, float]]:
        """
        Close the current subpath and return its starting user-space point,
        or None when there is no current subpath.
        """
        start = self.path.subpath_start()
        if start is None:
            return None
        if not isinstance(self.path[-1], (MoveTo, ClosePath)):
            self.path.append(ClosePath(start.p))
        return start.user

    def clip(self) -> None:
        # replaces rather than intersects; the emitted clip still nests in the output
        if self.clip_path:
            logger.info("clip: intersecting clipping paths is approximated by replacing the clip path")
        self.clip_path = copy.deepcopy(self.path)
