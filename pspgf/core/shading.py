# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Radial (type 3) shading model.

A radial shading blends between two circles. The parameter s runs from 0
(first circle) to 1 (second circle); the shading function is evaluated at
t = t0 + s*(t1 - t0). Output formats without a native shading model need
the gradient as a short list of color stops, so fit_linear_segments_on_color
picks the fewest parameter values whose linear interpolation reproduces the
sampled colors within a tolerance.

PLRM: Section 4.9.3 (Shading Types), Type 3 (Radial) shadings
"""

from __future__ import annotations

import copy
import math
from typing import List, Tuple

import numpy as np

from . import color_space
from . import error as ps_error
from . import ps_function
from . import types as ps


def color_space_from_object(space: ps.PSObject) -> color_space.Color:
    """Fresh color for a device color space given as a name or [/Name] array."""
    if space.TYPE == ps.T_ARRAY and space.length >= 1:
        space = space.get(0)
    if space.TYPE != ps.T_NAME:
        raise ps_error.PSError(ps_error.TYPECHECK, detail="shading ColorSpace")
    family = color_space.DEVICE_SPACES.get(space.val)
    if family is None:
        raise ps_error.PSError(
            ps_error.UNIMPLEMENTED, detail=f"shading color space {space.val.decode('latin-1')}"
        )
    return family()


class RadialShading(object):
    """A type 3 shading dictionary, parsed and validated."""

    def __init__(self, shading_dict: ps.Dict) -> None:
        d = shading_dict.to_dict()
        shading_type = d.get_bytes(b"ShadingType")
        if shading_type is None:
            raise ps_error.PSError(ps_error.UNDEFINED, detail="ShadingType")
        if shading_type.to_int() != 3:
            raise ps_error.PSError(
                ps_error.UNIMPLEMENTED, detail=f"ShadingType {shading_type.to_int()}"
            )

        space = d.get_bytes(b"ColorSpace")
        if space is None:
            raise ps_error.PSError(ps_error.UNDEFINED, detail="ColorSpace")
        self.color = color_space_from_object(space)

        coords = d.get_bytes(b"Coords")
        if coords is None:
            raise ps_error.PSError(ps_error.UNDEFINED, detail="Coords")
        coords = coords.to_array().to_floats()
        if len(coords) != 6:
            raise ps_error.PSError(ps_error.RANGECHECK, detail="Coords needs 6 numbers")
        self.x0, self.y0, self.r0, self.x1, self.y1, self.r1 = coords
        if self.r0 < 0 or self.r1 < 0:
            raise ps_error.PSError(ps_error.RANGECHECK, detail="negative radius")

        domain = d.get_bytes(b"Domain")
        self.t0, self.t1 = 0.0, 1.0
        if domain is not None:
            domain = domain.to_array().to_floats()
            if len(domain) != 2:
                raise ps_error.PSError(ps_error.RANGECHECK, detail="Domain needs 2 numbers")
            self.t0, self.t1 = domain

        extend = d.get_bytes(b"Extend")
        if extend is None:
            self.extend0 = self.extend1 = False
        else:
            flags = extend.to_array().items()
            if len(flags) != 2:
                raise ps_error.PSError(ps_error.RANGECHECK, detail="Extend needs 2 booleans")
            self.extend0, self.extend1 = flags[0].to_bool(), flags[1].to_bool()

        self.function = d.get_bytes(b"Function")
        if self.function is None:
            raise ps_error.PSError(ps_error.UNDEFINED, detail="Function")

    def get_coord(self, s: float) -> Tuple[float, float]:
        """Center of the circle at parameter s, in user space."""
        return self.x0 + s * (self.x1 - self.x0), self.y0 + s * (self.y1 - self.y0)

    def get_radius(self, s: float) -> float:
        return self.r0 + s * (self.r1 - self.r0)

    def get_color(self, s: float) -> color_space.Color:
        t = self.t0 + s * (self.t1 - self.t0)
        color = copy.deepcopy(self.color)
        color.set_color(ps_function.evaluate_function(self.function, [t])[:self.color.n_inputs()])
        return color

    def get_s_for_distance(self, distance: float, s_min: float, s_max: float) -> float:
        """
        Smallest s in [s_min, s_max] whose circle radius reaches `distance`;
        s_min when the circles do not grow with s.
        """
        growth = self.r1 - self.r0
        if growth <= 0:
            return s_min
        s = (distance - self.r0) / growth
        return max(s_min, min(s_max, s))

    def fit_linear_segments_on_color(self, tolerance: float, samples: int = 101) -> List[float]:
        """
        Parameter values, always starting at 0 and ending at 1, such that
        linearly interpolating the RGB color between consecutive values stays
        within `tolerance` of every sampled color.
        """
        s_values = np.linspace(0.0, 1.0, samples)
        colors = np.array([self.get_color(s).get_rgb() for s in s_values])

        breakpoints = [0]
        start = 0
        while start < samples - 1:
            end = start + 1
            while end + 1 < samples and self._fits(s_values, colors, start, end + 1, tolerance):
                end += 1
            breakpoints.append(end)
            start = end
        return [float(s_values[i]) for i in breakpoints]

    @staticmethod
    def _fits(s_values: np.ndarray, colors: np.ndarray, start: int, end: int, tolerance: float) -> bool:
        span = s_values[end] - s_values[start]
        weights = ((s_values[start:end + 1] - s_values[start]) / span)[:, np.newaxis]
        interp = colors[start] + weights * (colors[end] - colors[start])
        return bool(np.all(np.abs(interp - colors[start:end + 1]) <= tolerance))

    def breakpoints(self, tolerance: float, extend_distance: float = math.inf,
                    samples: int = 101) -> List[Tuple[float, float, color_space.Color]]:
        """
        Color stops as (s, radius, color). With Extend on the outer circle an
        extra stop repeating the final color is placed at the first radius
        reaching `extend_distance` (user units), which emulates an infinite
        extension in formats that have no extend flag.
        """
        stops = [(s, self.get_radius(s), self.get_color(s))
                 for s in self.fit_linear_segments_on_color(tolerance, samples)]
        if self.extend1:
            max_s = self.get_s_for_distance(extend_distance, 1.0, math.inf)
            if max_s > 1.0:
                stops.append((max_s, self.get_radius(max_s), self.get_color(1.0)))
        return stops
