# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PGF Output Device

Writes a LaTeX `pgfpicture` made of PGF basic-layer commands. Device space
is in micrometres (the default CTM maps one PostScript point to
25400/72 um); coordinates are written in centimetres and line widths in
millimetres.

Line width and dash pattern are not written when they are set but when a
stroke needs them, and only if they differ from what was last written in
the current scope. The last written values live in the graphics state's
device_data, so grestore brings back exactly what the closing
`\\end{pgfscope}` restores in the output.
"""

import logging
from typing import List, Optional, TextIO, Tuple

from ...core import error as ps_error
from ...core import types as ps
from ...core.color_space import Color
from ...core.shading import RadialShading
from ..output_device import OutputDevice

logger = logging.getLogger(__name__)

# micrometres per PostScript point
UNIT = 25.4 * 1000 / 72

COLOR_NAME = "pspgf_color"
SHADING_NAME = "pspgf_shading"

_LINE_CAPS = {
    ps.LINE_CAP_BUTT: "\\pgfsetbuttcap",
    ps.LINE_CAP_ROUND: "\\pgfsetroundcap",
    ps.LINE_CAP_SQUARE: "\\pgfsetrectcap",
}

_LINE_JOINS = {
    ps.LINE_JOIN_MITER: "\\pgfsetmiterjoin",
    ps.LINE_JOIN_ROUND: "\\pgfsetroundjoin",
    ps.LINE_JOIN_BEVEL: "\\pgfsetbeveljoin",
}

_TEX_SPECIALS = {
    "\\": "\\textbackslash{}",
    "{": "\\{",
    "}": "\\}",
    "$": "\\$",
    "&": "\\&",
    "#": "\\#",
    "%": "\\%",
    "_": "\\_",
    "^": "\\textasciicircum{}",
    "~": "\\textasciitilde{}",
}


def fmt(value: float, decimals: int) -> str:
    """Shortest fixed-point form with at most `decimals` decimals."""
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def tex_escape(text: str) -> str:
    return "".join(_TEX_SPECIALS.get(ch, ch) for ch in text)


class PGFDevice(OutputDevice):
    """Emits PGF drawing commands to a text stream."""

    def __init__(
        self,
        out: TextIO,
        color_tolerance: float = 0.01,
        extend_distance: float = 0.3e6,
        tolerance: float = 1e-10,
        shading_samples: int = 101,
        creator: str = "pspgf",
        bounding_box: Optional[Tuple[float, float, float, float]] = None,
    ) -> None:
        super().__init__()
        self.out = out
        self.color_tolerance = color_tolerance
        self.extend_distance = extend_distance
        self.tolerance = tolerance
        self.shading_samples = shading_samples
        self.creator = creator
        self.bounding_box = bounding_box

    def default_ctm(self) -> ps.Matrix:
        return ps.Matrix.scaling(UNIT, UNIT)

    def _write(self, line: str) -> None:
        self.out.write(line + "\n")

    # number formats

    @staticmethod
    def coor(value: float) -> str:
        """Device micrometres as centimetres."""
        return fmt(1e-4 * value, 3) + "cm"

    def point(self, x: float, y: float) -> str:
        return "\\pgfpoint{" + self.coor(x) + "}{" + self.coor(y) + "}"

    # lifecycle

    def init(self, gstate: ps.GraphicsState) -> None:
        gstate.device_data["linewidth"] = -1.0
        gstate.device_data["dash"] = ([], 0.0)
        self._write(f"% Created by {self.creator}")
        self._write("\\begin{pgfpicture}")
        if self.bounding_box is not None:
            self.set_bounding_box(*self.bounding_box)

    def finish(self) -> None:
        if self.scope_depth:
            logger.warning("closing %d unbalanced scope(s) at end of output", self.scope_depth)
        while self.scope_depth > 0:
            self.end_scope()
        self._write("\\end{pgfpicture}")

    def set_bounding_box(self, llx: float, lly: float, urx: float, ury: float) -> None:
        ctm = self.default_ctm()
        x0, y0 = ctm.transform(llx, lly)
        x1, y1 = ctm.transform(urx, ury)
        self._write(
            "\\pgfpathrectangle{" + self.point(x0, y0) + "}{" + self.point(x1 - x0, y1 - y0) + "}"
        )
        self._write("\\pgfusepath{use as bounding box}")

    # paths

    def write_path(self, path: ps.Path) -> None:
        last = len(path) - 1
        for i, section in enumerate(path):
            if isinstance(section, ps.MoveTo):
                # a trailing moveto draws nothing
                if i != last:
                    self._write("\\pgfpathmoveto{" + self.point(section.p.x, section.p.y) + "}")
            elif isinstance(section, ps.LineTo):
                self._write("\\pgfpathlineto{" + self.point(section.p.x, section.p.y) + "}")
            elif isinstance(section, ps.CurveTo):
                self._write(
                    "\\pgfpathcurveto{" + self.point(section.p1.x, section.p1.y) + "}"
                    "{" + self.point(section.p2.x, section.p2.y) + "}"
                    "{" + self.point(section.p3.x, section.p3.y) + "}"
                )
            elif isinstance(section, ps.ClosePath):
                self._write("\\pgfpathclose")
            else:
                raise ps_error.PSError(
                    ps_error.UNIMPLEMENTED, detail=f"path section {type(section).__name__}"
                )

    def fill(self, gstate: ps.GraphicsState) -> None:
        self.write_path(gstate.path)
        self._write("\\pgfusepath{fill}")

    def eofill(self, gstate: ps.GraphicsState) -> None:
        self.write_path(gstate.path)
        self._write("\\pgfseteorule\\pgfusepath{fill}\\pgfsetnonzerorule")

    def stroke(self, gstate: ps.GraphicsState) -> None:
        self._update_dash(gstate)
        self._update_linewidth(gstate)
        self.write_path(gstate.path)
        self._write("\\pgfusepath{stroke}")

    def clip(self, clip_path: ps.Path) -> None:
        self.write_path(clip_path)
        self._write("\\pgfusepath{clip}")

    def eoclip(self, clip_path: ps.Path) -> None:
        self.write_path(clip_path)
        self._write("\\pgfseteorule\\pgfusepath{clip}\\pgfsetnonzerorule")

    # line attributes

    def _update_linewidth(self, gstate: ps.GraphicsState) -> None:
        width = gstate.line_width * gstate.CTM.mean_scaling()
        if abs(width - gstate.device_data.get("linewidth", -1.0)) > self.tolerance:
            self._write("\\pgfsetlinewidth{" + fmt(1e-3 * width, 4) + "mm}")
            gstate.device_data["linewidth"] = width

    def _update_dash(self, gstate: ps.GraphicsState) -> None:
        scaling = gstate.CTM.mean_scaling()
        pattern = [length * scaling for length in gstate.dash_pattern]
        offset = gstate.dash_offset * scaling
        last_pattern, last_offset = gstate.device_data.get("dash", ([], 0.0))
        same = (
            len(pattern) == len(last_pattern)
            and all(abs(a - b) <= self.tolerance for a, b in zip(pattern, last_pattern))
            and abs(offset - last_offset) <= self.tolerance
        )
        if same:
            return
        # pgf needs an even number of entries; repeating an odd pattern is equivalent
        lengths = pattern * 2 if len(pattern) % 2 else pattern
        dashes = "".join("{" + self.coor(length) + "}" for length in lengths)
        self._write("\\pgfsetdash{" + dashes + "}{" + self.coor(offset) + "}")
        gstate.device_data["dash"] = (pattern, offset)

    def setlinecap(self, cap: int) -> None:
        if cap not in _LINE_CAPS:
            raise ps_error.e(ps_error.RANGECHECK, "setlinecap")
        self._write(_LINE_CAPS[cap])

    def setlinejoin(self, join: int) -> None:
        if join not in _LINE_JOINS:
            raise ps_error.e(ps_error.RANGECHECK, "setlinejoin")
        self._write(_LINE_JOINS[join])

    def setmiterlimit(self, limit: float) -> None:
        self._write("\\pgfsetmiterlimit{" + fmt(limit, 4) + "}")

    def set_color(self, color: Color) -> None:
        n_comp = color.n_components()
        if n_comp >= 4:
            model, levels = "cmyk", color.get_cmyk()
        elif n_comp == 3:
            model, levels = "rgb", color.get_rgb()
        else:
            model, levels = "gray", (color.get_gray(),)
        values = ",".join(fmt(level, 6) for level in levels)
        self._write(
            "\\definecolor{" + COLOR_NAME + "}{" + model + "}{" + values + "}"
            "\\pgfsetstrokecolor{" + COLOR_NAME + "}\\pgfsetfillcolor{" + COLOR_NAME + "}"
        )

    # text

    def show(self, text: str, position: Tuple[float, float], angle: float,
             fontsize: float, anchor: str = "") -> None:
        options = []
        if "t" in anchor:
            options.append("top")
        elif "B" in anchor:
            options.append("base")
        elif "b" in anchor:
            options.append("bottom")
        if "l" in anchor:
            options.append("left")
        elif "r" in anchor:
            options.append("right")
        options.append("x=" + self.coor(position[0]))
        options.append("y=" + self.coor(position[1]))
        if abs(angle) > self.tolerance:
            options.append("rotate=" + fmt(angle, 4))
        size = fontsize / 72 * 72.27
        self._write(
            "\\pgftext[" + ",".join(options) + "]{\\fontsize{" + fmt(size, 2) + "}{"
            + fmt(1.2 * size, 2) + "}\\selectfont{" + tex_escape(text) + "}}"
        )

    # shading

    def shfill(self, shading: ps.Dict, gstate: ps.GraphicsState) -> None:
        radial = RadialShading(shading)
        ctm = gstate.CTM
        scaling = ctm.mean_scaling()
        if scaling == 0:
            raise ps_error.e(ps_error.UNDEFINEDRESULT, "shfill")
        x_scale = ctm.x_scaling() / scaling
        y_scale = ctm.y_scaling() / scaling
        angle = ctm.rotation()

        stops = radial.breakpoints(
            self.color_tolerance, self.extend_distance / scaling, self.shading_samples
        )
        stops.sort(key=lambda stop: stop[1])

        # the shading is declared in user units scaled by the mean scaling,
        # centered on the outermost stop; the low-level transform maps it to device space
        max_s = max(s for s, _, _ in stops)
        x0, y0 = radial.get_coord(0.0)
        x1, y1 = radial.get_coord(max_s)
        inner = self.point(scaling * (x0 - x1), scaling * (y0 - y1))
        color_spec = ";".join(
            "rgb(" + self.coor(scaling * radius) + ")=("
            + ",".join(fmt(level, 6) for level in color.get_rgb()) + ")"
            for _, radius, color in stops
        )

        transforms = self._shading_transforms(ctm.transform(x1, y1), angle, x_scale, y_scale)

        self.start_scope()
        self._write("\\pgfdeclareradialshading{" + SHADING_NAME + "}{" + inner + "}{" + color_spec + "}")
        self._write("\\pgflowlevelobj{" + transforms + "}{\\pgfuseshading{" + SHADING_NAME + "}}")
        self.end_scope()

    def _shading_transforms(self, center: Tuple[float, float], angle: float,
                            x_scale: float, y_scale: float) -> str:
        parts: List[str] = ["\\pgftransformshift{" + self.point(*center) + "}"]
        if abs(angle) > self.tolerance:
            parts.append("\\pgftransformrotate{" + fmt(angle, 4) + "}")
        if abs(x_scale - 1) > self.tolerance:
            parts.append("\\pgftransformxscale{" + fmt(x_scale, 6) + "}")
        if abs(y_scale - 1) > self.tolerance:
            parts.append("\\pgftransformyscale{" + fmt(y_scale, 6) + "}")
        return "".join(parts)

    # scopes

    def start_scope(self) -> None:
        self._write("\\begin{pgfscope}")
        self.scope_depth += 1

    def end_scope(self) -> None:
        if self.scope_depth <= 0:
            logger.warning("end_scope without a matching start_scope ignored")
            return
        self._write("\\end{pgfscope}")
        self.scope_depth -= 1

    # debugging aids

    def draw_dot(self, x: float, y: float) -> None:
        self.start_scope()
        self._write("\\pgfsetfillcolor{red}")
        self._write("\\pgfpathcircle{" + self.point(x, y) + "}{0.5pt}")
        self._write("\\pgfusepath{fill}")
        self.end_scope()

    def draw_rect(self, llx: float, lly: float, urx: float, ury: float) -> None:
        self.start_scope()
        self._write("\\pgfsetstrokecolor{blue}")
        self._write("\\pgfpathrectangle{" + self.point(llx, lly) + "}{" + self.point(urx - llx, ury - lly) + "}")
        self._write("\\pgfusepath{stroke}")
        self.end_scope()
