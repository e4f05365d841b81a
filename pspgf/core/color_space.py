# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PostScript Color Model

Colors are small mutable objects tagged by their color space: Gray, RGB,
CMYK and Indexed. Each can report itself in any of the device spaces, and
each knows how many operands setcolor takes for it.

PLRM: Sections 4.8 (Color Spaces) and 7.2 (Conversions Among Device Color Spaces)
"""

from typing import List, Sequence, Tuple

from .error import PSError, RANGECHECK, TYPECHECK


class ColorSpaceEngine:
    """Device color conversions (PLRM Section 7.2)."""

    @staticmethod
    def rgb_to_gray(red: float, green: float, blue: float) -> float:
        """NTSC luminance: gray = 0.3*red + 0.59*green + 0.11*blue"""
        return 0.3 * red + 0.59 * green + 0.11 * blue

    @staticmethod
    def cmyk_to_gray(cyan: float, magenta: float, yellow: float, black: float) -> float:
        return 1.0 - min(1.0, 0.3 * cyan + 0.59 * magenta + 0.11 * yellow + black)

    @staticmethod
    def rgb_to_cmyk(red: float, green: float, blue: float) -> Tuple[float, float, float, float]:
        """
        Convert RGB to CMYK with identity black generation and undercolor
        removal: k = min(c, m, y) and k is taken out of each of c, m, y.
        """
        c = 1.0 - red
        m = 1.0 - green
        y = 1.0 - blue
        k = min(c, m, y)
        return (
            max(0.0, min(1.0, c - k)),
            max(0.0, min(1.0, m - k)),
            max(0.0, min(1.0, y - k)),
            max(0.0, min(1.0, k)),
        )

    @staticmethod
    def cmyk_to_rgb(cyan: float, magenta: float, yellow: float, black: float) -> Tuple[float, float, float]:
        return (
            1.0 - min(1.0, cyan + black),
            1.0 - min(1.0, magenta + black),
            1.0 - min(1.0, yellow + black),
        )

    @staticmethod
    def hsb_to_rgb(hue: float, saturation: float, brightness: float) -> Tuple[float, float, float]:
        """Convert HSB to RGB using the hexcone model."""
        if saturation == 0.0:
            return (brightness, brightness, brightness)
        if brightness == 0.0:
            return (0.0, 0.0, 0.0)

        h = hue * 6.0
        if h >= 6.0:
            h = 0.0
        sector = int(h)
        fractional = h - sector

        p = brightness * (1.0 - saturation)
        q = brightness * (1.0 - saturation * fractional)
        t = brightness * (1.0 - saturation * (1.0 - fractional))

        if sector == 0:
            return (brightness, t, p)
        elif sector == 1:
            return (q, brightness, p)
        elif sector == 2:
            return (p, brightness, t)
        elif sector == 3:
            return (p, q, brightness)
        elif sector == 4:
            return (t, p, brightness)
        return (brightness, p, q)


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


class Color(object):
    """Base class for the color variants; `levels` holds the components."""

    family = ""

    def __init__(self, levels: Sequence[float]) -> None:
        self.levels = [float(v) for v in levels]

    def n_inputs(self) -> int:
        """Number of operands setcolor takes in this space."""
        return len(self.levels)

    def n_components(self) -> int:
        """Number of device components this color is emitted with."""
        return len(self.levels)

    def set_color(self, components: Sequence[float]) -> None:
        if len(components) != self.n_inputs():
            raise PSError(RANGECHECK)
        self.levels = [_clamp(float(v)) for v in components]

    def get_gray(self) -> float:
        raise NotImplementedError

    def get_rgb(self) -> Tuple[float, float, float]:
        raise NotImplementedError

    def get_cmyk(self) -> Tuple[float, float, float, float]:
        return ColorSpaceEngine.rgb_to_cmyk(*self.get_rgb())

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.levels == other.levels

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.levels})"


class Gray(Color):
    family = "DeviceGray"

    def __init__(self, level: float = 0.0) -> None:
        super().__init__([level])

    def get_gray(self) -> float:
        return self.levels[0]

    def get_rgb(self) -> Tuple[float, float, float]:
        gray = self.levels[0]
        return (gray, gray, gray)

    def get_cmyk(self) -> Tuple[float, float, float, float]:
        return (0.0, 0.0, 0.0, 1.0 - self.levels[0])


class RGB(Color):
    family = "DeviceRGB"

    def __init__(self, red: float = 0.0, green: float = 0.0, blue: float = 0.0) -> None:
        super().__init__([red, green, blue])

    def get_gray(self) -> float:
        return ColorSpaceEngine.rgb_to_gray(*self.levels)

    def get_rgb(self) -> Tuple[float, float, float]:
        return tuple(self.levels)


class CMYK(Color):
    family = "DeviceCMYK"

    def __init__(self, cyan: float = 0.0, magenta: float = 0.0, yellow: float = 0.0, black: float = 1.0) -> None:
        super().__init__([cyan, magenta, yellow, black])

    def get_gray(self) -> float:
        return ColorSpaceEngine.cmyk_to_gray(*self.levels)

    def get_rgb(self) -> Tuple[float, float, float]:
        return ColorSpaceEngine.cmyk_to_rgb(*self.levels)

    def get_cmyk(self) -> Tuple[float, float, float, float]:
        return tuple(self.levels)


class Indexed(Color):
    """
    [/Indexed base hival lookup] with a string lookup table. The single
    setcolor operand is an index into the table; the looked-up entry is
    stored in the wrapped base color, which is what gets emitted.
    """

    family = "Indexed"

    def __init__(self, base: Color, hival: int, lookup: bytes) -> None:
        if hival < 0 or hival > 4095:
            raise PSError(RANGECHECK)
        n_comp = base.n_inputs()
        if len(lookup) != n_comp * (hival + 1):
            raise PSError(RANGECHECK)
        self.base = base
        self.hival = hival
        self.table: List[List[float]] = [
            [lookup[i * n_comp + j] / 255.0 for j in range(n_comp)]
            for i in range(hival + 1)
        ]
        super().__init__([0])
        self.base.levels = list(self.table[0])

    def n_inputs(self) -> int:
        return 1

    def n_components(self) -> int:
        return self.base.n_components()

    def set_color(self, components: Sequence[float]) -> None:
        if len(components) != 1:
            raise PSError(RANGECHECK)
        index = components[0]
        if float(index) != int(index):
            raise PSError(TYPECHECK)
        index = int(index)
        if index < 0 or index > self.hival:
            raise PSError(RANGECHECK)
        self.levels = [float(index)]
        self.base.levels = list(self.table[index])

    def get_gray(self) -> float:
        return self.base.get_gray()

    def get_rgb(self) -> Tuple[float, float, float]:
        return self.base.get_rgb()

    def get_cmyk(self) -> Tuple[float, float, float, float]:
        return self.base.get_cmyk()

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Indexed)
            and self.levels == other.levels
            and self.base == other.base
        )


DEVICE_SPACES = {
    b"DeviceGray": Gray,
    b"DeviceRGB": RGB,
    b"DeviceCMYK": CMYK,
}
