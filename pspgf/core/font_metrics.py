# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Font metrics service.

Text placement needs glyph advance widths and bounding boxes. They come
from a FontMetrics object keyed by font name and glyph name, in units of
1/1000 em. BuiltinFontMetrics carries the widths of the standard
Helvetica and Courier faces; other fonts are measured as Helvetica.
"""

from typing import Dict, Tuple

BBox = Tuple[float, float, float, float]

_HELVETICA_WIDTHS = {
    "space": 278, "exclam": 278, "quotedbl": 355, "numbersign": 556,
    "dollar": 556, "percent": 889, "ampersand": 667, "quoteright": 222,
    "parenleft": 333, "parenright": 333, "asterisk": 389, "plus": 584,
    "comma": 278, "hyphen": 333, "minus": 584, "period": 278, "slash": 278,
    "zero": 556, "one": 556, "two": 556, "three": 556, "four": 556,
    "five": 556, "six": 556, "seven": 556, "eight": 556, "nine": 556,
    "colon": 278, "semicolon": 278, "less": 584, "equal": 584,
    "greater": 584, "question": 556, "at": 1015, "A": 667, "B": 667,
    "C": 722, "D": 722, "E": 667, "F": 611, "G": 778, "H": 722, "I": 278,
    "J": 500, "K": 667, "L": 556, "M": 833, "N": 722, "O": 778, "P": 667,
    "Q": 778, "R": 722, "S": 667, "T": 611, "U": 722, "V": 667, "W": 944,
    "X": 667, "Y": 667, "Z": 611, "bracketleft": 278, "backslash": 278,
    "bracketright": 278, "asciicircum": 469, "underscore": 556,
    "quoteleft": 222, "a": 556, "b": 556, "c": 500, "d": 556, "e": 556,
    "f": 278, "g": 556, "h": 556, "i": 222, "j": 222, "k": 500, "l": 222,
    "m": 833, "n": 556, "o": 556, "p": 556, "q": 556, "r": 333, "s": 500,
    "t": 278, "u": 556, "v": 500, "w": 722, "x": 500, "y": 500, "z": 500,
    "braceleft": 334, "bar": 260, "braceright": 334, "asciitilde": 584,
}

_HELVETICA_BBOX = (-166.0, -225.0, 1000.0, 931.0)
_COURIER_BBOX = (-23.0, -250.0, 715.0, 805.0)
_DEFAULT_WIDTH = 556.0
_COURIER_WIDTH = 600.0
_ASCENT = 718.0
_DESCENT = -207.0


class FontMetrics(object):
    """Interface of the metrics service."""

    def char_width(self, font_name: bytes, glyph: str) -> float:
        raise NotImplementedError

    def char_bbox(self, font_name: bytes, glyph: str) -> BBox:
        raise NotImplementedError

    def font_bbox(self, font_name: bytes) -> BBox:
        raise NotImplementedError


class BuiltinFontMetrics(FontMetrics):

    def __init__(self, extra_widths: Dict[bytes, Dict[str, float]] = None) -> None:
        self.extra_widths = extra_widths or {}

    @staticmethod
    def _is_monospaced(font_name: bytes) -> bool:
        return font_name.startswith(b"Courier") or font_name.startswith(b"NimbusMono")

    def char_width(self, font_name: bytes, glyph: str) -> float:
        if glyph == ".notdef":
            return 0.0
        widths = self.extra_widths.get(font_name)
        if widths is not None and glyph in widths:
            return float(widths[glyph])
        if self._is_monospaced(font_name):
            return _COURIER_WIDTH
        return float(_HELVETICA_WIDTHS.get(glyph, _DEFAULT_WIDTH))

    def char_bbox(self, font_name: bytes, glyph: str) -> BBox:
        return (0.0, _DESCENT, self.char_width(font_name, glyph), _ASCENT)

    def font_bbox(self, font_name: bytes) -> BBox:
        if self._is_monospaced(font_name):
            return _COURIER_BBOX
        return _HELVETICA_BBOX
