# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf Types Utility Classes Module

Operator wraps a built-in handler, Font is the dictionary-shaped font
resource and Save is the token returned by the save operator.
"""

from typing import Callable

from .base import PSObject
from .composite import Dict
from .constants import ACCESS_EXECUTE_ONLY, ACCESS_UNLIMITED, ATTRIB_EXEC, T_FONT, T_OPERATOR, T_SAVE


class Operator(PSObject):
    """A named built-in; `val` is the handler called as handler(ctxt, ostack)."""
    TYPE = T_OPERATOR

    def __init__(self, func: Callable, name: bytes = b"") -> None:
        super().__init__(func, ACCESS_EXECUTE_ONLY, ATTRIB_EXEC)
        self.name = name or func.__name__.encode("ascii")

    def __eq__(self, other) -> bool:
        return isinstance(other, Operator) and self.val is other.val

    def __hash__(self):
        return hash(self.val)

    def to_dict_key(self):
        return ("operator", self.name)

    def __str__(self) -> str:
        return "--" + self.name.decode("ascii") + "--"

    def __repr__(self) -> str:
        return self.__str__()


class Font(Dict):
    """
    A font dictionary. Besides the usual entries (FontName, FontMatrix,
    Encoding, FontBBox) it holds a reference to the font-metrics service
    used for glyph widths.
    """
    TYPE = T_FONT

    def __init__(self, metrics=None, max_length: int = 10, access: int = ACCESS_UNLIMITED) -> None:
        super().__init__(max_length, b"font", access)
        self.metrics = metrics

    def font_name(self) -> bytes:
        name = self.get_bytes(b"FontName")
        if name is None:
            return b""
        return name.to_bytes()

    def __repr__(self) -> str:
        return "-font-"


class Save(PSObject):
    """Snapshot token; `val` is the graphics state stack depth at save time."""
    TYPE = T_SAVE

    def __init__(self, level: int, save_id: int) -> None:
        super().__init__(level)
        self.save_id = save_id

    def __eq__(self, other) -> bool:
        return isinstance(other, Save) and self.save_id == other.save_id

    def __hash__(self):
        return hash(("save", self.save_id))

    def to_dict_key(self):
        return ("save", self.save_id)

    def __repr__(self) -> str:
        return "-save-"
