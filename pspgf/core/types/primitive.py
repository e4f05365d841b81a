# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf Types Primitive Classes Module

Simple atomic PostScript values. They are copied by value and compare by
value; Int and Real compare with each other numerically.
"""

from .base import PSObject
from .constants import (
    ACCESS_UNLIMITED, ATTRIB_LIT,
    T_BOOL, T_NULL, T_INT, T_REAL, T_MARK
)


class Bool(PSObject):
    """PostScript boolean type - represents true/false values."""
    TYPE = T_BOOL

    def __init__(self, val: bool, access: int = ACCESS_UNLIMITED, attrib: int = ATTRIB_LIT) -> None:
        super().__init__(bool(val), access, attrib)

    def __eq__(self, other) -> bool:
        return isinstance(other, Bool) and self.val == other.val

    def __hash__(self):
        return hash(("bool", self.val))

    def to_bool(self) -> bool:
        return self.val

    def to_dict_key(self):
        return ("bool", self.val)

    def __str__(self) -> str:
        return "true" if self.val else "false"

    def __repr__(self) -> str:
        return self.__str__()


class Null(PSObject):
    """PostScript null type - represents null/empty values."""
    TYPE = T_NULL

    def __init__(self, val: None = None, access: int = ACCESS_UNLIMITED, attrib: int = ATTRIB_LIT) -> None:
        super().__init__(None, access, attrib)

    def __eq__(self, other) -> bool:
        return isinstance(other, Null)

    def __hash__(self):
        return hash("null")

    def to_dict_key(self):
        return ("null",)

    def __str__(self) -> str:
        return "null"

    def __repr__(self) -> str:
        return "null"


class Int(PSObject):
    """PostScript integer type - represents whole number values."""
    TYPE = T_INT

    def __init__(self, val: int, access: int = ACCESS_UNLIMITED, attrib: int = ATTRIB_LIT) -> None:
        super().__init__(val, access, attrib)

    def __eq__(self, other) -> bool:
        if not isinstance(other, (Int, Real)):
            return False
        return self.val == other.val

    def __hash__(self):
        return hash(self.val)

    def to_int(self) -> int:
        return self.val

    def to_real(self) -> float:
        return float(self.val)

    def to_dict_key(self):
        return self.val

    def __str__(self) -> str:
        return str(self.val)

    def __repr__(self) -> str:
        return self.__str__()


class Real(PSObject):
    """PostScript real (floating-point) type - represents decimal number values."""
    TYPE = T_REAL

    def __init__(self, val: float, access: int = ACCESS_UNLIMITED, attrib: int = ATTRIB_LIT) -> None:
        super().__init__(float(val), access, attrib)

    def __eq__(self, other) -> bool:
        if not isinstance(other, (Int, Real)):
            return False
        return self.val == other.val

    def __hash__(self):
        return hash(self.val)

    def to_real(self) -> float:
        return self.val

    def to_dict_key(self):
        return self.val

    def __str__(self) -> str:
        if self.val.is_integer() and abs(self.val) < 1e15:
            return f"{self.val:.1f}"
        return repr(self.val)

    def __repr__(self) -> str:
        return self.__str__()


class Mark(PSObject):
    """PostScript mark type - the stack-marker sentinel."""
    TYPE = T_MARK

    def __init__(self, access: int = ACCESS_UNLIMITED, attrib: int = ATTRIB_LIT) -> None:
        super().__init__(None, access, attrib)

    def __eq__(self, other) -> bool:
        return isinstance(other, Mark)

    def __hash__(self):
        return hash("mark")

    def to_dict_key(self):
        return ("mark",)

    def __repr__(self) -> str:
        return "-mark-"


def number(val):
    """Wrap a Python number in Int or Real, keeping integers integral."""
    if isinstance(val, int) and not isinstance(val, bool):
        return Int(val)
    return Real(val)
