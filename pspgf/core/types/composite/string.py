# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf Types Composite String Module

PostScript strings are mutable byte buffers. A String object is a view
(start, length) onto a shared bytearray; getinterval returns another view
of the same buffer so writes through either are visible to both.
"""

from typing import Union

from ...error import PSError, RANGECHECK
from ..base import PSObject
from ..constants import ACCESS_UNLIMITED, ATTRIB_LIT, T_NAME, T_STRING


class String(PSObject):
    TYPE = T_STRING

    def __init__(
        self,
        val: Union[bytes, bytearray, int] = b"",
        start: int = 0,
        length: int = None,
        access: int = ACCESS_UNLIMITED,
        attrib: int = ATTRIB_LIT,
    ) -> None:
        if isinstance(val, int):
            val = bytearray(val)
        elif not isinstance(val, bytearray):
            val = bytearray(val)
        super().__init__(val, access, attrib, is_composite=True)
        self.start = start
        self.length = len(val) - start if length is None else length

    def byte_string(self) -> bytes:
        return bytes(self.val[self.start:self.start + self.length])

    def get(self, index: int) -> int:
        if index < 0 or index >= self.length:
            raise PSError(RANGECHECK)
        return self.val[self.start + index]

    def put(self, index: int, byte: int) -> None:
        if index < 0 or index >= self.length:
            raise PSError(RANGECHECK)
        if byte < 0 or byte > 255:
            raise PSError(RANGECHECK)
        self.val[self.start + index] = byte

    def getinterval(self, index: int, count: int) -> "String":
        if index < 0 or count < 0 or index + count > self.length:
            raise PSError(RANGECHECK)
        new_str = self.__copy__()
        new_str.start = self.start + index
        new_str.length = count
        return new_str

    def putinterval(self, index: int, data: bytes) -> None:
        if index < 0 or index + len(data) > self.length:
            raise PSError(RANGECHECK)
        pos = self.start + index
        self.val[pos:pos + len(data)] = data

    def to_bytes(self) -> bytes:
        return self.byte_string()

    def to_dict_key(self):
        return self.byte_string()

    def __eq__(self, other) -> bool:
        other_type = getattr(other, "TYPE", None)
        if other_type in (T_STRING, T_NAME):
            return self.byte_string() == other.to_bytes()
        return False

    def __hash__(self):
        return hash(self.byte_string())

    def __str__(self) -> str:
        return self.byte_string().decode("latin-1")

    def __repr__(self) -> str:
        out = []
        for byte in self.byte_string():
            ch = chr(byte)
            if ch in "()\\":
                out.append("\\" + ch)
            elif ch == "\n":
                out.append("\\n")
            elif ch == "\r":
                out.append("\\r")
            elif ch == "\t":
                out.append("\\t")
            elif 32 <= byte < 127:
                out.append(ch)
            else:
                out.append(f"\\{byte:03o}")
        return "(" + "".join(out) + ")"
