# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf Types Composite Name Module

Names are immutable symbols. They hash by their bytes and compare equal to
strings holding the same characters, which is what lets a string be used
as a dictionary key interchangeably with the name.
"""

from typing import Union

from ..base import PSObject
from ..constants import ACCESS_UNLIMITED, ATTRIB_LIT, T_NAME, T_STRING


class Name(PSObject):
    TYPE = T_NAME

    def __init__(
        self,
        name: Union[bytes, bytearray, str],
        access: int = ACCESS_UNLIMITED,
        attrib: int = ATTRIB_LIT,
    ) -> None:
        if isinstance(name, str):
            name = name.encode("latin-1")
        super().__init__(bytes(name), access, attrib)
        self._hash = hash(self.val)

    def __hash__(self):
        return self._hash

    def __eq__(self, other) -> bool:
        other_type = getattr(other, "TYPE", None)
        if other_type == T_NAME:
            return self.val == other.val
        if other_type == T_STRING:
            return self.val == other.byte_string()
        if isinstance(other, bytes):
            return self.val == other
        return False

    def to_bytes(self) -> bytes:
        return self.val

    def to_dict_key(self):
        return self.val

    def __str__(self) -> str:
        return self.val.decode("latin-1")

    def __repr__(self) -> str:
        if self.is_executable():
            return self.__str__()
        return "/" + self.__str__()
