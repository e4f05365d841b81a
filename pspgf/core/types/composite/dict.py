# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf Types Composite Dict Module

Dictionaries map keys to values. The Python dict in `val` is keyed by each
key object's to_dict_key() so that names and strings with the same
characters, and integers and reals with the same value, land on the same
entry. The original key objects are kept alongside for forall and ==.
Copies of a Dict object share both mappings.
"""

from typing import Iterator, Optional, Tuple

from ...error import PSError, INVALIDACCESS, TYPECHECK
from ..base import PSObject
from ..constants import ACCESS_UNLIMITED, ATTRIB_LIT, T_DICT, T_NULL, T_STRING
from .name import Name


class Dict(PSObject):
    TYPE = T_DICT

    def __init__(
        self,
        max_length: int = 0,
        name: bytes = b"",
        access: int = ACCESS_UNLIMITED,
        attrib: int = ATTRIB_LIT,
    ) -> None:
        super().__init__({}, access, attrib, is_composite=True)
        self.key_objs = {}
        self.max_length = max_length
        self.name = name

    def _key(self, key: PSObject):
        if key.TYPE == T_NULL:
            raise PSError(TYPECHECK)
        return key.to_dict_key()

    def get(self, key: PSObject) -> Optional[PSObject]:
        return self.val.get(self._key(key))

    def get_bytes(self, key: bytes) -> Optional[PSObject]:
        """Look up a name given as raw bytes, for internal callers."""
        return self.val.get(key)

    def put(self, key: PSObject, value: PSObject) -> None:
        if not self.can_write():
            raise PSError(INVALIDACCESS)
        hkey = self._key(key)
        if key.TYPE == T_STRING:
            key = Name(key.byte_string())
        self.val[hkey] = value
        if hkey not in self.key_objs:
            self.key_objs[hkey] = key

    def put_bytes(self, key: bytes, value: PSObject) -> None:
        self.val[key] = value
        self.key_objs.setdefault(key, Name(key))

    def undef(self, key: PSObject) -> None:
        if not self.can_write():
            raise PSError(INVALIDACCESS)
        hkey = self._key(key)
        self.val.pop(hkey, None)
        self.key_objs.pop(hkey, None)

    def known(self, key: PSObject) -> bool:
        return self._key(key) in self.val

    def items(self) -> Iterator[Tuple[PSObject, PSObject]]:
        for hkey, value in list(self.val.items()):
            yield self.key_objs[hkey], value

    def __len__(self) -> int:
        return len(self.val)

    def maxlength(self) -> int:
        return max(self.max_length, len(self.val))

    def __eq__(self, other) -> bool:
        return isinstance(other, Dict) and self.val is other.val

    def __hash__(self):
        return id(self.val)

    def to_dict_key(self):
        return ("dict", id(self.val))

    def to_dict(self) -> "Dict":
        return self

    def __repr__(self) -> str:
        return "-dict-"
