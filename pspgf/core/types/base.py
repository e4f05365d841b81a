# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf Types Base Classes Module

This module contains the PSObject base class shared by every PostScript
value. Besides the value itself an object carries its literal/executable
attribute and its access level, and it exposes the coercions used by the
operators. A coercion either returns the converted value or raises a
typecheck error; numeric coercions never truncate implicitly.
"""

import copy
from typing import Any

from ..error import PSError, TYPECHECK, RANGECHECK
from .constants import (
    ACCESS_UNLIMITED, ACCESS_READ_ONLY, ACCESS_EXECUTE_ONLY, ATTRIB_LIT,
    ATTRIB_EXEC, TYPE_NAMES
)


class PSObject(object):
    """
    Base class for all PostScript objects.

    Composite subclasses share their `val` between copies, so copying an
    object copies its header (attribute, access) and aliases its contents.
    """
    TYPE = None

    def __init__(
        self,
        val: Any,
        access: int = ACCESS_UNLIMITED,
        attrib: int = ATTRIB_LIT,
        is_composite: bool = False,
    ) -> None:
        self.val = val
        self.access = access
        self.attrib = attrib
        self.is_composite = is_composite

    def __copy__(self):
        new_obj = self.__class__.__new__(self.__class__)
        new_obj.__dict__.update(self.__dict__)
        return new_obj

    # attributes and access

    def is_executable(self) -> bool:
        return self.attrib == ATTRIB_EXEC

    def can_read(self) -> bool:
        return self.access >= ACCESS_READ_ONLY

    def can_write(self) -> bool:
        return self.access >= ACCESS_UNLIMITED

    def can_execute(self) -> bool:
        return self.access >= ACCESS_EXECUTE_ONLY

    def with_attrib(self, attrib: int) -> "PSObject":
        new_obj = copy.copy(self)
        new_obj.attrib = attrib
        return new_obj

    def with_access(self, access: int) -> "PSObject":
        new_obj = copy.copy(self)
        new_obj.access = access
        return new_obj

    def type_name(self) -> bytes:
        return TYPE_NAMES[self.TYPE]

    # coercions

    def to_int(self) -> int:
        raise PSError(TYPECHECK)

    def to_non_neg_int(self) -> int:
        val = self.to_int()
        if val < 0:
            raise PSError(RANGECHECK)
        return val

    def to_real(self) -> float:
        raise PSError(TYPECHECK)

    def to_bool(self) -> bool:
        raise PSError(TYPECHECK)

    def to_bytes(self) -> bytes:
        raise PSError(TYPECHECK)

    def to_proc(self):
        raise PSError(TYPECHECK)

    def to_array(self):
        raise PSError(TYPECHECK)

    def to_dict(self):
        raise PSError(TYPECHECK)

    def to_matrix(self):
        raise PSError(TYPECHECK)

    def to_dict_key(self):
        """Hashable key used to store this object in a dictionary."""
        return self

    # text forms used by cvs / = and == respectively

    def __str__(self) -> str:
        return "--nostringval--"

    def __repr__(self) -> str:
        return "-" + self.type_name().decode("ascii") + "-"