# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf Types Composite Sub-Package

- string.py: String - mutable byte buffer views
- name.py: Name - immutable symbols
- array.py: Array + Matrix - list views and affine transforms
- dict.py: Dict - key/value store
"""

from .string import String
from .name import Name
from .array import Array, Matrix
from .dict import Dict

__all__ = ["String", "Name", "Array", "Matrix", "Dict"]
