# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf Types Constants Module

This module contains the constants used throughout the interpreter: stack
limits, access levels, literal/executable attributes and the type tags that
identify each PostScript object variant.
"""

# stack limits (defaults, overridable through the system params)
O_STACK_MAX = 500                           # Operand stack maximum depth
D_STACK_MAX = 250                           # Dictionary stack maximum depth
G_STACK_MAX = 100                           # Graphics state stack maximum depth
EXEC_DEPTH_MAX = 150                        # Nested procedure execution depth

# PostScript system constants
MAX_POSTSCRIPT_INTEGER = 2147483647         # Maximum 32-bit signed integer (2^31 - 1)
MIN_POSTSCRIPT_INTEGER = -2147483648

# access types
ACCESS_UNLIMITED = 4                        # Can read, write, and execute
ACCESS_READ_ONLY = 2                        # Can read but not write
ACCESS_EXECUTE_ONLY = 1                     # Can execute but not read/write
ACCESS_NONE = 0                             # No access allowed

# attribute types
ATTRIB_LIT = 0
ATTRIB_EXEC = 1

# PSObject types
T_ARRAY = 0
T_BOOL = 1
T_DICT = 2
T_FILE = 3
T_FONT = 4
T_INT = 6
T_MARK = 7
T_NAME = 8
T_NULL = 9
T_OPERATOR = 10
T_REAL = 12
T_SAVE = 13
T_STRING = 14

# names returned by the type operator
TYPE_NAMES = {
    T_ARRAY: b"arraytype",
    T_BOOL: b"booleantype",
    T_DICT: b"dicttype",
    T_FILE: b"filetype",
    T_FONT: b"fonttype",
    T_INT: b"integertype",
    T_MARK: b"marktype",
    T_NAME: b"nametype",
    T_NULL: b"nulltype",
    T_OPERATOR: b"operatortype",
    T_REAL: b"realtype",
    T_SAVE: b"savetype",
    T_STRING: b"stringtype",
}

# Type grouping constants for fast type checking
NUMERIC_TYPES = frozenset({T_INT, T_REAL})
COMPOSITE_TYPES = frozenset({T_ARRAY, T_DICT, T_STRING, T_FONT})
DICT_TYPES = frozenset({T_DICT, T_FONT})
LITERAL_TYPES = frozenset({T_INT, T_REAL, T_BOOL, T_MARK, T_SAVE})

# Winding Rule types
WINDING_NON_ZERO = 0
WINDING_EVEN_ODD = 1

# line cap types
LINE_CAP_BUTT = 0
LINE_CAP_ROUND = 1
LINE_CAP_SQUARE = 2

# line join types
LINE_JOIN_MITER = 0
LINE_JOIN_ROUND = 1
LINE_JOIN_BEVEL = 2

# points per inch
PPI = 72.0
