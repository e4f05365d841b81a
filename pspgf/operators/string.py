# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from ..core import error as ps_error
from ..core import types as ps


def _check_search_operands(ostack, op_name):
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)
    # 2. TYPECHECK - Check operand types (string string)
    if ostack[-1].TYPE != ps.T_STRING or ostack[-2].TYPE != ps.T_STRING:
        raise ps_error.e(ps_error.TYPECHECK, op_name)
    # 3. INVALIDACCESS - Check read access
    if not ostack[-1].can_read() or not ostack[-2].can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, op_name)


def anchorsearch(ctxt, ostack):
    """
    string seek **anchorsearch** post match true (if found)
                                 string false    (if not found)


    determines whether the string seek matches the initial substring of string (that is,
    whether string is at least as long as seek and the corresponding characters are equal).
    If it matches, **anchorsearch** splits string into two segments: match, the portion
    of string that matches seek, and post, the remainder of string; it then pushes the
    string objects post and match and the boolean value true. If not, **anchorsearch**
    pushes the original string and the boolean value false.

    **Examples**
        (abbc) (ab) **anchorsearch**    -> (bc) (ab) true
        (abbc) (bb) **anchorsearch**    -> (abbc) false

    **Errors**:     **invalidaccess**, **stackoverflow**, **stackunderflow**, **typecheck**
    **See Also**:   **search**, **token**
    """
    _check_search_operands(ostack, anchorsearch.__name__)

    string, seek = ostack[-2], ostack[-1]
    if string.byte_string().startswith(seek.byte_string()):
        match = string.getinterval(0, seek.length)
        post = string.getinterval(seek.length, string.length - seek.length)
        ostack[-2] = post
        ostack[-1] = match
        ostack.append(ps.Bool(True))
    else:
        ostack[-1] = ps.Bool(False)


def search(ctxt, ostack):
    """
    string seek **search** post match pre true  (if found)
                           string false         (if not found)


    looks for the first occurrence of the string seek within string and returns the
    results of this search on the operand stack. If seek is found, **search** splits string
    into three segments: pre, the portion of string preceding the match; match, the
    portion of string that matches seek; and post, the remainder of string. It then
    pushes the string objects post, match, and pre on the operand stack, followed by
    the boolean value true. All three of these strings are substrings sharing intervals
    of the value of the original string. If the search fails, **search** pushes the
    original string and the boolean value false.

    **Examples**
        (abbc) (ab) **search**  -> (bc) (ab) () true
        (abbc) (bb) **search**  -> (c) (bb) (a) true
        (abbc) (bc) **search**  -> () (bc) (ab) true
        (abbc) (B) **search**   -> (abbc) false

    **Errors**:     **invalidaccess**, **stackoverflow**, **stackunderflow**, **typecheck**
    **See Also**:   **anchorsearch**, **token**
    """
    _check_search_operands(ostack, search.__name__)

    string, seek = ostack[-2], ostack[-1]
    pos = string.byte_string().find(seek.byte_string())
    if pos < 0:
        ostack[-1] = ps.Bool(False)
        return

    end = pos + seek.length
    ostack[-2] = string.getinterval(end, string.length - end)
    ostack[-1] = string.getinterval(pos, seek.length)
    ostack.append(string.getinterval(0, pos))
    ostack.append(ps.Bool(True))


def ps_string(ctxt, ostack):
    """
    int **string** string


    creates a string of length int, each of whose elements is initialized with the
    integer 0, and pushes this string on the operand stack. The int operand must be a
    nonnegative integer not greater than the maximum allowable string length.

    **Errors**:     **limitcheck**, **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **length**, **type**
    """
    op = "string"

    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_INT:
        raise ps_error.e(ps_error.TYPECHECK, op)
    # 3. RANGECHECK - Length must be nonnegative
    if ostack[-1].val < 0:
        raise ps_error.e(ps_error.RANGECHECK, op)
    # 4. LIMITCHECK - Maximum string length
    if ostack[-1].val > 65535:
        raise ps_error.e(ps_error.LIMITCHECK, op)

    ostack[-1] = ps.String(ostack[-1].val)
