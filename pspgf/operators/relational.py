# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import operator

from ..core import error as ps_error
from ..core import types as ps


def _logical(ostack, op_name, func):
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)
    # 2. TYPECHECK - Both boolean or both integer
    a, b = ostack[-2], ostack[-1]
    if a.TYPE == ps.T_BOOL and b.TYPE == ps.T_BOOL:
        result = ps.Bool(func(a.val, b.val))
    elif a.TYPE == ps.T_INT and b.TYPE == ps.T_INT:
        result = ps.Int(func(a.val, b.val))
    else:
        raise ps_error.e(ps_error.TYPECHECK, op_name)

    ostack.pop()
    ostack[-1] = result


def ps_and(ctxt, ostack):
    """
    bool₁ bool₂ **and** bool₃
    int₁ int₂ **and** int₃


    returns the logical conjunction of the operands if they are boolean. If the operands
    are integers, **and** returns the bitwise "and" of their binary representations.

    **Examples**
        true true **and**   -> true
        99 1 **and**        -> 1
        52 7 **and**        -> 4

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **or**, **xor**, **not**, **true**, **false**
    """
    _logical(ostack, ps_and.__name__, operator.and_)


def ps_or(ctxt, ostack):
    """
    bool₁ bool₂ **or** bool₃
    int₁ int₂ **or** int₃


    returns the logical disjunction of the operands if they are boolean. If the operands
    are integers, **or** returns the bitwise "inclusive or" of their binary representations.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **and**, **xor**, **not**
    """
    _logical(ostack, ps_or.__name__, operator.or_)


def xor(ctxt, ostack):
    """
    bool₁ bool₂ **xor** bool₃
    int₁ int₂ **xor** int₃


    returns the logical "exclusive or" of the operands if they are boolean. If the
    operands are integers, **xor** returns the bitwise "exclusive or" of their binary
    representations.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **or**, **and**, **not**
    """
    _logical(ostack, xor.__name__, operator.xor)


def ps_not(ctxt, ostack):
    """
    bool₁ **not** bool₂
    int₁ **not** int₂


    returns the logical negation of the operand if it is boolean. If the operand is an
    integer, **not** returns the bitwise complement (ones complement) of its binary
    representation.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **and**, **or**, **xor**, **if**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, ps_not.__name__)

    obj = ostack[-1]
    if obj.TYPE == ps.T_BOOL:
        ostack[-1] = ps.Bool(not obj.val)
    elif obj.TYPE == ps.T_INT:
        ostack[-1] = ps.Int(~obj.val)
    else:
        raise ps_error.e(ps_error.TYPECHECK, ps_not.__name__)


def bitshift(ctxt, ostack):
    """
    int₁ shift **bitshift** int₂


    shifts the binary representation of int₁ left by shift bits and returns the result.
    Bits shifted out are lost; bits shifted in are 0. If shift is negative, a right shift
    by -shift bits is performed.

    **Examples**
        7 3 **bitshift**    -> 56
        142 -3 **bitshift** -> 17

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **and**, **or**, **xor**, **not**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, bitshift.__name__)
    # 2. TYPECHECK - Check operand types (int int)
    if ostack[-1].TYPE != ps.T_INT or ostack[-2].TYPE != ps.T_INT:
        raise ps_error.e(ps_error.TYPECHECK, bitshift.__name__)

    value, shift = ostack[-2].val & 0xFFFFFFFF, ostack[-1].val
    value = (value << shift if shift >= 0 else value >> -shift) & 0xFFFFFFFF
    # back to a signed 32-bit integer
    if value > ps.MAX_POSTSCRIPT_INTEGER:
        value -= 1 << 32
    ostack.pop()
    ostack[-1] = ps.Int(value)


def _check_equality_operands(ostack, op_name):
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)
    # 2. INVALIDACCESS - Strings are compared by content
    for obj in ostack[-2:]:
        if obj.TYPE == ps.T_STRING and not obj.can_read():
            raise ps_error.e(ps_error.INVALIDACCESS, op_name)


def eq(ctxt, ostack):
    """
    any₁ any₂ **eq** bool


    pops two objects from the operand stack and pushes true if they are equal, or false
    if not. Simple objects are equal if their types and values are the same. Strings are
    equal if their lengths and individual elements are equal. Other composite objects
    (arrays and dictionaries) are equal only if they share the same value.

    Integers and real numbers can be compared freely, and so can strings and names.
    The literal/executable and access attributes of objects are not considered.

    **Examples**
        4.0 4 eq            -> true
        (abc) (abc) eq      -> true
        (abc) /abc eq       -> true
        [1 2 3] dup eq      -> true
        [1 2 3] [1 2 3] eq  -> false

    **Errors**:     **invalidaccess**, **stackunderflow**
    **See Also**:   **ne**, **le**, **lt**, **ge**, **gt**
    """
    _check_equality_operands(ostack, eq.__name__)

    result = ostack[-2] == ostack[-1]
    ostack.pop()
    ostack[-1] = ps.Bool(result)


def ne(ctxt, ostack):
    """
    any₁ any₂ **ne** bool


    pops two objects from the operand stack and pushes false if they are equal, or true
    if not. What it means for objects to be equal is presented in the description of the
    **eq** operator.

    **Errors**:     **invalidaccess**, **stackunderflow**
    **See Also**:   **eq**, **ge**, **gt**, **le**, **lt**
    """
    _check_equality_operands(ostack, ne.__name__)

    result = ostack[-2] == ostack[-1]
    ostack.pop()
    ostack[-1] = ps.Bool(not result)


def _compare(ostack, op_name, func):
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)
    # 2. TYPECHECK - Both numbers or both strings
    a, b = ostack[-2], ostack[-1]
    if a.TYPE in ps.NUMERIC_TYPES and b.TYPE in ps.NUMERIC_TYPES:
        result = func(a.val, b.val)
    elif a.TYPE == ps.T_STRING and b.TYPE == ps.T_STRING:
        # 3. INVALIDACCESS - Check read access
        if not a.can_read() or not b.can_read():
            raise ps_error.e(ps_error.INVALIDACCESS, op_name)
        result = func(a.byte_string(), b.byte_string())
    else:
        raise ps_error.e(ps_error.TYPECHECK, op_name)

    ostack.pop()
    ostack[-1] = ps.Bool(result)


def ge(ctxt, ostack):
    """
    num₁ num₂ **ge** bool
    string₁ string₂ **ge** bool


    pops two objects from the operand stack and pushes true if the first operand is
    greater than or equal to the second, or false otherwise. If both operands are
    numbers, **ge** compares their mathematical values. If both operands are strings,
    **ge** compares them element by element.

    **Examples**
        4.2 4 **ge**            -> true
        (abc) (d) **ge**        -> false
        (aba) (ab) **ge**       -> true

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **gt**, **eq**, **ne**, **le**, **lt**
    """
    _compare(ostack, ge.__name__, operator.ge)


def gt(ctxt, ostack):
    """
    num₁ num₂ **gt** bool
    string₁ string₂ **gt** bool


    pops two objects from the operand stack and pushes true if the first operand is
    greater than the second, or false otherwise.

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **ge**, **eq**, **ne**, **le**, **lt**
    """
    _compare(ostack, gt.__name__, operator.gt)


def le(ctxt, ostack):
    """
    num₁ num₂ **le** bool
    string₁ string₂ **le** bool


    pops two objects from the operand stack and pushes true if the first operand is less
    than or equal to the second, or false otherwise.

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **lt**, **eq**, **ne**, **ge**, **gt**
    """
    _compare(ostack, le.__name__, operator.le)


def lt(ctxt, ostack):
    """
    num₁ num₂ **lt** bool
    string₁ string₂ **lt** bool


    pops two objects from the operand stack and pushes true if the first operand is less
    than the second, or false otherwise.

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **le**, **eq**, **ne**, **ge**, **gt**
    """
    _compare(ostack, lt.__name__, operator.lt)
