# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from ..core import error as ps_error
from ..core import types as ps


def aload(ctxt, ostack):
    """
    array **aload** any₀ ... anyₙ₋₁ array


    successively pushes all n elements of array on the operand stack, where n is the
    length of the operand, and finally pushes the operand itself.

    **Examples**
        [23 (ab) -6] **aload**  -> 23 (ab) -6 [23 (ab) -6]

    **Errors**:     **invalidaccess**, **stackoverflow**, **stackunderflow**, **typecheck**
    **See Also**:   **astore**, **get**, **getinterval**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, aload.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_ARRAY:
        raise ps_error.e(ps_error.TYPECHECK, aload.__name__)
    # 3. INVALIDACCESS - Check read access
    if not ostack[-1].can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, aload.__name__)
    # 4. STACKOVERFLOW - Room for every element
    arr = ostack[-1]
    if ostack.max_length and len(ostack) + arr.length > ostack.max_length:
        raise ps_error.e(ps_error.STACKOVERFLOW, aload.__name__)

    ostack.pop()
    for item in arr.items():
        ostack.append(item)
    ostack.append(arr)


def array(ctxt, ostack):
    """
    int **array** array


    creates an array of length int, each of whose elements is initialized with a null
    object, and pushes this array on the operand stack. The int operand must be a
    nonnegative integer not greater than the maximum allowable array length.

    **Examples**
        3 **array**     -> [null null null]

    **Errors**:     **limitcheck**, **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **aload**, **astore**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, array.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_INT:
        raise ps_error.e(ps_error.TYPECHECK, array.__name__)
    # 3. RANGECHECK - Length must be nonnegative
    if ostack[-1].val < 0:
        raise ps_error.e(ps_error.RANGECHECK, array.__name__)
    # 4. LIMITCHECK - Maximum array length
    if ostack[-1].val > 65535:
        raise ps_error.e(ps_error.LIMITCHECK, array.__name__)

    ostack[-1] = ps.Array.of_size(ostack[-1].val)


def array_from_mark(ctxt, ostack):
    """
    mark obj₀ ... objₙ₋₁ **]** array


    creates a new array of n elements, where n is the number of elements above the
    topmost mark on the operand stack, stores those elements into the array, and returns
    the array on the operand stack. The topmost object becomes element n-1 and the
    bottommost becomes element 0. Both the elements and the mark are removed.

    **Examples**
        [5 4 3]         -> [5 4 3]
        [1 2 add]       -> [3]

    **Errors**:     **limitcheck**, **unmatchedmark**
    **See Also**:   **[**, **mark**, **array**, **astore**
    """
    op = "]"

    # 1. UNMATCHEDMARK - Find the mark
    count = None
    for depth in range(len(ostack)):
        if ostack.peek(depth).TYPE == ps.T_MARK:
            count = depth
            break
    if count is None:
        raise ps_error.e(ps_error.UNMATCHEDMARK, op)
    # 2. LIMITCHECK - Maximum array length
    if count > 65535:
        raise ps_error.e(ps_error.LIMITCHECK, op)

    items = ostack[len(ostack) - count:]
    del ostack[-(count + 1):]
    ostack.append(ps.Array(items))


def astore(ctxt, ostack):
    """
    any₀ ... anyₙ₋₁ array **astore** array


    stores the objects any₀ to anyₙ₋₁ from the operand stack into array, where n is
    the length of array. The **astore** operator first removes the array operand from
    the stack and determines its length. It then removes that number of objects from
    the stack, storing the topmost one into element n - 1 of array and the bottommost
    one into element 0. Finally, it pushes array back on the stack.

    **Examples**
        (a) (bcd) (ef) 3 **array** **astore**   -> [(a) (bcd) (ef)]

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **aload**, **put**, **putinterval**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, astore.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_ARRAY:
        raise ps_error.e(ps_error.TYPECHECK, astore.__name__)
    # 3. INVALIDACCESS - Check write access
    arr = ostack[-1]
    if not arr.can_write():
        raise ps_error.e(ps_error.INVALIDACCESS, astore.__name__)
    # 4. STACKUNDERFLOW - n objects below the array
    if len(ostack) < arr.length + 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, astore.__name__)

    ostack.pop()
    if arr.length:
        arr.putinterval(0, ostack[-arr.length:])
        del ostack[-arr.length:]
    ostack.append(arr)
