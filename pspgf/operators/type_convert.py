# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import math

from ..core import error as ps_error
from ..core import types as ps
from ..core.tokenizer import next_token


def text_form(obj: ps.PSObject) -> bytes:
    """The characters cvs and = produce for `obj`."""
    if obj.TYPE in (ps.T_INT, ps.T_REAL, ps.T_BOOL):
        return str(obj).encode("ascii")
    if obj.TYPE == ps.T_STRING:
        return obj.byte_string()
    if obj.TYPE == ps.T_NAME:
        return obj.val
    if obj.TYPE == ps.T_OPERATOR:
        return obj.name
    return b"--nostringval--"


def _number_from_string(string: ps.String, op_name: str) -> ps.PSObject:
    source = ps.File(string.byte_string(), "%string")
    try:
        obj = next_token(source)
    except ps_error.PSError as err:
        raise ps_error.e(err.code, op_name, err.detail) from err
    if obj is None or obj.TYPE not in ps.NUMERIC_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, op_name)
    return obj


def _check_one(ostack: ps.Stack, op_name: str) -> None:
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)


def cvi(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
       num **cvi** int
    string **cvi** int


    (convert to integer) takes an integer, real, or string object from the stack and
    produces an integer result. If the operand is an integer, **cvi** simply returns it. If the
    operand is a real number, it truncates any fractional part (that is, rounds it toward
    0) and converts it to an integer. If the operand is a string, **cvi** invokes the equivalent
    of the token operator to interpret the characters of the string as a number
    according to the PostScript syntax rules. A **rangecheck** error occurs if a real number
    is too large to convert to an integer.

    **Examples**
        (3.3E1) **cvi**     -> 33
        -47.8 **cvi**       -> -47
        520.9 **cvi**       -> 520

    **Errors**:     **invalidaccess**, **rangecheck**, **stackunderflow**, **syntaxerror**, **typecheck**
    **See Also**:   **cvr**, **ceiling**, **floor**, **round**, **truncate**
    """
    _check_one(ostack, cvi.__name__)
    obj = ostack[-1]
    # 2. TYPECHECK - Check operand type
    if obj.TYPE not in (ps.T_INT, ps.T_REAL, ps.T_STRING):
        raise ps_error.e(ps_error.TYPECHECK, cvi.__name__)
    # 3. INVALIDACCESS - Check read access
    if obj.TYPE == ps.T_STRING:
        if not obj.can_read():
            raise ps_error.e(ps_error.INVALIDACCESS, cvi.__name__)
        obj = _number_from_string(obj, cvi.__name__)

    if obj.TYPE == ps.T_INT:
        ostack[-1] = obj
        return
    value = obj.val
    # 4. RANGECHECK - Real out of integer range
    if math.isnan(value) or not ps.MIN_POSTSCRIPT_INTEGER <= value <= ps.MAX_POSTSCRIPT_INTEGER:
        raise ps_error.e(ps_error.RANGECHECK, cvi.__name__)
    ostack[-1] = ps.Int(int(value))


def cvr(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
       num **cvr** real
    string **cvr** real


    (convert to real) takes an integer, real, or string object and produces a real result.
    If the operand is a string, **cvr** invokes the equivalent of the token operator to
    interpret the characters of the string as a number, which it then converts to a real.

    **Errors**:     **invalidaccess**, **stackunderflow**, **syntaxerror**, **typecheck**
    **See Also**:   **cvi**
    """
    _check_one(ostack, cvr.__name__)
    obj = ostack[-1]
    # 2. TYPECHECK - Check operand type
    if obj.TYPE not in (ps.T_INT, ps.T_REAL, ps.T_STRING):
        raise ps_error.e(ps_error.TYPECHECK, cvr.__name__)
    if obj.TYPE == ps.T_STRING:
        # 3. INVALIDACCESS - Check read access
        if not obj.can_read():
            raise ps_error.e(ps_error.INVALIDACCESS, cvr.__name__)
        obj = _number_from_string(obj, cvr.__name__)

    ostack[-1] = ps.Real(obj.to_real())


def cvn(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    string **cvn** name


    (convert to name) converts the string operand to a name object that is lexically
    the same as the string. The name object is executable if the string was executable.

    **Examples**
        (abc) **cvn**       -> /abc
        (abc) cvx **cvn**   -> abc

    **Errors**:     **invalidaccess**, **limitcheck**, **stackunderflow**, **typecheck**
    **See Also**:   **cvs**, **type**
    """
    _check_one(ostack, cvn.__name__)
    obj = ostack[-1]
    # 2. TYPECHECK - Check operand type
    if obj.TYPE != ps.T_STRING:
        raise ps_error.e(ps_error.TYPECHECK, cvn.__name__)
    # 3. INVALIDACCESS - Check read access
    if not obj.can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, cvn.__name__)

    ostack[-1] = ps.Name(obj.byte_string(), attrib=obj.attrib)


def cvs(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    any string **cvs** substring


    (convert to string) produces a text representation of an arbitrary object any, stores
    the text into string (overwriting some initial portion of its value), and returns a
    string object designating the substring actually used. If string is too small to hold
    the result of the conversion, a **rangecheck** error occurs.

    If any is a number or a boolean, **cvs** produces its text form. If any is a string,
    **cvs** copies its contents into string. If any is a name or an operator, **cvs**
    produces the text of that name or the operator's name. Any other type produces
    the text --nostringval--.

    **Examples**
        /str 20 string def
        123 456 add str **cvs**     -> (579)
        mark str **cvs**            -> (--nostringval--)

    **Errors**:     **invalidaccess**, **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **cvi**, **cvr**, **string**, **type**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, cvs.__name__)
    # 2. TYPECHECK - Destination must be a string
    dest = ostack[-1]
    if dest.TYPE != ps.T_STRING:
        raise ps_error.e(ps_error.TYPECHECK, cvs.__name__)
    # 3. INVALIDACCESS - Check write access
    if not dest.can_write():
        raise ps_error.e(ps_error.INVALIDACCESS, cvs.__name__)

    text = text_form(ostack[-2])
    # 4. RANGECHECK - Destination large enough
    if len(text) > dest.length:
        raise ps_error.e(ps_error.RANGECHECK, cvs.__name__)

    dest.putinterval(0, text)
    ostack.pop()
    ostack[-1] = dest.getinterval(0, len(text))


def cvx(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    any **cvx** any


    (convert to executable) makes the object on the top of the operand stack have the
    executable instead of the literal attribute.

    **Errors**:     **stackunderflow**
    **See Also**:   **cvlit**, **xcheck**
    """
    _check_one(ostack, cvx.__name__)

    ostack[-1] = ostack[-1].with_attrib(ps.ATTRIB_EXEC)


def cvlit(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    any **cvlit** any


    (convert to literal) makes the object on the top of the operand stack have the
    literal instead of the executable attribute.

    **Errors**:     **stackunderflow**
    **See Also**:   **cvx**, **xcheck**
    """
    _check_one(ostack, cvlit.__name__)

    ostack[-1] = ostack[-1].with_attrib(ps.ATTRIB_LIT)


def xcheck(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    any **xcheck** bool


    tests whether the operand has the executable or the literal attribute, returning true
    if it is executable or false if it is literal.

    **Errors**:     **stackunderflow**
    **See Also**:   **cvx**, **cvlit**
    """
    _check_one(ostack, xcheck.__name__)

    ostack[-1] = ps.Bool(ostack[-1].is_executable())


def _check_access_operand(ostack: ps.Stack, op_name: str) -> ps.PSObject:
    _check_one(ostack, op_name)
    obj = ostack[-1]
    # 2. TYPECHECK - Access applies to composites and files
    if obj.TYPE not in ps.COMPOSITE_TYPES and obj.TYPE != ps.T_FILE:
        raise ps_error.e(ps_error.TYPECHECK, op_name)
    return obj


def rcheck(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    array **rcheck** bool
    dict **rcheck** bool
    file **rcheck** bool
    string **rcheck** bool


    tests whether the operand's access permits its value to be read explicitly by
    PostScript operators.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **executeonly**, **noaccess**, **readonly**, **wcheck**
    """
    obj = _check_access_operand(ostack, rcheck.__name__)

    ostack[-1] = ps.Bool(obj.can_read())


def wcheck(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    array **wcheck** bool
    dict **wcheck** bool
    file **wcheck** bool
    string **wcheck** bool


    tests whether the operand's access permits its value to be written explicitly by
    PostScript operators.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **rcheck**, **readonly**, **executeonly**, **noaccess**
    """
    obj = _check_access_operand(ostack, wcheck.__name__)

    ostack[-1] = ps.Bool(obj.can_write())


def _reduce_access(ostack: ps.Stack, op_name: str, access: int) -> None:
    obj = _check_access_operand(ostack, op_name)
    # 3. INVALIDACCESS - Access can only be reduced
    if obj.access < access:
        raise ps_error.e(ps_error.INVALIDACCESS, op_name)
    if obj.TYPE in ps.DICT_TYPES:
        # the access of a dictionary belongs to the dictionary itself
        obj.access = access
        return
    ostack[-1] = obj.with_access(access)


def readonly(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    array **readonly** array
    dict **readonly** dict
    file **readonly** file
    string **readonly** string


    reduces the access attribute of an array, dictionary, file or string object to
    read-only. Access can only be reduced by these means, never increased.

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **executeonly**, **noaccess**, **rcheck**, **wcheck**
    """
    _reduce_access(ostack, readonly.__name__, ps.ACCESS_READ_ONLY)


def executeonly(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    array **executeonly** array
    file **executeonly** file
    string **executeonly** string


    reduces the access attribute of an array, file or string object to execute-only.
    Access can only be reduced by these means, never increased. When an object is
    execute-only, its value cannot be read or written explicitly by PostScript operators.
    However, the object can still be executed by the PostScript interpreter.

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **noaccess**, **rcheck**, **readonly**, **wcheck**, **xcheck**
    """
    if ostack and ostack[-1].TYPE in ps.DICT_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, executeonly.__name__)
    _reduce_access(ostack, executeonly.__name__, ps.ACCESS_EXECUTE_ONLY)


def noaccess(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    array **noaccess** array
    dict **noaccess** dict
    file **noaccess** file
    string **noaccess** string


    reduces the access attribute of an array, dictionary, file or string object to none.
    The value of the object cannot be executed or accessed directly by PostScript
    operators.

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **executeonly**, **rcheck**, **readonly**, **wcheck**, **xcheck**
    """
    _reduce_access(ostack, noaccess.__name__, ps.ACCESS_NONE)


def ps_type(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    any **type** name


    returns a name object that identifies the type of the object any. The result is one
    of the following names: arraytype, booleantype, dicttype, filetype, fonttype,
    integertype, marktype, nametype, nulltype, operatortype, realtype, savetype,
    stringtype. The name is executable.

    **Errors**:     **stackunderflow**
    **See Also**:   **cvlit**, **cvx**, **xcheck**
    """
    _check_one(ostack, ps_type.__name__)

    ostack[-1] = ps.Name(ostack[-1].type_name(), attrib=ps.ATTRIB_EXEC)
