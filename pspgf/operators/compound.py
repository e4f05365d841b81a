# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Polymorphic operators over the composite types: arrays, strings and
dictionaries share copy, get, put, length, getinterval and putinterval.
"""

from copy import copy

from ..core import error as ps_error
from ..core import types as ps


def ps_copy(ctxt, ostack):
    """
    any₁ ... anyₙ n **copy** any₁ ... anyₙ any₁ ... anyₙ
    array₁ array₂ **copy** subarray₂
    dict₁ dict₂ **copy** dict₂
    string₁ string₂ **copy** substring₂


    performs two entirely different functions, depending on the type of the topmost
    operand.

    In the first form, where the top element on the operand stack is a nonnegative integer
    n, **copy** pops n from the stack and duplicates the top n elements on the stack.
    This form of **copy** operates only on the objects themselves, not on the values of
    composite objects.

    **Examples**
        (a) (b) (c) 2 **copy**      -> (a) (b) (c) (b) (c)
        (a) (b) (c) 0 **copy**      -> (a) (b) (c)

    In the other forms, **copy** copies all the elements of the first composite object into
    the second, one level deep. For arrays and strings the second object must be at least
    as long as the first; **copy** returns the initial subarray or substring of the second
    operand into which the elements were copied.

    **Errors**:     **invalidaccess**, **rangecheck**, **stackoverflow**, **stackunderflow**, **typecheck**
    **See Also**:   **dup**, **get**, **put**, **putinterval**
    """
    op = "copy"

    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op)

    top = ostack[-1]
    if top.TYPE == ps.T_INT:
        n = top.val
        # 2. RANGECHECK - n must be nonnegative
        if n < 0:
            raise ps_error.e(ps_error.RANGECHECK, op)
        # 3. STACKUNDERFLOW - n elements below the count
        if len(ostack) < n + 1:
            raise ps_error.e(ps_error.STACKUNDERFLOW, op)
        # 4. STACKOVERFLOW - Room for the copies
        if ostack.max_length and len(ostack) - 1 + n > ostack.max_length:
            raise ps_error.e(ps_error.STACKOVERFLOW, op)
        ostack.pop()
        if n:
            for obj in ostack[-n:]:
                ostack.append(copy(obj))
        return

    # 2. STACKUNDERFLOW - Two composites
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op)
    source, dest = ostack[-2], ostack[-1]
    # 3. TYPECHECK - Same composite type
    if dest.TYPE in ps.DICT_TYPES and source.TYPE in ps.DICT_TYPES:
        pass
    elif dest.TYPE not in (ps.T_ARRAY, ps.T_STRING) or source.TYPE != dest.TYPE:
        raise ps_error.e(ps_error.TYPECHECK, op)
    # 4. INVALIDACCESS - Read the source, write the destination
    if not source.can_read() or not dest.can_write():
        raise ps_error.e(ps_error.INVALIDACCESS, op)

    if dest.TYPE in ps.DICT_TYPES:
        for key, value in source.items():
            dest.put(key, value)
        result = dest
    else:
        # 5. RANGECHECK - Destination long enough
        if dest.length < source.length:
            raise ps_error.e(ps_error.RANGECHECK, op)
        if dest.TYPE == ps.T_STRING:
            dest.putinterval(0, source.byte_string())
        else:
            dest.putinterval(0, source.items())
        result = dest.getinterval(0, source.length)

    ostack.pop()
    ostack[-1] = result


def get(ctxt, ostack):
    """
    array index **get** any
    dict key **get** any
    string index **get** int


    returns a single element from the value of the first operand. If the first operand is
    an array or a string, **get** treats the second operand as an index and returns the
    element identified by the index, counting from 0. If the first operand is a dictionary,
    **get** looks up the second operand as a key in the dictionary and returns the
    associated value; an **undefined** error occurs if the key is not present.

    **Examples**
        [31 41 59] 0 **get**        -> 31
        /mykey (myvalue) def
        currentdict /mykey **get**  -> (myvalue)
        (abc) 1 **get**             -> 98

    **Errors**:     **invalidaccess**, **rangecheck**, **stackunderflow**, **typecheck**, **undefined**
    **See Also**:   **put**, **getinterval**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, get.__name__)

    container, key = ostack[-2], ostack[-1]
    # 2. TYPECHECK - Check container type
    if container.TYPE not in (ps.T_ARRAY, ps.T_STRING) and container.TYPE not in ps.DICT_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, get.__name__)
    # 3. INVALIDACCESS - Check read access
    if not container.can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, get.__name__)

    if container.TYPE in ps.DICT_TYPES:
        value = container.get(key)
        if value is None:
            raise ps_error.e(ps_error.UNDEFINED, get.__name__)
    else:
        # 4. TYPECHECK - Index must be an integer
        if key.TYPE != ps.T_INT:
            raise ps_error.e(ps_error.TYPECHECK, get.__name__)
        if container.TYPE == ps.T_STRING:
            value = ps.Int(container.get(key.val))
        else:
            value = container.get(key.val)

    ostack.pop()
    ostack[-1] = value


def put(ctxt, ostack):
    """
    array index any **put** -
    dict key any **put** -
    string index int **put** -


    replaces a single element of the value of the first operand. If the first operand is
    an array or a string, **put** treats the second operand as an index and stores the
    third operand at the position identified by the index, counting from 0. If the first
    operand is a dictionary, **put** uses the second operand as a key and the third
    operand as a value, and stores this key-value pair into dict.

    **Examples**
        /ar [5 17 3 8] def
        ar 2 (abcd) **put**
        ar                      -> [5 17 (abcd) 8]

    **Errors**:     **invalidaccess**, **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **get**, **putinterval**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 3:
        raise ps_error.e(ps_error.STACKUNDERFLOW, put.__name__)

    container, key, value = ostack[-3], ostack[-2], ostack[-1]
    # 2. TYPECHECK - Check container type
    if container.TYPE not in (ps.T_ARRAY, ps.T_STRING) and container.TYPE not in ps.DICT_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, put.__name__)
    # 3. INVALIDACCESS - Check write access
    if not container.can_write():
        raise ps_error.e(ps_error.INVALIDACCESS, put.__name__)

    if container.TYPE in ps.DICT_TYPES:
        container.put(key, value)
    else:
        # 4. TYPECHECK - Index must be an integer
        if key.TYPE != ps.T_INT:
            raise ps_error.e(ps_error.TYPECHECK, put.__name__)
        if container.TYPE == ps.T_STRING:
            if value.TYPE != ps.T_INT:
                raise ps_error.e(ps_error.TYPECHECK, put.__name__)
            container.put(key.val, value.val)
        else:
            container.put(key.val, value)

    del ostack[-3:]


def length(ctxt, ostack):
    """
    array **length** int
    dict **length** int
    string **length** int
    name **length** int


    returns the number of elements in the value of its operand if the operand is an
    array, a string or a name. If the operand is a dictionary, **length** returns the
    current number of entries it contains.

    **Examples**
        [1 2 4] **length**      -> 3
        [] **length**           -> 0
        /ar 20 array def
        ar **length**           -> 20
        (abc\\n) **length**      -> 4

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **maxlength**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, length.__name__)

    obj = ostack[-1]
    if obj.TYPE == ps.T_NAME:
        ostack[-1] = ps.Int(len(obj.val))
        return
    # 2. TYPECHECK - Check operand type
    if obj.TYPE not in (ps.T_ARRAY, ps.T_STRING) and obj.TYPE not in ps.DICT_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, length.__name__)
    # 3. INVALIDACCESS - Check read access
    if not obj.can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, length.__name__)

    if obj.TYPE in ps.DICT_TYPES:
        ostack[-1] = ps.Int(len(obj))
    else:
        ostack[-1] = ps.Int(obj.length)


def getinterval(ctxt, ostack):
    """
    array index count **getinterval** subarray
    string index count **getinterval** substring


    creates a new array or string object whose value consists of some subsequence of
    the original array or string. The subsequence consists of count elements starting at
    the specified index in the original object. The elements in the subsequence are
    shared between the original and new objects.

    **Examples**
        [9 8 7 6 5] 1 3 **getinterval**     -> [8 7 6]
        (abcde) 1 3 **getinterval**         -> (bcd)
        (abcde) 0 0 **getinterval**         -> ()

    **Errors**:     **invalidaccess**, **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **get**, **putinterval**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 3:
        raise ps_error.e(ps_error.STACKUNDERFLOW, getinterval.__name__)
    # 2. TYPECHECK - Check operand types (array|string int int)
    source, index, count = ostack[-3], ostack[-2], ostack[-1]
    if source.TYPE not in (ps.T_ARRAY, ps.T_STRING):
        raise ps_error.e(ps_error.TYPECHECK, getinterval.__name__)
    if index.TYPE != ps.T_INT or count.TYPE != ps.T_INT:
        raise ps_error.e(ps_error.TYPECHECK, getinterval.__name__)
    # 3. INVALIDACCESS - Check read access
    if not source.can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, getinterval.__name__)

    result = source.getinterval(index.val, count.val)
    del ostack[-3:]
    ostack.append(result)


def putinterval(ctxt, ostack):
    """
    array₁ index array₂ **putinterval** -
    string₁ index string₂ **putinterval** -


    replaces a subsequence of the elements of the first operand by the entire contents
    of the third operand. The subsequence that is replaced begins at index in the first
    operand; its length is the same as the length of the third operand.

    **Examples**
        /ar [5 8 2 7 3] def
        ar 1 [(a) (b) (c)] **putinterval**
        ar                                      -> [5 (a) (b) (c) 3]

    **Errors**:     **invalidaccess**, **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **getinterval**, **put**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 3:
        raise ps_error.e(ps_error.STACKUNDERFLOW, putinterval.__name__)
    # 2. TYPECHECK - Check operand types
    dest, index, source = ostack[-3], ostack[-2], ostack[-1]
    if dest.TYPE not in (ps.T_ARRAY, ps.T_STRING) or source.TYPE != dest.TYPE:
        raise ps_error.e(ps_error.TYPECHECK, putinterval.__name__)
    if index.TYPE != ps.T_INT:
        raise ps_error.e(ps_error.TYPECHECK, putinterval.__name__)
    # 3. INVALIDACCESS - Check access
    if not dest.can_write() or not source.can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, putinterval.__name__)

    if dest.TYPE == ps.T_STRING:
        dest.putinterval(index.val, source.byte_string())
    else:
        dest.putinterval(index.val, source.items())
    del ostack[-3:]
