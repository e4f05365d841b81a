# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

import copy

from ..core import error as ps_error
from ..core import types as ps
from ..core.tokenizer import next_token

LINE_FEED = 10
RETURN = 13


def _check_file_and_string(ostack, op_name):
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)
    # 2. TYPECHECK - Check operand types (file string)
    if ostack[-2].TYPE != ps.T_FILE or ostack[-1].TYPE != ps.T_STRING:
        raise ps_error.e(ps_error.TYPECHECK, op_name)
    # 3. INVALIDACCESS - The string must be writable
    if not ostack[-1].can_write():
        raise ps_error.e(ps_error.INVALIDACCESS, op_name)


def closefile(ctxt, ostack):
    """
    file **closefile** -


    closes file, breaking the association between the file object and the underlying
    file. Closing the file that is currently being executed ends its execution at the
    next token.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **currentfile**, **readline**, **readstring**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, closefile.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_FILE:
        raise ps_error.e(ps_error.TYPECHECK, closefile.__name__)

    ostack.pop().close()


def currentfile(ctxt, ostack):
    """
    - **currentfile** file


    returns the file object from which the PostScript interpreter is currently or was
    most recently reading program input. If no file is being executed, **currentfile**
    returns an invalid (closed) file object.

    **Errors**:     **stackoverflow**
    **See Also**:   **token**, **readline**, **readstring**
    """
    if ctxt.file_stack:
        ostack.append(ctxt.file_stack[-1])
        return

    invalid = ps.File(b"", "%invalid")
    invalid.close()
    ostack.append(invalid)


def readline(ctxt, ostack):
    """
    file string **readline** substring bool


    reads a line of characters (terminated by a newline character) from file and stores
    them into successive elements of string. **readline** returns the substring of string
    that was filled and a boolean value indicating the outcome (true normally, false if
    end-of-file was encountered before a newline character was read).

    A line of characters terminates with a newline: a carriage return character, a
    line feed character, or both. The terminating newline character is not stored into
    string or included at the end of the returned substring. If **readline** completely
    fills string before encountering a newline character, a **rangecheck** error occurs.

    **Errors**:     **invalidaccess**, **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **readstring**, **token**
    """
    _check_file_and_string(ostack, readline.__name__)

    the_file = ostack[-2]
    the_string = ostack[-1]
    line = bytearray()
    newline_read = False
    while True:
        b = the_file.read()
        if b is None:
            break
        if b == LINE_FEED:
            newline_read = True
            break
        if b == RETURN:
            newline_read = True
            nxt = the_file.read()
            if nxt is not None and nxt != LINE_FEED:
                the_file.unread(nxt)
            break
        # 4. RANGECHECK - The line must fit into the string
        if len(line) == the_string.length:
            raise ps_error.e(ps_error.RANGECHECK, readline.__name__)
        line.append(b)

    the_string.putinterval(0, bytes(line))
    ostack[-2] = the_string.getinterval(0, len(line))
    ostack[-1] = ps.Bool(newline_read)


def readstring(ctxt, ostack):
    """
    file string **readstring** substring bool


    reads characters from file and stores them into successive elements of string until
    either the entire string has been filled or an end-of-file indication is encountered
    in file. **readstring** then returns the substring of string that was filled and a
    boolean value indicating the outcome (true normally, false if end-of-file was
    encountered before the string was filled).

    All character codes are treated the same, as integers in the range 0 to 255. There
    are no special characters.

    **Errors**:     **invalidaccess**, **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **readline**, **token**
    """
    _check_file_and_string(ostack, readstring.__name__)

    the_file = ostack[-2]
    the_string = ostack[-1]
    # 4. RANGECHECK - The string must not be empty
    if the_string.length == 0:
        raise ps_error.e(ps_error.RANGECHECK, readstring.__name__)

    data = the_file.read_bytes(the_string.length)
    the_string.putinterval(0, data)
    ostack[-2] = the_string.getinterval(0, len(data))
    ostack[-1] = ps.Bool(len(data) == the_string.length)


def token(ctxt, ostack):
    """
      file **token** any true
                       false
    string **token** post any true
                       false


    reads characters from file or string, interpreting them according to the PostScript
    language syntax rules until it has scanned and constructed an entire object.

    In the file case, **token** normally pushes the scanned object followed by true. If
    **token** reaches end-of-file before encountering any characters besides white-space
    characters, it returns false and closes the file.

    In the string case, **token** normally pushes post (the substring of string beyond
    the portion consumed by **token**), the scanned object, and true. If **token** reaches
    the end of string before encountering any characters besides white-space characters,
    it simply returns false.

    In either case, the any result is an ordinary object. It may be simple or composite.
    **token** does not execute it; an executable name is pushed as it is.

    **Errors**:     **invalidaccess**, **stackoverflow**, **stackunderflow**, **syntaxerror**, **typecheck**
    **See Also**:   **readline**, **readstring**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, token.__name__)

    source_obj = ostack[-1]
    # 2. TYPECHECK - Check operand type
    if source_obj.TYPE not in (ps.T_FILE, ps.T_STRING):
        raise ps_error.e(ps_error.TYPECHECK, token.__name__)
    # 3. INVALIDACCESS - Check read access
    if not source_obj.can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, token.__name__)

    if source_obj.TYPE == ps.T_FILE:
        try:
            obj = next_token(source_obj)
        except ps_error.PSError as err:
            raise ps_error.e(err.code, token.__name__, err.detail) from err
        if obj is None:
            source_obj.close()
            ostack[-1] = ps.Bool(False)
            return
        ostack[-1] = obj
        ostack.append(ps.Bool(True))
        return

    source = ps.File(source_obj.byte_string(), "%string")
    try:
        obj = next_token(source)
    except ps_error.PSError as err:
        raise ps_error.e(err.code, token.__name__, err.detail) from err
    if obj is None:
        ostack[-1] = ps.Bool(False)
        return

    # a white-space character ending the object is consumed with it
    used = source.tell()
    post = copy.copy(source_obj)
    post.start = source_obj.start + used
    post.length = source_obj.length - used
    if len(ostack) + 2 > ostack.max_length:
        raise ps_error.e(ps_error.STACKOVERFLOW, token.__name__)
    ostack[-1] = post
    ostack.append(obj)
    ostack.append(ps.Bool(True))
