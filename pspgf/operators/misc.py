# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from . import type_convert as ps_convert
from ..core import error as ps_error
from ..core import types as ps


def _bind(ctxt, arr):
    """recursive **bind**"""
    for i, obj in enumerate(arr.items()):
        if obj.TYPE == ps.T_ARRAY and obj.attrib == ps.ATTRIB_EXEC and obj.access > ps.ACCESS_READ_ONLY:
            _bind(ctxt, obj)
            # make the nested procedure readonly
            obj.access = ps.ACCESS_READ_ONLY
        elif obj.TYPE == ps.T_NAME and obj.attrib == ps.ATTRIB_EXEC:
            op = ctxt.d_stack.lookup(obj)
            if op is not None and op.TYPE == ps.T_OPERATOR:
                arr.put(i, op)


def _write(ctxt, data: bytes) -> None:
    ctxt.stdout.write(data.decode("latin-1"))


def bind(ctxt, ostack):
    """
    proc **bind** proc


    replaces executable operator names in proc by their values. For each element of
    proc that is an executable name, **bind** looks up the name in the context of the current
    dictionary stack as if by the load operator. If the name is found and its value
    is an operator object, **bind** replaces the name with the operator in proc. If the
    name is not found or its value is not an operator, **bind** does not make a change.

    For each procedure object contained within proc, **bind** applies itself recursively to
    that procedure, makes the procedure read-only, and stores it back into proc. A
    read-only procedure is ignored; its elements are neither bound nor examined.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **load**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, bind.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_ARRAY:
        raise ps_error.e(ps_error.TYPECHECK, bind.__name__)

    if ostack[-1].access > ps.ACCESS_READ_ONLY:
        _bind(ctxt, ostack[-1])


def currentglobal(ctxt, ostack):
    """
    - **currentglobal** bool


    returns the VM allocation mode currently in effect. The converter has a single
    VM, so the value only records what **setglobal** last selected.

    **Errors**:     **stackoverflow**
    **See Also**:   **setglobal**
    """
    ostack.append(ps.Bool(ctxt.vm_alloc_mode))


def setglobal(ctxt, ostack):
    """
    bool **setglobal** -


    sets the VM allocation mode: true denotes global, false denotes local. Objects are
    allocated the same way in either mode.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **currentglobal**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, setglobal.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_BOOL:
        raise ps_error.e(ps_error.TYPECHECK, setglobal.__name__)

    ctxt.vm_alloc_mode = ostack.pop().val


def equals(ctxt, ostack):
    """
    any **=** -


    pops an object from the operand stack, produces a text representation of that
    object's value as **cvs** would, and writes the result followed by a newline
    character to the standard output file. Objects without a text form print as
    --nostringval--.

    **Errors**:     **stackunderflow**
    **See Also**:   **==**, **print**, **cvs**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, "=")

    _write(ctxt, ps_convert.text_form(ostack.pop()) + b"\n")


def equals_equals(ctxt, ostack):
    """
    any **==** -


    pops an object from the operand stack, produces a text representation of that
    object followed by a newline character, and writes the result to the standard
    output file. The text is as close as possible to the syntax used to write the
    object: strings in parentheses, literal names with a slash, procedures in braces.

    **Errors**:     **stackunderflow**
    **See Also**:   **=**, **print**, **pstack**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, "==")

    ctxt.stdout.write(repr(ostack.pop()) + "\n")


def flush(ctxt, ostack):
    """
    - **flush** -


    causes any buffered characters for the standard output file to be delivered
    immediately.

    **Errors**:     **ioerror**
    **See Also**:   **print**
    """
    try:
        ctxt.stdout.flush()
    except OSError as exc:
        raise ps_error.e(ps_error.IOERROR, flush.__name__, str(exc)) from exc


def ps_print(ctxt, ostack):
    """
    string **print** -


    writes the characters of string to the standard output file. Note that **print**
    is a file operator; it has nothing to do with painting glyphs for characters on the
    current page (see **show**).

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **flush**, **=**, **==**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, ps_print.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_STRING:
        raise ps_error.e(ps_error.TYPECHECK, ps_print.__name__)
    # 3. INVALIDACCESS - Check read access
    if not ostack[-1].can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, ps_print.__name__)

    _write(ctxt, ostack.pop().byte_string())


def pstack(ctxt, ostack):
    """
    any₁ ... anyₙ **pstack** any₁ ... anyₙ


    writes text representations of every object on the stack to the standard output
    file, but leaves the stack unchanged. **pstack** applies the **==** operator to each
    element of the stack, starting with the topmost element.

    **Errors**:     (none)
    **See Also**:   **==**
    """
    for obj in reversed(ostack):
        ctxt.stdout.write(repr(obj) + "\n")


def _unimplemented(op_name: str):
    raise ps_error.e(ps_error.UNIMPLEMENTED, op_name)


def charpath(ctxt, ostack):
    """
    string bool **charpath** -

    Glyph outlines are not available to the converter. Always raises **unimplemented**.
    """
    _unimplemented(charpath.__name__)


def colorimage(ctxt, ostack):
    """
    width height bits/comp matrix datasrc₀ ... datasrcₙ₋₁ multi ncomp **colorimage** -

    Sampled images are not converted. Always raises **unimplemented**.
    """
    _unimplemented(colorimage.__name__)


def errordict(ctxt, ostack):
    """
    - **errordict** dict

    Error handler procedures cannot be redefined. Errors are reported through
    **stopped** and $error instead. Always raises **unimplemented**.
    """
    _unimplemented(errordict.__name__)


def image(ctxt, ostack):
    """
    width height bits/sample matrix datasrc **image** -

    Sampled images are not converted. Always raises **unimplemented**.
    """
    _unimplemented(image.__name__)


def imagemask(ctxt, ostack):
    """
    width height polarity matrix datasrc **imagemask** -

    Sampled images are not converted. Always raises **unimplemented**.
    """
    _unimplemented(imagemask.__name__)


def pathforall(ctxt, ostack):
    """
    move line curve close **pathforall** -

    Always raises **unimplemented**.
    """
    _unimplemented(pathforall.__name__)


def strokepath(ctxt, ostack):
    """
    - **strokepath** -

    The outline of a stroke is left to the PGF renderer. Always raises **unimplemented**.
    """
    _unimplemented(strokepath.__name__)
