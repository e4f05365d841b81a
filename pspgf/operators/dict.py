# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from typing import Any

from . import array as ps_array
from . import clipping as ps_clipping
from . import color_ops as ps_color_ops
from . import compound as ps_compound
from . import control as ps_control
from . import file as ps_file
from . import font_ops as ps_font_ops
from . import graphics_state as ps_gstate
from . import math as ps_math
from . import matrix as ps_matrix
from . import misc as ps_misc
from . import operand_stack as ps_operand_stack
from . import painting as ps_painting
from . import path as ps_path
from . import relational as ps_rel_bool_bitwise
from . import string as ps_string
from . import type_convert as ps_type_attrib_conv
from ..core import encoding
from ..core import error as ps_error
from ..core import types as ps

# number of permanent dictionaries at the bottom of the dictionary stack
# (systemdict, globaldict, userdict)
PERMANENT_DICTS = 3


def add_to_dict(d, name: str, the_type: Any, val) -> None:
    key = bytes(name, "ascii")
    if the_type is ps.Operator:
        d.put_bytes(key, ps.Operator(val, key))
    else:
        d.put_bytes(key, the_type(val))


def _encoding_array(glyph_names) -> ps.Array:
    arr = ps.Array([ps.Name(name) for name in glyph_names])
    return arr.with_access(ps.ACCESS_READ_ONLY)


def create_system_dict() -> ps.Dict:
    """
    Build systemdict: every built-in operator name bound to its handler,
    plus the constant entries (true, false, null, encoding vectors).
    """
    obj = ps.Dict(300, b"systemdict")

    ops = [
        # boolean constants
        ("true", ps.Bool, True),
        ("false", ps.Bool, False),
        ("null", ps.Null, None),
        # operand stack operators
        ("clear", ps.Operator, ps_operand_stack.clear),
        ("cleartomark", ps.Operator, ps_operand_stack.cleartomark),
        ("count", ps.Operator, ps_operand_stack.count),
        ("counttomark", ps.Operator, ps_operand_stack.counttomark),
        ("dup", ps.Operator, ps_operand_stack.dup),
        ("exch", ps.Operator, ps_operand_stack.exch),
        ("index", ps.Operator, ps_operand_stack.index),
        ("mark", ps.Operator, ps_operand_stack.ps_mark),
        ("pop", ps.Operator, ps_operand_stack.pop),
        ("roll", ps.Operator, ps_operand_stack.roll),
        # arithmetic operators
        ("abs", ps.Operator, ps_math.ps_abs),
        ("add", ps.Operator, ps_math.add),
        ("atan", ps.Operator, ps_math.atan),
        ("ceiling", ps.Operator, ps_math.ceiling),
        ("cos", ps.Operator, ps_math.cos),
        ("div", ps.Operator, ps_math.div),
        ("exp", ps.Operator, ps_math.exp),
        ("floor", ps.Operator, ps_math.floor),
        ("idiv", ps.Operator, ps_math.idiv),
        ("ln", ps.Operator, ps_math.ln),
        ("log", ps.Operator, ps_math.log),
        ("mod", ps.Operator, ps_math.mod),
        ("mul", ps.Operator, ps_math.mul),
        ("neg", ps.Operator, ps_math.neg),
        ("rand", ps.Operator, ps_math.rand),
        ("round", ps.Operator, ps_math.ps_round),
        ("rrand", ps.Operator, ps_math.rrand),
        ("sin", ps.Operator, ps_math.sin),
        ("sqrt", ps.Operator, ps_math.sqrt),
        ("srand", ps.Operator, ps_math.srand),
        ("sub", ps.Operator, ps_math.sub),
        ("truncate", ps.Operator, ps_math.truncate),
        # relational, boolean and bitwise operators
        ("and", ps.Operator, ps_rel_bool_bitwise.ps_and),
        ("bitshift", ps.Operator, ps_rel_bool_bitwise.bitshift),
        ("eq", ps.Operator, ps_rel_bool_bitwise.eq),
        ("ge", ps.Operator, ps_rel_bool_bitwise.ge),
        ("gt", ps.Operator, ps_rel_bool_bitwise.gt),
        ("le", ps.Operator, ps_rel_bool_bitwise.le),
        ("lt", ps.Operator, ps_rel_bool_bitwise.lt),
        ("ne", ps.Operator, ps_rel_bool_bitwise.ne),
        ("not", ps.Operator, ps_rel_bool_bitwise.ps_not),
        ("or", ps.Operator, ps_rel_bool_bitwise.ps_or),
        ("xor", ps.Operator, ps_rel_bool_bitwise.xor),
        # array operators
        ("[", ps.Operator, ps_operand_stack.ps_mark),
        ("]", ps.Operator, ps_array.array_from_mark),
        ("aload", ps.Operator, ps_array.aload),
        ("array", ps.Operator, ps_array.array),
        ("astore", ps.Operator, ps_array.astore),
        # compound operators
        ("copy", ps.Operator, ps_compound.ps_copy),
        ("get", ps.Operator, ps_compound.get),
        ("getinterval", ps.Operator, ps_compound.getinterval),
        ("length", ps.Operator, ps_compound.length),
        ("put", ps.Operator, ps_compound.put),
        ("putinterval", ps.Operator, ps_compound.putinterval),
        # dictionary operators
        ("<<", ps.Operator, ps_operand_stack.ps_mark),
        (">>", ps.Operator, dict_from_mark),
        ("begin", ps.Operator, begin),
        ("countdictstack", ps.Operator, countdictstack),
        ("currentdict", ps.Operator, currentdict),
        ("def", ps.Operator, ps_def),
        ("dict", ps.Operator, ps_dict),
        ("end", ps.Operator, end),
        ("known", ps.Operator, known),
        ("load", ps.Operator, load),
        ("maxlength", ps.Operator, maxlength),
        ("store", ps.Operator, store),
        ("undef", ps.Operator, undef),
        ("where", ps.Operator, where),
        # string operators
        ("anchorsearch", ps.Operator, ps_string.anchorsearch),
        ("search", ps.Operator, ps_string.search),
        ("string", ps.Operator, ps_string.ps_string),
        # type, attribute and conversion operators
        ("cvi", ps.Operator, ps_type_attrib_conv.cvi),
        ("cvlit", ps.Operator, ps_type_attrib_conv.cvlit),
        ("cvn", ps.Operator, ps_type_attrib_conv.cvn),
        ("cvr", ps.Operator, ps_type_attrib_conv.cvr),
        ("cvs", ps.Operator, ps_type_attrib_conv.cvs),
        ("cvx", ps.Operator, ps_type_attrib_conv.cvx),
        ("executeonly", ps.Operator, ps_type_attrib_conv.executeonly),
        ("noaccess", ps.Operator, ps_type_attrib_conv.noaccess),
        ("rcheck", ps.Operator, ps_type_attrib_conv.rcheck),
        ("readonly", ps.Operator, ps_type_attrib_conv.readonly),
        ("type", ps.Operator, ps_type_attrib_conv.ps_type),
        ("wcheck", ps.Operator, ps_type_attrib_conv.wcheck),
        ("xcheck", ps.Operator, ps_type_attrib_conv.xcheck),
        # control operators
        ("exec", ps.Operator, ps_control.ps_exec),
        ("exit", ps.Operator, ps_control.ps_exit),
        ("for", ps.Operator, ps_control.ps_for),
        ("forall", ps.Operator, ps_control.forall),
        ("if", ps.Operator, ps_control.ps_if),
        ("ifelse", ps.Operator, ps_control.ifelse),
        ("loop", ps.Operator, ps_control.loop),
        ("quit", ps.Operator, ps_control.quit),
        ("repeat", ps.Operator, ps_control.repeat),
        ("stop", ps.Operator, ps_control.stop),
        ("stopped", ps.Operator, ps_control.stopped),
        # graphics state operators
        ("currentdash", ps.Operator, ps_gstate.currentdash),
        ("currentflat", ps.Operator, ps_gstate.currentflat),
        ("currentlinecap", ps.Operator, ps_gstate.currentlinecap),
        ("currentlinejoin", ps.Operator, ps_gstate.currentlinejoin),
        ("currentlinewidth", ps.Operator, ps_gstate.currentlinewidth),
        ("currentmiterlimit", ps.Operator, ps_gstate.currentmiterlimit),
        ("grestore", ps.Operator, ps_gstate.grestore),
        ("grestoreall", ps.Operator, ps_gstate.grestoreall),
        ("gsave", ps.Operator, ps_gstate.gsave),
        ("initgraphics", ps.Operator, ps_gstate.initgraphics),
        ("restore", ps.Operator, ps_gstate.restore),
        ("save", ps.Operator, ps_gstate.save),
        ("setdash", ps.Operator, ps_gstate.setdash),
        ("setflat", ps.Operator, ps_gstate.setflat),
        ("setlinecap", ps.Operator, ps_gstate.setlinecap),
        ("setlinejoin", ps.Operator, ps_gstate.setlinejoin),
        ("setlinewidth", ps.Operator, ps_gstate.setlinewidth),
        ("setmiterlimit", ps.Operator, ps_gstate.setmiterlimit),
        # matrix operators
        ("concat", ps.Operator, ps_matrix.concat),
        ("concatmatrix", ps.Operator, ps_matrix.concatmatrix),
        ("currentmatrix", ps.Operator, ps_matrix.currentmatrix),
        ("defaultmatrix", ps.Operator, ps_matrix.defaultmatrix),
        ("dtransform", ps.Operator, ps_matrix.dtransform),
        ("identmatrix", ps.Operator, ps_matrix.identmatrix),
        ("idtransform", ps.Operator, ps_matrix.idtransform),
        ("initmatrix", ps.Operator, ps_matrix.initmatrix),
        ("invertmatrix", ps.Operator, ps_matrix.invertmatrix),
        ("itransform", ps.Operator, ps_matrix.itransform),
        ("matrix", ps.Operator, ps_matrix.matrix),
        ("rotate", ps.Operator, ps_matrix.rotate),
        ("scale", ps.Operator, ps_matrix.scale),
        ("setmatrix", ps.Operator, ps_matrix.setmatrix),
        ("transform", ps.Operator, ps_matrix.transform),
        ("translate", ps.Operator, ps_matrix.translate),
        # path construction operators
        ("arc", ps.Operator, ps_path.arc),
        ("arcn", ps.Operator, ps_path.arcn),
        ("closepath", ps.Operator, ps_path.closepath),
        ("currentpoint", ps.Operator, ps_path.currentpoint),
        ("curveto", ps.Operator, ps_path.curveto),
        ("lineto", ps.Operator, ps_path.lineto),
        ("moveto", ps.Operator, ps_path.moveto),
        ("newpath", ps.Operator, ps_path.newpath),
        ("pathbbox", ps.Operator, ps_path.pathbbox),
        ("rcurveto", ps.Operator, ps_path.rcurveto),
        ("rlineto", ps.Operator, ps_path.rlineto),
        ("rmoveto", ps.Operator, ps_path.rmoveto),
        # painting operators
        ("eofill", ps.Operator, ps_painting.eofill),
        ("fill", ps.Operator, ps_painting.fill),
        ("rectfill", ps.Operator, ps_painting.rectfill),
        ("rectstroke", ps.Operator, ps_painting.rectstroke),
        ("shfill", ps.Operator, ps_painting.shfill),
        ("showpage", ps.Operator, ps_painting.showpage),
        ("stroke", ps.Operator, ps_painting.stroke),
        # clipping operators
        ("clip", ps.Operator, ps_clipping.clip),
        ("eoclip", ps.Operator, ps_clipping.eoclip),
        ("initclip", ps.Operator, ps_clipping.initclip),
        ("rectclip", ps.Operator, ps_clipping.rectclip),
        # color operators
        ("currentcmykcolor", ps.Operator, ps_color_ops.currentcmykcolor),
        ("currentcolor", ps.Operator, ps_color_ops.currentcolor),
        ("currentcolorspace", ps.Operator, ps_color_ops.currentcolorspace),
        ("currentgray", ps.Operator, ps_color_ops.currentgray),
        ("currentrgbcolor", ps.Operator, ps_color_ops.currentrgbcolor),
        ("setcmykcolor", ps.Operator, ps_color_ops.setcmykcolor),
        ("setcolor", ps.Operator, ps_color_ops.setcolor),
        ("setcolorspace", ps.Operator, ps_color_ops.setcolorspace),
        ("setgray", ps.Operator, ps_color_ops.setgray),
        ("sethsbcolor", ps.Operator, ps_color_ops.sethsbcolor),
        ("setrgbcolor", ps.Operator, ps_color_ops.setrgbcolor),
        # font and text operators
        ("ashow", ps.Operator, ps_font_ops.ashow),
        ("currentfont", ps.Operator, ps_font_ops.currentfont),
        ("definefont", ps.Operator, ps_font_ops.definefont),
        ("findfont", ps.Operator, ps_font_ops.findfont),
        ("makefont", ps.Operator, ps_font_ops.makefont),
        ("scalefont", ps.Operator, ps_font_ops.scalefont),
        ("setfont", ps.Operator, ps_font_ops.setfont),
        ("show", ps.Operator, ps_font_ops.show),
        ("stringwidth", ps.Operator, ps_font_ops.stringwidth),
        # file operators
        ("closefile", ps.Operator, ps_file.closefile),
        ("currentfile", ps.Operator, ps_file.currentfile),
        ("readline", ps.Operator, ps_file.readline),
        ("readstring", ps.Operator, ps_file.readstring),
        ("token", ps.Operator, ps_file.token),
        # output and miscellaneous operators
        ("=", ps.Operator, ps_misc.equals),
        ("==", ps.Operator, ps_misc.equals_equals),
        ("bind", ps.Operator, ps_misc.bind),
        ("currentglobal", ps.Operator, ps_misc.currentglobal),
        ("flush", ps.Operator, ps_misc.flush),
        ("print", ps.Operator, ps_misc.ps_print),
        ("pstack", ps.Operator, ps_misc.pstack),
        ("setglobal", ps.Operator, ps_misc.setglobal),
        # operators this interpreter deliberately does not provide
        ("charpath", ps.Operator, ps_misc.charpath),
        ("colorimage", ps.Operator, ps_misc.colorimage),
        ("errordict", ps.Operator, ps_misc.errordict),
        ("image", ps.Operator, ps_misc.image),
        ("imagemask", ps.Operator, ps_misc.imagemask),
        ("pathforall", ps.Operator, ps_misc.pathforall),
        ("strokepath", ps.Operator, ps_misc.strokepath),
    ]

    for op in ops:
        add_to_dict(obj, *op)

    for name, glyph_names in encoding.ENCODINGS.items():
        obj.put_bytes(name, _encoding_array(glyph_names))

    # a reference to the systemdict itself
    obj.put_bytes(b"systemdict", obj)
    return obj


def dict_from_mark(ctxt, ostack):
    """
    mark key₁ value₁ ... keyₙ valueₙ **>>** dict


    creates and returns a dictionary containing the specified key-value pairs. The
    operands are a mark followed by an even number of objects, which the operator uses
    alternately as keys and values to be inserted into the dictionary. A **rangecheck**
    error occurs if there is an odd number of objects above the topmost mark.

    **Errors**:     **rangecheck**, **typecheck**, **unmatchedmark**
    **See Also**:   **<<**, **mark**, **dict**
    """
    op = ">>"

    # 1. UNMATCHEDMARK - Find the mark
    pairs = None
    for depth in range(len(ostack)):
        if ostack[-1 - depth].TYPE == ps.T_MARK:
            pairs = depth
            break
    if pairs is None:
        raise ps_error.e(ps_error.UNMATCHEDMARK, op)
    # 2. RANGECHECK - Even number of objects
    if pairs % 2:
        raise ps_error.e(ps_error.RANGECHECK, op)
    # 3. TYPECHECK - null is not a valid key
    items = ostack[len(ostack) - pairs:]
    for key in items[::2]:
        if key.TYPE == ps.T_NULL:
            raise ps_error.e(ps_error.TYPECHECK, op)

    d = ps.Dict(pairs // 2)
    for i in range(0, pairs, 2):
        d.put(items[i], items[i + 1])
    del ostack[-(pairs + 1):]
    ostack.append(d)


def begin(ctxt, ostack):
    """
    dict **begin** -


    pushes dict on the dictionary stack, making it the current dictionary and installing
    it as the first of the dictionaries consulted during implicit name lookup and by
    **def**, **load**, **store**, and **where**.

    **Errors**:     **dictstackoverflow**, **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **end**, **countdictstack**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, begin.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE not in ps.DICT_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, begin.__name__)
    # 3. INVALIDACCESS - Check access permission
    if not ostack[-1].can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, begin.__name__)
    # 4. LIMITCHECK - Dictionary stack depth
    d_stack = ctxt.d_stack
    if d_stack.max_length and len(d_stack) >= d_stack.max_length:
        raise ps_error.e(ps_error.LIMITCHECK, begin.__name__, "dictionary stack full")

    d_stack.append(ostack.pop())


def end(ctxt, ostack):
    """
    - **end** -


    pops the current dictionary off the dictionary stack, making the dictionary below
    it the current dictionary. If **end** tries to pop the bottommost instance of
    **userdict**, a **dictstackunderflow** error occurs.

    **Errors**:     **dictstackunderflow**
    **See Also**:   **begin**, **countdictstack**
    """
    if len(ctxt.d_stack) <= PERMANENT_DICTS:
        raise ps_error.e(ps_error.DICTSTACKUNDERFLOW, end.__name__)

    ctxt.d_stack.pop()


def countdictstack(ctxt, ostack):
    """
    - **countdictstack** int


    counts the number of dictionaries currently on the dictionary stack and pushes
    this count on the operand stack.

    **Errors**:     **stackoverflow**
    **See Also**:   **begin**, **end**
    """
    ostack.append(ps.Int(len(ctxt.d_stack)))


def currentdict(ctxt, ostack):
    """
    - **currentdict** dict


    pushes the current dictionary (the dictionary on the top of the dictionary stack)
    on the operand stack.

    **Errors**:     **stackoverflow**
    **See Also**:   **begin**
    """
    ostack.append(ctxt.d_stack[-1])


def ps_def(ctxt, ostack):
    """
    key value **def** -


    associates key with value in the current dictionary, the one on the top of the
    dictionary stack. If key is already present in the current dictionary, **def**
    simply replaces its value; otherwise, **def** creates a new entry for key and stores
    value with it.

    **Examples**
        /ncnt 1 **def**             % Define ncnt to be 1 in current dict
        /ncnt ncnt 1 add **def**    % ncnt now has value 2

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **store**, **put**
    """
    op = "def"

    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op)
    # 2. INVALIDACCESS - Current dictionary must be writable
    d = ctxt.d_stack[-1]
    if not d.can_write():
        raise ps_error.e(ps_error.INVALIDACCESS, op)
    # 3. TYPECHECK - null is not a valid key
    if ostack[-2].TYPE == ps.T_NULL:
        raise ps_error.e(ps_error.TYPECHECK, op)

    # name the dictionary after its key, for the diagnostic dump
    if ostack[-1].TYPE == ps.T_DICT and ostack[-2].TYPE == ps.T_NAME and not ostack[-1].name:
        ostack[-1].name = ostack[-2].val
    ctxt.d_stack.define(ostack.peek(1), ostack.peek())
    ostack.pop()
    ostack.pop()


def ps_dict(ctxt, ostack):
    """
    int **dict** dict


    creates an empty dictionary with an initial capacity of int elements and pushes the
    created dictionary object on the operand stack. int is expected to be a nonnegative
    integer. The dictionary can grow beyond that capacity if necessary.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **begin**, **end**, **length**, **maxlength**
    """
    op = "dict"

    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_INT:
        raise ps_error.e(ps_error.TYPECHECK, op)
    # 3. RANGECHECK - Capacity must be nonnegative
    if ostack[-1].val < 0:
        raise ps_error.e(ps_error.RANGECHECK, op)

    ostack[-1] = ps.Dict(ostack[-1].val)


def known(ctxt, ostack):
    """
    dict key **known** bool


    returns true if there is an entry in the dictionary dict whose key is key;
    otherwise, it returns false. dict does not have to be on the dictionary stack.

    **Examples**
        /mydict 5 dict def
        mydict /total 0 put
        mydict /total **known**     -> true
        mydict /badname **known**   -> false

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **where**, **load**, **get**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, known.__name__)
    # 2. TYPECHECK - Check dictionary type
    if ostack[-2].TYPE not in ps.DICT_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, known.__name__)
    # 3. INVALIDACCESS - Check dictionary access
    if not ostack[-2].can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, known.__name__)

    result = ostack[-2].known(ostack[-1])
    ostack.pop()
    ostack[-1] = ps.Bool(result)


def load(ctxt, ostack):
    """
    key **load** value


    searches for key in each dictionary on the dictionary stack, starting with the topmost
    (current) dictionary. If key is found in some dictionary, **load** pushes the associated
    value on the operand stack; otherwise, an **undefined** error occurs and key is left
    on the stack.

    **load** looks up key the same way the interpreter looks up executable names that it
    encounters during execution. However, **load** always pushes the associated value
    on the operand stack; it never executes the value.

    **Examples**
        /avg {add 2 div} def
        /avg **load**               -> {add 2 div}

    **Errors**:     **stackunderflow**, **typecheck**, **undefined**
    **See Also**:   **where**, **get**, **store**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, load.__name__)
    # 2. TYPECHECK - null is not a valid key
    if ostack[-1].TYPE == ps.T_NULL:
        raise ps_error.e(ps_error.TYPECHECK, load.__name__)

    value = ctxt.d_stack.lookup(ostack[-1])
    if value is None:
        raise ps_error.e(ps_error.UNDEFINED, load.__name__)
    ostack[-1] = value


def maxlength(ctxt, ostack):
    """
    dict **maxlength** int


    returns the capacity of the dictionary dict, a number at least as large as that
    returned by the **length** operator.

    **Examples**
        /mydict 5 dict def
        mydict length           -> 0
        mydict **maxlength**    -> 5

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **length**, **dict**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, maxlength.__name__)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE not in ps.DICT_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, maxlength.__name__)
    # 3. INVALIDACCESS - Check access permission
    if not ostack[-1].can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, maxlength.__name__)

    ostack[-1] = ps.Int(ostack[-1].maxlength())


def store(ctxt, ostack):
    """
    key value **store** -


    searches for key in each dictionary on the dictionary stack, starting with the topmost
    (current) dictionary. If key is found in some dictionary, **store** replaces its
    value by the value operand; otherwise, **store** creates a new entry with key and value
    in the current dictionary.

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **def**, **put**, **where**, **load**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, store.__name__)
    # 2. TYPECHECK - null is not a valid key
    if ostack[-2].TYPE == ps.T_NULL:
        raise ps_error.e(ps_error.TYPECHECK, store.__name__)
    # 3. INVALIDACCESS - Target dictionary must be writable
    target = ctxt.d_stack.where(ostack[-2]) or ctxt.d_stack[-1]
    if not target.can_write():
        raise ps_error.e(ps_error.INVALIDACCESS, store.__name__)

    ctxt.d_stack.store(ostack.peek(1), ostack.peek())
    ostack.pop()
    ostack.pop()


def undef(ctxt, ostack):
    """
    dict key **undef** -


    removes key and its associated value from the dictionary dict. dict does not need to
    be on the dictionary stack. If key is not present in dict, **undef** does nothing.

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **def**, **known**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, undef.__name__)
    # 2. TYPECHECK - Check dictionary type
    if ostack[-2].TYPE not in ps.DICT_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, undef.__name__)
    # 3. INVALIDACCESS - Check write access
    if not ostack[-2].can_write():
        raise ps_error.e(ps_error.INVALIDACCESS, undef.__name__)

    ostack[-2].undef(ostack[-1])
    ostack.pop()
    ostack.pop()


def where(ctxt, ostack):
    """
    key **where** dict true (if found)
                  false     (if not found)


    determines which dictionary on the dictionary stack, if any, contains an entry whose
    key is key. **where** searches for key in each dictionary on the dictionary stack,
    starting with the topmost (current) dictionary. If key is found in some dictionary,
    **where** returns that dictionary object and the boolean value true; otherwise,
    **where** simply returns false.

    **Errors**:     **stackoverflow**, **stackunderflow**, **typecheck**
    **See Also**:   **known**, **load**, **get**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, where.__name__)
    # 2. TYPECHECK - null is not a valid key
    if ostack[-1].TYPE == ps.T_NULL:
        raise ps_error.e(ps_error.TYPECHECK, where.__name__)

    d = ctxt.d_stack.where(ostack[-1])
    if d is None:
        ostack[-1] = ps.Bool(False)
    else:
        ostack[-1] = d
        ostack.append(ps.Bool(True))
