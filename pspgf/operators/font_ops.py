# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Font and text operators.

Glyph outlines are never drawn. show hands the text to the output device,
which typesets it with the document's own fonts; the interpreter only
needs the advance widths from the font-metrics service to keep the current
point where a real renderer would leave it.
"""

from typing import Tuple

from ..core import encoding
from ..core import error as ps_error
from ..core import types as ps

DEFAULT_FONT = b"Helvetica"
# text anchor for show: baseline, left
SHOW_ANCHOR = "Bl"


def _is_font(obj) -> bool:
    return obj.TYPE in ps.DICT_TYPES


def _font_matrix(font, op_name: str) -> ps.Matrix:
    fm = font.get_bytes(b"FontMatrix")
    if fm is None or fm.TYPE != ps.T_ARRAY or fm.length != 6:
        raise ps_error.e(ps_error.INVALIDFONT, op_name)
    if any(item.TYPE not in ps.NUMERIC_TYPES for item in fm.items()):
        raise ps_error.e(ps_error.INVALIDFONT, op_name)
    return fm.to_matrix()


def _copy_font(ctxt, font) -> ps.Font:
    metrics = getattr(font, "metrics", None) or ctxt.font_metrics
    new_font = ps.Font(metrics, max(font.maxlength(), 10))
    for key, value in font.items():
        new_font.put(key, value)
    return new_font


def _new_font(ctxt, name: bytes) -> ps.Font:
    """A font dictionary for one of the fonts the metrics service knows."""
    font = ps.Font(ctxt.font_metrics)
    font.put_bytes(b"FontName", ps.Name(name))
    font.put_bytes(b"FontType", ps.Int(1))
    font.put_bytes(b"FontMatrix", ps.Matrix((0.001, 0.0, 0.0, 0.001, 0.0, 0.0)))
    font.put_bytes(b"Encoding", ctxt.system_dict.get_bytes(b"StandardEncoding"))
    font.put_bytes(
        b"FontBBox",
        ps.Array([ps.Real(v) for v in ctxt.font_metrics.font_bbox(name)]).with_access(ps.ACCESS_READ_ONLY),
    )
    return font


def find_font(ctxt, key: ps.PSObject) -> ps.PSObject:
    font = ctxt.font_directory.get(key)
    if font is None:
        font = _new_font(ctxt, key.to_bytes())
        ctxt.font_directory.put(key, font)
    return font


def current_font(ctxt) -> ps.PSObject:
    if ctxt.gstate.font is None:
        ctxt.gstate.font = find_font(ctxt, ps.Name(DEFAULT_FONT))
    return ctxt.gstate.font


def _glyph_names(font, data: bytes, op_name: str):
    enc = font.get_bytes(b"Encoding")
    if enc is None or enc.TYPE != ps.T_ARRAY:
        raise ps_error.e(ps_error.INVALIDFONT, op_name)
    glyphs = []
    for code in data:
        if code >= enc.length:
            glyphs.append(".notdef")
            continue
        glyph = enc.get(code)
        glyphs.append(glyph.val.decode("latin-1") if glyph.TYPE == ps.T_NAME else ".notdef")
    return glyphs


def _text_width(font, glyphs) -> float:
    """Summed advance width of the glyphs, in glyph space units."""
    metrics = getattr(font, "metrics", None)
    if metrics is None:
        return 0.0
    font_name = font.font_name() if isinstance(font, ps.Font) else b""
    return sum(metrics.char_width(font_name, glyph) for glyph in glyphs)


def _advance(font, glyphs, op_name: str) -> Tuple[float, float]:
    """User space displacement of the current point after showing the glyphs."""
    return _font_matrix(font, op_name).dtransform(_text_width(font, glyphs), 0.0)


def _show_text(ctxt, font, data: bytes, op_name: str, extra=(0.0, 0.0)) -> None:
    gstate = ctxt.gstate
    x, y = gstate.position
    glyphs = _glyph_names(font, data, op_name)
    fm = _font_matrix(font, op_name)

    text = "".join(encoding.GLYPH_UNICODE.get(glyph, "") for glyph in glyphs)
    text_matrix = fm.multiply(gstate.CTM)
    default_scaling = ctxt.device.default_ctm().mean_scaling()
    fontsize = 1000.0 * text_matrix.mean_scaling() / default_scaling if default_scaling else 0.0

    if text:
        ctxt.device.show(
            text, gstate.CTM.transform(x, y), text_matrix.rotation(), fontsize, SHOW_ANCHOR
        )

    dx, dy = fm.dtransform(_text_width(font, glyphs), 0.0)
    dx += extra[0] * len(data)
    dy += extra[1] * len(data)
    gstate.moveto(x + dx, y + dy)


def _check_string(ostack, op_name: str) -> None:
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)
    # 2. TYPECHECK - Check operand type
    if ostack[-1].TYPE != ps.T_STRING:
        raise ps_error.e(ps_error.TYPECHECK, op_name)
    # 3. INVALIDACCESS - Check read access
    if not ostack[-1].can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, op_name)


def ashow(ctxt, ostack):
    """
    ax ay string **ashow** -


    paints glyphs for the characters of string in a manner similar to **show**, but while
    doing so, adjusts the width of each glyph shown by adding ax to the glyph's x width
    and ay to its y width, thus modifying the spacing between glyphs. The numbers ax
    and ay are x and y displacements in the user coordinate system.

    The string is passed to the output as one piece of text, so the extra spacing only
    affects where the current point ends up.

    **Errors**:     **invalidaccess**, **invalidfont**, **nocurrentpoint**, **stackunderflow**, **typecheck**
    **See Also**:   **show**, **stringwidth**
    """
    _check_string(ostack, ashow.__name__)
    if len(ostack) < 3:
        raise ps_error.e(ps_error.STACKUNDERFLOW, ashow.__name__)
    if ostack[-2].TYPE not in ps.NUMERIC_TYPES or ostack[-3].TYPE not in ps.NUMERIC_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, ashow.__name__)
    # 4. NOCURRENTPOINT - Text starts at the current point
    if ctxt.gstate.position is None:
        raise ps_error.e(ps_error.NOCURRENTPOINT, ashow.__name__)

    extra = (ostack[-3].to_real(), ostack[-2].to_real())
    _show_text(ctxt, current_font(ctxt), ostack[-1].byte_string(), ashow.__name__, extra)
    del ostack[-3:]


def currentfont(ctxt, ostack):
    """
    - **currentfont** font


    returns the current font dictionary in the graphics state. Before any **setfont** the
    default font (Helvetica) is returned.

    **Errors**:     **stackoverflow**
    **See Also**:   **setfont**, **findfont**
    """
    ostack.append(current_font(ctxt))


def definefont(ctxt, ostack):
    """
    key font **definefont** font


    registers font as a font dictionary associated with key (usually a name), so that
    later **findfont** operations with the same key return it. A plain dictionary is
    turned into a font dictionary measured with the built-in metrics; its FontMatrix
    entry is required.

    **Errors**:     **invalidaccess**, **invalidfont**, **stackunderflow**, **typecheck**
    **See Also**:   **findfont**, **makefont**, **scalefont**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, definefont.__name__)
    # 2. TYPECHECK - Check operand type
    if not _is_font(ostack[-1]):
        raise ps_error.e(ps_error.TYPECHECK, definefont.__name__)
    if ostack[-2].TYPE == ps.T_NULL:
        raise ps_error.e(ps_error.TYPECHECK, definefont.__name__)
    # 3. INVALIDFONT - A font needs a FontMatrix
    _font_matrix(ostack[-1], definefont.__name__)

    font = ostack[-1]
    if font.TYPE != ps.T_FONT:
        font = _copy_font(ctxt, font)
        if font.get_bytes(b"FontName") is None and ostack[-2].TYPE in (ps.T_NAME, ps.T_STRING):
            font.put_bytes(b"FontName", ps.Name(ostack[-2].to_bytes()))
        if font.get_bytes(b"Encoding") is None:
            font.put_bytes(b"Encoding", ctxt.system_dict.get_bytes(b"StandardEncoding"))
    ctxt.font_directory.put(ostack[-2], font)
    ostack.pop()
    ostack[-1] = font


def findfont(ctxt, ostack):
    """
    key **findfont** font


    obtains a font dictionary identified by the specified key and pushes it on the operand
    stack. Fonts registered with **definefont** are returned as they were defined; any
    other name gives a font measured with the built-in metrics (standard widths of the
    Helvetica and Courier faces), so text in any font can be placed.

    **Errors**:     **invalidfont**, **stackunderflow**, **typecheck**
    **See Also**:   **definefont**, **scalefont**, **makefont**, **setfont**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, findfont.__name__)
    # 2. TYPECHECK - Font keys are names or strings
    if ostack[-1].TYPE not in (ps.T_NAME, ps.T_STRING):
        raise ps_error.e(ps_error.TYPECHECK, findfont.__name__)

    ostack[-1] = find_font(ctxt, ostack[-1])


def makefont(ctxt, ostack):
    """
    font matrix **makefont** font'


    applies matrix to font, producing a new font' whose glyphs are transformed by
    matrix when they are shown. **makefont** first creates a copy of font. Then it
    replaces the new font's FontMatrix entry with the result of concatenating the
    existing FontMatrix with matrix. The original font is not changed.

    **Errors**:     **invalidfont**, **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **scalefont**, **setfont**, **findfont**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, makefont.__name__)
    # 2. TYPECHECK - Check operand types (font matrix)
    if not _is_font(ostack[-2]) or ostack[-1].TYPE != ps.T_ARRAY:
        raise ps_error.e(ps_error.TYPECHECK, makefont.__name__)
    # 3. RANGECHECK - Six element matrix
    if ostack[-1].length != 6:
        raise ps_error.e(ps_error.RANGECHECK, makefont.__name__)
    if any(item.TYPE not in ps.NUMERIC_TYPES for item in ostack[-1].items()):
        raise ps_error.e(ps_error.TYPECHECK, makefont.__name__)

    fm = _font_matrix(ostack[-2], makefont.__name__)
    new_font = _copy_font(ctxt, ostack[-2])
    new_font.put_bytes(b"FontMatrix", fm.multiply(ostack[-1].to_matrix()))
    ostack.pop()
    ostack[-1] = new_font


def scalefont(ctxt, ostack):
    """
    font scale **scalefont** font'


    applies the scale factor scale to font, producing a new font' whose glyphs are
    scaled by scale (in both the x and y dimensions) when they are shown. This is
    equivalent to **makefont** with the matrix [scale 0 0 scale 0 0]. **scalefont** does
    not change the original font; it creates a new font.

    **Examples**
        /Helvetica **findfont** 12 **scalefont** **setfont**

    **Errors**:     **invalidfont**, **stackunderflow**, **typecheck**
    **See Also**:   **makefont**, **setfont**, **findfont**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, scalefont.__name__)
    # 2. TYPECHECK - Check operand types (font scale)
    if not _is_font(ostack[-2]) or ostack[-1].TYPE not in ps.NUMERIC_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, scalefont.__name__)

    size = ostack[-1].to_real()
    fm = _font_matrix(ostack[-2], scalefont.__name__)
    new_font = _copy_font(ctxt, ostack[-2])
    new_font.put_bytes(b"FontMatrix", fm.multiply(ps.Matrix.scaling(size, size)))
    ostack.pop()
    ostack[-1] = new_font


def setfont(ctxt, ostack):
    """
    font **setfont** -


    establishes the font dictionary parameter in the graphics state. This specifies the
    font to be used by subsequent glyph operators, such as **show** and **stringwidth**.
    font must be a valid font dictionary previously returned by **findfont**, **scalefont**
    or **makefont**.

    **Errors**:     **invalidfont**, **stackunderflow**, **typecheck**
    **See Also**:   **currentfont**, **scalefont**, **makefont**, **findfont**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, setfont.__name__)
    # 2. TYPECHECK - Check operand type
    if not _is_font(ostack[-1]):
        raise ps_error.e(ps_error.TYPECHECK, setfont.__name__)
    # 3. INVALIDFONT - A font needs a FontMatrix
    _font_matrix(ostack[-1], setfont.__name__)

    ctxt.gstate.font = ostack.pop()


def show(ctxt, ostack):
    """
    string **show** -


    paints glyphs for the characters identified by the elements of string using the
    font in the graphics state, beginning at the current point. Each character code is
    mapped through the font's Encoding to a glyph name and the text is placed in the
    output with its baseline starting at the current point, rotated and sized according
    to the FontMatrix and the CTM. The current point is then advanced by the glyph
    widths.

    **Errors**:     **invalidaccess**, **invalidfont**, **nocurrentpoint**, **stackunderflow**, **typecheck**
    **See Also**:   **ashow**, **stringwidth**, **setfont**
    """
    _check_string(ostack, show.__name__)
    # 4. NOCURRENTPOINT - Text starts at the current point
    if ctxt.gstate.position is None:
        raise ps_error.e(ps_error.NOCURRENTPOINT, show.__name__)

    _show_text(ctxt, current_font(ctxt), ostack[-1].byte_string(), show.__name__)
    ostack.pop()


def stringwidth(ctxt, ostack):
    """
    string **stringwidth** wx wy


    calculates the change in the current point that would occur if string were given
    as the operand to **show** with the current font. wx and wy are computed by adding
    together the width vectors of all the individual glyphs for string and converting
    the result to user space. They form a distance vector in x and y describing the
    width of the entire string in user space.

    **Errors**:     **invalidaccess**, **invalidfont**, **stackoverflow**, **stackunderflow**, **typecheck**
    **See Also**:   **show**, **setfont**
    """
    _check_string(ostack, stringwidth.__name__)

    font = current_font(ctxt)
    glyphs = _glyph_names(font, ostack[-1].byte_string(), stringwidth.__name__)
    wx, wy = _advance(font, glyphs, stringwidth.__name__)
    ostack[-1] = ps.Real(wx)
    ostack.append(ps.Real(wy))
