# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from ..core import error as ps_error
from ..core import types as ps


def _set_ctm(ctxt, m: ps.Matrix) -> None:
    """
    Replace the CTM. The current point stays where it is in device space,
    so its user space coordinates are recomputed from the new CTM.
    """
    ctxt.gstate.CTM = m
    if m.determinant() != 0:
        ctxt.gstate.update_position()


def _is_matrix_operand(obj) -> bool:
    return obj.TYPE == ps.T_ARRAY


def _read_matrix(obj, op_name: str) -> ps.Matrix:
    """Validate a six number array and return it as a Matrix."""
    if obj.TYPE != ps.T_ARRAY:
        raise ps_error.e(ps_error.TYPECHECK, op_name)
    if not obj.can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, op_name)
    if obj.length != 6:
        raise ps_error.e(ps_error.RANGECHECK, op_name)
    for item in obj.items():
        if item.TYPE not in ps.NUMERIC_TYPES:
            raise ps_error.e(ps_error.TYPECHECK, op_name)
    return obj.to_matrix()


def _check_dest_matrix(obj, op_name: str) -> None:
    if obj.TYPE != ps.T_ARRAY:
        raise ps_error.e(ps_error.TYPECHECK, op_name)
    if obj.length != 6:
        raise ps_error.e(ps_error.RANGECHECK, op_name)
    if not obj.can_write():
        raise ps_error.e(ps_error.INVALIDACCESS, op_name)


def _store_matrix(dest, m: ps.Matrix) -> None:
    dest.putinterval(0, [ps.Real(c) for c in m.coefficients()])


def _modify_ctm(ctxt, ostack, op_name: str, n_args: int, build) -> None:
    """
    Shared body of translate, scale and rotate: `n_args` numbers, optionally
    followed by a matrix to fill instead of changing the CTM.
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < n_args:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)

    with_matrix = _is_matrix_operand(ostack[-1])
    if with_matrix:
        if len(ostack) < n_args + 1:
            raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)
        _check_dest_matrix(ostack[-1], op_name)
        args = ostack[-n_args - 1:-1]
    else:
        args = ostack[-n_args:]
    # 2. TYPECHECK - Numeric operands
    if any(arg.TYPE not in ps.NUMERIC_TYPES for arg in args):
        raise ps_error.e(ps_error.TYPECHECK, op_name)

    m = build(*[arg.to_real() for arg in args])
    if with_matrix:
        dest = ostack.pop()
        _store_matrix(dest, m)
        del ostack[-n_args:]
        ostack.append(dest)
    else:
        _set_ctm(ctxt, m.multiply(ctxt.gstate.CTM))
        del ostack[-n_args:]


def _transform_pair(ctxt, ostack, op_name: str, apply) -> None:
    """
    Shared body of transform, itransform, dtransform and idtransform.
    `apply(matrix, x, y)` maps the pair; the CTM is used unless a matrix
    operand is given.
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)

    if _is_matrix_operand(ostack[-1]):
        if len(ostack) < 3:
            raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)
        m = _read_matrix(ostack[-1], op_name)
        n_pop = 3
    else:
        m = ctxt.gstate.CTM
        n_pop = 2
    x_obj, y_obj = ostack[-n_pop], ostack[-n_pop + 1]
    # 2. TYPECHECK - Numeric coordinates
    if x_obj.TYPE not in ps.NUMERIC_TYPES or y_obj.TYPE not in ps.NUMERIC_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, op_name)
    # 3. UNDEFINEDRESULT - Inverse of a singular matrix
    try:
        x, y = apply(m, x_obj.to_real(), y_obj.to_real())
    except ps_error.PSError as err:
        raise ps_error.e(err.code, op_name) from err

    del ostack[-n_pop:]
    ostack.append(ps.Real(x))
    ostack.append(ps.Real(y))


def concat(ctxt, ostack):
    """
    matrix **concat** -


    applies the transformation represented by matrix to the user coordinate space.
    **concat** accomplishes this by concatenating matrix with the current transformation
    matrix (CTM); that is, it replaces the CTM with the matrix product matrix X CTM.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **concatmatrix**, **currentmatrix**, **setmatrix**, **translate**, **scale**, **rotate**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, concat.__name__)

    m = _read_matrix(ostack[-1], concat.__name__)
    _set_ctm(ctxt, m.multiply(ctxt.gstate.CTM))
    ostack.pop()


def concatmatrix(ctxt, ostack):
    """
    matrix₁ matrix₂ matrix₃ **concatmatrix** matrix₃


    replaces the value of matrix₃ with the result of multiplying matrix₁ X matrix₂
    and pushes the modified matrix₃ back on the operand stack. This operator does
    not affect the CTM.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **concat**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 3:
        raise ps_error.e(ps_error.STACKUNDERFLOW, concatmatrix.__name__)

    m1 = _read_matrix(ostack[-3], concatmatrix.__name__)
    m2 = _read_matrix(ostack[-2], concatmatrix.__name__)
    _check_dest_matrix(ostack[-1], concatmatrix.__name__)

    dest = ostack[-1]
    _store_matrix(dest, m1.multiply(m2))
    del ostack[-3:]
    ostack.append(dest)


def currentmatrix(ctxt, ostack):
    """
    matrix **currentmatrix** matrix


    replaces the value of matrix with the current transformation matrix (CTM) in the
    graphics state and pushes this modified matrix back on the operand stack.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **setmatrix**, **defaultmatrix**, **initmatrix**, **rotate**, **scale**, **translate**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, currentmatrix.__name__)

    _check_dest_matrix(ostack[-1], currentmatrix.__name__)
    _store_matrix(ostack[-1], ctxt.gstate.CTM)


def defaultmatrix(ctxt, ostack):
    """
    matrix **defaultmatrix** matrix


    replaces the value of matrix with the default transformation matrix for the current
    output device and pushes this modified matrix back on the operand stack.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **currentmatrix**, **initmatrix**, **setmatrix**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, defaultmatrix.__name__)

    _check_dest_matrix(ostack[-1], defaultmatrix.__name__)
    _store_matrix(ostack[-1], ctxt.device.default_ctm())


def identmatrix(ctxt, ostack):
    """
    matrix **identmatrix** matrix


    replaces the value of matrix with the identity matrix [1.0 0.0 0.0 1.0 0.0 0.0]
    and pushes this modified matrix back on the operand stack.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **matrix**, **currentmatrix**, **defaultmatrix**, **initmatrix**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, identmatrix.__name__)

    _check_dest_matrix(ostack[-1], identmatrix.__name__)
    _store_matrix(ostack[-1], ps.Matrix())


def initmatrix(ctxt, ostack):
    """
    - **initmatrix** -


    sets the current transformation matrix (CTM) to the default matrix for the current
    output device.

    **Errors**:     (none)
    **See Also**:   **defaultmatrix**, **setmatrix**, **currentmatrix**
    """
    _set_ctm(ctxt, ctxt.device.default_ctm())


def invertmatrix(ctxt, ostack):
    """
    matrix₁ matrix₂ **invertmatrix** matrix₂


    replaces the value of matrix₂ with the inverse of matrix₁ and pushes the modified
    matrix₂ back on the operand stack. If matrix₁ has no inverse, an **undefinedresult**
    error occurs.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**, **undefinedresult**
    **See Also**:   **itransform**, **idtransform**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, invertmatrix.__name__)

    m1 = _read_matrix(ostack[-2], invertmatrix.__name__)
    _check_dest_matrix(ostack[-1], invertmatrix.__name__)
    # 2. UNDEFINEDRESULT - Singular matrix
    if m1.determinant() == 0:
        raise ps_error.e(ps_error.UNDEFINEDRESULT, invertmatrix.__name__)

    dest = ostack[-1]
    _store_matrix(dest, m1.inverted())
    del ostack[-2:]
    ostack.append(dest)


def matrix(ctxt, ostack):
    """
    - **matrix** matrix


    creates a six-element array object, fills it in with the values of an identity
    matrix [1.0 0.0 0.0 1.0 0.0 0.0], and pushes this array on the operand stack.

    **Errors**:     **stackoverflow**
    **See Also**:   **currentmatrix**, **defaultmatrix**, **identmatrix**, **initmatrix**
    """
    ostack.append(ps.Matrix())


def setmatrix(ctxt, ostack):
    """
    matrix **setmatrix** -


    replaces the current transformation matrix (CTM) in the graphics state with the
    value of matrix. This operator is mainly used to restore a CTM obtained earlier
    with **currentmatrix**.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **currentmatrix**, **defaultmatrix**, **initmatrix**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, setmatrix.__name__)

    _set_ctm(ctxt, _read_matrix(ostack[-1], setmatrix.__name__))
    ostack.pop()


def translate(ctxt, ostack):
    """
           tx ty **translate** -
    tx ty matrix **translate** matrix


    moves the origin of the user coordinate space by tx units horizontally and ty units
    vertically, or returns a matrix representing this transformation. The orientation of
    the axes and the sizes of the coordinate units are unaffected.

    The first form of the operator applies this transformation to the user coordinate
    system by replacing the CTM with the matrix product T X CTM. The second form
    replaces the value of the matrix operand with T and pushes the result back on the
    operand stack without altering the CTM.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **setmatrix**, **currentmatrix**, **scale**, **rotate**, **concat**
    """
    _modify_ctm(ctxt, ostack, translate.__name__, 2, ps.Matrix.translation)


def scale(ctxt, ostack):
    """
           sx sy **scale** -
    sx sy matrix **scale** matrix


    scales the units of the user coordinate space by a factor of sx units horizontally
    and sy units vertically, or returns a matrix representing this transformation. The
    position of the coordinate origin and the orientation of the axes are unaffected.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **setmatrix**, **currentmatrix**, **translate**, **rotate**, **concat**
    """
    _modify_ctm(ctxt, ostack, scale.__name__, 2, ps.Matrix.scaling)


def rotate(ctxt, ostack):
    """
           angle **rotate** -
    angle matrix **rotate** matrix


    rotates the axes of the user coordinate space by angle degrees counterclockwise
    about the origin, or returns a matrix representing this transformation. The position
    of the coordinate origin and the sizes of the coordinate units are unaffected.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **setmatrix**, **currentmatrix**, **translate**, **scale**, **concat**
    """
    _modify_ctm(ctxt, ostack, rotate.__name__, 1, ps.Matrix.rotation_by)


def transform(ctxt, ostack):
    """
           x y **transform** x' y'
    x y matrix **transform** x' y'


    applies a transformation matrix to the coordinates (x, y), returning the transformed
    coordinates (x', y'). The first form of the operator uses the CTM to transform user
    space coordinates to device space; the second uses the supplied matrix.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **dtransform**, **itransform**, **idtransform**
    """
    _transform_pair(ctxt, ostack, transform.__name__, lambda m, x, y: m.transform(x, y))


def dtransform(ctxt, ostack):
    """
           dx dy **dtransform** dx' dy'
    dx dy matrix **dtransform** dx' dy'


    applies a transformation matrix to the distance vector (dx, dy), returning the
    transformed distance vector (dx', dy'). A distance vector is not affected by the
    translation components of the matrix.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **idtransform**, **transform**, **itransform**
    """
    _transform_pair(ctxt, ostack, dtransform.__name__, lambda m, x, y: m.dtransform(x, y))


def itransform(ctxt, ostack):
    """
             x' y' **itransform** x y
    x' y' matrix **itransform** x y


    applies the inverse of a transformation matrix to the coordinates (x', y'), returning
    the transformed coordinates (x, y). If the matrix is not invertible, an
    **undefinedresult** error occurs.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**, **undefinedresult**
    **See Also**:   **transform**, **dtransform**, **idtransform**, **invertmatrix**
    """
    _transform_pair(ctxt, ostack, itransform.__name__, lambda m, x, y: m.itransform(x, y))


def idtransform(ctxt, ostack):
    """
             dx' dy' **idtransform** dx dy
    dx' dy' matrix **idtransform** dx dy


    applies the inverse of a transformation matrix to the distance vector (dx', dy'),
    returning the transformed distance vector (dx, dy).

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**, **undefinedresult**
    **See Also**:   **dtransform**, **transform**, **itransform**, **invertmatrix**
    """
    _transform_pair(ctxt, ostack, idtransform.__name__, lambda m, x, y: m.idtransform(x, y))
