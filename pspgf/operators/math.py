# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import math

from ..core import error as ps_error
from ..core import types as ps


def _integer_or_real(value: int) -> ps.PSObject:
    """Integer results outside the 32-bit range are returned as reals."""
    if ps.MIN_POSTSCRIPT_INTEGER <= value <= ps.MAX_POSTSCRIPT_INTEGER:
        return ps.Int(value)
    return ps.Real(float(value))


def _result(value) -> ps.PSObject:
    if isinstance(value, int):
        return _integer_or_real(value)
    if math.isnan(value) or math.isinf(value):
        raise ps_error.PSError(ps_error.UNDEFINEDRESULT)
    return ps.Real(value)


def _check_numeric(ostack: ps.Stack, count: int, op_name: str) -> None:
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < count:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)
    # 2. TYPECHECK - Check operand types
    for obj in ostack[-count:]:
        if obj.TYPE not in ps.NUMERIC_TYPES:
            raise ps_error.e(ps_error.TYPECHECK, op_name)


def _check_integers(ostack: ps.Stack, count: int, op_name: str) -> None:
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < count:
        raise ps_error.e(ps_error.STACKUNDERFLOW, op_name)
    # 2. TYPECHECK - Check operand types
    for obj in ostack[-count:]:
        if obj.TYPE != ps.T_INT:
            raise ps_error.e(ps_error.TYPECHECK, op_name)


def ps_abs(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num₁ **abs** num₂


    returns the absolute value of num₁. The type of the result is the same as the type
    of num₁ unless num₁ is the most negative integer, in which case the result is a real
    number.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **neg**
    """
    _check_numeric(ostack, 1, ps_abs.__name__)

    ostack[-1] = _result(abs(ostack[-1].val))


def add(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num₁ num₂ **add** sum


    returns the sum of num₁ and num₂. If both operands are integers and the result is
    within integer range, the result is an integer; otherwise, the result is a real number.

    **Examples**
        3 4 **add**         -> 7
        9.9 1.1 **add**     -> 11.0

    **Errors**:     **stackunderflow**, **typecheck**, **undefinedresult**
    **See Also**:   **div**, **mul**, **sub**, **idiv**, **mod**
    """
    _check_numeric(ostack, 2, add.__name__)

    result = _result(ostack[-2].val + ostack[-1].val)
    ostack.pop()
    ostack[-1] = result


def sub(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num₁ num₂ **sub** difference


    returns the result of subtracting num₂ from num₁. If both operands are integers and
    the result is within integer range, the result is an integer; otherwise, the result
    is a real number.

    **Errors**:     **stackunderflow**, **typecheck**, **undefinedresult**
    **See Also**:   **add**, **div**, **mul**, **idiv**, **mod**
    """
    _check_numeric(ostack, 2, sub.__name__)

    result = _result(ostack[-2].val - ostack[-1].val)
    ostack.pop()
    ostack[-1] = result


def mul(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num₁ num₂ **mul** product


    returns the product of num₁ and num₂. If both operands are integers and the result
    is within integer range, the result is an integer; otherwise, the result is a real
    number.

    **Errors**:     **stackunderflow**, **typecheck**, **undefinedresult**
    **See Also**:   **add**, **div**, **idiv**, **mod**, **sub**
    """
    _check_numeric(ostack, 2, mul.__name__)

    result = _result(ostack[-2].val * ostack[-1].val)
    ostack.pop()
    ostack[-1] = result


def div(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num₁ num₂ **div** quotient


    divides num₁ by num₂, producing a result that is always a real number even if both
    operands are integers.

    **Examples**
        3 2 **div**         -> 1.5
        4 2 **div**         -> 2.0

    **Errors**:     **stackunderflow**, **typecheck**, **undefinedresult**
    **See Also**:   **idiv**, **add**, **mul**, **sub**, **mod**
    """
    _check_numeric(ostack, 2, div.__name__)
    # 3. UNDEFINEDRESULT - Division by zero
    if ostack[-1].val == 0:
        raise ps_error.e(ps_error.UNDEFINEDRESULT, div.__name__)

    result = _result(ostack[-2].to_real() / ostack[-1].to_real())
    ostack.pop()
    ostack[-1] = result


def idiv(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    int₁ int₂ **idiv** quotient


    divides int₁ by int₂ and returns the integer part of the quotient, with any fractional
    part discarded. Both operands of **idiv** must be integers and the result is an integer.

    **Examples**
        3 2 **idiv**        -> 1
        -5 2 **idiv**       -> -2

    **Errors**:     **stackunderflow**, **typecheck**, **undefinedresult**
    **See Also**:   **div**, **add**, **mul**, **sub**, **mod**, **cvi**
    """
    _check_integers(ostack, 2, idiv.__name__)
    # 3. UNDEFINEDRESULT - Division by zero
    if ostack[-1].val == 0:
        raise ps_error.e(ps_error.UNDEFINEDRESULT, idiv.__name__)

    int1, int2 = ostack[-2].val, ostack[-1].val
    quotient = abs(int1) // abs(int2)
    if (int1 < 0) != (int2 < 0):
        quotient = -quotient
    ostack.pop()
    ostack[-1] = _integer_or_real(quotient)


def mod(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    int₁ int₂ **mod** remainder


    returns the remainder that results from dividing int₁ by int₂. The sign of the result
    is the same as the sign of the dividend int₁. Both operands must be integers and
    the result is an integer.

    **Examples**
        5 3 **mod**     -> 2
        -5 3 **mod**    -> -2

    **Errors**:     **stackunderflow**, **typecheck**, **undefinedresult**
    **See Also**:   **idiv**, **div**
    """
    _check_integers(ostack, 2, mod.__name__)
    # 3. UNDEFINEDRESULT - Modulo by zero
    if ostack[-1].val == 0:
        raise ps_error.e(ps_error.UNDEFINEDRESULT, mod.__name__)

    int1, int2 = ostack[-2].val, ostack[-1].val
    result = abs(int1) % abs(int2)
    # sign follows the dividend
    if int1 < 0:
        result = -result
    ostack.pop()
    ostack[-1] = ps.Int(result)


def neg(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num₁ **neg** num₂


    returns the negative of num₁. The type of the result is the same as the type of num₁
    unless num₁ is the most negative integer, in which case the result is a real number.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **abs**
    """
    _check_numeric(ostack, 1, neg.__name__)

    ostack[-1] = _result(-ostack[-1].val)


def _round_like(ostack: ps.Stack, op_name: str, func) -> None:
    _check_numeric(ostack, 1, op_name)
    if ostack[-1].TYPE == ps.T_REAL:
        ostack[-1] = ps.Real(float(func(ostack[-1].val)))


def ceiling(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num₁ **ceiling** num₂


    returns the least integer value greater than or equal to num₁. The type of the result
    is the same as the type of the operand.

    **Examples**
        3.2 **ceiling**     -> 4.0
        -4.8 **ceiling**    -> -4.0
        99 **ceiling**      -> 99

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **floor**, **round**, **truncate**, **cvi**
    """
    _round_like(ostack, ceiling.__name__, math.ceil)


def floor(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num₁ **floor** num₂


    returns the greatest integer value less than or equal to num₁. The type of the result
    is the same as the type of the operand.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **ceiling**, **round**, **truncate**, **cvi**
    """
    _round_like(ostack, floor.__name__, math.floor)


def ps_round(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num₁ **round** num₂


    returns the integer value nearest to num₁. If num₁ is equally close to its two nearest
    integers, **round** returns the greater of the two. The type of the result is the same
    as the type of the operand.

    **Examples**
        3.2 **round**       -> 3.0
        6.5 **round**       -> 7.0
        -6.5 **round**      -> -6.0

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **ceiling**, **floor**, **truncate**, **cvi**
    """
    _round_like(ostack, ps_round.__name__, lambda value: math.floor(value + 0.5))


def truncate(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num₁ **truncate** num₂


    truncates num₁ toward 0 by removing its fractional part. The type of the result is
    the same as the type of the operand.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **ceiling**, **floor**, **round**, **cvi**
    """
    _round_like(ostack, truncate.__name__, math.trunc)


def sqrt(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num **sqrt** real


    returns the square root of num, which must be a nonnegative number. The result is
    a real number.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **exp**
    """
    _check_numeric(ostack, 1, sqrt.__name__)
    # 3. RANGECHECK - Operand must be nonnegative
    if ostack[-1].val < 0:
        raise ps_error.e(ps_error.RANGECHECK, sqrt.__name__)

    ostack[-1] = ps.Real(math.sqrt(ostack[-1].val))


def atan(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num den **atan** angle


    returns the angle (in degrees between 0 and 360) whose tangent is num divided by
    den. Either num or den may be 0, but not both. The result is a real number.

    **Examples**
        0 1 **atan**        -> 0.0
        1 0 **atan**        -> 90.0
        -100 0 **atan**     -> 270.0
        4 4 **atan**        -> 45.0

    **Errors**:     **stackunderflow**, **typecheck**, **undefinedresult**
    **See Also**:   **cos**, **sin**
    """
    _check_numeric(ostack, 2, atan.__name__)
    # 3. UNDEFINEDRESULT - Both operands zero
    if ostack[-2].val == 0 and ostack[-1].val == 0:
        raise ps_error.e(ps_error.UNDEFINEDRESULT, atan.__name__)

    result = math.degrees(math.atan2(ostack[-2].val, ostack[-1].val))
    if result < 0:
        result += 360.0
    ostack.pop()
    ostack[-1] = ps.Real(result)


def cos(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    angle **cos** real


    returns the cosine of angle, which is interpreted as an angle in degrees. The result
    is a real number.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **atan**, **sin**
    """
    _check_numeric(ostack, 1, cos.__name__)

    ostack[-1] = ps.Real(math.cos(math.radians(ostack[-1].val)))


def sin(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    angle **sin** real


    returns the sine of angle, which is interpreted as an angle in degrees. The result is
    a real number.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **atan**, **cos**
    """
    _check_numeric(ostack, 1, sin.__name__)

    ostack[-1] = ps.Real(math.sin(math.radians(ostack[-1].val)))


def exp(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    base exponent **exp** real


    raises base to the exponent power. The operands may be either integers or real
    numbers. If the exponent has a fractional part, the result is meaningful only if the
    base is nonnegative. The result is always a real number.

    **Examples**
        9 0.5 **exp**       -> 3.0
        -9 -1 **exp**       -> -0.111111

    **Errors**:     **stackunderflow**, **typecheck**, **undefinedresult**
    **See Also**:   **sqrt**, **ln**, **log**, **mul**
    """
    _check_numeric(ostack, 2, exp.__name__)

    base, exponent = ostack[-2].to_real(), ostack[-1].to_real()
    # 3. UNDEFINEDRESULT - No real result
    if base == 0 and exponent < 0:
        raise ps_error.e(ps_error.UNDEFINEDRESULT, exp.__name__)
    if base < 0 and not exponent.is_integer():
        raise ps_error.e(ps_error.UNDEFINEDRESULT, exp.__name__)
    try:
        result = math.pow(base, exponent)
    except OverflowError:
        raise ps_error.e(ps_error.UNDEFINEDRESULT, exp.__name__) from None

    ostack.pop()
    ostack[-1] = ps.Real(result)


def ln(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num **ln** real


    returns the natural logarithm (base e) of num. The result is a real number.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **log**, **exp**
    """
    _check_numeric(ostack, 1, ln.__name__)
    # 3. RANGECHECK - Operand must be positive
    if ostack[-1].val <= 0:
        raise ps_error.e(ps_error.RANGECHECK, ln.__name__)

    ostack[-1] = ps.Real(math.log(ostack[-1].val))


def log(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    num **log** real


    returns the common logarithm (base 10) of num. The result is a real number.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **ln**, **exp**
    """
    _check_numeric(ostack, 1, log.__name__)
    # 3. RANGECHECK - Operand must be positive
    if ostack[-1].val <= 0:
        raise ps_error.e(ps_error.RANGECHECK, log.__name__)

    ostack[-1] = ps.Real(math.log10(ostack[-1].val))


def rand(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    - **rand** int


    returns a random integer in the range 0 to 2**31 - 1, produced by a pseudo-random
    number generator. The random number generator's state can be reset by **srand**
    and interrogated by **rrand**.

    **Errors**:     **stackoverflow**
    **See Also**:   **srand**, **rrand**
    """
    value = ctxt.rng.randrange(ps.MAX_POSTSCRIPT_INTEGER)
    ostack.append(ps.Int(value))
    ctxt.random_seed = value


def srand(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    int **srand** -


    initializes the random number generator with the seed int, which may be any integer
    value. Executing **srand** with a particular value causes subsequent invocations of
    **rand** to generate a reproducible sequence of results. The state is kept per
    interpreter context.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **rand**, **rrand**
    """
    _check_integers(ostack, 1, srand.__name__)

    ctxt.random_seed = ostack.pop().val
    ctxt.rng.seed(ctxt.random_seed)


def rrand(ctxt: ps.Context, ostack: ps.Stack) -> None:
    """
    - **rrand** int


    returns an integer representing the current state of the random number generator
    used by **rand**. Presenting it to **srand** later restarts a reproducible sequence.

    **Errors**:     **stackoverflow**
    **See Also**:   **rand**, **srand**
    """
    ostack.append(ps.Int(ctxt.random_seed))
