from __future__ import annotations

import itertools

import pytest

from conftest import run, values
from pspgf.core import error as ps_error
from pspgf.core import types as ps

NUMBERS = ["0", "7", "-3", "2.5", "-0.25", "1000"]


@pytest.mark.parametrize("op, func", [
    ("add", lambda a, b: a + b),
    ("sub", lambda a, b: a - b),
    ("mul", lambda a, b: a * b),
])
def test_mixed_arithmetic_matches_real_arithmetic(ctxt, op, func) -> None:
    for a, b in itertools.product(NUMBERS, repeat=2):
        ctxt.o_stack.clear()
        run(ctxt, f"{a} {b} {op}")
        (result,) = ctxt.o_stack
        assert result.to_real() == pytest.approx(func(float(a), float(b)))
        both_int = "." not in a and "." not in b
        assert result.TYPE == (ps.T_INT if both_int else ps.T_REAL)


def test_integer_overflow_produces_real(ctxt) -> None:
    run(ctxt, "2147483647 1 add -2147483648 1 sub 65536 65536 mul")
    assert [o.TYPE for o in ctxt.o_stack] == [ps.T_REAL] * 3
    assert values(ctxt) == [2147483648.0, -2147483649.0, 4294967296.0]


def test_division(ctxt) -> None:
    run(ctxt, "3 2 div 4 2 div 7 2 idiv -7 2 idiv 5 3 mod -5 3 mod")
    assert values(ctxt) == [1.5, 2.0, 3, -3, 2, -2]
    assert ctxt.o_stack[1].TYPE == ps.T_REAL


@pytest.mark.parametrize("source", ["1 0 div", "1 0 idiv", "1 0 mod", "0 0 atan"])
def test_undefined_results(ctxt, source) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, source)
    assert info.value.code == ps_error.UNDEFINEDRESULT


def test_idiv_requires_integers(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "3.0 2 idiv")
    assert info.value.code == ps_error.TYPECHECK
    assert info.value.command == "idiv"
    # operands are left in place
    assert values(ctxt) == [3.0, 2]


def test_rounding_family(ctxt) -> None:
    run(ctxt, "3.2 ceiling -4.8 floor 2.5 round -2.5 round 6.7 truncate 5 neg -3 abs")
    assert values(ctxt) == [4.0, -5.0, 3.0, -2.0, 6.0, -5, 3]


def test_transcendental(ctxt) -> None:
    run(ctxt, "0 1 atan 1 0 atan -100 0 atan 4 4 atan 16 sqrt 90 sin 0 cos 2 10 exp 100 log")
    assert values(ctxt) == pytest.approx([0.0, 90.0, 270.0, 45.0, 4.0, 1.0, 1.0, 1024.0, 2.0])


def test_rand_is_reproducible_after_srand(ctxt) -> None:
    run(ctxt, "42 srand rand rand 42 srand rand rand")
    a, b, c, d = values(ctxt)
    assert (a, b) == (c, d)
    assert all(0 <= v <= ps.MAX_POSTSCRIPT_INTEGER for v in (a, b))


def test_bitwise_and_boolean(ctxt) -> None:
    run(ctxt, "12 10 and 12 10 or 12 10 xor 5 not true false or 1 3 bitshift 8 -2 bitshift -1 -28 bitshift")
    assert values(ctxt) == [8, 14, 6, -6, True, 8, 2, 15]


def test_comparison(ctxt) -> None:
    run(ctxt, "4.0 4 eq (abc) (abc) eq (abc) /abc eq [1] [1] eq 1 2 lt (b) (a) gt 3 3 ge 2 1 le")
    assert values(ctxt) == [True, True, True, False, True, True, True, False]
