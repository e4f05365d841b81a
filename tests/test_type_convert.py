from __future__ import annotations

import pytest

from conftest import run, values
from pspgf.core import error as ps_error
from pspgf.core import types as ps


def test_numeric_conversions(ctxt) -> None:
    run(ctxt, "(3.3E1) cvi -47.8 cvi 520.9 cvi 7 cvr (16#10) cvr")
    assert values(ctxt) == [33, -47, 520, 7.0, 16.0]
    assert [o.TYPE for o in ctxt.o_stack] == [ps.T_INT] * 3 + [ps.T_REAL] * 2


@pytest.mark.parametrize("source, code", [
    ("(abc) cvi", ps_error.TYPECHECK),
    ("/abc cvi", ps_error.TYPECHECK),
    ("1e20 cvi", ps_error.RANGECHECK),
    ("cvr", ps_error.STACKUNDERFLOW),
])
def test_numeric_conversion_errors(ctxt, source, code) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, source)
    assert info.value.code == code


def test_malformed_numeric_string_is_reported_by_the_operator(ctxt) -> None:
    for op in ("cvi", "cvr"):
        ctxt.o_stack.clear()
        with pytest.raises(ps_error.PSError) as info:
            run(ctxt, f"(1e) {op}")
        assert info.value.code == ps_error.SYNTAXERROR
        assert info.value.command == op


def test_cvs_text_forms(ctxt) -> None:
    run(ctxt, """
        /buf 20 string def
        123 456 add buf cvs
        2.5 buf cvs
        3.0 buf cvs
        true buf cvs
        /abc buf cvs
        mark buf cvs
    """)
    # buf is shared, so every result reads through to the final text
    assert [o.length for o in ctxt.o_stack] == [3, 3, 3, 4, 3, 15]
    assert values(ctxt)[-1] == b"--nostringval--"


def test_cvs_into_short_string_is_rangecheck(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "12345 3 string cvs")
    assert info.value.code == ps_error.RANGECHECK


def test_cvn_keeps_the_executable_attribute(ctxt) -> None:
    run(ctxt, "(abc) cvn (def) cvx cvn")
    lit, exe = ctxt.o_stack
    assert lit.TYPE == exe.TYPE == ps.T_NAME
    assert not lit.is_executable()
    assert exe.is_executable()


def test_attribute_operators(ctxt) -> None:
    run(ctxt, "{1} xcheck [1] xcheck {1} cvlit xcheck [1] cvx xcheck")
    assert values(ctxt) == [True, False, False, True]


def test_access_operators(ctxt) -> None:
    run(ctxt, "(a) rcheck (a) wcheck (a) readonly wcheck (a) readonly rcheck (a) noaccess rcheck")
    assert values(ctxt) == [True, True, False, True, False]


def test_access_cannot_be_raised_back(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "[1] readonly dup 0 2 put")
    assert info.value.code == ps_error.INVALIDACCESS


@pytest.mark.parametrize("source, name", [
    ("1", b"integertype"),
    ("1.5", b"realtype"),
    ("true", b"booleantype"),
    ("(s)", b"stringtype"),
    ("/n", b"nametype"),
    ("[1]", b"arraytype"),
    ("{1}", b"arraytype"),
    ("1 dict", b"dicttype"),
    ("null", b"nulltype"),
    ("mark", b"marktype"),
    ("/add load", b"operatortype"),
    ("currentfile", b"filetype"),
])
def test_type_names(ctxt, source, name) -> None:
    run(ctxt, f"{source} type")
    (result,) = ctxt.o_stack
    assert result.TYPE == ps.T_NAME
    assert result.val == name
    assert result.is_executable()
