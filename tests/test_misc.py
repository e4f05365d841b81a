from __future__ import annotations

import pytest

from conftest import run, values
from pspgf.core import error as ps_error


def output(ctxt) -> str:
    return ctxt.stdout.getvalue()


def test_equals_writes_text_form(ctxt) -> None:
    run(ctxt, "(hi) = 42 = 2.0 = /name = true = [1] =")
    assert output(ctxt) == "hi\n42\n2.0\nname\ntrue\n--nostringval--\n"
    assert values(ctxt) == []


def test_equals_equals_writes_syntax_form(ctxt) -> None:
    run(ctxt, "(a\\(b) == /lit == [1 /x (s) {y}] == /add load == null == mark ==")
    assert output(ctxt) == "(a\\(b)\n/lit\n[1 /x (s) {y}]\n--add--\nnull\n-mark-\n"


def test_print_writes_raw_bytes(ctxt) -> None:
    run(ctxt, "(one) print (two\\n) print flush")
    assert output(ctxt) == "onetwo\n"


def test_print_requires_a_string(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "42 print")
    assert info.value.code == ps_error.TYPECHECK


def test_pstack_prints_top_first_and_keeps_the_stack(ctxt) -> None:
    run(ctxt, "1 (two) /three pstack")
    assert output(ctxt) == "/three\n(two)\n1\n"
    assert len(ctxt.o_stack) == 3


@pytest.mark.parametrize("op", ["=", "=="])
def test_output_operators_underflow(ctxt, op) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, op)
    assert info.value.code == ps_error.STACKUNDERFLOW
    assert info.value.command == op


def test_global_allocation_mode(ctxt) -> None:
    run(ctxt, "currentglobal true setglobal currentglobal false setglobal currentglobal")
    assert values(ctxt) == [False, True, False]


@pytest.mark.parametrize("op", [
    "charpath", "colorimage", "errordict", "image", "imagemask", "pathforall", "strokepath",
])
def test_missing_features_are_unimplemented(ctxt, op) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, op)
    assert info.value.code == ps_error.UNIMPLEMENTED
    assert info.value.command == op
