from __future__ import annotations

import math

import pytest

from conftest import run, values
from pspgf.core import error as ps_error
from pspgf.core import types as ps


def test_operand_stack_operators(ctxt) -> None:
    run(ctxt, "1 2 3 exch 4 dup pop 5 1 index 7 8 9 3 -1 roll")
    assert values(ctxt) == [1, 3, 2, 4, 5, 4, 8, 9, 7]

    run(ctxt, "clear 1 2 3 2 copy count")
    assert values(ctxt) == [1, 2, 3, 2, 3, 5]

    run(ctxt, "clear 1 mark 2 3 counttomark cleartomark")
    assert values(ctxt) == [1]


def test_pop_on_empty_stack_is_stackunderflow(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "pop")
    assert info.value.code == ps_error.STACKUNDERFLOW
    assert info.value.command == "pop"


def test_undefined_name_is_left_on_the_stack(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "1 nosuchname")
    assert info.value.code == ps_error.UNDEFINED
    top = ctxt.o_stack[-1]
    assert top.TYPE == ps.T_NAME and top.val == b"nosuchname"


def test_if_and_ifelse(ctxt) -> None:
    run(ctxt, "true {1} if false {2} if 3 4 lt {(yes)} {(no)} ifelse")
    assert values(ctxt) == [1, b"yes"]


@pytest.mark.parametrize("initial, increment, limit", [
    (0, 1, 4), (1, 2, 6), (3, -0.5, 1), (0, 1, -3), (5, -1, 9), (0, 3, 10), (2, 2, 2),
])
def test_for_iteration_count(ctxt, initial, increment, limit) -> None:
    run(ctxt, f"{initial} {increment} {limit} {{}} for")
    expected = max(0, math.floor((limit - initial) / increment) + 1)
    assert len(ctxt.o_stack) == expected
    if expected:
        assert ctxt.o_stack[0].val == initial


def test_for_with_zero_increment_does_nothing(ctxt) -> None:
    run(ctxt, "0 0 10 {(never)} for")
    assert values(ctxt) == []


def test_for_integer_and_real_control_variables(ctxt) -> None:
    run(ctxt, "0 1 1 4 {add} for 1 .5 2 {} for")
    assert values(ctxt) == [10, 1.0, 1.5, 2.0]
    assert ctxt.o_stack[0].TYPE == ps.T_INT
    assert ctxt.o_stack[1].TYPE == ps.T_REAL


def test_repeat_loop_and_exit(ctxt) -> None:
    run(ctxt, "0 4 {1 add} repeat 0 {1 add dup 10 eq {exit} if} loop")
    assert values(ctxt) == [4, 10]


def test_repeat_rejects_negative_count(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "-1 {} repeat")
    assert info.value.code == ps_error.RANGECHECK


def test_forall_over_array_string_and_dict(ctxt) -> None:
    run(ctxt, "0 [1 2 3] {add} forall (AB) {} forall << /k 5 >> {} forall")
    assert values(ctxt)[:3] == [6, 65, 66]
    key, value = ctxt.o_stack[3:]
    assert key.val == b"k" and value.val == 5


def test_forall_exit(ctxt) -> None:
    run(ctxt, "[1 2 3 4] {dup 2 gt {pop exit} if} forall")
    assert values(ctxt) == [1, 2]


def test_exec_runs_procedures_and_strings(ctxt) -> None:
    run(ctxt, "{1 2 add} exec (3 4 mul) cvx exec /x exec")
    assert values(ctxt)[:2] == [3, 12]
    assert ctxt.o_stack[2].val == b"x"


def test_stopped_catches_errors_and_records_them(ctxt) -> None:
    run(ctxt, "{1 0 div} stopped {stop} stopped {(fine)} stopped")
    assert values(ctxt)[-4:] == [True, True, b"fine", False]
    assert ctxt.error_info.get_bytes(b"errorname").val == b"undefinedresult"
    assert ctxt.error_info.get_bytes(b"command").val == b"div"


def test_stopped_lets_unimplemented_escape(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "{image} stopped")
    assert info.value.code == ps_error.UNIMPLEMENTED


def test_exit_outside_a_loop_is_invalidexit(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "exit")
    assert info.value.code == ps_error.INVALIDEXIT


def test_stop_and_quit_end_the_job(ctxt, device) -> None:
    run(ctxt, "1 stop 2")
    assert values(ctxt) == [1]
    run(ctxt, "quit 3")
    assert values(ctxt) == [1]
    assert device.names().count("finish") == 2


def test_runaway_recursion_is_limitcheck(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "/f {f} def f")
    assert info.value.code == ps_error.LIMITCHECK


def test_error_finishes_the_device(ctxt, device) -> None:
    with pytest.raises(ps_error.PSError):
        run(ctxt, "gsave 1 2 moveto typo")
    assert device.names()[-1] == "finish"


def test_bind_replaces_operator_names(ctxt) -> None:
    run(ctxt, "/p {1 2 add {3 mul} } bind def /p load")
    proc = ctxt.o_stack[-1]
    assert proc.get(2).TYPE == ps.T_OPERATOR
    inner = proc.get(3)
    assert inner.get(1).TYPE == ps.T_OPERATOR
    assert not inner.can_write()
