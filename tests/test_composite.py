from __future__ import annotations

import pytest

from conftest import run, values
from pspgf.core import error as ps_error
from pspgf.core import types as ps


@pytest.mark.parametrize("n", [0, 1, 7, 100])
def test_array_length(ctxt, n) -> None:
    run(ctxt, f"{n} array length")
    assert values(ctxt) == [n]


def test_literal_array_aload_round_trip(ctxt) -> None:
    run(ctxt, "[1 2.5 (s) /n [3]] aload length")
    assert ctxt.o_stack[-1].val == 5
    # aload leaves the elements below the array itself
    assert len(ctxt.o_stack) == 6
    assert ctxt.o_stack[-2].TYPE == ps.T_ARRAY and ctxt.o_stack[-2].length == 1
    assert values(ctxt)[:3] == [1, 2.5, b"s"]


def test_array_contents_are_executed(ctxt) -> None:
    run(ctxt, "[ 1 2 add ] length [ 3 4 ] 0 get")
    assert values(ctxt) == [1, 3]

    run(ctxt, "clear [ << /A 1 >> true null ] dup 0 get type exch dup 1 get type exch 2 get type")
    assert values(ctxt) == [b"dicttype", b"booleantype", b"nulltype"]


def test_closing_bracket_without_a_mark(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "1 2 ]")
    assert info.value.code == ps_error.UNMATCHEDMARK
    assert info.value.command == "]"


def test_astore_and_put_get(ctxt) -> None:
    run(ctxt, "1 2 3 3 array astore dup 1 (x) put dup 1 get exch 0 get")
    assert values(ctxt) == [b"x", 1]


def test_getinterval_views_share_storage(ctxt) -> None:
    run(ctxt, "/a [10 20 30 40 50] def a 1 3 getinterval 0 99 put a 1 get")
    assert values(ctxt) == [99]

    run(ctxt, "clear a 2 [7 8] putinterval a 2 2 getinterval aload pop")
    assert values(ctxt) == [7, 8]


def test_string_views_share_storage(ctxt) -> None:
    run(ctxt, "/s (hello) def s 1 3 getinterval 0 69 put s")
    assert values(ctxt) == [b"hEllo"]


def test_copy_forms(ctxt) -> None:
    run(ctxt, "[1 2 3] 5 array copy length (abc) 5 string copy")
    assert values(ctxt) == [3, b"abc"]

    run(ctxt, "clear << /a 1 >> 2 dict copy /a get")
    assert values(ctxt) == [1]


def test_index_out_of_range_is_rangecheck(ctxt) -> None:
    for source in ("[1 2] 2 get", "[1 2] -1 get", "(ab) 1 5 getinterval", "(abc) 0 300 put"):
        ctxt.o_stack.clear()
        with pytest.raises(ps_error.PSError) as info:
            run(ctxt, source)
        assert info.value.code == ps_error.RANGECHECK


def test_array_and_string_length_limit(ctxt) -> None:
    for source in ("70000 array", "70000 string"):
        ctxt.o_stack.clear()
        with pytest.raises(ps_error.PSError) as info:
            run(ctxt, source)
        assert info.value.code == ps_error.LIMITCHECK


def test_eq_on_composites(ctxt) -> None:
    run(ctxt, "/a [1 2 3] def a a eq a [1 2 3] eq a 0 2 getinterval a 0 2 getinterval eq")
    assert values(ctxt) == [True, False, True]


def test_readonly_array_rejects_put(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "[1 2] readonly 0 5 put")
    assert info.value.code == ps_error.INVALIDACCESS


def test_string_operators(ctxt) -> None:
    run(ctxt, "3 string length (abbc) (bb) search (abbc) (ab) anchorsearch (abbc) (x) search")
    assert values(ctxt) == [3, b"c", b"bb", b"a", True, b"bc", b"ab", True, b"abbc", False]


def test_dictionary_operators(ctxt) -> None:
    run(ctxt, """
        /d 5 dict def
        d begin /x 1 def /y 2 def end
        d /x known d /z known d length d maxlength
        d begin x y add end
        d /x undef d /x known
    """)
    assert values(ctxt) == [True, False, 2, 5, 3, False]


def test_def_versus_store(ctxt) -> None:
    run(ctxt, """
        /v 1 def
        5 dict begin
            /v 2 store
            /w 3 store
            currentdict /v known
            currentdict /w known
        end
        v
    """)
    assert values(ctxt) == [False, True, 2]


def test_where_and_load(ctxt) -> None:
    run(ctxt, "/q 7 def /q where /add where /nope where /q load")
    user_dict, found, system_dict, found2, missing, q = ctxt.o_stack
    assert user_dict is ctxt.user_dict or user_dict == ctxt.user_dict
    assert (found.val, found2.val, missing.val, q.val) == (True, True, False, 7)
    assert system_dict == ctxt.system_dict


def test_load_of_undefined_key_pushes_it_back(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "/nothing load")
    assert info.value.code == ps_error.UNDEFINED
    assert ctxt.o_stack[-1].val == b"nothing"


def test_dictionary_literal_and_dict_stack(ctxt) -> None:
    run(ctxt, "<< /a 1 /b (two) >> dup /b get exch length countdictstack")
    assert values(ctxt) == [b"two", 2, 3]


def test_end_at_permanent_dicts_is_dictstackunderflow(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "end")
    assert info.value.code == ps_error.DICTSTACKUNDERFLOW


def test_systemdict_is_read_only(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "systemdict /add 1 put")
    assert info.value.code == ps_error.INVALIDACCESS


def test_integer_and_real_keys_share_an_entry(ctxt) -> None:
    run(ctxt, "<< 1 (one) >> 1.0 get")
    assert values(ctxt) == [b"one"]
    assert ctxt.o_stack[0].TYPE == ps.T_STRING


def test_stack_peek_and_limit() -> None:
    stack = ps.Stack(2)
    stack.append(ps.Int(1))
    stack.append(ps.Int(2))
    assert stack.peek().val == 2
    assert stack.peek(1).val == 1
    with pytest.raises(ps_error.PSError) as info:
        stack.append(ps.Int(3))
    assert info.value.code == ps_error.STACKOVERFLOW
