from __future__ import annotations

import pytest

from conftest import run, values
from pspgf.core import error as ps_error
from pspgf.core import types as ps
from pspgf.operators import file as ps_file


def test_readline_reads_inline_data(ctxt) -> None:
    run(ctxt, "currentfile 20 string readline\nhello world\n(after)")
    assert values(ctxt) == [b"hello world", True, b"after"]


def test_readline_accepts_cr_lf_and_eof(ctxt) -> None:
    run(ctxt, "currentfile 9 string readline one\r\ncurrentfile 9 string readline two\rcurrentfile 9 string readline end")
    assert values(ctxt) == [b"one", True, b"two", True, b"end", False]


def test_readline_overflowing_the_string_is_rangecheck(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "currentfile 3 string readline\nabcdef\n")
    assert info.value.code == ps_error.RANGECHECK
    assert info.value.command == "readline"


def test_readstring(ctxt) -> None:
    run(ctxt, "currentfile 5 string readstring ABCDE pop currentfile 10 string readstring xyz")
    assert values(ctxt) == [b"ABCDE", b"xyz", False]


def test_readstring_into_empty_string_is_rangecheck(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "currentfile () readstring")
    assert info.value.code == ps_error.RANGECHECK


def test_token_on_a_file(ctxt) -> None:
    run(ctxt, "currentfile token 42 pop")
    assert values(ctxt) == [42]


def test_token_on_a_file_at_end_closes_it(ctxt) -> None:
    run(ctxt, "currentfile dup token")
    the_file, found = ctxt.o_stack
    assert found.val is False
    assert the_file.closed


def test_token_on_a_string(ctxt) -> None:
    run(ctxt, "( 12 /x {a}) token")
    assert values(ctxt) == [b"/x {a}", 12, True]

    run(ctxt, "clear (  ) token")
    assert values(ctxt) == [False]


def test_token_post_string_shares_storage(ctxt) -> None:
    run(ctxt, "/s (abc def) def s token pop pop 0 88 put s")
    assert values(ctxt) == [b"abc Xef"]


def test_token_stops_at_a_delimiter(ctxt) -> None:
    run(ctxt, "(abc[1]) token")
    post, name, found = ctxt.o_stack
    assert post.byte_string() == b"[1]"
    assert name.TYPE == ps.T_NAME and name.is_executable()
    assert found.val is True


def test_token_reports_syntax_errors(ctxt) -> None:
    with pytest.raises(ps_error.PSError) as info:
        run(ctxt, "(}) token")
    assert info.value.code == ps_error.SYNTAXERROR
    assert info.value.command == "token"


def test_closefile_on_currentfile_ends_the_document(ctxt) -> None:
    run(ctxt, "1 currentfile closefile 2 3")
    assert values(ctxt) == [1]


def test_closing_a_copy_closes_the_file(ctxt) -> None:
    run(ctxt, "currentfile dup closefile 1 2 3")
    (the_file,) = ctxt.o_stack
    assert the_file.closed


def test_currentfile_outside_execution_is_closed(ctxt) -> None:
    ps_file.currentfile(ctxt, ctxt.o_stack)
    (the_file,) = ctxt.o_stack
    assert the_file.TYPE == ps.T_FILE
    assert the_file.closed


def test_file_operators_check_operand_types(ctxt) -> None:
    for source in ("(x) 5 string readline", "currentfile 5 readstring", "5 token", "(x) closefile"):
        ctxt.o_stack.clear()
        with pytest.raises(ps_error.PSError) as info:
            run(ctxt, source)
        assert info.value.code == ps_error.TYPECHECK
