from __future__ import annotations

import pytest

from pspgf.core import error as ps_error
from pspgf.core import types as ps
from pspgf.core.tokenizer import ObjectSequence


def scan(text: bytes) -> list:
    return list(ObjectSequence(text))


def test_numbers_and_names() -> None:
    objs = scan(b"42 -7 3.5 .5 1e3 16#FF 2#101 abc /lit")

    assert [o.TYPE for o in objs] == [
        ps.T_INT, ps.T_INT, ps.T_REAL, ps.T_REAL, ps.T_REAL, ps.T_INT, ps.T_INT,
        ps.T_NAME, ps.T_NAME,
    ]
    assert [o.val for o in objs[:7]] == [42, -7, 3.5, 0.5, 1000.0, 255, 5]
    assert objs[7].is_executable()
    assert not objs[8].is_executable()
    assert objs[8].val == b"lit"


def test_integer_beyond_32_bits_becomes_real() -> None:
    (obj,) = scan(b"3000000000")
    assert obj.TYPE == ps.T_REAL
    assert obj.val == 3e9


def test_truncated_number_is_a_syntax_error() -> None:
    with pytest.raises(ps_error.PSError) as info:
        scan(b"1.5e")
    assert info.value.code == ps_error.SYNTAXERROR


def test_strings_with_nesting_and_escapes() -> None:
    (obj,) = scan(rb"(a (nested) \(x\) \101\n\\)")
    assert obj.byte_string() == b"a (nested) (x) A\n\\"


def test_hex_and_ascii85_strings() -> None:
    hex_str, a85 = scan(b"<48 65 6c6C6> <~87cURDZ~>")
    assert hex_str.byte_string() == b"Hell`"
    assert a85.byte_string() == b"Hello"


def test_braces_make_procedures_and_brackets_are_operators() -> None:
    proc, open_, one, close = scan(b"{1 {2} [add]} [1]")

    assert proc.TYPE == ps.T_ARRAY and proc.is_executable()
    assert proc.length == 5
    assert proc.get(1).is_executable()
    assert [proc.get(i).val for i in (2, 4)] == [b"[", b"]"]
    assert open_.TYPE == close.TYPE == ps.T_NAME
    assert open_.is_executable() and close.is_executable()
    assert (open_.val, one.val, close.val) == (b"[", 1, b"]")


def test_comments_are_skipped() -> None:
    objs = scan(b"%!PS-Adobe-3.0\n1 % one\n2")
    assert [o.val for o in objs] == [1, 2]


@pytest.mark.parametrize("text", [b"{1 2", b"1 2}", b"{[1 2", b"(open", b"<4G>"])
def test_malformed_input_raises_syntaxerror(text: bytes) -> None:
    with pytest.raises(ps_error.PSError) as info:
        scan(text)
    assert info.value.code == ps_error.SYNTAXERROR


def test_sequence_is_restartable_and_lazy() -> None:
    seq = ObjectSequence(b"1 2 3 }")
    it = iter(seq)
    assert next(it).val == 1

    # a fresh iteration starts over from the first byte
    assert [o.val for _, o in zip(range(3), seq)] == [1, 2, 3]
