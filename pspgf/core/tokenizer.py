# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PostScript scanner.

Turns the bytes of a File into PostScript objects, one at a time. Braces
produce procedures, scanned in full before the procedure is returned.
Square brackets come back as the executable names [ and ], so the
contents of a literal array are executed and collected by the ] operator.
Malformed input raises a syntaxerror and scanning does not resume inside
the bad token.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Union

from . import error as ps_error
from . import types as ps

# White-space characters (PLRM Table 3.1)
NULL = 0
TAB = 9
BACKSPACE = 8
LINE_FEED = 10
FORM_FEED = 12
RETURN = 13
SPACE = 32

# Delimiter characters
L_PAREN = 40
R_PAREN = 41
LESS_THAN = 60
GREATER_THAN = 62
L_SQR_BRACKET = 91
R_SQR_BRACKET = 93
L_CRLY_BRACKET = 123
R_CRLY_BRACKET = 125
SOLIDUS = 47
PERCENT = 37
ESCAPE = 92
TILDE = 126

delimiters = {
    L_PAREN, R_PAREN, LESS_THAN, GREATER_THAN, L_SQR_BRACKET,
    R_SQR_BRACKET, L_CRLY_BRACKET, R_CRLY_BRACKET, SOLIDUS, PERCENT,
}

white_space = {NULL, SPACE, TAB, LINE_FEED, FORM_FEED, RETURN}

_INT_RE = re.compile(rb"^[+-]?\d+$")
_REAL_RE = re.compile(rb"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")
_TRUNCATED_REAL_RE = re.compile(rb"^[+-]?(\d+\.?\d*|\.\d+)[eE][+-]?$")
_RADIX_RE = re.compile(rb"^(\d+)#(.*)$")

# escape sequences inside (...) strings
_STRING_ESCAPES = {
    ord("n"): LINE_FEED,
    ord("r"): RETURN,
    ord("t"): TAB,
    ord("b"): BACKSPACE,
    ord("f"): FORM_FEED,
    ESCAPE: ESCAPE,
    L_PAREN: L_PAREN,
    R_PAREN: R_PAREN,
}


def syntax_error(source: ps.File, detail: str) -> ps_error.PSError:
    return ps_error.PSError(
        ps_error.SYNTAXERROR, "token", f"{detail} (line {source.line_num})"
    )


def _skip_space_and_comments(source: ps.File) -> Optional[int]:
    """Return the first significant byte, or None at end of file."""
    while True:
        b = source.read()
        if b is None:
            return None
        if b in white_space:
            continue
        if b == PERCENT:
            while b is not None and b not in (LINE_FEED, RETURN, FORM_FEED):
                b = source.read()
            continue
        return b


def _read_regular(source: ps.File, first: Optional[int] = None) -> bytes:
    out = bytearray()
    if first is not None:
        out.append(first)
    while True:
        b = source.read()
        if b is None:
            break
        if b in white_space:
            break
        if b in delimiters:
            source.unread(b)
            break
        out.append(b)
    return bytes(out)


def _read_string(source: ps.File) -> bytes:
    out = bytearray()
    depth = 1
    while True:
        b = source.read()
        if b is None:
            raise syntax_error(source, "unterminated string")
        if b == L_PAREN:
            depth += 1
        elif b == R_PAREN:
            depth -= 1
            if depth == 0:
                return bytes(out)
        elif b == RETURN:
            # end-of-line inside a string reads as a single newline
            nxt = source.read()
            if nxt is not None and nxt != LINE_FEED:
                source.unread(nxt)
            out.append(LINE_FEED)
            continue
        elif b == ESCAPE:
            b = source.read()
            if b is None:
                raise syntax_error(source, "unterminated string")
            if b in _STRING_ESCAPES:
                out.append(_STRING_ESCAPES[b])
            elif 48 <= b <= 55:
                digits = [b]
                for _ in range(2):
                    nxt = source.read()
                    if nxt is not None and 48 <= nxt <= 55:
                        digits.append(nxt)
                    else:
                        if nxt is not None:
                            source.unread(nxt)
                        break
                out.append(int(bytes(digits), 8) & 0xFF)
            elif b == RETURN:
                nxt = source.read()
                if nxt is not None and nxt != LINE_FEED:
                    source.unread(nxt)
            elif b == LINE_FEED:
                pass
            else:
                out.append(b)
            continue
        out.append(b)


def _read_hex_string(source: ps.File) -> bytes:
    digits = bytearray()
    while True:
        b = source.read()
        if b is None:
            raise syntax_error(source, "unterminated hex string")
        if b == GREATER_THAN:
            break
        if b in white_space:
            continue
        if chr(b) not in "0123456789abcdefABCDEF":
            raise syntax_error(source, "invalid character in hex string")
        digits.append(b)
    if len(digits) % 2:
        digits.append(ord("0"))
    return bytes.fromhex(digits.decode("ascii"))


def _read_ascii85_string(source: ps.File) -> bytes:
    out = bytearray()
    group: List[int] = []
    while True:
        b = source.read()
        if b is None:
            raise syntax_error(source, "unterminated ASCII85 string")
        if b in white_space:
            continue
        if b == TILDE:
            if source.read() != GREATER_THAN:
                raise syntax_error(source, "bad ASCII85 terminator")
            break
        if b == ord("z") and not group:
            out.extend(b"\0\0\0\0")
            continue
        if b < 33 or b > 117:
            raise syntax_error(source, "invalid character in ASCII85 string")
        group.append(b - 33)
        if len(group) == 5:
            out.extend(_decode_ascii85_group(group))
            group = []
    if group:
        if len(group) == 1:
            raise syntax_error(source, "truncated ASCII85 group")
        n_bytes = len(group) - 1
        group.extend([84] * (5 - len(group)))
        out.extend(_decode_ascii85_group(group)[:n_bytes])
    return bytes(out)


def _decode_ascii85_group(values: List[int]) -> bytes:
    acc = 0
    for v in values:
        acc = acc * 85 + v
    if acc > 0xFFFFFFFF:
        raise ps_error.PSError(ps_error.SYNTAXERROR, "token", "ASCII85 group overflow")
    return acc.to_bytes(4, "big")


def _int_or_real(val: int) -> ps.PSObject:
    if ps.MIN_POSTSCRIPT_INTEGER <= val <= ps.MAX_POSTSCRIPT_INTEGER:
        return ps.Int(val)
    return ps.Real(float(val))


def _regular_token(source: ps.File, text: bytes) -> ps.PSObject:
    """A number if `text` reads as one, otherwise an executable name."""
    if _INT_RE.match(text):
        return _int_or_real(int(text))
    if _REAL_RE.match(text):
        return ps.Real(float(text))
    if _TRUNCATED_REAL_RE.match(text):
        raise syntax_error(source, f"truncated number {text!r}")
    m = _RADIX_RE.match(text)
    if m:
        radix = int(m.group(1))
        digits = m.group(2)
        if 2 <= radix <= 36:
            if not digits:
                raise syntax_error(source, f"truncated number {text!r}")
            try:
                val = int(digits, radix)
            except ValueError:
                val = None
            if val is not None:
                # radix numbers are unsigned 32-bit patterns
                if val > 0xFFFFFFFF:
                    return ps.Real(float(val))
                if val > ps.MAX_POSTSCRIPT_INTEGER:
                    val -= 0x100000000
                return ps.Int(val)
    return ps.Name(text, attrib=ps.ATTRIB_EXEC)


def _read_procedure(source: ps.File) -> ps.Array:
    items = []
    while True:
        obj = next_token(source, R_CRLY_BRACKET)
        if obj is None:
            raise syntax_error(source, "missing '}'")
        if obj is _CLOSED:
            break
        items.append(obj)
    return ps.Array(items, attrib=ps.ATTRIB_EXEC)


# sentinel returned when the expected closing delimiter is read
_CLOSED = object()


def next_token(source: ps.File, closer: Optional[int] = None) -> Union[ps.PSObject, object, None]:
    """
    Scan one object from `source`. Returns None at end of file. While a
    composite is being read `closer` is its closing byte, which comes back
    as an internal sentinel.
    """
    b = _skip_space_and_comments(source)
    if b is None:
        return None

    if b == L_PAREN:
        return ps.String(_read_string(source))

    if b == LESS_THAN:
        nxt = source.read()
        if nxt == LESS_THAN:
            return ps.Name(b"<<", attrib=ps.ATTRIB_EXEC)
        if nxt == TILDE:
            return ps.String(_read_ascii85_string(source))
        if nxt is not None:
            source.unread(nxt)
        return ps.String(_read_hex_string(source))

    if b == GREATER_THAN:
        if source.read() == GREATER_THAN:
            return ps.Name(b">>", attrib=ps.ATTRIB_EXEC)
        raise syntax_error(source, "unexpected '>'")

    if b == L_CRLY_BRACKET:
        return _read_procedure(source)

    if b == R_CRLY_BRACKET:
        if b == closer:
            return _CLOSED
        raise syntax_error(source, "unbalanced '}'")

    # [ and ] are operators, like << and >>
    if b in (L_SQR_BRACKET, R_SQR_BRACKET):
        return ps.Name(bytes((b,)), attrib=ps.ATTRIB_EXEC)

    if b == R_PAREN:
        raise syntax_error(source, "unbalanced ')'")

    if b == SOLIDUS:
        nxt = source.read()
        if nxt == SOLIDUS:
            # immediately evaluated names are resolved when executed
            return ps.Name(_read_regular(source), attrib=ps.ATTRIB_EXEC)
        if nxt is not None:
            source.unread(nxt)
        return ps.Name(_read_regular(source))

    return _regular_token(source, _read_regular(source, b))


def parse(source: ps.File) -> Iterator[ps.PSObject]:
    """Yield the objects of `source` lazily, one complete object at a time."""
    while True:
        obj = next_token(source)
        if obj is None:
            return
        yield obj


class ObjectSequence(object):
    """
    A restartable, lazily scanned sequence of objects. Every iteration
    rescans the document from its first byte.
    """

    def __init__(self, data: Union[bytes, bytearray], name: str = "%document") -> None:
        self.data = bytes(data)
        self.name = name
        self.file = None

    def open(self) -> ps.File:
        self.file = ps.File(self.data, self.name, attrib=ps.ATTRIB_EXEC)
        return self.file

    def __iter__(self) -> Iterator[ps.PSObject]:
        return parse(self.open())
