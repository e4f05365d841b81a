# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PostScript error conditions.

Every failure raised by the interpreter is a PSError carrying one of the
integer codes below. Handlers validate their operands first and raise
before touching the operand stack, so the stack is left as it was when
the error propagates.
"""

from __future__ import annotations

from typing import Optional

# error types
DICTSTACKUNDERFLOW = 3
INVALIDACCESS = 5
INVALIDEXIT = 6
INVALIDFONT = 8
IOERROR = 10
LIMITCHECK = 11
NOCURRENTPOINT = 12
RANGECHECK = 13
STACKOVERFLOW = 14
STACKUNDERFLOW = 15
SYNTAXERROR = 16
TYPECHECK = 18
UNDEFINED = 19
UNDEFINEDRESULT = 22
UNMATCHEDMARK = 23
UNIMPLEMENTED = 27

ERROR_NAMES = {
    DICTSTACKUNDERFLOW: "dictstackunderflow",
    INVALIDACCESS: "invalidaccess",
    INVALIDEXIT: "invalidexit",
    INVALIDFONT: "invalidfont",
    IOERROR: "ioerror",
    LIMITCHECK: "limitcheck",
    NOCURRENTPOINT: "nocurrentpoint",
    RANGECHECK: "rangecheck",
    STACKOVERFLOW: "stackoverflow",
    STACKUNDERFLOW: "stackunderflow",
    SYNTAXERROR: "syntaxerror",
    TYPECHECK: "typecheck",
    UNDEFINED: "undefined",
    UNDEFINEDRESULT: "undefinedresult",
    UNMATCHEDMARK: "unmatchedmark",
    UNIMPLEMENTED: "unimplemented",
}


class PSError(Exception):
    """A PostScript error condition raised by an operator, the parser or the dispatcher."""

    def __init__(self, code: int, command: Optional[str] = None, detail: str = "") -> None:
        self.code = code
        self.command = command
        self.detail = detail
        super().__init__(self._message())

    @property
    def name(self) -> str:
        return ERROR_NAMES.get(self.code, f"error#{self.code}")

    def _message(self) -> str:
        msg = f"/{self.name}"
        if self.command:
            msg += f" in --{self.command}--"
        if self.detail:
            msg += f": {self.detail}"
        return msg

    def __str__(self) -> str:
        return self._message()


def e(error_code: int, func_name: str, detail: str = "") -> PSError:
    """Build the error for operator `func_name`; callers raise the result."""
    if func_name.startswith("ps_"):
        func_name = func_name[3:]
    return PSError(error_code, func_name, detail)
