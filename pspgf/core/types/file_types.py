# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf Types File Module

File is a read-only input byte stream with one byte of push-back, which
is all the tokenizer needs.
"""

import io
from typing import Optional, Union

from ..error import PSError, IOERROR
from .base import PSObject
from .constants import ACCESS_READ_ONLY, ATTRIB_LIT, T_FILE


class File(PSObject):
    TYPE = T_FILE

    def __init__(
        self,
        stream: Union[bytes, bytearray, io.BufferedIOBase],
        name: str = "%stdin",
        attrib: int = ATTRIB_LIT,
    ) -> None:
        if isinstance(stream, (bytes, bytearray)):
            stream = io.BytesIO(bytes(stream))
        super().__init__(stream, ACCESS_READ_ONLY, attrib, is_composite=True)
        self.name = name
        self.line_num = 1
        self._pushback = []

    @property
    def closed(self) -> bool:
        # kept on the shared stream so that every copy of the file sees it
        return self.val.closed

    def read(self) -> Optional[int]:
        """Return the next byte, or None at end of file."""
        if self._pushback:
            return self._pushback.pop()
        if self.closed:
            return None
        try:
            data = self.val.read(1)
        except (OSError, ValueError) as exc:
            raise PSError(IOERROR, detail=str(exc)) from exc
        if not data:
            return None
        if data == b"\n":
            self.line_num += 1
        return data[0]

    def unread(self, byte: int) -> None:
        self._pushback.append(byte)

    def read_bytes(self, count: int) -> bytes:
        out = bytearray()
        while len(out) < count:
            byte = self.read()
            if byte is None:
                break
            out.append(byte)
        return bytes(out)

    def tell(self) -> int:
        """Number of bytes consumed so far, not counting pushed back ones."""
        return self.val.tell() - len(self._pushback)

    def close(self) -> None:
        self._pushback.clear()
        self.val.close()

    def __eq__(self, other) -> bool:
        return isinstance(other, File) and self.val is other.val

    def __hash__(self):
        return id(self.val)

    def to_dict_key(self):
        return ("file", id(self.val))

    def __repr__(self) -> str:
        return "-file-"
