# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Conversion entry point.

convert() runs one (E)PS document through a fresh interpreter context and
writes the resulting pgfpicture. Nothing survives between calls.
"""

import logging
import re
import struct
from typing import Any, Dict, Optional, TextIO, Tuple

from .core import context_init
from .core.tokenizer import ObjectSequence, parse
from .devices.pgf.pgf import PGFDevice
from .operators.control import execjob

logger = logging.getLogger(__name__)

# first four bytes of a DOS EPS binary file
DOS_EPS_MAGIC = b"\xc5\xd0\xd3\xc6"

_BOUNDING_BOX_RE = re.compile(
    rb"^%%BoundingBox:[ \t]*(-?[\d.]+)[ \t]+(-?[\d.]+)[ \t]+(-?[\d.]+)[ \t]+(-?[\d.]+)",
    re.MULTILINE,
)


def strip_dos_header(data: bytes) -> bytes:
    """
    Return the PostScript section of a DOS EPS file. The header holds the
    offset and length of that section as little-endian 32-bit integers
    right after the magic number. Other data is returned unchanged.
    """
    if not data.startswith(DOS_EPS_MAGIC) or len(data) < 12:
        return data
    offset, length = struct.unpack("<II", data[4:12])
    logger.debug("DOS EPS header: PostScript at %d, %d bytes", offset, length)
    return data[offset:offset + length]


def find_bounding_box(data: bytes) -> Optional[Tuple[float, float, float, float]]:
    """The first %%BoundingBox comment with four numbers, or None."""
    match = _BOUNDING_BOX_RE.search(data)
    if match is None:
        return None
    try:
        llx, lly, urx, ury = (float(v) for v in match.groups())
    except ValueError:
        logger.warning("ignoring malformed %%%%BoundingBox comment")
        return None
    return llx, lly, urx, ury


def convert(
    data: bytes,
    out: TextIO,
    system_params: Optional[Dict[str, Any]] = None,
    stdout: Optional[TextIO] = None,
) -> None:
    """
    Interpret the PostScript program `data` and write PGF code to `out`.

    Args:
        data: the document, optionally with a DOS EPS header
        out: text stream receiving the pgfpicture
        system_params: overrides for init_system_params() entries
        stdout: stream for the program's own print, = and == output

    Raises:
        PSError: when the program fails; `out` still holds a complete picture
            of everything drawn up to the failure.
    """
    params = context_init.init_system_params()
    if system_params:
        params.update(system_params)

    data = strip_dos_header(data)
    device = PGFDevice(
        out,
        color_tolerance=params["ColorTolerance"],
        extend_distance=params["ExtendDistance"],
        tolerance=params["StateTolerance"],
        shading_samples=params["ShadingSamples"],
        creator=params["Creator"],
        bounding_box=find_bounding_box(data),
    )
    ctxt = context_init.create_context(params, device, stdout)

    source = ObjectSequence(data).open()
    execjob(ctxt, parse(source), source)


def convert_file(input_path: str, output_path: str, **kwargs) -> None:
    """Convert the file at `input_path` and write the picture to `output_path`."""
    with open(input_path, "rb") as f:
        data = f.read()
    with open(output_path, "w", encoding="utf-8") as out:
        convert(data, out, **kwargs)
