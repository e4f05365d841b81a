# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf - PostScript to PGF Converter

Command-line entry point. Converts one (E)PS file into a LaTeX pgfpicture.

Usage:
    pspgf input.eps                 # writes input.pgf
    pspgf -o figure.tex input.eps
    pspgf -o - input.eps            # writes to standard output
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .converter import convert
from .core import error as ps_error
from .core.context_init import VERSION


def get_output_name(outputfile: Optional[str], inputfile: str) -> str:
    """The -o argument, or the input file name with a .pgf extension."""
    if outputfile:
        return outputfile
    return os.path.splitext(inputfile)[0] + ".pgf"


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pspgf",
        description="pspgf - PostScript to PGF Converter",
    )
    parser.add_argument("-V", "--version", action="version", version=f"pspgf {VERSION}")
    parser.add_argument("inputfile", help="PostScript or EPS file to convert")
    parser.add_argument(
        "-o", "--output", dest="outputfile",
        help="Specify output filename ('-' for standard output)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Report approximations made during conversion"
    )
    parser.add_argument(
        "--shading-samples", type=int, default=None,
        help="Number of samples taken along a radial shading (default: 101)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argument_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    try:
        with open(args.inputfile, "rb") as f:
            data = f.read()
    except OSError as exc:
        print(f"pspgf Error: Cannot read '{args.inputfile}': {exc}", file=sys.stderr)
        return 1

    system_params = {}
    if args.shading_samples is not None:
        system_params["ShadingSamples"] = args.shading_samples

    output_name = get_output_name(args.outputfile, args.inputfile)
    try:
        if output_name == "-":
            convert(data, sys.stdout, system_params, stdout=sys.stderr)
        else:
            with open(output_name, "w", encoding="utf-8") as out:
                convert(data, out, system_params, stdout=sys.stderr)
    except ps_error.PSError as err:
        print(f"pspgf Error: {err}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"pspgf Error: Cannot write '{output_name}': {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
