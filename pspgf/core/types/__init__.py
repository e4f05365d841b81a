# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf Types Package - Public API

All PostScript types and constants are re-exported here so that callers
use the single import pattern `from ..core import types as ps`.

- constants.py: type tags, access levels, limits
- base.py: PSObject and its coercions
- primitive.py: Bool, Null, Int, Real, Mark
- composite/: String, Name, Array, Matrix, Dict
- utility.py: Operator, Font, Save
- file_types.py: File
- graphics.py: path sections, Path, GraphicsState
- context.py: Context, Stack, DictStack
"""

from .constants import *
from .base import PSObject
from .primitive import Bool, Null, Int, Real, Mark, number
from .composite import String, Name, Array, Matrix, Dict
from .utility import Operator, Font, Save
from .file_types import File
from .graphics import (
    Point, MoveTo, LineTo, CurveTo, ClosePath, Path, PathSection, GraphicsState
)
from .context import Context, Stack, DictStack
