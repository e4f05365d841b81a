# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf Types Composite Array Module

Arrays are views (start, length) onto a shared Python list. Sub-arrays made
with getinterval alias the same list, and two array objects are eq only
when they view the same list over the same bounds. A procedure is an
array with the executable attribute.

Matrix is the six-coefficient array [a b c d tx ty] mapping
(x, y) -> (a*x + c*y + tx, b*x + d*y + ty). It is an ordinary array to the
language (arraytype) and adds the affine helpers used by the graphics code.
"""

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from ...error import PSError, RANGECHECK, TYPECHECK, UNDEFINEDRESULT
from ..base import PSObject
from ..constants import ACCESS_UNLIMITED, ATTRIB_LIT, NUMERIC_TYPES, T_ARRAY
from ..primitive import Null, Real


class Array(PSObject):
    TYPE = T_ARRAY

    def __init__(
        self,
        val: Optional[List[PSObject]] = None,
        start: int = 0,
        length: Optional[int] = None,
        access: int = ACCESS_UNLIMITED,
        attrib: int = ATTRIB_LIT,
    ) -> None:
        if val is None:
            val = []
        super().__init__(val, access, attrib, is_composite=True)
        self.start = start
        self.length = len(val) - start if length is None else length

    @classmethod
    def of_size(cls, size: int) -> "Array":
        return cls([Null() for _ in range(size)])

    def items(self) -> List[PSObject]:
        return self.val[self.start:self.start + self.length]

    def get(self, index: int) -> PSObject:
        if index < 0 or index >= self.length:
            raise PSError(RANGECHECK)
        return self.val[self.start + index]

    def put(self, index: int, obj: PSObject) -> None:
        if index < 0 or index >= self.length:
            raise PSError(RANGECHECK)
        self.val[self.start + index] = obj

    def getinterval(self, index: int, count: int) -> "Array":
        if index < 0 or count < 0 or index + count > self.length:
            raise PSError(RANGECHECK)
        new_arr = Array(self.val, self.start + index, count, self.access, self.attrib)
        return new_arr

    def putinterval(self, index: int, objs: Sequence[PSObject]) -> None:
        if index < 0 or index + len(objs) > self.length:
            raise PSError(RANGECHECK)
        pos = self.start + index
        self.val[pos:pos + len(objs)] = list(objs)

    def __iter__(self):
        return iter(self.items())

    def __len__(self) -> int:
        return self.length

    def __eq__(self, other) -> bool:
        if getattr(other, "TYPE", None) != T_ARRAY:
            return False
        return (
            self.val is other.val
            and self.start == other.start
            and self.length == other.length
        )

    def __hash__(self):
        return hash((id(self.val), self.start, self.length))

    def to_dict_key(self):
        return ("array", id(self.val), self.start, self.length)

    def to_array(self) -> "Array":
        return self

    def to_proc(self) -> "Array":
        if not self.is_executable():
            raise PSError(TYPECHECK)
        return self

    def to_matrix(self) -> "Matrix":
        if self.length != 6:
            raise PSError(RANGECHECK)
        coeffs = []
        for item in self.items():
            if item.TYPE not in NUMERIC_TYPES:
                raise PSError(TYPECHECK)
            coeffs.append(item.to_real())
        return Matrix(coeffs)

    def to_floats(self) -> List[float]:
        return [item.to_real() for item in self.items()]

    def __repr__(self) -> str:
        body = " ".join(repr(item) for item in self.items())
        if self.is_executable():
            return "{" + body + "}"
        return "[" + body + "]"


class Matrix(Array):
    """An affine transform stored as a six element array."""

    def __init__(self, coeffs: Iterable[float] = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)) -> None:
        super().__init__([Real(c) for c in coeffs])
        if self.length != 6:
            raise PSError(RANGECHECK)

    def coefficients(self) -> List[float]:
        return [item.to_real() for item in self.items()]

    def to_matrix(self) -> "Matrix":
        return Matrix(self.coefficients())

    def transform(self, x: float, y: float) -> Tuple[float, float]:
        a, b, c, d, tx, ty = self.coefficients()
        return a * x + c * y + tx, b * x + d * y + ty

    def dtransform(self, dx: float, dy: float) -> Tuple[float, float]:
        a, b, c, d, _, _ = self.coefficients()
        return a * dx + c * dy, b * dx + d * dy

    def determinant(self) -> float:
        a, b, c, d, _, _ = self.coefficients()
        return a * d - b * c

    def inverted(self) -> "Matrix":
        a, b, c, d, tx, ty = self.coefficients()
        det = a * d - b * c
        if det == 0:
            raise PSError(UNDEFINEDRESULT)
        ia, ib, ic, id_ = d / det, -b / det, -c / det, a / det
        return Matrix((ia, ib, ic, id_, -(tx * ia + ty * ic), -(tx * ib + ty * id_)))

    def itransform(self, x: float, y: float) -> Tuple[float, float]:
        return self.inverted().transform(x, y)

    def idtransform(self, dx: float, dy: float) -> Tuple[float, float]:
        return self.inverted().dtransform(dx, dy)

    def multiply(self, other: "Matrix") -> "Matrix":
        """Return self x other, i.e. apply self first and then other."""
        a1, b1, c1, d1, tx1, ty1 = self.coefficients()
        a2, b2, c2, d2, tx2, ty2 = other.coefficients()
        return Matrix((
            a1 * a2 + b1 * c2,
            a1 * b2 + b1 * d2,
            c1 * a2 + d1 * c2,
            c1 * b2 + d1 * d2,
            tx1 * a2 + ty1 * c2 + tx2,
            tx1 * b2 + ty1 * d2 + ty2,
        ))

    @classmethod
    def translation(cls, tx: float, ty: float) -> "Matrix":
        return cls((1.0, 0.0, 0.0, 1.0, tx, ty))

    @classmethod
    def scaling(cls, sx: float, sy: float) -> "Matrix":
        return cls((sx, 0.0, 0.0, sy, 0.0, 0.0))

    @classmethod
    def rotation_by(cls, angle: float) -> "Matrix":
        rad = math.radians(angle)
        cos_a, sin_a = math.cos(rad), math.sin(rad)
        return cls((cos_a, sin_a, -sin_a, cos_a, 0.0, 0.0))

    # decomposition into scale and rotation

    def x_scaling(self) -> float:
        a, b, _, _, _, _ = self.coefficients()
        return math.hypot(a, b)

    def y_scaling(self) -> float:
        """Scale along the y axis; negative when the transform mirrors."""
        x_scale = self.x_scaling()
        if x_scale == 0:
            _, _, c, d, _, _ = self.coefficients()
            return math.hypot(c, d)
        return self.determinant() / x_scale

    def mean_scaling(self) -> float:
        return math.sqrt(abs(self.determinant()))

    def rotation(self) -> float:
        """Rotation angle of the x axis in degrees."""
        a, b, _, _, _, _ = self.coefficients()
        return math.degrees(math.atan2(b, a))
