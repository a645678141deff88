"""Affine matrix primitive for folding `matrix(a b c d e f)` transforms.

Matrix format (a, b, c, d, e, f) represents:
    | a  c  e |
    | b  d  f |
    | 0  0  1 |
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

# Exporters serialize the same matrix with slightly different round-off
MATRIX_TOLERANCE = 1e-4

_NUM = r"([-\d\.]+)"
_MATRIX_RE = re.compile(r"matrix\(" + r"\s+".join([_NUM] * 6) + r"\)")


@dataclass(frozen=True, eq=False)
class Matrix:
    a: float
    b: float
    c: float
    d: float
    e: float
    f: float

    def transform(self, x: float, y: float) -> tuple[float, float]:
        """Map a point through the matrix."""
        return (
            self.a * x + self.c * y + self.e,
            self.b * x + self.d * y + self.f,
        )

    def transform_points(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        """Map an Nx2 array of points. Same formula as transform(), component-wise."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        xs = self.a * pts[:, 0] + self.c * pts[:, 1] + self.e
        ys = self.b * pts[:, 0] + self.d * pts[:, 1] + self.f
        return np.column_stack((xs, ys))

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return all(
            abs(mine - theirs) < MATRIX_TOLERANCE
            for mine, theirs in zip(self.as_tuple(), other.as_tuple())
        )

    __hash__ = None  # tolerant equality cannot be hashed consistently

    def __str__(self) -> str:
        return "matrix(" + " ".join(f"{v:g}" for v in self.as_tuple()) + ")"


def identity() -> Matrix:
    return Matrix(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def translation(tx: float, ty: float) -> Matrix:
    return Matrix(1.0, 0.0, 0.0, 1.0, tx, ty)


def parse_matrix(transform_str: str | None) -> Matrix | None:
    """Parse a `matrix(a b c d e f)` transform attribute.

    Returns None for anything else (translate(), comma-separated arguments,
    fewer than six numbers) so callers can skip folding.
    """
    if not transform_str:
        return None
    match = _MATRIX_RE.search(transform_str)
    if not match:
        return None
    try:
        return Matrix(*(float(g) for g in match.groups()))
    except ValueError:
        # e.g. "1.2.3" or a lone "-" satisfy the character class
        return None


def format_coordinate(value: float) -> str:
    """Six fixed decimals, always with '.' as the decimal point."""
    return f"{float(value):.6f}"
