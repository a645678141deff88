"""Path-data transformer for straight-line borders (M, L, Z only).

UML exporters draw class borders and connectors with absolute straight-line
commands, so this is a minimal lexer rather than a full path grammar. Curves,
arcs and relative commands are not recognised and do not survive a rewrite.
"""

from __future__ import annotations

import re

import numpy as np

from svgcleaner.svg.matrix import Matrix, format_coordinate

# A command letter followed by its numeric run, or a bare close-path
_TOKEN_RE = re.compile(r"[MLZ]\s*[\d\.\s-]+|Z")

# Two or more consecutive close-path commands
_DUPLICATE_CLOSE_RE = re.compile(r"([Zz])(?:\s*[Zz])+")


def tokenize(d: str) -> list[str]:
    """Split path data into trimmed M/L/Z tokens."""
    return [m.group(0).strip() for m in _TOKEN_RE.finditer(d)]


def _coordinate_pairs(literals: list[str]) -> list[tuple[float, float]]:
    pairs: list[tuple[float, float]] = []
    for i in range(0, len(literals) - 1, 2):
        try:
            pairs.append((float(literals[i]), float(literals[i + 1])))
        except ValueError:
            continue
    return pairs


def transform_path_data(d: str, matrix: Matrix) -> str:
    """Rewrite every M/L coordinate pair in `d` through `matrix`.

    Malformed or incomplete pairs are dropped. Output tokens are joined by
    single spaces with coordinates in six-decimal fixed notation.
    """
    result: list[str] = []

    for token in tokenize(d):
        if token == "Z":
            result.append("Z")
            continue

        command, literals = token[0], token[1:].split()
        result.append(command)

        pairs = _coordinate_pairs(literals)
        if not pairs:
            continue
        for x, y in matrix.transform_points(np.array(pairs)):
            result.append(format_coordinate(x))
            result.append(format_coordinate(y))

    return " ".join(result).strip()


def collapse_duplicate_close(d: str) -> str:
    """Collapse `Z Z` (or `ZZ`) into a single close-path command."""
    return _DUPLICATE_CLOSE_RE.sub(r"\1", d)
