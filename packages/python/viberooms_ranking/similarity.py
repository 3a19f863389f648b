from __future__ import annotations

import math

import numpy as np
from viberooms_core.errors import SchemeMismatch
from viberooms_core.types import SchemeVector


def _check(a: SchemeVector, b: SchemeVector) -> None:
    if a.scheme != b.scheme:
        raise SchemeMismatch(f"cannot compare: {a.scheme.value} vs {b.scheme.value}")


def cosine(a: SchemeVector, b: SchemeVector) -> float:
    """Cosine similarity; 0 when either side is all-zero."""
    _check(a, b)
    x = np.asarray(a.values, dtype=np.float64)
    y = np.asarray(b.values, dtype=np.float64)
    denom = float(np.linalg.norm(x)) * float(np.linalg.norm(y))
    return 0.0 if denom == 0 else float(x @ y) / denom


def max_distance(dim: int) -> float:
    # diagonal of the unit hypercube
    return math.sqrt(dim)


def proximity(a: SchemeVector, b: SchemeVector) -> float:
    """1 - euclidean distance / max possible distance."""
    _check(a, b)
    x = np.asarray(a.values, dtype=np.float64)
    y = np.asarray(b.values, dtype=np.float64)
    dist = float(np.linalg.norm(x - y))
    return 1.0 - dist / max_distance(len(a.values))


def rating_bonus(rating: float | None, pivot: float = 6.5, slope: float = 0.05) -> float:
    """Slight, monotonic boost for better-rated items; 0 when unrated."""
    if rating is None:
        return 0.0
    return (float(rating) - pivot) * slope