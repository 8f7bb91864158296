from __future__ import annotations

from typing import Any

from ppmtrace.exceptions import DegenerateVectorError


def square(a: float) -> float:
    return a * a


def dot_batch(a: Any, b: Any) -> Any:
    """Dot product over the last axis, summed in x, y, z order."""
    return a[..., 0] * b[..., 0] + a[..., 1] * b[..., 1] + a[..., 2] * b[..., 2]


def normalize_batch(xp: Any, v: Any) -> Any:
    """Normalize (..., 3) vectors; zero-length entries are an error."""
    n = xp.sqrt(dot_batch(v, v))
    if bool(xp.any(n == 0.0)):
        msg = "Cannot normalize a zero-length vector"
        raise DegenerateVectorError(msg)
    return v / n[..., None]
