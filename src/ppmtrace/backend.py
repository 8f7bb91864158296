from __future__ import annotations

from typing import Any, Literal

import numpy as np

try:
    import cupy as cp  # type: ignore
except ImportError:  # pragma: no cover
    cp = None

ArrayModule = Any
BackendName = Literal["auto", "numpy", "cupy"]


def get_array_module(backend: BackendName = "numpy") -> ArrayModule:
    """Return numpy or cupy depending on availability and request."""
    if backend not in ("auto", "numpy", "cupy"):
        msg = f"Unknown array backend: {backend!r}"
        raise ValueError(msg)
    if backend == "cupy" and cp is None:
        msg = "CuPy backend requested but cupy is not installed"
        raise ValueError(msg)
    if backend in ("auto", "cupy") and cp is not None:
        return cp
    return np


def is_cupy(xp: ArrayModule) -> bool:
    """Return True if xp is the CuPy module."""
    return cp is not None and xp is cp


def to_numpy(xp: ArrayModule, a: Any) -> np.ndarray:
    """Convert xp array to NumPy for serialization and matplotlib."""
    if is_cupy(xp):
        return cp.asnumpy(a)  # type: ignore[union-attr]
    return np.asarray(a)
