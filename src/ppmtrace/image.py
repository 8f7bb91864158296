from __future__ import annotations

import io
import logging
import operator
from typing import TYPE_CHECKING, Any, TextIO

import numpy as np

from ppmtrace.exceptions import PixelIndexError
from ppmtrace.vector import Color

if TYPE_CHECKING:
    import os

logger = logging.getLogger(__name__)

MAX_COLOR = 255


class ImageBuffer:
    """Fixed-size row-major RGB raster with the origin at the top-left.

    Channels are stored as float64 and stay unbounded until export, where
    they are mapped to ``[0, MAX_COLOR]`` integers.

    Parameters
    ----------
    rows:
        Number of pixel rows (image height).
    cols:
        Number of pixel columns (image width).

    """

    __slots__ = ("_pixels",)

    def __init__(self, rows: int, cols: int) -> None:
        """Create a black buffer."""
        if rows <= 0 or cols <= 0:
            msg = f"Image dimensions must be positive, got {rows}x{cols}"
            raise ValueError(msg)
        self._pixels = np.zeros((int(rows), int(cols), 3), dtype=np.float64)

    @property
    def rows(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def cols(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def _check(self, row: int, col: int) -> tuple[int, int]:
        try:
            row, col = operator.index(row), operator.index(col)
        except TypeError:
            msg = f"Pixel indices must be integers, got ({row!r}, {col!r})"
            raise PixelIndexError(msg) from None
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            msg = f"Pixel ({row}, {col}) outside {self.rows}x{self.cols} image"
            raise PixelIndexError(msg)
        return row, col

    def set(self, row: int, col: int, color: Color) -> ImageBuffer:
        """Overwrite one pixel; returns self so calls can be chained."""
        row, col = self._check(row, col)
        self._pixels[row, col] = color.as_tuple()
        return self

    def get(self, row: int, col: int) -> Color:
        row, col = self._check(row, col)
        return Color.of(self._pixels[row, col])

    def put_rows(self, start: int, block: Any) -> ImageBuffer:
        """Overwrite rows [start, start + n) with an (n, cols, 3) block."""
        arr = np.asarray(block, dtype=np.float64)
        if arr.ndim != 3 or arr.shape[1:] != (self.cols, 3):
            msg = f"Expected an (n, {self.cols}, 3) block, got shape {arr.shape}"
            raise ValueError(msg)
        stop = start + arr.shape[0]
        if start < 0 or stop > self.rows:
            msg = f"Rows [{start}, {stop}) outside {self.rows}-row image"
            raise PixelIndexError(msg)
        self._pixels[start:stop] = arr
        return self

    def normalize(self) -> ImageBuffer:
        """Rescale each channel from its observed [min, max] to [0, 1].

        A channel whose values are all equal uses a spread of 1, so it maps
        to 0 instead of dividing by zero.
        """
        lowest = self._pixels.min(axis=(0, 1))
        highest = self._pixels.max(axis=(0, 1))
        spread = highest - lowest
        spread = np.where(spread <= 0.0, 1.0, spread)
        self._pixels = (self._pixels - lowest) / spread
        return self

    def to_bytes_array(self) -> np.ndarray:
        """Channels as integers in [0, MAX_COLOR], truncated toward zero."""
        scaled = np.trunc(self._pixels * MAX_COLOR)
        return np.clip(scaled, 0, MAX_COLOR).astype(np.int64)

    def write_ppm(self, stream: TextIO) -> None:
        """Write the buffer as ASCII PPM (P3) to an open text stream."""
        stream.write("P3\n")
        stream.write(f"{self.cols} {self.rows}\n")
        stream.write(f"{MAX_COLOR}\n")
        for r, g, b in self.to_bytes_array().reshape(-1, 3):
            stream.write(f"{r} {g} {b}\n")

    def to_ppm(self) -> str:
        out = io.StringIO()
        self.write_ppm(out)
        return out.getvalue()

    def export(self, path: str | os.PathLike[str]) -> None:
        """Save the buffer as an ASCII PPM file; I/O errors propagate."""
        with open(path, "w", encoding="ascii", newline="\n") as f:
            self.write_ppm(f)
        logger.info("Wrote %dx%d PPM to %s", self.cols, self.rows, path)

    def to_array(self) -> np.ndarray:
        """Copy of the raw (rows, cols, 3) float channels."""
        return self._pixels.copy()

    @classmethod
    def from_array(cls, pixels: Any) -> ImageBuffer:
        arr = np.asarray(pixels, dtype=np.float64)
        if arr.ndim != 3 or arr.shape[2] != 3:
            msg = f"Expected a (rows, cols, 3) array, got shape {arr.shape}"
            raise ValueError(msg)
        buf = cls(arr.shape[0], arr.shape[1])
        buf._pixels[...] = arr
        return buf
