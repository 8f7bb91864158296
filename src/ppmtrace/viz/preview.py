from __future__ import annotations

import os
from typing import TYPE_CHECKING

import matplotlib as mpl
import numpy as np

# Backend has to be chosen before pyplot is imported; Agg is the headless fallback.
_BACKEND = os.environ.get("PPMTRACE_MPL_BACKEND", "").strip()
if _BACKEND:
    mpl.use(_BACKEND, force=True)
else:
    for candidate in ("TkAgg", "QtAgg", "Agg"):
        # noinspection PyBroadException
        try:
            mpl.use(candidate, force=True)
            break
        except Exception:  # pragma: no cover  # noqa: BLE001, S112
            continue

import matplotlib.pyplot as plt  # noqa: E402

if TYPE_CHECKING:
    from ppmtrace.image import ImageBuffer


class ImagePreview:
    """Matplotlib viewer for a rendered image buffer."""

    def __init__(self, title: str = "ppmtrace") -> None:
        """Initialize the figure."""
        fig, ax = plt.subplots(figsize=(8, 8))
        self.fig = fig
        self.ax = ax
        ax.set_title(title)
        ax.set_axis_off()

    def draw(self, image: ImageBuffer) -> None:
        # Same truncation as the PPM export, so the preview matches the file.
        img = image.to_bytes_array().astype(np.uint8)
        self.ax.imshow(img, origin="upper")

    def show(self) -> None:
        plt.tight_layout()
        plt.show()

    def save(self, path: str | os.PathLike[str], dpi: int = 150) -> None:
        """Save figure to disk (useful if running headless with Agg)."""
        self.fig.tight_layout()
        self.fig.savefig(path, dpi=dpi)

    def close(self) -> None:
        plt.close(self.fig)
