"""Opaque-bounds extraction for decoded RGBA images."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


ALPHA_THRESHOLD = 10


@dataclass(frozen=True, slots=True)
class ImageBounds:
    """Axis-aligned box of opaque pixels in source-pixel coordinates."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def center_x(self) -> float:
        return (self.min_x + self.max_x) / 2

    @property
    def center_y(self) -> float:
        return (self.min_y + self.max_y) / 2


def alpha_channel(pixels: np.ndarray) -> np.ndarray:
    """Return the alpha plane of ``pixels`` on a 0..255 scale.

    Float images (as produced by ``matplotlib.image.imread`` for PNG) are
    assumed to be in ``[0, 1]``. Images without an alpha channel are opaque.
    """
    arr = np.asarray(pixels)
    if arr.ndim == 2 or arr.shape[2] < 4:
        return np.full(arr.shape[:2], 255, dtype=np.uint8)
    alpha = arr[:, :, 3]
    if np.issubdtype(alpha.dtype, np.floating):
        return np.rint(np.clip(alpha, 0.0, 1.0) * 255.0).astype(np.uint8)
    return alpha.astype(np.uint8, copy=False)


def compute_bounds(image, threshold: int = ALPHA_THRESHOLD) -> ImageBounds:
    """Compute the bounding box of pixels whose alpha exceeds ``threshold``.

    ``image`` is an ``ImageAsset`` or an ``(H, W[, C])`` array. A fully
    transparent image yields the full rectangle ``(0, 0, width, height)``.
    """
    pixels = getattr(image, "pixels", image)
    alpha = alpha_channel(pixels)
    height, width = alpha.shape

    ys, xs = np.nonzero(alpha > threshold)
    if xs.size == 0:
        return ImageBounds(0, 0, width, height)
    return ImageBounds(int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))
