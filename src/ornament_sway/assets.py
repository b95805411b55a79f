"""Image asset decoding.

Assets are resolved all-or-nothing: a scene never starts with a partial set of
images, so any decode failure is raised as :class:`AssetLoadError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import matplotlib.image as mpimg
import numpy as np


logger = logging.getLogger(__name__)


class AssetLoadError(RuntimeError):
    """Raised when any image of a scene manifest cannot be decoded."""


@dataclass(slots=True)
class ImageAsset:
    """A decoded RGBA bitmap, stored as an ``(H, W, 4)`` uint8 array."""

    name: str
    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


def to_rgba8(pixels: np.ndarray) -> np.ndarray:
    """Normalize a decoded image to an ``(H, W, 4)`` uint8 array."""
    arr = np.asarray(pixels)
    if np.issubdtype(arr.dtype, np.floating):
        arr = np.rint(np.clip(arr, 0.0, 1.0) * 255.0).astype(np.uint8)
    else:
        arr = arr.astype(np.uint8, copy=False)
    if arr.ndim == 2:
        arr = np.stack([arr, arr, arr], axis=-1)
    if arr.shape[2] == 3:
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
        arr = np.concatenate([arr, alpha], axis=-1)
    return arr


def load_image(name: str, path: str | Path) -> ImageAsset:
    """Decode one image file into an :class:`ImageAsset`."""
    try:
        pixels = mpimg.imread(str(path))
    except (OSError, ValueError) as exc:
        raise AssetLoadError(f"Failed to load asset {name!r} from {path}: {exc}") from exc
    return ImageAsset(name=name, pixels=to_rgba8(pixels))


def load_assets(
    manifest: dict[str, str],
    base_dir: str | Path = ".",
    required: list[str] | None = None,
) -> dict[str, ImageAsset]:
    """Decode every image named in ``manifest`` relative to ``base_dir``.

    Args:
        manifest: Mapping of asset key to file name.
        base_dir: Directory the file names are resolved against.
        required: Keys that must be present in the manifest.

    Returns:
        Mapping of asset key to decoded image.

    Raises:
        AssetLoadError: if a required key is missing or any file fails.
    """
    missing = [key for key in (required or []) if key not in manifest]
    if missing:
        raise AssetLoadError(f"Manifest is missing assets: {', '.join(missing)}")

    base = Path(base_dir)
    images: dict[str, ImageAsset] = {}
    for key, filename in manifest.items():
        images[key] = load_image(key, base / filename)
    logger.info("Loaded %d assets from %s", len(images), base)
    return images
