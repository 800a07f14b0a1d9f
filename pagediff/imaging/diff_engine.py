"""Perceptual per-pixel comparison of two equal-size renders.

Colour distance is measured in YIQ space after blending each pixel's alpha
onto white. A pixel differs when its squared YIQ distance exceeds
``MAX_YIQ_DELTA * threshold ** 2``. Differing pixels are painted in the
highlight colour; matching pixels are drawn as faded grayscale of the first
image.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

# Upper bound of the squared YIQ distance between two colours.
MAX_YIQ_DELTA = 35215.0
DEFAULT_THRESHOLD = 0.1
DEFAULT_DIFF_COLOR = (255, 0, 0)
GRAY_ALPHA = 0.1


@dataclass(frozen=True)
class DiffOutput:
    differing_pixels: int
    image: Image.Image


def _blend(channel: np.ndarray, alpha: np.ndarray) -> np.ndarray:
    return 255.0 + (channel - 255.0) * alpha


def _luma(rgb: np.ndarray) -> np.ndarray:
    return rgb[..., 0] * 0.29889531 + rgb[..., 1] * 0.58662247 + rgb[..., 2] * 0.11448223


def _chroma(rgb: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    i = rgb[..., 0] * 0.59597799 - rgb[..., 1] * 0.27417610 - rgb[..., 2] * 0.32180189
    q = rgb[..., 0] * 0.21147017 - rgb[..., 1] * 0.52261711 + rgb[..., 2] * 0.31114694
    return i, q


def color_delta(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Squared YIQ distance between two (..., 4) uint8 pixel arrays."""
    a = a.astype(np.float32)
    b = b.astype(np.float32)
    rgb_a = _blend(a[..., :3], a[..., 3:4] / 255.0)
    rgb_b = _blend(b[..., :3], b[..., 3:4] / 255.0)

    dy = _luma(rgb_a) - _luma(rgb_b)
    ia, qa = _chroma(rgb_a)
    ib, qb = _chroma(rgb_b)
    return 0.5053 * dy * dy + 0.299 * (ia - ib) ** 2 + 0.1957 * (qa - qb) ** 2


def _gray_background(arr: np.ndarray) -> np.ndarray:
    """Faded luma of ``arr`` as float32, built one channel at a time."""
    gray = np.zeros(arr.shape[:2], dtype=np.float32)
    scratch = np.empty(arr.shape[:2], dtype=np.float32)
    for channel, weight in enumerate((0.29889531, 0.58662247, 0.11448223)):
        np.multiply(arr[..., channel], np.float32(weight), out=scratch)
        gray += scratch
    np.multiply(arr[..., 3], np.float32(GRAY_ALPHA / 255.0), out=scratch)
    gray -= 255.0
    gray *= scratch
    gray += 255.0
    return np.clip(gray, 0, 255, out=gray)


def diff_images(
    a: Image.Image,
    b: Image.Image,
    threshold: float = DEFAULT_THRESHOLD,
    diff_color: tuple[int, int, int] = DEFAULT_DIFF_COLOR,
) -> DiffOutput:
    """Compare two equal-size images; return the differing count and a visualization.

    Only byte-changed pixels go through the colour-delta computation.
    """
    if a.size != b.size:
        raise ValueError(f"Image sizes do not match: {a.size} vs {b.size}")

    arr_a = np.asarray(a.convert("RGBA"))
    arr_b = np.asarray(b.convert("RGBA"))

    changed = np.any(arr_a != arr_b, axis=2)
    max_delta = MAX_YIQ_DELTA * threshold * threshold
    mask = np.zeros(changed.shape, dtype=bool)
    if changed.any():
        mask[changed] = color_delta(arr_a[changed], arr_b[changed]) > max_delta

    out = np.empty(arr_a.shape, dtype=np.uint8)
    gray = _gray_background(arr_a)
    for channel in range(3):
        out[..., channel] = gray
    del gray
    out[..., 3] = 255
    out[mask, :3] = diff_color

    count = int(mask.sum())
    logger.debug("Pixel diff: %d of %d pixels differ (threshold %.2f)",
                 count, mask.size, threshold)
    return DiffOutput(differing_pixels=count, image=Image.fromarray(out))
