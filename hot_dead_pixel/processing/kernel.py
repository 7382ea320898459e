# Neighbourhood kernel statistics
"""
Per-channel mean/min/max over a fixed set of neighbour offsets.

Two implementations with identical results:
- evaluate(): scalar reference, one coordinate at a time.
- evaluate_planes(): whole-image version built on OpenCV filters.

Offsets are (dx, dy) pairs relative to the centre pixel. The centre itself
is never part of a table.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import cv2

from .pixel_buffer import PixelBuffer, RGB

Offset = Tuple[int, int]

# Canonical 8-neighbourhood used for every interior pixel
CENTER_OFFSETS: Tuple[Offset, ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)

# Border tables. Defined for completeness; detection skips border pixels
# and never selects these.
TOP_EDGE_OFFSETS: Tuple[Offset, ...] = ((-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))
BOTTOM_EDGE_OFFSETS: Tuple[Offset, ...] = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0))
LEFT_EDGE_OFFSETS: Tuple[Offset, ...] = ((0, -1), (1, -1), (1, 0), (0, 1), (1, 1))
RIGHT_EDGE_OFFSETS: Tuple[Offset, ...] = ((-1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1))
TOP_LEFT_OFFSETS: Tuple[Offset, ...] = ((1, 0), (0, 1), (1, 1))
TOP_RIGHT_OFFSETS: Tuple[Offset, ...] = ((-1, 0), (-1, 1), (0, 1))
BOTTOM_LEFT_OFFSETS: Tuple[Offset, ...] = ((0, -1), (1, -1), (1, 0))
BOTTOM_RIGHT_OFFSETS: Tuple[Offset, ...] = ((-1, -1), (0, -1), (-1, 0))

EDGE_OFFSETS = {
    "top": TOP_EDGE_OFFSETS,
    "bottom": BOTTOM_EDGE_OFFSETS,
    "left": LEFT_EDGE_OFFSETS,
    "right": RIGHT_EDGE_OFFSETS,
    "top_left": TOP_LEFT_OFFSETS,
    "top_right": TOP_RIGHT_OFFSETS,
    "bottom_left": BOTTOM_LEFT_OFFSETS,
    "bottom_right": BOTTOM_RIGHT_OFFSETS,
}


@dataclass(frozen=True)
class KernelStat:
    """Neighbourhood statistics for one pixel. Mean is truncated to an int."""
    mean: RGB
    min: RGB
    max: RGB


def evaluate(buffer: PixelBuffer, x: int, y: int, offsets: Sequence[Offset] = CENTER_OFFSETS) -> KernelStat:
    """
    Computes per-channel mean, min and max over the neighbours of (x, y).

    Every neighbour must lie inside the buffer. This is asserted, not
    handled: detection and correction only call it for interior pixels.
    """
    assert offsets, "offset table must not be empty"
    width, height = buffer.width, buffer.height

    sum_r = sum_g = sum_b = 0
    min_r = min_g = min_b = 255
    max_r = max_g = max_b = 0

    for dx, dy in offsets:
        nx, ny = x + dx, y + dy
        assert 0 <= nx < width and 0 <= ny < height, f"neighbour ({nx}, {ny}) outside {width}x{height}"
        r, g, b = buffer.get(nx, ny)
        sum_r += r
        sum_g += g
        sum_b += b
        min_r = min(min_r, r)
        min_g = min(min_g, g)
        min_b = min(min_b, b)
        max_r = max(max_r, r)
        max_g = max(max_g, g)
        max_b = max(max_b, b)

    n = len(offsets)
    # Sums are never negative, so floor division truncates
    return KernelStat(
        mean=(sum_r // n, sum_g // n, sum_b // n),
        min=(min_r, min_g, min_b),
        max=(max_r, max_g, max_b),
    )


def offset_radius(offsets: Sequence[Offset]) -> int:
    """Chebyshev radius of the table: how far the footprint reaches from the centre."""
    return max(max(abs(dx), abs(dy)) for dx, dy in offsets)


def kernel_weights(offsets: Sequence[Offset]) -> np.ndarray:
    """Square weight matrix with a count at each offset, centre at [r, r]."""
    r = offset_radius(offsets)
    weights = np.zeros((2 * r + 1, 2 * r + 1), dtype=np.float32)
    for dx, dy in offsets:
        weights[dy + r, dx + r] += 1.0
    return weights


def evaluate_planes(image: np.ndarray, offsets: Sequence[Offset] = CENTER_OFFSETS):
    """
    Whole-image version of evaluate().

    Args:
        image (numpy.ndarray): (h, w, 3) uint8 RGB array.
        offsets: Neighbour table.

    Returns:
        tuple: (mean, min, max) int32 arrays of shape (h - 2r, w - 2r, 3),
               covering only the pixels whose footprint fits inside the
               image. Element [j, i] belongs to pixel (i + r, j + r).
    """
    assert offsets, "offset table must not be empty"
    r = offset_radius(offsets)
    h, w = image.shape[:2]
    out_shape = (max(h - 2 * r, 0), max(w - 2 * r, 0), 3)
    if out_shape[0] == 0 or out_shape[1] == 0:
        empty = np.zeros(out_shape, dtype=np.int32)
        return empty, empty.copy(), empty.copy()

    image = np.ascontiguousarray(image)
    weights = kernel_weights(offsets)
    mask = (weights > 0).astype(np.uint8)

    # filter2D correlates (no kernel flip), so weights[dy + r, dx + r]
    # picks up pixel (x + dx, y + dy). Same for erode/dilate.
    sums = cv2.filter2D(image, cv2.CV_32F, weights, borderType=cv2.BORDER_REPLICATE)
    mins = cv2.erode(image, mask, borderType=cv2.BORDER_REPLICATE)
    maxs = cv2.dilate(image, mask, borderType=cv2.BORDER_REPLICATE)

    inner = (slice(r, h - r), slice(r, w - r))
    mean = np.rint(sums[inner]).astype(np.int32) // len(offsets)
    return mean, mins[inner].astype(np.int32), maxs[inner].astype(np.int32)
