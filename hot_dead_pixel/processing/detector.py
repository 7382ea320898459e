# Hot and dead pixel detection
"""
Classifies every interior pixel as hot, dead or healthy from the statistics
of its 8 neighbours.

A pixel is dead when it is near-black, no brighter than the darkest
neighbour on any channel, and its summed deviation from the neighbour mean
is below the dead threshold. Hot is the mirror image with near-white, the
brightest neighbour and the hot threshold. Pixels on the outermost rows and
columns are never classified.

Three entry points share the same rule and return identical lists in
raster order:
- detect(method="scalar"): reference loop over evaluate().
- detect(method="vectorized"): array version over evaluate_planes().
- detect_parallel(): vectorized bands on a thread pool, merged in order.
"""

import concurrent.futures
import time
from dataclasses import dataclass, fields
from typing import List, Optional, Tuple

import numpy as np

from ..config import settings
from ..utils.errors import ConfigurationError
from ..utils.logger import get_logger
from .kernel import CENTER_OFFSETS, KernelStat, evaluate, evaluate_planes
from .pixel_buffer import Coordinate, DefectSet, PixelBuffer, RGB

logger = get_logger(__name__)

HOT = "hot"
DEAD = "dead"

DETECTION_METHODS = ("vectorized", "scalar")


@dataclass(frozen=True)
class DetectionParams:
    """Tunable classification thresholds."""
    near_black_max: int = settings.NEAR_BLACK_MAX  # every channel < this
    near_white_min: int = settings.NEAR_WHITE_MIN  # every channel > this
    dead_divisor: float = settings.DEAD_DELTA_DIVISOR
    hot_divisor: float = settings.HOT_DELTA_DIVISOR

    @property
    def dead_threshold(self) -> int:
        """Delta must be strictly below this for a dead classification."""
        return round(-255 / self.dead_divisor)

    @property
    def hot_threshold(self) -> int:
        """Delta must be strictly above this for a hot classification."""
        return round(255 / self.hot_divisor)

    @classmethod
    def from_settings(cls, overrides: Optional[dict] = None) -> "DetectionParams":
        """Builds params from settings.DETECTION_DEFAULTS with optional overrides."""
        values = dict(settings.DETECTION_DEFAULTS)
        known = {f.name for f in fields(cls)}
        for key, value in (overrides or {}).items():
            if key not in known:
                raise ConfigurationError(f"Unknown detection setting '{key}'.", setting_name=key)
            values[key] = value
        for key in ("dead_divisor", "hot_divisor"):
            if not values[key] > 0:
                raise ConfigurationError(f"'{key}' must be positive, got {values[key]}.", setting_name=key)
        return cls(**values)


def classify(center: RGB, stat: KernelStat, params: DetectionParams) -> Optional[str]:
    """Returns HOT, DEAD or None for one pixel given its neighbourhood stats."""
    r, g, b = center
    mean_r, mean_g, mean_b = stat.mean
    min_r, min_g, min_b = stat.min
    max_r, max_g, max_b = stat.max

    # Raw summed deviation, not an average
    delta = (r - mean_r) + (g - mean_g) + (b - mean_b)

    # Brighter than the darkest neighbour on some channel
    invalid_as_dead = max(r - min_r, g - min_g, b - min_b) > 0
    # Darker than the brightest neighbour on some channel
    invalid_as_hot = min(r - max_r, g - max_g, b - max_b) < 0

    nb = params.near_black_max
    nw = params.near_white_min
    near_black = r < nb and g < nb and b < nb
    near_white = r > nw and g > nw and b > nw

    if near_black and not invalid_as_dead and delta < params.dead_threshold:
        return DEAD
    if near_white and not invalid_as_hot and delta > params.hot_threshold:
        return HOT
    return None


def classify_planes(center: np.ndarray, mean: np.ndarray, mins: np.ndarray, maxs: np.ndarray,
                    params: DetectionParams) -> Tuple[np.ndarray, np.ndarray]:
    """Array form of classify(). All inputs are (h, w, 3) int32; returns (hot_mask, dead_mask)."""
    delta = (center - mean).sum(axis=2)
    invalid_as_dead = (center - mins).max(axis=2) > 0
    invalid_as_hot = (center - maxs).min(axis=2) < 0
    near_black = (center < params.near_black_max).all(axis=2)
    near_white = (center > params.near_white_min).all(axis=2)

    dead_mask = near_black & ~invalid_as_dead & (delta < params.dead_threshold)
    hot_mask = near_white & ~invalid_as_hot & (delta > params.hot_threshold) & ~dead_mask
    return hot_mask, dead_mask


def _mask_to_coordinates(mask: np.ndarray, x0: int, y0: int) -> List[Coordinate]:
    # np.nonzero walks row-major, which is raster order
    ys, xs = np.nonzero(mask)
    return [Coordinate(int(x) + x0, int(y) + y0) for y, x in zip(ys, xs)]


def _detect_scalar(buffer: PixelBuffer, params: DetectionParams) -> DefectSet:
    hot, dead = [], []
    for y in range(buffer.height):
        for x in range(buffer.width):
            if buffer.is_border(x, y):
                continue
            stat = evaluate(buffer, x, y, CENTER_OFFSETS)
            label = classify(buffer.get(x, y), stat, params)
            if label == DEAD:
                dead.append(Coordinate(x, y))
            elif label == HOT:
                hot.append(Coordinate(x, y))
    return DefectSet(hot=hot, dead=dead)


def _detect_rows(image: np.ndarray, params: DetectionParams, y0: int = 1):
    """Classifies the interior of image; coordinates are shifted so row 1 of image maps to y0."""
    mean, mins, maxs = evaluate_planes(image, CENTER_OFFSETS)
    if mean.size == 0:
        return [], []
    center = image[1:-1, 1:-1].astype(np.int32)
    hot_mask, dead_mask = classify_planes(center, mean, mins, maxs, params)
    return _mask_to_coordinates(hot_mask, 1, y0), _mask_to_coordinates(dead_mask, 1, y0)


def detect(buffer: PixelBuffer, params: Optional[DetectionParams] = None, method: str = "vectorized") -> DefectSet:
    """Scans all interior pixels and returns detected hot and dead sites in raster order.

    Args:
        buffer (PixelBuffer): Image to scan. Not modified.
        params (DetectionParams): Thresholds; defaults from settings.
        method (str): "vectorized" or "scalar". Results are identical.

    Returns:
        DefectSet: Detections.
    """
    if params is None:
        params = DetectionParams()
    if method not in DETECTION_METHODS:
        raise ValueError(f"Unknown detection method '{method}'. Expected one of {DETECTION_METHODS}.")

    start = time.perf_counter()
    if method == "scalar":
        result = _detect_scalar(buffer, params)
    else:
        hot, dead = _detect_rows(buffer.as_array(), params)
        result = DefectSet(hot=hot, dead=dead)

    logger.info(
        "Detected %d hot and %d dead pixels (%s, %.3fs)",
        len(result.hot), len(result.dead), method, time.perf_counter() - start,
    )
    return result


def detect_parallel(buffer: PixelBuffer, params: Optional[DetectionParams] = None,
                    workers: Optional[int] = None, band_rows: Optional[int] = None) -> DefectSet:
    """Vectorized detection split into horizontal bands on a thread pool.

    Each band carries one halo row above and below so its interior rows see
    the same neighbours as a full-image scan. Band results are concatenated
    in band order, so the output matches detect() exactly.
    """
    if params is None:
        params = DetectionParams()
    if band_rows is None:
        band_rows = settings.PARALLEL_DEFAULTS["band_rows"]
    if workers is None:
        workers = settings.PARALLEL_DEFAULTS["max_workers"]
    if band_rows < 1:
        raise ValueError(f"band_rows must be at least 1, got {band_rows}.")

    image = buffer.as_array()
    interior_end = buffer.height - 1
    bands = [(y0, min(y0 + band_rows, interior_end)) for y0 in range(1, interior_end, band_rows)]

    start = time.perf_counter()
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        # numpy/OpenCV release the GIL for the heavy lifting
        futures = [executor.submit(_detect_rows, image[y0 - 1:y1 + 1], params, y0) for y0, y1 in bands]
        # Collect in submission order, not completion order
        results = [future.result() for future in futures]

    hot, dead = [], []
    for band_hot, band_dead in results:
        hot.extend(band_hot)
        dead.extend(band_dead)

    logger.info(
        "Detected %d hot and %d dead pixels (parallel, %d bands, %.3fs)",
        len(hot), len(dead), len(bands), time.perf_counter() - start,
    )
    return DefectSet(hot=hot, dead=dead)
