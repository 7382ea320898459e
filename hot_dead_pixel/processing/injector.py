# Synthetic defect injection
"""
Stamps pure-white and pure-black pixels at pseudo-random sites and records
them as ground truth for scoring the detector.

Sites are not deduplicated: a later draw may land on an earlier one, and a
dead draw may overwrite a hot one. The comparator tolerates that noise.
"""

import numpy as np

from ..config import settings
from ..utils.logger import get_logger
from .pixel_buffer import Coordinate, DefectSet, PixelBuffer

logger = get_logger(__name__)

DEFAULT_SEED = settings.INJECTION_DEFAULTS["seed"]


def make_rng(seed=DEFAULT_SEED):
    """Returns a generator for seed; an object that already has integers() is used as-is."""
    if hasattr(seed, "integers"):
        return seed
    return np.random.default_rng(seed)


def _scatter(buffer: PixelBuffer, count: int, value: int, rng):
    sites = []
    for _ in range(count):
        x = int(rng.integers(0, buffer.width))
        y = int(rng.integers(0, buffer.height))
        buffer.set(x, y, value, value, value)
        sites.append(Coordinate(x, y))
    return sites


def inject(buffer: PixelBuffer, hot_count: int, dead_count: int, seed=DEFAULT_SEED) -> DefectSet:
    """Injects hot_count white then dead_count black pixels into buffer in place.

    Args:
        buffer (PixelBuffer): Image to mutate.
        hot_count (int): Number of hot draws.
        dead_count (int): Number of dead draws.
        seed: Integer seed, or a numpy Generator to draw from directly.

    Returns:
        DefectSet: Ground truth in draw order.
    """
    if hot_count < 0 or dead_count < 0:
        raise ValueError(f"Defect counts must be non-negative, got hot={hot_count}, dead={dead_count}.")

    rng = make_rng(seed)
    hot = _scatter(buffer, hot_count, settings.HOT_VALUE, rng)
    dead = _scatter(buffer, dead_count, settings.DEAD_VALUE, rng)

    logger.info("Injected %d hot and %d dead pixels into %dx%d buffer", len(hot), len(dead), buffer.width, buffer.height)
    return DefectSet(hot=hot, dead=dead)
