# Defect correction by neighbour mean replacement
import itertools
from typing import Sequence

from ..utils.logger import get_logger
from .kernel import CENTER_OFFSETS, Offset, evaluate
from .pixel_buffer import DefectSet, PixelBuffer

logger = get_logger(__name__)


def correct(buffer: PixelBuffer, detected: DefectSet, offsets: Sequence[Offset] = CENTER_OFFSETS,
            from_snapshot: bool = False) -> int:
    """Overwrites every detected site with the mean of its neighbours, in place.

    Hot sites are processed before dead sites, each list in its own order.
    When two defects are adjacent the later one reads the already corrected
    value of the earlier one, so the result depends on that order.

    Args:
        buffer (PixelBuffer): Image to repair.
        detected (DefectSet): Sites to replace. Must be interior pixels.
        offsets: Neighbour table.
        from_snapshot (bool): Read all neighbours from a copy taken before
            any write. Order-independent, but gives different values than
            the default wherever defects touch.

    Returns:
        int: Number of pixels written.
    """
    source = buffer.copy() if from_snapshot else buffer
    written = 0
    for site in itertools.chain(detected.hot, detected.dead):
        stat = evaluate(source, site.x, site.y, offsets)
        buffer.set(site.x, site.y, *stat.mean)
        written += 1

    logger.info("Corrected %d pixels%s", written, " (snapshot reads)" if from_snapshot else "")
    return written
