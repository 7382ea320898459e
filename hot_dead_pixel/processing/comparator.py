# Detection accuracy scoring against injected ground truth
from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..utils.logger import get_logger
from .pixel_buffer import Coordinate, DefectSet

logger = get_logger(__name__)


@dataclass(frozen=True)
class ClassReport:
    """Scores for one defect class."""
    label: str
    ground_truth: int
    detected: int
    missed: int
    false_positives: int

    @property
    def found(self) -> int:
        return self.ground_truth - self.missed


@dataclass(frozen=True)
class DetectionReport:
    """Per-class scores plus the detections that matched no ground truth."""
    hot: ClassReport
    dead: ClassReport
    false_positives: DefectSet

    def summary_lines(self) -> List[str]:
        lines = []
        for report in (self.hot, self.dead):
            lines.append(
                f"{report.label.capitalize()} pixels: missed {report.missed} of {report.ground_truth} injected, "
                f"{report.detected} detected, {report.false_positives} false positive(s)"
            )
        return lines


def _reconcile(truth: Sequence[Coordinate], detected: Sequence[Coordinate]) -> Tuple[int, Tuple[Coordinate, ...]]:
    """
    Returns (missed, leftovers) for one class.

    missed counts ground-truth entries with no equal detection at all.
    leftovers is detected with one occurrence removed per ground-truth
    entry, earliest first, keeping the original order of what remains.
    """
    detected_sites = set(detected)
    missed = sum(1 for site in truth if site not in detected_sites)

    unmatched = Counter(truth)
    leftovers = []
    for site in detected:
        if unmatched[site] > 0:
            unmatched[site] -= 1
        else:
            leftovers.append(site)
    return missed, tuple(leftovers)


def score(ground_truth: DefectSet, detected: DefectSet) -> DetectionReport:
    """Reconciles ground truth with detections for both classes. Never fails."""
    hot_missed, hot_extra = _reconcile(ground_truth.hot, detected.hot)
    dead_missed, dead_extra = _reconcile(ground_truth.dead, detected.dead)

    report = DetectionReport(
        hot=ClassReport("hot", len(ground_truth.hot), len(detected.hot), hot_missed, len(hot_extra)),
        dead=ClassReport("dead", len(ground_truth.dead), len(detected.dead), dead_missed, len(dead_extra)),
        false_positives=DefectSet(hot=hot_extra, dead=dead_extra),
    )
    for line in report.summary_lines():
        logger.debug(line)
    return report


def compare(ground_truth: DefectSet, detected: DefectSet) -> DefectSet:
    """Returns the detections that do not correspond to any ground-truth site."""
    return score(ground_truth, detected).false_positives
