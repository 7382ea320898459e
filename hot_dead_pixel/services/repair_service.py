from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from ..config import settings
from ..io import image_loader, image_saver
from ..processing.comparator import DetectionReport, score
from ..processing.corrector import correct
from ..processing.detector import DetectionParams, detect, detect_parallel
from ..processing.injector import DEFAULT_SEED, inject
from ..processing.pixel_buffer import DefectSet, PixelBuffer
from ..utils.errors import ConfigurationError
from ..utils.logger import get_logger

logger = get_logger(__name__)

PIPELINE_METHODS = ("vectorized", "scalar", "parallel")


@dataclass(frozen=True)
class PipelineResult:
    """Everything one run produced."""

    ground_truth: DefectSet
    detected: DefectSet
    report: DetectionReport
    corrected: int
    target_path: str
    snapshot_path: Optional[str] = None


def default_snapshot_path(target_path: str) -> str:
    """target.png -> target_injected.png"""
    stem, ext = os.path.splitext(target_path)
    return f"{stem}{settings.IO_DEFAULTS['snapshot_suffix']}{ext}"


class RepairService:
    """Thin facade over IO + processing."""

    def __init__(self, params: Optional[DetectionParams] = None, method: str = "vectorized") -> None:
        if method not in PIPELINE_METHODS:
            raise ConfigurationError(
                f"Unknown detection method '{method}'. Expected one of {PIPELINE_METHODS}.", setting_name="method"
            )
        self._params = params or DetectionParams()
        self._method = method

    @property
    def params(self) -> DetectionParams:
        return self._params

    def load_image(self, file_path: str) -> PixelBuffer:
        return image_loader.decode(file_path)

    def save_image(self, buffer: PixelBuffer, file_path: str, **kwargs) -> None:
        image_saver.encode(file_path, buffer, **kwargs)

    def inject(self, buffer: PixelBuffer, hot_count: int, dead_count: int, seed=DEFAULT_SEED) -> DefectSet:
        return inject(buffer, hot_count, dead_count, seed)

    def detect(self, buffer: PixelBuffer) -> DefectSet:
        if self._method == "parallel":
            return detect_parallel(buffer, self._params)
        return detect(buffer, self._params, method=self._method)

    def score(self, ground_truth: DefectSet, detected: DefectSet) -> DetectionReport:
        return score(ground_truth, detected)

    def correct(self, buffer: PixelBuffer, detected: DefectSet) -> int:
        return correct(buffer, detected)

    def run(
        self,
        source_path: str,
        target_path: str,
        hot_count: int,
        dead_count: int,
        seed=DEFAULT_SEED,
        snapshot_path: Optional[str] = None,
        save_snapshot: bool = True,
    ) -> PipelineResult:
        """Decode, inject, snapshot, detect, score, correct, encode.

        DecodeError and EncodeError propagate; the run is not resumable.
        """
        buffer = self.load_image(source_path)
        ground_truth = self.inject(buffer, hot_count, dead_count, seed)

        if save_snapshot:
            snapshot_path = snapshot_path or default_snapshot_path(target_path)
            self.save_image(buffer, snapshot_path)
        else:
            snapshot_path = None

        detected = self.detect(buffer)
        report = self.score(ground_truth, detected)
        for line in report.summary_lines():
            logger.info(line)

        corrected = self.correct(buffer, detected)
        self.save_image(buffer, target_path)

        return PipelineResult(
            ground_truth=ground_truth,
            detected=detected,
            report=report,
            corrected=corrected,
            target_path=target_path,
            snapshot_path=snapshot_path,
        )


def run_pipeline(
    source_path: str,
    target_path: str,
    hot_count: int = settings.INJECTION_DEFAULTS["hot_count"],
    dead_count: int = settings.INJECTION_DEFAULTS["dead_count"],
    seed=DEFAULT_SEED,
    snapshot_path: Optional[str] = None,
    save_snapshot: bool = True,
    params: Optional[DetectionParams] = None,
    method: str = "vectorized",
) -> PipelineResult:
    service = RepairService(params=params, method=method)
    return service.run(
        source_path,
        target_path,
        hot_count,
        dead_count,
        seed=seed,
        snapshot_path=snapshot_path,
        save_snapshot=save_snapshot,
    )
