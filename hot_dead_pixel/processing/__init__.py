# Processing package initialization
from .pixel_buffer import PixelBuffer, Coordinate, DefectSet
from .kernel import (
    KernelStat, CENTER_OFFSETS, EDGE_OFFSETS,
    evaluate, evaluate_planes
)
from .injector import inject, make_rng, DEFAULT_SEED
from .detector import DetectionParams, classify, detect, detect_parallel, HOT, DEAD
from .comparator import ClassReport, DetectionReport, compare, score
from .corrector import correct
