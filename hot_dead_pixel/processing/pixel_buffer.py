# Pixel buffer and defect coordinate types
"""
Flat, row-major RGB byte buffer plus the small value types shared by the
detection pipeline.

Pixel (x, y) lives at byte offset 3 * (y * width + x). Accessors do not
bounds-check: callers in the core only ever address valid coordinates.
"""

from dataclasses import dataclass
from typing import Iterable, NamedTuple, Tuple

import numpy as np

RGB = Tuple[int, int, int]


class Coordinate(NamedTuple):
    """Integer pixel location."""
    x: int
    y: int


@dataclass(frozen=True)
class DefectSet:
    """Hot and dead coordinate lists, in the order their producer emitted them."""
    hot: Tuple[Coordinate, ...] = ()
    dead: Tuple[Coordinate, ...] = ()

    def __post_init__(self):
        # Accept any iterable of (x, y) pairs and freeze it
        object.__setattr__(self, "hot", _as_coordinates(self.hot))
        object.__setattr__(self, "dead", _as_coordinates(self.dead))

    @classmethod
    def empty(cls) -> "DefectSet":
        return cls()

    @property
    def total(self) -> int:
        return len(self.hot) + len(self.dead)

    def is_empty(self) -> bool:
        return self.total == 0


def _as_coordinates(points: Iterable) -> Tuple[Coordinate, ...]:
    return tuple(p if isinstance(p, Coordinate) else Coordinate(int(p[0]), int(p[1])) for p in points)


class PixelBuffer:
    """
    Interleaved 8-bit RGB pixels stored in one contiguous 1-D array.

    The buffer is a thin view: it writes through to whatever array it wraps
    and never reallocates it.
    """

    CHANNELS = 3

    def __init__(self, data, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer dimensions must be positive, got {width}x{height}.")
        data = np.asarray(data)
        if data.dtype != np.uint8 or data.ndim != 1:
            raise ValueError("Pixel data must be a 1-D uint8 array.")
        expected = width * height * self.CHANNELS
        if data.size != expected:
            raise ValueError(f"Pixel data has {data.size} bytes, expected {expected} for {width}x{height} RGB.")
        self.data = data
        self.width = width
        self.height = height

    @classmethod
    def from_array(cls, image: np.ndarray) -> "PixelBuffer":
        """Wraps an (h, w, 3) uint8 array. Shares memory when the array is C-contiguous."""
        if image is None or image.ndim != 3 or image.shape[2] != cls.CHANNELS:
            raise ValueError("Image must be an (height, width, 3) RGB array.")
        if image.dtype != np.uint8:
            raise ValueError(f"Image must be uint8, got {image.dtype}.")
        height, width = image.shape[:2]
        flat = np.ascontiguousarray(image).reshape(-1)
        return cls(flat, width, height)

    @classmethod
    def filled(cls, width: int, height: int, rgb: RGB) -> "PixelBuffer":
        image = np.empty((height, width, cls.CHANNELS), dtype=np.uint8)
        image[:, :] = rgb
        return cls.from_array(image)

    def as_array(self) -> np.ndarray:
        """(height, width, 3) view onto the same storage."""
        return self.data.reshape(self.height, self.width, self.CHANNELS)

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.data.copy(), self.width, self.height)

    def offset(self, x: int, y: int) -> int:
        return self.CHANNELS * (y * self.width + x)

    def get(self, x: int, y: int) -> RGB:
        i = self.offset(x, y)
        r, g, b = self.data[i:i + 3].tolist()
        return r, g, b

    def set(self, x: int, y: int, r: int, g: int, b: int) -> None:
        i = self.offset(x, y)
        self.data[i] = r
        self.data[i + 1] = g
        self.data[i + 2] = b

    def is_border(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and np.array_equal(self.data, other.data)

    __hash__ = None

    def __repr__(self):
        return f"PixelBuffer({self.width}x{self.height})"
