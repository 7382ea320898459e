# IO package initialization
from .image_loader import (
    decode,
    SUPPORTED_READ_EXTENSIONS,
)
from .image_saver import (
    encode,
    resolve_format,
    WRITE_FORMATS,
    READ_ONLY_FORMATS,
)

__all__ = [
    'decode',
    'SUPPORTED_READ_EXTENSIONS',
    'encode',
    'resolve_format',
    'WRITE_FORMATS',
    'READ_ONLY_FORMATS',
]
