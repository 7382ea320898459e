# Image import functionality using Pillow
import os

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from ..processing.pixel_buffer import PixelBuffer
from ..utils.errors import DecodeError
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Extensions Pillow is expected to read for this tool
SUPPORTED_READ_EXTENSIONS = (
    '.png', '.jpg', '.jpeg', '.bmp', '.tga', '.gif', '.psd',
    '.pnm', '.ppm', '.pgm', '.pbm', '.tif', '.tiff', '.webp',
)


def decode(file_path):
    """Loads an image from the specified file path into an RGB pixel buffer.

    Handles EXIF orientation automatically and converts any colour mode
    (grayscale, palette, RGBA, ...) to 8-bit RGB.

    Args:
        file_path (str): The path to the image file.

    Returns:
        PixelBuffer: The decoded pixels.

    Raises:
        DecodeError: If the path is invalid or missing, or the data cannot be decoded.
    """
    if not isinstance(file_path, str) or not file_path:
        raise DecodeError("Invalid file path provided.", file_path=file_path)

    if not os.path.isfile(file_path):
        raise DecodeError(f"File not found at '{file_path}'", file_path=file_path)

    try:
        with Image.open(file_path) as img:
            # exif_transpose returns a new image (or a copy) with orientation applied
            img_oriented = ImageOps.exif_transpose(img)
            if img_oriented.mode != 'RGB':
                logger.debug("Converting image from mode '%s' to 'RGB'.", img_oriented.mode)
                img_rgb = img_oriented.convert('RGB')
            else:
                img_rgb = img_oriented
            image_np = np.array(img_rgb, dtype=np.uint8)
    except UnidentifiedImageError as e:
        raise DecodeError(
            f"Pillow could not identify image file format or file is corrupted: '{file_path}'",
            file_path=file_path, original_error=e,
        ) from e
    except (OSError, ValueError) as e:
        # Truncated data and decoder failures surface as OSError
        raise DecodeError(f"Error decoding image '{file_path}': {e}", file_path=file_path, original_error=e) from e

    if image_np.size == 0:
        raise DecodeError(f"Loaded image is empty: '{file_path}'", file_path=file_path)

    buffer = PixelBuffer.from_array(image_np)
    logger.info("Loaded '%s' (%dx%d)", file_path, buffer.width, buffer.height)
    return buffer
